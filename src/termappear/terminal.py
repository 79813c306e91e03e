"""GUI terminal emulator backends (macOS).

PUBLIC API:
  - TerminalPane: One tab/session of a GUI terminal, identified by TTY
  - MacTerminal: Base class for scriptable macOS terminals
  - Iterm2: iTerm2 backend
  - TerminalApp: Terminal.app backend
  - TERMINAL_SERVER_NAMES: Process names of the supported terminal apps
"""

from dataclasses import dataclass

from .macos import MacOs
from .processes import Processes

__all__ = ["TerminalPane", "MacTerminal", "Iterm2", "TerminalApp", "TERMINAL_SERVER_NAMES"]


@dataclass(frozen=True)
class TerminalPane:
    """A separate interactive session in a GUI terminal.

    Attributes:
        tty: TTY device of the pane.
        window: Window index.
        tab: Tab index within the window.
        session: Split index within the tab (iTerm2 only).
        pids: PIDs that could be the terminal emulator hosting the pane.
    """

    tty: str
    window: int | None = None
    tab: int | None = None
    session: int | None = None
    pids: tuple[int, ...] = ()


class MacTerminal:
    """Base class for macOS terminal support.

    Subclasses set `app_name` (both the process name and the scripting name)
    and the helper method names.
    """

    app_name: str = ""
    pgrep_pattern: str = ""
    panes_method: str = ""
    reveal_method: str = ""

    def __init__(self, mac_os: MacOs, processes: Processes):
        self.mac_os = mac_os
        self.processes = processes

    def running(self) -> bool:
        return len(self.processes.pgrep(self.pgrep_pattern or self.app_name)) > 0

    def panes(self) -> list[TerminalPane]:
        """Enumerate the panes this terminal has."""
        pids = tuple(self.processes.pgrep(self.pgrep_pattern or self.app_name))
        return [
            TerminalPane(
                tty=pane["tty"],
                window=pane.get("window"),
                tab=pane.get("tab"),
                session=pane.get("session"),
                pids=pids,
            )
            for pane in self.mac_os.call_method(self.panes_method) or []
        ]

    def reveal_pane(self, pane: TerminalPane) -> bool:
        return bool(self.mac_os.call_method(self.reveal_method, pane.tty))


class Iterm2(MacTerminal):
    app_name = "iTerm2"
    panes_method = "iterm2_panes"
    reveal_method = "iterm2_reveal_tty"


class TerminalApp(MacTerminal):
    app_name = "Terminal"
    pgrep_pattern = "Terminal.app"
    panes_method = "terminal_panes"
    reveal_method = "terminal_reveal_tty"


TERMINAL_SERVER_NAMES = frozenset(cls.app_name for cls in (Iterm2, TerminalApp))
