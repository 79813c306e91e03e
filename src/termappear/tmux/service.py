"""The Tmux service: query and drive a tmux server.

See the tmux man page for what clients, sessions, windows and panes are.

PUBLIC API:
  - Tmux: Query clients/sessions/windows/panes, focus and create panes
"""

import logging
from typing import Any

from ..errors import TmuxError
from ..runner import Runner
from ..util.command_builder import CommandBuilder
from .core import format_string, parse_records, tmux_command
from .models import TmuxClient, TmuxPane, TmuxSession, TmuxWindow

logger = logging.getLogger(__name__)

__all__ = ["Tmux"]


class Tmux:
    """Interacts with `tmux`. Used by the tmux revealer and the editor IDE."""

    def __init__(self, runner: Runner):
        self.runner = runner

    def clients(self) -> list[TmuxClient]:
        """List all the tmux clients on the system."""
        records = self._ipc(tmux_command("list-clients").flags(F=format_string(TmuxClient.FORMAT)))
        return [TmuxClient.from_record(r, self) for r in records]

    def panes(self) -> list[TmuxPane]:
        """List all the tmux panes on the system."""
        records = self._ipc(tmux_command("list-panes").flags(a=True, F=format_string(TmuxPane.FORMAT)))
        return [TmuxPane.from_record(r, self) for r in records]

    def sessions(self) -> list[TmuxSession]:
        """List all the tmux sessions on the system."""
        records = self._ipc(tmux_command("list-sessions").flags(F=format_string(TmuxSession.FORMAT)))
        return [TmuxSession.from_record(r, self) for r in records]

    def windows(self) -> list[TmuxWindow]:
        """List all the tmux windows in any session."""
        records = self._ipc(tmux_command("list-windows").flags(a=True, F=format_string(TmuxWindow.FORMAT)))
        return [TmuxWindow.from_record(r, self) for r in records]

    def reveal_pane(self, pane: Any) -> None:
        """Focus a pane inside tmux.

        Args:
            pane: Anything with session, window and pane fields (a TmuxPane or a join containing one).
        """
        self._ipc(tmux_command("select-pane").flags(t=f"{pane.session}:{pane.window}.{pane.pane}"))
        self._ipc(tmux_command("select-window").flags(t=f"{pane.session}:{pane.window}"))

    def new_session(self, **flags: Any) -> TmuxSession:
        """Create a detached session and return it."""
        new_id = self._create(tmux_command("new-session").flags(d=True, **flags), "session_id")
        return self._find_created(self.sessions(), new_id, "session")

    def new_window(self, **flags: Any) -> TmuxWindow:
        new_id = self._create(tmux_command("new-window").flags(**flags), "window_id")
        return self._find_created(self.windows(), new_id, "window")

    def split_window(self, **flags: Any) -> TmuxPane:
        new_id = self._create(tmux_command("split-window").flags(**flags), "pane_id")
        return self._find_created(self.panes(), new_id, "pane")

    def send_keys(self, target: str, *keys: str, literal: bool = False) -> None:
        """Send keys to a target; with `literal`, keys are sent as text (-l)."""
        self._ipc(tmux_command("send-keys").flags(t=target, l=literal).args(*keys))

    def _create(self, command: CommandBuilder, id_var: str) -> str:
        # Only the id is trusted from the creation output; the record is re-queried.
        output = self.runner.run(command.flags(P=True, F=f"#{{{id_var}}}").to_list())
        new_id = output.strip().splitlines()[-1].strip() if output.strip() else ""
        if not new_id:
            raise TmuxError(f"tmux did not report the id of the new object: {output!r}")
        return new_id

    def _find_created(self, candidates: list, new_id: str, kind: str):
        for candidate in candidates:
            if candidate.id == new_id:
                logger.debug(f"created tmux {kind} {new_id}")
                return candidate
        raise TmuxError(f"created tmux {kind} {new_id} but could not find it again")

    def _ipc(self, command: CommandBuilder) -> list[dict[str, str]]:
        return parse_records(self.runner.run(command.to_list()))
