"""Revealers: strategies that find and focus a process tree's visible surface.

Each revealer handles one terminal backend. The instance runs every revealer
in a fixed order against the same ancestry and ORs their results.

PUBLIC API:
  - BaseRevealer: Decide support, then reveal
  - TerminalRevealer: GUI terminal emulators matched by TTY
  - TmuxRevealer: tmux panes, plus the client attached to their session
  - REVEALER_NAMES: Default revealer order
  - build_revealers: Build the ordered revealer list from names
"""

import logging
from collections.abc import Callable, Sequence

from .errors import AppearError
from .lsof import Lsof, PaneConnection
from .macos import MacOs
from .processes import ProcessInfo, Processes
from .terminal import TERMINAL_SERVER_NAMES, Iterm2, MacTerminal, TerminalApp
from .tmux import Tmux, TmuxClient, TmuxPane
from .util.join import join

logger = logging.getLogger(__name__)

type ProcessTree = Sequence[ProcessInfo]
type RevealCallback = Callable[[int], bool]

TMUX_BINARY = "tmux"

REVEALER_NAMES = ("iterm2", "terminal", "tmux")

__all__ = ["BaseRevealer", "TerminalRevealer", "TmuxRevealer", "REVEALER_NAMES", "build_revealers"]


class BaseRevealer:
    """Extend to support another terminal backend."""

    name = "base"

    def call(self, tree: ProcessTree) -> bool:
        """Reveal `tree` if this revealer supports it.

        Returns:
            True if something was revealed.
        """
        target, *rest = tree
        if not self.supports_tree(target, rest):
            return False
        return self.reveal_tree(tree)

    def supports_tree(self, target: ProcessInfo, rest: Sequence[ProcessInfo]) -> bool:
        raise NotImplementedError

    def reveal_tree(self, tree: ProcessTree) -> bool:
        raise NotImplementedError


class TerminalRevealer(BaseRevealer):
    """Reveals panes of a scriptable GUI terminal that host the tree."""

    def __init__(self, terminal: MacTerminal, mac_os: MacOs, lsof: Lsof):
        self.terminal = terminal
        self.mac_os = mac_os
        self.lsof = lsof
        self.name = terminal.app_name

    def supports_tree(self, target: ProcessInfo, rest: Sequence[ProcessInfo]) -> bool:
        return any(p.name == self.terminal.app_name and self.mac_os.has_gui(p) for p in rest)

    def reveal_tree(self, tree: ProcessTree) -> bool:
        hits = self.lsof.join_via_tty(tree, self.terminal.panes())

        by_tty: dict[str, PaneConnection] = {}
        for hit in hits:
            if self._is_terminal_server(hit.process):
                continue
            by_tty.setdefault(hit.tty, hit)

        revealed = 0
        for hit in by_tty.values():
            logger.info(f"{self.name}: revealing tty {hit.tty} for pid {hit.pid}")
            self.terminal.reveal_pane(hit.pane)
            revealed += 1

        return revealed > 0

    def _is_terminal_server(self, process: ProcessInfo) -> bool:
        # The emulator itself, or its non-GUI server, holds every pane TTY open.
        return self.mac_os.has_gui(process) or process.name in TERMINAL_SERVER_NAMES


class TmuxRevealer(BaseRevealer):
    """Reveals tmux panes running the tree, then the client showing them.

    Focusing a pane inside tmux is invisible unless a client window is also
    brought forward, so the client's PID is revealed through `reveal`, the
    top-level entry point.
    """

    name = "tmux"

    def __init__(self, tmux: Tmux, lsof: Lsof, processes: Processes, reveal: RevealCallback):
        self.tmux = tmux
        self.lsof = lsof
        self.processes = processes
        self.reveal = reveal

    def supports_tree(self, target: ProcessInfo, rest: Sequence[ProcessInfo]) -> bool:
        return any(p.name == TMUX_BINARY for p in rest)

    def reveal_tree(self, tree: ProcessTree) -> bool:
        panes = self.tmux.panes()

        relevant_panes = join("pid", tree, panes)
        for pane in relevant_panes:
            logger.info(f"tmux: revealing pane {pane.session}:{pane.window}.{pane.pane}")
            self.tmux.reveal_pane(pane)

        client_pid = self.client_pid_for_tree(tree, panes)
        if client_pid is not None:
            try:
                self.reveal(client_pid)
            except AppearError as e:
                logger.warning(f"tmux: could not reveal client {client_pid}: {e}")

        return len(relevant_panes) > 0

    def client_pid_for_tree(self, tree: ProcessTree, panes: Sequence[TmuxPane] | None = None) -> int | None:
        """Find the PID of a tmux client showing a pane that runs the tree.

        tmux does not report client PIDs. The client's TTY is held open by both
        the client and the server, so the client is the tmux process connected
        to that TTY whose PID is not the server's.
        """
        server = next((p for p in tree if p.name == TMUX_BINARY), None)
        if server is None:
            return None

        if panes is None:
            panes = self.tmux.panes()

        procs_and_panes = join("pid", panes, tree)
        procs_and_clients = join("session", self.tmux.clients(), procs_and_panes)
        if not procs_and_clients:
            return None

        # Several clients attached to one session: always take the last one listed.
        clients = [m for m in procs_and_clients[-1].members if isinstance(m, TmuxClient)]
        tty = clients[-1].tty

        tmux_pids = self.processes.pgrep(TMUX_BINARY)
        if not tmux_pids:
            return None

        connections = self.lsof.lsofs([tty], pids=tmux_pids).get(tty, [])
        for conn in connections:
            if conn.command_name.startswith(TMUX_BINARY) and conn.pid != server.pid:
                logger.debug(f"tmux: client on {tty} is pid {conn.pid}")
                return conn.pid
        return None


def build_revealers(
    names: Sequence[str],
    mac_os: MacOs,
    processes: Processes,
    lsof: Lsof,
    tmux: Tmux,
    reveal: RevealCallback,
) -> list[BaseRevealer]:
    """Build revealers in the given order.

    Raises:
        ValueError: For an unknown revealer name.
    """
    factories: dict[str, Callable[[], BaseRevealer]] = {
        "iterm2": lambda: TerminalRevealer(Iterm2(mac_os, processes), mac_os, lsof),
        "terminal": lambda: TerminalRevealer(TerminalApp(mac_os, processes), mac_os, lsof),
        "tmux": lambda: TmuxRevealer(tmux, lsof, processes, reveal),
    }

    revealers = []
    for name in names:
        if name not in factories:
            raise ValueError(f"unknown revealer {name!r}, expected one of {sorted(factories)}")
        revealers.append(factories[name]())
    return revealers
