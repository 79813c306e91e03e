"""Open files in a Neovim running inside tmux, then reveal it.

An "IDE" here is a tmux window with Neovim on top (70%) and two small shells
underneath. Files open in an existing Neovim whose working directory contains
them; otherwise a new IDE window is created for the file's project.

PUBLIC API:
  - TmuxIde: Find or create an editor for a file and bring it forward
  - project_root: Nearest ancestor directory holding a .git folder
"""

import logging
import os
import shlex
import time
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from ..errors import ExecutionFailure, NvimError
from ..processes import Processes
from ..tmux import Tmux, TmuxPane, TmuxWindow
from ..runner import Runner
from ..util.join import join
from .nvim import Nvim

logger = logging.getLogger(__name__)

NVIM_POLL_ATTEMPTS = 50
NVIM_POLL_INTERVAL = 0.1

# Editors narrower than this get a new tab instead of a vertical split.
VSPLIT_MIN_COLUMNS = 100

__all__ = ["TmuxIde", "project_root"]


def project_root(filename: str) -> Path:
    """Nearest ancestor of `filename` containing .git, else its directory."""
    directory = Path(os.path.abspath(filename)).parent
    for candidate in [directory, *directory.parents]:
        if (candidate / ".git").exists():
            return candidate
    return directory


class TmuxIde:
    """Editor driver that keeps Neovim sessions in tmux windows."""

    def __init__(
        self,
        processes: Processes,
        tmux: Tmux,
        runner: Runner,
        reveal: Callable[[int], bool],
        socket_dir: Path,
        poll_attempts: int = NVIM_POLL_ATTEMPTS,
        poll_interval: float = NVIM_POLL_INTERVAL,
    ):
        self.processes = processes
        self.tmux = tmux
        self.runner = runner
        self.reveal = reveal
        self.socket_dir = Path(socket_dir).expanduser()
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval

    def call(self, filename: str) -> bool:
        """Open `filename` and reveal the editor.

        Returns:
            True if the editor was revealed in a terminal.
        """
        nvim = self.find_nvim(filename)
        if nvim is not None:
            pane = self.find_tmux_pane(nvim)
        else:
            nvim, pane = self.create_ide(filename)

        if not nvim.focus_file(filename):
            columns, _ = nvim.size
            if columns > VSPLIT_MIN_COLUMNS:
                nvim.open_vsplit(filename)
            else:
                nvim.open_tab(filename)

        if pane is not None:
            self.tmux.reveal_pane(pane)

        return self.reveal(nvim.pid)

    def find_nvim(self, filename: str) -> Optional[Nvim]:
        return Nvim.find_for_file(filename, self.runner, self.socket_dir)

    def find_tmux_pane(self, nvim: Nvim) -> Optional[TmuxPane]:
        """The tmux pane whose process tree contains `nvim`, if any."""
        tree = self.processes.process_tree(nvim.pid)
        if not any(p.name == "tmux" for p in tree):
            return None

        procs_and_panes = join("pid", self.tmux.panes(), tree)
        if not procs_and_panes:
            return None
        return procs_and_panes[0].unjoin(lambda member: isinstance(member, TmuxPane))

    def create_ide(self, filename: str) -> tuple[Nvim, Optional[TmuxPane]]:
        """Create a tmux window running Neovim on `filename`."""
        directory = project_root(filename)
        window = self._find_or_create_window(directory)

        bottom = window.panes()[0]
        top = bottom.split(v=True, b=True, l="70%", c=str(directory))

        socket = self.socket_dir / f"termappear-{uuid.uuid4().hex[:8]}.sock"
        self.socket_dir.mkdir(parents=True, exist_ok=True)
        self.tmux.send_keys(top.id, shlex.join(["nvim", "--listen", str(socket), filename]), literal=True)
        self.tmux.send_keys(top.id, "Enter")

        # Two small shells under the editor.
        self.tmux.split_window(t=bottom.id, h=True, c=str(directory))

        nvim = self.wait_for_nvim(socket)
        # Pane indices shift after splits; look the editor pane up again.
        return nvim, self.find_tmux_pane(nvim) or top

    def wait_for_nvim(self, socket: Path) -> Nvim:
        """Poll until a Neovim answers on `socket`.

        Raises:
            NvimError: If it does not answer within the poll budget.
        """
        nvim = Nvim(socket, self.runner)
        for _ in range(self.poll_attempts):
            if socket.exists():
                try:
                    nvim.pid
                    return nvim
                except NvimError as e:
                    logger.debug(f"nvim at {socket} not ready: {e}")
            time.sleep(self.poll_interval)
        raise NvimError(f"nvim did not start listening on {socket}")

    def _find_or_create_window(self, directory: Path) -> TmuxWindow:
        try:
            sessions = self.tmux.sessions()
        except ExecutionFailure as e:
            logger.debug(f"no tmux server running: {e}")
            sessions = []
        if not sessions:
            session = self.tmux.new_session(c=str(directory))
            return session.windows()[0]

        session = sessions[0]
        for window in session.windows():
            panes = window.panes()
            if len(panes) == 1 and panes[0].current_path == str(directory):
                return window
        return session.new_window(c=str(directory))
