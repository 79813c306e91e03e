"""Neovim control through neovim-remote (nvr).

Each Neovim is reached through its listen socket. Point Neovim at a socket in
the socket directory, for example in your shell rc:

    export NVIM_LISTEN_ADDRESS="$HOME/.vim/sockets/vim-zsh-$$.sock"

PUBLIC API:
  - Nvim: One remote Neovim session
  - NvimPane: A window of a Neovim tab and the buffer it shows
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ExecutionFailure, NvimError
from ..runner import Runner
from ..util.command_builder import CommandBuilder

logger = logging.getLogger(__name__)

COMMAND = "nvr"

# What Vim shows for buffers without a name.
NO_NAME = "[No Name]"

# Logical name -> fnamemodify() modifiers applied to each buffer name.
BUFFER_FILENAME_EXPANSIONS = {
    "name": "",
    "fullname": ":p",
    "path": ":p:h",
    "relativename": ":~:.",
    "relativepath": ":~:.:h",
    "shortname": ":t",
}

__all__ = ["Nvim", "NvimPane"]


@dataclass(frozen=True)
class NvimPane:
    """A Vim window.

    Attributes:
        tab: Tab number (1-based).
        window: Window number within the tab (1-based).
        buffer: Buffer number shown in the window.
        buffer_info: Buffer name expansions, keyed as BUFFER_FILENAME_EXPANSIONS.
    """

    tab: int
    window: int
    buffer: int
    buffer_info: dict[str, Any]


class Nvim:
    """Wraps nvr to drive one Neovim session."""

    def __init__(self, socket: Path | str, runner: Runner):
        self.socket = Path(socket)
        self.runner = runner

    @staticmethod
    def sockets(socket_dir: Path) -> list[Path]:
        """All sockets in socket_dir, sorted by name."""
        return sorted(Path(socket_dir).expanduser().glob("*.sock"))

    @classmethod
    def find_for_file(cls, filename: str, runner: Runner, socket_dir: Path) -> Optional["Nvim"]:
        """Find a Neovim whose working directory contains `filename`."""
        target = os.path.abspath(filename)
        for socket in cls.sockets(socket_dir):
            nvim = cls(socket, runner)
            try:
                cwd = nvim.cwd
            except NvimError as e:
                logger.debug(f"skipping unresponsive nvim at {socket}: {e}")
                continue
            if _path_contains(str(cwd), target):
                return nvim
        return None

    def expr(self, vimscript: str) -> Any:
        """Evaluate a Vimscript expression, parsing the result as YAML.

        Vimscript lists and strings print as YAML flow sequences and scalars.

        Raises:
            NvimError: If nvr fails or the output does not parse.
        """
        output = self._run(self._command().flag("remote-expr", vimscript))
        try:
            return yaml.safe_load(output)
        except yaml.YAMLError as e:
            raise NvimError(output, e) from e

    def cmd(self, vimscript: str) -> None:
        """Run an Ex command, e.g. "tabe foo.py"."""
        self._run(self._command().flag("c", vimscript))

    @property
    def pid(self) -> int:
        return int(self.expr("getpid()"))

    @property
    def cwd(self) -> Path:
        return Path(str(self.expr("getcwd()")))

    @property
    def size(self) -> tuple[int, int]:
        """Editor (columns, lines)."""
        columns, lines = self.expr("[&columns, &lines]")
        return int(columns), int(lines)

    def open_tab(self, filename: str) -> None:
        self.cmd(f"tabe {filename}")

    def open_vsplit(self, filename: str) -> None:
        self.cmd(f"vsplit {filename}")

    def open_hsplit(self, filename: str) -> None:
        self.cmd(f"split {filename}")

    def panes(self) -> list[NvimPane]:
        """All the Vim windows in all tabs."""
        buffers = {b["buffer"]: b for b in self._buffers()}
        panes = []
        for tab_index, buffer_numbers in enumerate(self._windows() or []):
            for window_index, buffer in enumerate(buffer_numbers):
                panes.append(
                    NvimPane(
                        # Vim numbers tabs and windows from 1
                        tab=tab_index + 1,
                        window=window_index + 1,
                        buffer=int(buffer),
                        buffer_info=buffers.get(int(buffer), {}),
                    )
                )
        return panes

    def find_pane(self, filename: str) -> Optional[NvimPane]:
        target = os.path.abspath(filename)
        for pane in self.panes():
            fullname = pane.buffer_info.get("fullname")
            if fullname and os.path.abspath(fullname) == target:
                return pane
        return None

    def has_file(self, filename: str) -> bool:
        return self.find_pane(filename) is not None

    def focus_file(self, filename: str) -> bool:
        """Switch to the tab and window showing `filename`."""
        pane = self.find_pane(filename)
        if pane is None:
            return False
        self.cmd(f"tabnext {pane.tab}")
        self.cmd(f"{pane.window}wincmd w")
        return True

    def _command(self) -> CommandBuilder:
        return CommandBuilder(COMMAND).flags(servername=str(self.socket))

    def _run(self, command: CommandBuilder) -> str:
        try:
            return self.runner.run(command.to_list())
        except (ExecutionFailure, OSError) as e:
            raise NvimError(f"{COMMAND} failed for {self.socket}: {e}", e) from e

    def _windows(self) -> list[list[int]]:
        return self.expr("map(range(1, tabpagenr('$')), \"tabpagebuflist(v:val)\")")

    def _buffers(self) -> list[dict[str, Any]]:
        modifiers = ", ".join(
            f"fnamemodify(bufname(v:val), '{mods}')" for mods in BUFFER_FILENAME_EXPANSIONS.values()
        )
        rows = self.expr(f"map(range(1, bufnr('$')), \"[v:val, {modifiers}]\")") or []

        buffers = []
        for row in rows:
            number, *names = row
            info: dict[str, Any] = {"buffer": int(number)}
            info.update(zip(BUFFER_FILENAME_EXPANSIONS, names))
            if not info.get("name"):
                info["name"] = NO_NAME
            buffers.append(info)
        return buffers


def _path_contains(parent: str, child: str) -> bool:
    parent = parent.rstrip(os.sep) + os.sep
    return child.startswith(parent)
