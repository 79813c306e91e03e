"""Open files in an existing editor session instead of revealing a PID.

Only Neovim inside tmux is supported, through neovim-remote.

PUBLIC API:
  - Nvim: One remote Neovim session
  - TmuxIde: Find or create a Neovim in tmux for a file and reveal it
  - EDITORS: Editor drivers by name
"""

from .nvim import Nvim, NvimPane
from .tmux_ide import TmuxIde, project_root

EDITORS = {"tmux-ide": TmuxIde}

__all__ = ["Nvim", "NvimPane", "TmuxIde", "project_root", "EDITORS"]
