"""termappear commands."""

from .reveal import reveal
from .tree import tree
from .panes import panes
from .edit import edit

__all__ = ["reveal", "tree", "panes", "edit"]
