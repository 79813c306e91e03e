"""tmux model - typed views and operations over a tmux server.

PUBLIC API:
  - Tmux: Service for querying and driving tmux
  - TmuxClient: Attached client record
  - TmuxSession: Session record
  - TmuxWindow: Window record
  - TmuxPane: Pane record
  - format_string: Build a -F format string
  - parse_records: Parse formatted tmux output
"""

from .core import format_string, parse_records
from .models import TmuxClient, TmuxPane, TmuxSession, TmuxWindow
from .service import Tmux

__all__ = [
    "Tmux",
    "TmuxClient",
    "TmuxSession",
    "TmuxWindow",
    "TmuxPane",
    "format_string",
    "parse_records",
]
