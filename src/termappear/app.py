"""termappear ReplKit2 application.

Exposes reveal, tree, panes and edit as REPL commands and MCP tools/resources.
Each command builds its own Instance, so lookups never outlive one call.
"""

from dataclasses import dataclass, field

from replkit2 import App

from .config import Config, get_config
from .instance import Instance


@dataclass
class TermAppearState:
    """Application state: the configuration commands build Instances from."""

    config: Config = field(default_factory=get_config)

    def instance(self) -> Instance:
        return Instance(self.config)


# Must be created before command imports for decorator registration
app = App(
    "termappear",
    TermAppearState,
    uri_scheme="termappear",
    fastmcp={
        "description": "Reveal the terminal window and tmux pane hosting a process",
        "tags": {"terminal", "tmux", "macos"},
    },
)


# Command imports trigger @app.command decorator registration
from .commands import reveal  # noqa: E402, F401
from .commands import tree  # noqa: E402, F401
from .commands import panes  # noqa: E402, F401
from .commands import edit  # noqa: E402, F401
