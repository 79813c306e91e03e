"""Reveal the terminal window, tab and tmux pane hosting a process.

Given a PID, termappear walks its process tree, finds which terminal surfaces
(iTerm2, Terminal.app, tmux) host it and brings each of them to the front.
Runs as a one-shot command line tool, or as a ReplKit2 REPL/MCP server.

PUBLIC API:
  - appear: Reveal a PID, returning True if anything was revealed
  - build_command: Shell command that reveals a PID with the same options
  - Instance: Composition root for repeated reveals
  - Config: Adjustable options
  - __version__: Package version string
"""

import shutil
import sys
from typing import Optional

from .config import Config, get_config
from .instance import Instance
from .util.command_builder import CommandBuilder

__version__ = "0.1.0"
__all__ = ["appear", "build_command", "Instance", "Config", "__version__"]


def appear(pid: int, config: Optional[Config] = None) -> bool:
    """Reveal `pid` in every terminal that hosts it.

    Raises:
        DeadProcess: If `pid` is not running.
    """
    return Instance(config or get_config()).reveal(pid)


def build_command(pid: int, config: Optional[Config] = None) -> str:
    """Build a shell command running the termappear CLI on `pid`.

    Useful to hand off a reveal to another process, e.g. from an editor plugin.
    """
    config = config or get_config()

    executable = shutil.which("termappear")
    base = [executable] if executable else [sys.executable, "-m", "termappear"]

    command = CommandBuilder(base).flags(
        v=config.verbose,
        l=str(config.log_file) if config.log_file else None,
        record_runs=config.record_runs,
    )
    return str(command.args(pid))
