"""Command line entry point for termappear.

    termappear [-v] [-l FILE] [--record-runs] [PID]
    termappear [-v] [-l FILE] -e EDITOR FILE
    termappear --repl | --mcp

Exit status is 0 when something was revealed, 2 when nothing was and 1 on error.
"""

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from . import __version__
from .config import Config, get_config
from .editor import EDITORS
from .instance import Instance
from .output import configure_logging, log_error

logger = logging.getLogger("termappear")

EXIT_REVEALED = 0
EXIT_ERROR = 1
EXIT_NOT_REVEALED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termappear",
        description="Reveal the terminal window, tab and tmux pane hosting a process.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("-l", "--log-file", type=Path, help="log debug output to this file")
    parser.add_argument("--record-runs", action="store_true", help="record executed commands as JSON")
    parser.add_argument(
        "-e",
        "--edit",
        metavar="EDITOR",
        choices=sorted(EDITORS),
        help="open TARGET as a file in EDITOR instead of revealing a PID",
    )
    parser.add_argument("--version", action="store_true", help="print the version and exit")
    parser.add_argument("--repl", action="store_true", help="run the interactive REPL")
    parser.add_argument("--mcp", action="store_true", help="run as an MCP server")
    parser.add_argument("target", nargs="?", help="PID to reveal (default: this process), or FILE with --edit")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[Config] = None) -> Config:
    """Overlay command-line flags on the file configuration."""
    config = base or get_config()
    changes = {}
    if args.verbose:
        changes["verbose"] = True
    if args.log_file:
        changes["log_file"] = args.log_file
    if args.record_runs:
        changes["record_runs"] = True
    if args.edit:
        changes["edit_file"] = True
        changes["editor"] = args.edit
    return replace(config, **changes)


def run(args: argparse.Namespace, config: Config) -> bool:
    """Reveal a PID or open a file, per `config`.

    Returns:
        True if something was revealed.
    """
    instance = Instance(config)

    if config.edit_file:
        if not args.target:
            raise ValueError("--edit needs a FILE")
        editor = EDITORS[config.editor](
            instance.processes,
            instance.tmux,
            instance.runner,
            instance.reveal,
            config.nvim_socket_dir,
        )
        return editor.call(args.target)

    pid = int(args.target) if args.target else os.getpid()
    return instance.reveal(pid)


def main(argv: Optional[list[str]] = None) -> int:
    """Run termappear and return its exit status."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"termappear {__version__}")
        return EXIT_NOT_REVEALED

    config = config_from_args(args)
    configure_logging(config)

    if args.repl or args.mcp:
        from .app import app

        if args.mcp:
            app.mcp.run()
        else:
            app.run(title="termappear - reveal a process in its terminal")
        return EXIT_REVEALED

    logger.debug(f"STARTING termappear {__version__} with {sys.argv}")
    try:
        revealed = run(args, config)
    except Exception as e:
        log_error(logger, e)
        print(f"termappear: {e}", file=sys.stderr)
        return EXIT_ERROR

    logger.debug(f"DONE revealed={revealed}")
    return EXIT_REVEALED if revealed else EXIT_NOT_REVEALED


if __name__ == "__main__":
    sys.exit(main())
