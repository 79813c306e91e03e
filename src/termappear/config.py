"""Configuration management for termappear.

Settings come from termappear.toml in the current directory or a parent,
overridden by command-line flags.

    # termappear.toml
    verbose = true
    log_file = "/tmp/termappear.log"
    revealers = ["tmux", "iterm2"]
    max_reveal_depth = 4

PUBLIC API:
  - Config: All adjustable options for an Instance
  - load_config: Load Config from a TOML file
  - get_config: Get or load the cached Config
"""

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

from .revealers import REVEALER_NAMES

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "termappear.toml"

__all__ = ["Config", "load_config", "get_config", "CONFIG_FILE_NAME"]


@dataclass
class Config:
    """Adjustable options for a termappear Instance.

    Attributes:
        log_file: Write debug logs to this file.
        verbose: Write debug logs to stderr.
        record_runs: Record every executed command as JSON in record_dir.
        record_dir: Where recorded runs are written.
        edit_file: Open a file in an editor instead of revealing a PID.
        editor: Editor name used with edit_file.
        max_reveal_depth: How many nested reveals (tmux inside tmux) to follow.
        revealers: Revealer names in the order they run.
        nvim_socket_dir: Directory holding Neovim listen sockets.
    """

    log_file: Optional[Path] = None
    verbose: bool = False
    record_runs: bool = False
    record_dir: Path = field(default_factory=lambda: Path.home() / ".cache" / "termappear" / "runs")
    edit_file: bool = False
    editor: Optional[str] = None
    max_reveal_depth: int = 4
    revealers: list[str] = field(default_factory=lambda: list(REVEALER_NAMES))
    nvim_socket_dir: Path = field(default_factory=lambda: Path.home() / ".vim" / "sockets")

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"ignoring unknown config key {key!r}")
                continue
            if key in ("log_file", "record_dir", "nvim_socket_dir") and value is not None:
                value = Path(value).expanduser()
            values[key] = value
        return cls(**values)


def _find_config_file() -> Optional[Path]:
    """Find termappear.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

    return None


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration, falling back to defaults when no file exists."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return Config()

    with open(path, "rb") as f:
        return Config.from_dict(tomllib.load(f))


# Global instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or load the global config."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
