"""Logging setup for termappear.

Debug logs go to stderr when verbose and to a file when one is configured;
with neither, termappear is silent.

PUBLIC API:
  - configure_logging: Attach handlers for the given config
  - log_error: Log an exception with its traceback
"""

import logging
import sys

from .config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

__all__ = ["configure_logging", "log_error"]


def configure_logging(config: Config) -> logging.Logger:
    """Configure the termappear logger from config.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger("termappear")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if config.verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(formatter)
        package_logger.addHandler(stderr_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False
    return package_logger


def log_error(logger: logging.Logger, err: BaseException) -> None:
    """Log an error with its full traceback."""
    logger.error(f"Error {type(err).__name__}: {err}", exc_info=err)
