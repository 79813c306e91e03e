"""termappear exceptions.

PUBLIC API:
  - AppearError: Base exception for all termappear errors
  - ExecutionFailure: A command exited non-zero
  - DeadProcess: Process info requested for a PID that is not running
  - ProcessTreeError: Malformed parent chain (cycle or runaway depth)
  - JoinError: A record cannot expose the join field
  - LsofParseError: An lsof output row could not be parsed
  - TmuxError: tmux query or creation did not produce the expected object
  - MacToolError: The macOS helper script reported an error
  - NvimError: Talking to Neovim failed
"""


class AppearError(Exception):
    """Base exception for all termappear errors."""

    pass


class ExecutionFailure(AppearError):
    """Raised when a command we ran exits non-zero."""

    def __init__(self, command, output: str):
        self.command = command
        self.output = output
        super().__init__(f"Command {command!r} failed with output {output!r}")


class DeadProcess(AppearError):
    """Raised when fetching info for a dead or unknown PID."""

    pass


class ProcessTreeError(AppearError):
    """Raised when a process ancestry cannot be resolved into a chain."""

    pass


class JoinError(AppearError):
    """Raised when the join field cannot be read from a record."""

    pass


class LsofParseError(AppearError):
    """Raised when an lsof row is missing fields."""

    pass


class TmuxError(AppearError):
    """Base exception for tmux operations."""

    pass


class MacToolError(AppearError):
    """Raised when the macOS helper returns an error-shaped response."""

    def __init__(self, message: str, stack: str | None = None):
        self.tool_message = message
        self.stack = stack
        super().__init__(f"Mac error {message!r}\n{stack or ''}".rstrip())


class NvimError(AppearError):
    """Raised when Neovim cannot be queried or controlled."""

    def __init__(self, message: str, from_err: Exception | None = None):
        super().__init__(message)
        self.from_err = from_err
