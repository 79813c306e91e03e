"""macOS-specific concerns: talking to GUI terminal apps via a JXA helper.

PUBLIC API:
  - MacOs: Call helper methods and classify GUI processes
  - HELPER_SCRIPT: Path to the bundled osascript helper
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .errors import MacToolError
from .processes import ProcessInfo
from .runner import Runner

logger = logging.getLogger(__name__)

HELPER_SCRIPT = Path(__file__).parent / "macos_helper.js"

_APP_BUNDLE = re.compile(r"\.app/Contents/")

__all__ = ["MacOs", "HELPER_SCRIPT"]


class MacOs:
    """Runs the companion macOS helper, communicating with JSON."""

    def __init__(self, runner: Runner, script: Path = HELPER_SCRIPT):
        self.runner = runner
        self.script = script

    def call_method(self, method_name: str, data: Any = None) -> Any:
        """Call a method in the helper script.

        Args:
            method_name: Helper method, e.g. "iterm2_panes".
            data: JSON-able argument for the method.

        Returns:
            The helper's JSON result value.

        Raises:
            MacToolError: If the helper reports an error.
        """
        command = ["osascript", "-l", "JavaScript", str(self.script), method_name]
        if data is not None:
            command.append(json.dumps(data))

        output = self.runner.run(command)
        lines = [line for line in output.splitlines() if line.strip()]
        if not lines:
            raise MacToolError(f"no output from helper method {method_name}")

        try:
            result = json.loads(lines[-1])
        except json.JSONDecodeError as e:
            raise MacToolError(f"unparseable helper output: {lines[-1]!r}") from e

        if result.get("status") == "error":
            error = result.get("error") or {}
            raise MacToolError(error.get("message", "unknown error"), error.get("stack"))
        return result.get("value")

    def has_gui(self, process: ProcessInfo) -> bool:
        """True if the process runs from inside a macOS .app bundle."""
        if not process.command:
            return False
        return bool(_APP_BUNDLE.search(process.command[0]))
