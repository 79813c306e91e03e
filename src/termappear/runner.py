"""Run external commands.

PUBLIC API:
  - Runner: Execute a command and return its combined output
  - RunnerRecorder: Runner that records every invocation as a JSON file
"""

import json
import logging
import os
import subprocess
import time
from collections import defaultdict
from datetime import datetime
from pathlib import Path

from .errors import ExecutionFailure

logger = logging.getLogger(__name__)

type Command = list[str] | str

__all__ = ["Runner", "RunnerRecorder", "Command"]


class Runner:
    """Synchronous command execution; blocks until the command exits."""

    def run(self, command: Command, allow_failure: bool = False) -> str:
        """Run a command and return combined stdout and stderr.

        Args:
            command: argv list, or a string run through the shell.
            allow_failure: Return the output instead of raising on non-zero exit.

        Raises:
            ExecutionFailure: If the command exits non-zero and failure is not allowed.
        """
        start = time.monotonic()
        result = subprocess.run(
            command,
            shell=isinstance(command, str),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        logger.debug(f"ran {command!r} in {time.monotonic() - start:.3f}s")

        if result.returncode != 0 and not allow_failure:
            raise ExecutionFailure(command, result.stdout)
        return result.stdout


class RunnerRecorder(Runner):
    """Records each command run to `record_dir` for building test fixtures.

    Files are named ``<init-ts>-<command>-run<N>.json``.
    """

    def __init__(self, record_dir: Path):
        self.record_dir = Path(record_dir)
        self.init_at = datetime.now()
        self._runs: dict[str, int] = defaultdict(int)

    def run(self, command: Command, allow_failure: bool = False) -> str:
        try:
            output = super().run(command)
        except ExecutionFailure as e:
            self._record(command, e.output, "error")
            if allow_failure:
                return e.output
            raise
        self._record(command, output, "success")
        return output

    def _record(self, command: Command, output: str, status: str) -> Path:
        name = _command_name(command)
        run_index = self._runs[name]
        self._runs[name] += 1

        data = {
            "command": command,
            "output": output,
            "status": status,
            "run_index": run_index,
            "record_at": datetime.now().isoformat(),
            "init_at": self.init_at.isoformat(),
        }

        self.record_dir.mkdir(parents=True, exist_ok=True)
        path = self.record_dir / f"{int(self.init_at.timestamp())}-{name}-run{run_index}.json"
        path.write_text(json.dumps(data, indent=2))
        return path


def _command_name(command: Command) -> str:
    first = command[0] if isinstance(command, list) else command.split()[0]
    return os.path.basename(first)
