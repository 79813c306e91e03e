"""Shared fixtures: a runner that plays back scripted command output."""

import threading

import pytest

from termappear.errors import ExecutionFailure
from termappear.processes import Processes
from termappear.tmux.core import FIELD_SEPARATOR


class FakeRunner:
    """Plays back scripted output, keyed by the exact argv.

    Unscripted commands fail as if the binary exited non-zero. A command
    scripted several times returns each output in turn, repeating the last.
    """

    def __init__(self):
        self.responses: dict[tuple[str, ...], list[tuple[str, bool]]] = {}
        self.calls: list[list[str]] = []
        self._lock = threading.Lock()

    def add(self, command, output: str = "", fail: bool = False) -> "FakeRunner":
        self.responses.setdefault(tuple(command), []).append((output, fail))
        return self

    def run(self, command, allow_failure: bool = False) -> str:
        key = tuple(command)
        with self._lock:
            self.calls.append(list(command))
            scripted = self.responses.get(key)
            if not scripted:
                output, fail = "unexpected command", True
            elif len(scripted) > 1:
                output, fail = scripted.pop(0)
            else:
                output, fail = scripted[0]

        if fail and not allow_failure:
            raise ExecutionFailure(list(command), output)
        return output

    def called(self, command) -> bool:
        return list(command) in self.calls

    def calls_to(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]


def ps_command(pid: int) -> list[str]:
    return ["ps", "-p", str(pid), "-o", "ppid=", "-o", "command="]


def script_processes(runner: FakeRunner, *processes: tuple[int, int, str]) -> None:
    """Script ps output for (pid, ppid, command line) triples."""
    for pid, ppid, command in processes:
        runner.add(ps_command(pid), f"  {ppid} {command}\n")


def tmux_records(*records: dict) -> str:
    """Render records the way tmux prints a format_string() format."""
    return "".join(FIELD_SEPARATOR.join(f"{k}:{v}" for k, v in r.items()) + "\n" for r in records)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def dead_pids(monkeypatch):
    """PIDs added to this set are reported as not running; all others are alive."""
    dead: set[int] = set()
    monkeypatch.setattr(Processes, "alive", lambda self, pid: pid not in dead)
    return dead
