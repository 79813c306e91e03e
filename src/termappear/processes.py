"""Process ancestry lookups through ps and pgrep.

PUBLIC API:
  - ProcessInfo: Immutable info about one process
  - Processes: Look up process info, ancestry chains and pgrep matches
  - MAX_TREE_DEPTH: Upper bound on ancestry length
"""

import logging
import os
from dataclasses import dataclass

from .errors import DeadProcess, ExecutionFailure, ProcessTreeError
from .runner import Runner
from .util.memoizer import Memoizer

logger = logging.getLogger(__name__)

# No sane ancestry is this deep; stops runaway walks on a corrupt parent chain.
MAX_TREE_DEPTH = 512

__all__ = ["ProcessInfo", "Processes", "MAX_TREE_DEPTH"]


@dataclass(frozen=True, slots=True)
class ProcessInfo:
    """Information about a process.

    Attributes:
        pid: Process ID.
        parent_pid: Parent process ID (0 for the root of the tree).
        command: argv of the process.
        name: Basename of argv[0].
    """

    pid: int
    parent_pid: int
    command: tuple[str, ...]
    name: str


class Processes:
    """Looks up information about system processes, mostly via `ps`.

    Results are cached per PID for the lifetime of the instance.
    """

    def __init__(self, runner: Runner):
        self.runner = runner
        self._info_memo = Memoizer()

    def alive(self, pid: int) -> bool:
        """Is the given process running?"""
        try:
            os.getpgid(pid)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True

    def get_info(self, pid: int) -> ProcessInfo:
        """Get info about a process by PID.

        Raises:
            DeadProcess: If the PID is not running.
            ProcessTreeError: If ps output cannot be parsed.
        """
        return self._info_memo.call(lambda: self._fetch_info(pid), pid)

    def process_tree(self, pid: int) -> list[ProcessInfo]:
        """Look up all the processes between `pid` and PID 1.

        Returns:
            Chain starting at `pid`, each element followed by its parent.

        Raises:
            DeadProcess: If `pid` or an ancestor is not running.
            ProcessTreeError: If the parent chain loops or is implausibly deep.
        """
        tree = [self.get_info(pid)]
        seen = {tree[0].pid}

        while tree[-1].pid > 1 and tree[-1].parent_pid != 0:
            parent_pid = tree[-1].parent_pid
            if parent_pid in seen:
                raise ProcessTreeError(f"cycle in ancestry of {pid}: {parent_pid} seen twice")
            if len(tree) >= MAX_TREE_DEPTH:
                raise ProcessTreeError(f"ancestry of {pid} exceeds {MAX_TREE_DEPTH} processes")
            seen.add(parent_pid)
            tree.append(self.get_info(parent_pid))

        return tree

    def pgrep(self, pattern: str) -> list[int]:
        """PIDs whose command line matches `pattern`; empty when nothing matches."""
        try:
            output = self.runner.run(["pgrep", "-lf", pattern])
        except ExecutionFailure:
            return []

        pids = []
        for line in output.splitlines():
            parts = line.split()
            if parts and parts[0].isdigit():
                pids.append(int(parts[0]))
        return pids

    def _fetch_info(self, pid: int) -> ProcessInfo:
        if not self.alive(pid):
            raise DeadProcess(f"cannot fetch info for dead PID {pid}")

        output = self.runner.run(["ps", "-p", str(pid), "-o", "ppid=", "-o", "command="])
        parts = output.split()
        if len(parts) < 2 or not parts[0].isdigit():
            raise ProcessTreeError(f"cannot parse ps output for PID {pid}: {output!r}")

        ppid, *command = parts
        return ProcessInfo(
            pid=pid,
            parent_pid=int(ppid),
            command=tuple(command),
            name=os.path.basename(command[0]),
        )
