"""Find which processes hold a TTY open, and correlate panes with processes.

lsof ("list open files") reports the connections programs have to a file.
Terminal panes and OS processes share no identifiers, but both touch the TTY
device, so lsof on a pane's TTY tells us which processes live in that pane.

PUBLIC API:
  - Connection: One parsed lsof row
  - PaneConnection: A pane hosting a process through a TTY connection
  - Lsof: Parallel lsof queries and pane/process correlation
"""

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import AppearError, LsofParseError
from .processes import ProcessInfo
from .runner import Runner
from .util.memoizer import Memoizer

logger = logging.getLogger(__name__)

__all__ = ["Connection", "PaneConnection", "Lsof"]

_FIELD_COUNT = 9


@dataclass(frozen=True, slots=True)
class Connection:
    """A connection of a process to a file, from one row of lsof output."""

    command_name: str
    pid: int
    user: str
    fd: str
    type: str
    device: str
    size: str
    node: str
    file_name: str

    @classmethod
    def from_line(cls, line: str) -> "Connection":
        """Parse an lsof output row.

        Raises:
            LsofParseError: If the row has fewer than 9 fields or a bad PID.
        """
        fields = line.split(None, _FIELD_COUNT - 1)
        if len(fields) < _FIELD_COUNT:
            raise LsofParseError(f"expected {_FIELD_COUNT} fields, got {len(fields)}")

        command_name, pid, user, fd, type_, device, size, node, file_name = fields
        if not pid.isdigit():
            raise LsofParseError(f"pid {pid!r} is not a number")

        return cls(
            command_name=command_name,
            pid=int(pid),
            user=user,
            fd=fd,
            type=type_,
            device=device,
            size=size,
            node=node,
            file_name=file_name.strip(),
        )


@dataclass(frozen=True, slots=True)
class PaneConnection:
    """A terminal pane currently hosting a process.

    Attributes:
        pane: Any object with a `tty` field.
        connection: The process's connection to that TTY.
        process: The process from the queried tree.
    """

    pane: Any
    connection: Connection
    process: ProcessInfo

    @property
    def tty(self) -> str:
        return self.connection.file_name

    @property
    def pid(self) -> int:
        return self.connection.pid


class Lsof:
    """Co-ordinates access to the `lsof` system utility."""

    def __init__(self, runner: Runner):
        self.runner = runner
        self._memo = Memoizer()

    def lsofs(self, paths: Iterable[str], pids: Sequence[int] | None = None) -> dict[str, list[Connection]]:
        """List connections to several files at once.

        Each path is queried in its own thread. A path whose query fails maps to
        an empty list; the other paths are unaffected.

        Args:
            paths: Files to query, usually TTY devices.
            pids: Restrict results to these PIDs.

        Returns:
            Map of every path to its connections.
        """
        results: dict[str, list[Connection]] = {}
        lock = threading.Lock()

        def worker(path: str) -> None:
            try:
                connections = self._lsof(path, pids)
            except (AppearError, OSError) as e:
                logger.error(f"lsof {path} failed: {e}")
                connections = []
            except Exception:
                logger.exception(f"lsof {path} failed unexpectedly")
                connections = []
            with lock:
                results[path] = connections

        threads = [threading.Thread(target=worker, args=(path,), daemon=True) for path in dict.fromkeys(paths)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        return results

    def join_via_tty(self, tree: Sequence[ProcessInfo], panes: Sequence[Any]) -> list[PaneConnection]:
        """Find panes whose TTY has a connection from a process in `tree`.

        If every pane has a `pids` field listing candidate terminal-emulator
        PIDs, lsof is restricted to those plus the tree, which is much faster.

        Returns:
            One PaneConnection per matching PID; when a PID touches several
            panes, the last pane wins.
        """
        hitlist = {process.pid: process for process in tree}
        ttys = [pane.tty for pane in panes]

        if all(getattr(pane, "pids", None) is not None for pane in panes):
            pids = list(hitlist)
            for pane in panes:
                pids.extend(pane.pids)
            lsofs = self.lsofs(ttys, pids=list(dict.fromkeys(pids)))
        else:
            lsofs = self.lsofs(ttys)

        hits: dict[int, PaneConnection] = {}
        for pane in panes:
            for conn in lsofs.get(pane.tty, []):
                process = hitlist.get(conn.pid)
                if process is not None:
                    hits[conn.pid] = PaneConnection(pane, conn, process)

        return list(hits.values())

    def _lsof(self, path: str, pids: Sequence[int] | None) -> list[Connection]:
        key = tuple(pids) if pids is not None else None
        return self._memo.call(lambda: self._query(path, key), path, key)

    def _query(self, path: str, pids: tuple[int, ...] | None) -> list[Connection]:
        if pids is not None:
            command = ["lsof", "-ap", ",".join(str(p) for p in pids), path]
        else:
            command = ["lsof", path]

        output = self.runner.run(command, allow_failure=True)
        lines = [line for line in output.splitlines() if line.strip()]
        if not lines:
            return []

        rows = []
        for line in lines[1:]:
            try:
                rows.append(Connection.from_line(line))
            except LsofParseError as e:
                logger.warning(f"lsof: parse error: {e}, line: {line!r}")
                return []
        return rows
