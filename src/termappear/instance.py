"""Instance: the composition root that co-ordinates revealing a PID.

PUBLIC API:
  - Instance: Builds all services and reveals process trees
"""

import logging
from typing import Optional

from .config import Config
from .lsof import Lsof
from .macos import MacOs
from .processes import ProcessInfo, Processes
from .revealers import BaseRevealer, build_revealers
from .runner import Runner, RunnerRecorder
from .tmux import Tmux

logger = logging.getLogger(__name__)

__all__ = ["Instance"]


class Instance:
    """Constructs the services and runs the revealer chain.

    Caches live on the services, so one Instance should serve one invocation.

    Attributes:
        config: Options for this instance.
        runner: Command runner shared by all services.
        processes: Process lookups.
        lsof: TTY connection lookups.
        mac_os: macOS helper access.
        tmux: tmux service.
        revealers: Revealers in the order they run.
    """

    def __init__(self, config: Optional[Config] = None, runner: Optional[Runner] = None):
        self.config = config or Config()

        if runner is None:
            runner = RunnerRecorder(self.config.record_dir) if self.config.record_runs else Runner()
        self.runner = runner

        self.processes = Processes(self.runner)
        self.lsof = Lsof(self.runner)
        self.mac_os = MacOs(self.runner)
        self.tmux = Tmux(self.runner)
        self.revealers: list[BaseRevealer] = build_revealers(
            self.config.revealers,
            mac_os=self.mac_os,
            processes=self.processes,
            lsof=self.lsof,
            tmux=self.tmux,
            reveal=self.reveal,
        )

        self._revealing: list[int] = []

    def process_tree(self, pid: int) -> list[ProcessInfo]:
        return self.processes.process_tree(pid)

    def reveal(self, pid: int) -> bool:
        """Reveal the given PID in every terminal surface that hosts it.

        Every revealer runs, even after an earlier one succeeded, because
        several backends may host the same tree. Reveals may nest (a tmux
        client inside a GUI terminal); nesting is bounded by
        `config.max_reveal_depth` and never revisits a PID already being revealed.

        Returns:
            True if anything was revealed.

        Raises:
            DeadProcess: If `pid` is not running.
        """
        if pid in self._revealing:
            logger.warning(f"already revealing pid {pid}, skipping")
            return False
        if len(self._revealing) >= self.config.max_reveal_depth:
            logger.warning(f"reveal depth {self.config.max_reveal_depth} reached at pid {pid}, skipping")
            return False

        self._revealing.append(pid)
        try:
            tree = self.process_tree(pid)
            logger.debug(f"process tree for {pid}: {[p.name for p in tree]}")

            statuses = []
            for revealer in self.revealers:
                status = revealer.call(tree)
                logger.debug(f"{revealer.name}: revealed={status}")
                statuses.append(status)
        finally:
            self._revealing.pop()

        return any(statuses)

    __call__ = reveal
