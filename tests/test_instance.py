"""Tests for Instance, the reveal entry point."""

import pytest

from termappear.config import Config
from termappear.errors import DeadProcess
from termappear.instance import Instance
from termappear.revealers import BaseRevealer
from termappear.runner import RunnerRecorder

from conftest import script_processes


class FakeRevealer(BaseRevealer):
    """Records the trees it sees and returns a fixed result."""

    def __init__(self, name, result=False, on_reveal=None):
        self.name = name
        self.result = result
        self.on_reveal = on_reveal
        self.trees = []

    def supports_tree(self, target, rest):
        return True

    def reveal_tree(self, tree):
        self.trees.append([p.pid for p in tree])
        if self.on_reveal:
            self.on_reveal(tree)
        return self.result


@pytest.fixture
def chain(runner, dead_pids):
    script_processes(runner, (30, 20, "vim"), (20, 10, "zsh"), (10, 1, "tmux"), (1, 0, "/sbin/launchd"))
    return runner


class TestReveal:
    """Tests for Instance.reveal."""

    def test_runs_every_revealer_and_ors(self, chain):
        instance = Instance(Config(), runner=chain)
        first = FakeRevealer("first", result=True)
        second = FakeRevealer("second", result=False)
        instance.revealers = [first, second]

        assert instance.reveal(30) is True
        assert first.trees == second.trees == [[30, 20, 10, 1]]

    def test_nothing_revealed(self, chain):
        instance = Instance(Config(), runner=chain)
        instance.revealers = [FakeRevealer("a"), FakeRevealer("b")]

        assert instance(30) is False

    def test_idempotent(self, chain):
        instance = Instance(Config(), runner=chain)
        revealer = FakeRevealer("a", result=True)
        instance.revealers = [revealer]

        assert instance.reveal(30) is True
        assert instance.reveal(30) is True
        assert len(revealer.trees) == 2

    def test_dead_process_propagates(self, chain, dead_pids):
        dead_pids.add(30)
        instance = Instance(Config(), runner=chain)
        instance.revealers = [FakeRevealer("a", result=True)]

        with pytest.raises(DeadProcess):
            instance.reveal(30)
        assert instance._revealing == []

    def test_nested_reveal_of_same_pid_is_skipped(self, chain):
        instance = Instance(Config(), runner=chain)
        nested = []
        instance.revealers = [FakeRevealer("loop", result=True, on_reveal=lambda tree: nested.append(instance.reveal(30)))]

        assert instance.reveal(30) is True
        assert nested == [False]

    def test_nesting_depth_is_bounded(self, chain):
        instance = Instance(Config(max_reveal_depth=2), runner=chain)
        depth_results = []

        def descend(tree):
            # Reveal the parent of whatever we were asked to reveal.
            depth_results.append(instance.reveal(tree[0].parent_pid))

        revealer = FakeRevealer("descend", result=True, on_reveal=descend)
        instance.revealers = [revealer]

        assert instance.reveal(30) is True
        assert revealer.trees == [[30, 20, 10, 1], [20, 10, 1]]
        assert depth_results == [False, True]
        assert instance._revealing == []


class TestConstruction:
    """Tests for building the services from Config."""

    def test_revealer_order_from_config(self, runner):
        instance = Instance(Config(revealers=["tmux", "iterm2"]), runner=runner)
        assert [r.name for r in instance.revealers] == ["tmux", "iTerm2"]

    def test_unknown_revealer(self, runner):
        with pytest.raises(ValueError):
            Instance(Config(revealers=["kitty"]), runner=runner)

    def test_record_runs_uses_recorder(self, tmp_path):
        instance = Instance(Config(record_runs=True, record_dir=tmp_path))
        assert isinstance(instance.runner, RunnerRecorder)
        assert instance.runner.record_dir == tmp_path

    def test_process_tree_delegates(self, chain):
        assert [p.name for p in Instance(Config(), runner=chain).process_tree(20)] == ["zsh", "tmux", "launchd"]
