"""Tests for the ReplKit2 commands."""

import pytest

pytest.importorskip("replkit2")

import termappear.app  # noqa: E402, F401
from termappear.commands import edit, panes, reveal, tree  # noqa: E402
from termappear.config import Config  # noqa: E402
from termappear.errors import DeadProcess  # noqa: E402
from termappear.processes import ProcessInfo  # noqa: E402
from termappear.tmux import TmuxPane  # noqa: E402


class FakeTmux:
    def panes(self):
        return [
            TmuxPane("%1", 100, "work", 0, 0, "zsh", "/src", True, tmux=None),
            TmuxPane("%2", 101, "play", 1, 0, "vim", "/tmp", False, tmux=None),
        ]


class FakeInstance:
    def __init__(self, outcome=True):
        self.outcome = outcome
        self.tmux = FakeTmux()
        self.config = Config()

    def reveal(self, pid):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    def process_tree(self, pid):
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return [ProcessInfo(pid, 1, ("vim", "a.py"), "vim"), ProcessInfo(1, 0, ("/sbin/launchd",), "launchd")]


class FakeState:
    def __init__(self, outcome=True):
        self.outcome = outcome

    def instance(self):
        return FakeInstance(self.outcome)


class TestCommands:
    """Tests for the command functions."""

    def test_reveal(self):
        result = reveal(FakeState(True), 42)
        assert result["frontmatter"]["status"] == "revealed"

    def test_reveal_not_found(self):
        result = reveal(FakeState(False), 42)
        assert result["frontmatter"]["status"] == "not_found"

    def test_reveal_error(self):
        result = reveal(FakeState(DeadProcess("gone")), 42)
        assert result["frontmatter"]["status"] == "error"

    def test_tree(self):
        rows = tree(FakeState(), 42)
        assert [row["Name"] for row in rows] == ["vim", "launchd"]
        assert rows[0]["Command"] == "vim a.py"

    def test_panes_filter(self):
        rows = panes(FakeState(), filter="vim")
        assert [row["ID"] for row in rows] == ["%2"]

    def test_edit_unknown_editor(self):
        result = edit(FakeState(), "a.py", editor="emacs")
        assert result["frontmatter"]["status"] == "error"
