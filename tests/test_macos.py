"""Tests for the macOS helper protocol and GUI terminal backends."""

import json

import pytest

from termappear.errors import MacToolError
from termappear.macos import HELPER_SCRIPT, MacOs
from termappear.processes import ProcessInfo, Processes
from termappear.terminal import TERMINAL_SERVER_NAMES, Iterm2, TerminalApp, TerminalPane


def helper_command(method, data=None):
    command = ["osascript", "-l", "JavaScript", str(HELPER_SCRIPT), method]
    if data is not None:
        command.append(json.dumps(data))
    return command


class TestMacOs:
    """Tests for MacOs.call_method and has_gui."""

    def test_helper_script_ships_with_package(self):
        assert HELPER_SCRIPT.exists()

    def test_ok_returns_value(self, runner):
        runner.add(helper_command("test_ok", {"x": 1}), 'some log noise\n{"status": "ok", "value": {"x": 1}}\n')
        assert MacOs(runner).call_method("test_ok", {"x": 1}) == {"x": 1}

    def test_error_raises_with_stack(self, runner):
        runner.add(
            helper_command("test_err"),
            '{"status": "error", "error": {"message": "boom", "stack": "at line 3"}}\n',
        )

        with pytest.raises(MacToolError) as exc_info:
            MacOs(runner).call_method("test_err")

        assert exc_info.value.tool_message == "boom"
        assert exc_info.value.stack == "at line 3"

    def test_no_output_raises(self, runner):
        runner.add(helper_command("iterm2_panes"), "\n")
        with pytest.raises(MacToolError):
            MacOs(runner).call_method("iterm2_panes")

    def test_garbage_output_raises(self, runner):
        runner.add(helper_command("iterm2_panes"), "execution error: not allowed\n")
        with pytest.raises(MacToolError):
            MacOs(runner).call_method("iterm2_panes")

    def test_has_gui(self, runner):
        mac_os = MacOs(runner)
        app = ProcessInfo(1, 0, ("/Applications/iTerm.app/Contents/MacOS/iTerm2",), "iTerm2")
        cli = ProcessInfo(2, 1, ("/bin/zsh",), "zsh")
        empty = ProcessInfo(3, 1, (), "")

        assert mac_os.has_gui(app)
        assert not mac_os.has_gui(cli)
        assert not mac_os.has_gui(empty)


class TestMacTerminal:
    """Tests for the GUI terminal backends."""

    def test_panes_carry_emulator_pids(self, runner):
        runner.add(["pgrep", "-lf", "iTerm2"], "50 /Applications/iTerm.app/Contents/MacOS/iTerm2\n")
        runner.add(
            helper_command("iterm2_panes"),
            json.dumps({"status": "ok", "value": [{"window": 0, "tab": 1, "session": 0, "tty": "/dev/ttys002"}]}),
        )

        panes = Iterm2(MacOs(runner), Processes(runner)).panes()

        assert panes == [TerminalPane(tty="/dev/ttys002", window=0, tab=1, session=0, pids=(50,))]

    def test_reveal_pane(self, runner):
        runner.add(helper_command("terminal_reveal_tty", "/dev/ttys002"), '{"status": "ok", "value": true}')

        terminal = TerminalApp(MacOs(runner), Processes(runner))

        assert terminal.reveal_pane(TerminalPane(tty="/dev/ttys002"))

    def test_running_uses_pattern(self, runner):
        runner.add(["pgrep", "-lf", "Terminal.app"], "77 /System/Applications/Utilities/Terminal.app/x\n")
        assert TerminalApp(MacOs(runner), Processes(runner)).running()
        assert not Iterm2(MacOs(runner), Processes(runner)).running()

    def test_server_names(self):
        assert TERMINAL_SERVER_NAMES == {"iTerm2", "Terminal"}
