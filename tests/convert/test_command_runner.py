"""Tests for run_command() and run_command_with_input()."""

import sys

import pytest

from expo_desktop.convert.command_runner import CommandResult, CommandRunner


@pytest.mark.unit
class TestCommandResult:

    def test_succeeded_requires_zero_exit_and_no_timeout(self):
        assert CommandResult(returncode=0).succeeded
        assert not CommandResult(returncode=1).succeeded
        assert not CommandResult(returncode=0, timed_out=True).succeeded

    def test_output_joins_stdout_and_stderr(self):
        assert CommandResult(returncode=0, stdout="a\n", stderr="b\n").output == "a\nb\n"


@pytest.mark.integration
class TestCommandRunner:

    def test_run_reports_exit_code(self, tmp_path):
        result = CommandRunner().run([sys.executable, "-c", "raise SystemExit(3)"], cwd=str(tmp_path))

        assert result.returncode == 3

    def test_run_uses_working_directory(self, tmp_path):
        CommandRunner().run(
            [sys.executable, "-c", "open('marker', 'w').close()"], cwd=str(tmp_path),
        )

        assert (tmp_path / "marker").exists()

    def test_run_with_input_feeds_stdin_and_captures_output(self, tmp_path):
        script = "import sys; lines = sys.stdin.read().splitlines(); print(len(lines), lines[-1])"

        result = CommandRunner().run_with_input(
            [sys.executable, "-c", script], cwd=str(tmp_path), input_text="a\nb\nc\n",
        )

        assert result.returncode == 0
        assert result.stdout == "3 c\n"
        assert not result.timed_out

    def test_run_with_input_stops_command_after_timeout(self, tmp_path):
        result = CommandRunner().run_with_input(
            [sys.executable, "-c", "import time; time.sleep(60)"],
            cwd=str(tmp_path), input_text="", timeout=0.5,
        )

        assert result.timed_out
        assert not result.succeeded

    def test_missing_executable_reports_127(self, tmp_path):
        missing = str(tmp_path / "no-such-npm")

        result = CommandRunner().run([missing, "install"], cwd=str(tmp_path))
        piped = CommandRunner().run_with_input([missing], cwd=str(tmp_path), input_text="")

        assert result.returncode == 127
        assert piped.returncode == 127
        assert "command not found" in piped.stderr
