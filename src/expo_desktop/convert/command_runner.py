"""CommandRunner: runs the external tools the pipeline drives.

Provides module-level run_command() and run_command_with_input()
functions, plus a CommandRunner class that delegates to them and can be
replaced by FakeCommandRunner in tests.
"""

import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from expo_desktop.convert.managed_subprocess import ManagedSubprocess

INTERRUPTED_EXIT_CODE = 130
NOT_FOUND_EXIT_CODE = 127


@dataclass
class CommandResult:
    """Outcome of one external command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        return self.stdout + self.stderr


def _not_found(cmd):
    return CommandResult(returncode=NOT_FOUND_EXIT_CODE, stderr=f"{cmd[0]}: command not found\n")


def run_command(cmd: List[str], cwd: str) -> CommandResult:
    """Run a command inheriting the terminal, so its diagnostics reach the user unmodified."""
    try:
        result = subprocess.run(cmd, cwd=cwd)
    except FileNotFoundError:
        return _not_found(cmd)

    return CommandResult(returncode=result.returncode)


def run_command_with_input(
    cmd: List[str], cwd: str, input_text: str, timeout: Optional[float] = None,
) -> CommandResult:
    """Run a command with input_text written to its stdin, then stdin closed.

    Output is captured. If the command has not exited after timeout
    seconds its process group is terminated and the result is marked
    timed_out.
    """
    try:
        process = subprocess.Popen(
            cmd,
            cwd=cwd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            start_new_session=True,
        )
    except FileNotFoundError:
        return _not_found(cmd)

    stdout, stderr = "", ""
    timed_out = False
    with ManagedSubprocess(process=process, label=os.path.basename(cmd[0])) as managed:
        try:
            stdout, stderr = process.communicate(input=input_text, timeout=timeout)
        except subprocess.TimeoutExpired:
            timed_out = True
            managed.stop()
            stdout, stderr = process.communicate()

    if managed.interrupted:
        return CommandResult(returncode=INTERRUPTED_EXIT_CODE)

    return CommandResult(
        returncode=process.returncode,
        stdout=stdout or "",
        stderr=stderr or "",
        timed_out=timed_out,
    )


class CommandRunner:
    """Delegates to the module-level run functions."""

    def run(self, cmd: List[str], cwd: str) -> CommandResult:
        return run_command(cmd, cwd=cwd)

    def run_with_input(
        self, cmd: List[str], cwd: str, input_text: str, timeout: Optional[float] = None,
    ) -> CommandResult:
        return run_command_with_input(cmd, cwd=cwd, input_text=input_text, timeout=timeout)
