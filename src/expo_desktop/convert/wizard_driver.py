"""WizardDriver: answers the `tauri init` setup wizard without a human.

In "pipe" mode the answers are written to the wizard's stdin in contract
order. Nothing tells us which prompt the wizard is waiting on, so the
contract's order must match the installed Tauri CLI. The transcript is
checked against the contract afterwards to explain failures.

In "flags" mode the same contract is passed as `tauri init --ci` flags
and stdin carries nothing.
"""

import sys

from expo_desktop.convert.command_runner import INTERRUPTED_EXIT_CODE
from expo_desktop.convert.errors import ExternalToolError

WIZARD_MODE_PIPE = "pipe"
WIZARD_MODE_FLAGS = "flags"
WIZARD_MODES = (WIZARD_MODE_PIPE, WIZARD_MODE_FLAGS)
DEFAULT_WIZARD_TIMEOUT = 300
STEP_NAME = "tauri init"


class WizardDriver:
    """Runs the scaffolding tool's init subcommand and feeds it a PromptContract.

    Args:
        command_runner: CommandRunner (or a fake) used to start the wizard.
        npx: Executable used to launch the Tauri CLI.
        mode: "pipe" or "flags".
        timeout: Seconds to wait before the wizard is considered hung.
        retries: Additional attempts after a failed run.
    """

    def __init__(
        self, command_runner, npx="npx", mode=WIZARD_MODE_PIPE,
        timeout=DEFAULT_WIZARD_TIMEOUT, retries=0,
    ):
        if mode not in WIZARD_MODES:
            raise ValueError(f"Unknown wizard mode: {mode}")
        self._runner = command_runner
        self._npx = npx
        self._mode = mode
        self._timeout = timeout
        self._retries = retries

    def command(self, contract):
        cmd = [self._npx, "tauri", "init"]
        if self._mode == WIZARD_MODE_FLAGS:
            cmd += ["--ci"] + contract.flags()
        return cmd

    def wizard_input(self, contract):
        if self._mode == WIZARD_MODE_FLAGS:
            return ""
        return contract.piped_input()

    def run(self, project_dir, contract):
        """Drive the wizard to completion, retrying up to `retries` times.

        Returns the successful CommandResult. Raises ExternalToolError
        when every attempt fails.
        """
        attempts = self._retries + 1
        for attempt in range(1, attempts + 1):
            result = self._runner.run_with_input(
                self.command(contract),
                cwd=project_dir,
                input_text=self.wizard_input(contract),
                timeout=self._timeout,
            )
            if result.succeeded:
                return result

            error = self._failure(result, contract)
            if attempt == attempts or result.returncode == INTERRUPTED_EXIT_CODE:
                raise error
            print(f"Error: {error}", file=sys.stderr)
            print(f"Retrying {STEP_NAME} (attempt {attempt + 1} of {attempts})...", file=sys.stderr)

    def _failure(self, result, contract):
        lines = []
        if result.timed_out:
            lines.append(
                f"{STEP_NAME} did not finish within {self._timeout}s "
                f"and was stopped (it was probably waiting for more input)"
            )
        else:
            lines.append(f"{STEP_NAME} failed with exit code {result.returncode}")

        if self._mode == WIZARD_MODE_PIPE:
            missing = contract.unanswered_prompts(result.output)
            if missing:
                lines.append(
                    f"Prompts from contract {contract.version} not seen in wizard output: "
                    + ", ".join(prompt.key for prompt in missing)
                )
        if result.output.strip():
            lines.append("Wizard output:")
            lines.append(result.output.rstrip())

        returncode = None if result.timed_out else result.returncode
        return ExternalToolError(
            STEP_NAME, returncode, result.output, detail="\n".join(lines),
        )
