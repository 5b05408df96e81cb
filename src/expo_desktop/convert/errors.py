"""Error taxonomy for the conversion pipeline.

Every error is fatal. The CLI catches ConversionError once, prints its
message, and exits with its exit_code.
"""


def exit_code_for(returncode):
    """Map a child exit status to a process exit code; signals become 128 + signum."""
    if returncode is None or returncode == 0:
        return 1
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode


class ConversionError(Exception):
    """Base class for all pipeline failures."""

    exit_code = 1


class InputError(ConversionError):
    """Missing or malformed command-line input, raised before any side effect."""


class AcquisitionError(ConversionError):
    """The repository could not be fetched into the project directory."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        if returncode:
            self.exit_code = exit_code_for(returncode)


class ManifestError(ConversionError):
    """package.json is missing, unreadable, or not a finite JSON object."""


class ExternalToolError(ConversionError):
    """An external command exited non-zero (or never exited).

    Args:
        step: Human-readable name of the failing step.
        returncode: Exit status of the tool, or None if it was killed.
        output: Captured output of the tool, surfaced verbatim.
    """

    def __init__(self, step, returncode=None, output="", detail=None):
        self.step = step
        self.returncode = returncode
        self.output = output
        if returncode:
            self.exit_code = exit_code_for(returncode)
        message = detail or f"{step} failed with exit code {returncode}"
        if not detail and output.strip():
            message += f"\n{output.rstrip()}"
        super().__init__(message)
