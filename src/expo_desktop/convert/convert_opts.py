"""Options dataclass for the convert command."""

from dataclasses import dataclass

import click

from expo_desktop.convert.dependency_installer import CLIENT_BINDING_PACKAGE, TOOLCHAIN_PACKAGE
from expo_desktop.convert.repo_acquirer import IF_EXISTS_FAIL
from expo_desktop.convert.wizard_driver import DEFAULT_WIZARD_TIMEOUT, WIZARD_MODE_PIPE


@dataclass
class ConvertOpts:
    """All options for the convert command."""

    repository_url: str
    parent_dir: str = "."
    if_exists: str = IF_EXISTS_FAIL
    npm: str = "npm"
    npx: str = "npx"
    toolchain_package: str = TOOLCHAIN_PACKAGE
    client_binding_package: str = CLIENT_BINDING_PACKAGE
    wizard_mode: str = WIZARD_MODE_PIPE
    wizard_timeout: float = DEFAULT_WIZARD_TIMEOUT
    wizard_retries: int = 0
    state_file: str | None = None
    dry_run: bool = False
    quiet: bool = False

    def validate(self):
        """Raise click.UsageError for option values no run could use."""
        if self.wizard_timeout <= 0:
            raise click.UsageError("--wizard-timeout must be greater than 0")
        if self.wizard_retries < 0:
            raise click.UsageError("--wizard-retries cannot be negative")
