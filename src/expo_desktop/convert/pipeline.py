"""ConversionPipeline: the ordered steps that turn an Expo checkout into a Tauri project.

Each step's on-disk result is the precondition of the next, so steps run
strictly in order and the first failure ends the run. Nothing is rolled
back.
"""

from dataclasses import dataclass
from typing import Tuple

import click

from expo_desktop.convert.pipeline_state import PipelineStage, PipelineState
from expo_desktop.convert.prompt_contract import PromptContract, app_identifier


@dataclass
class PipelineSteps:
    """Bundles the collaborators the pipeline drives."""
    repo_acquirer: object
    dependency_installer: object
    manifest_patcher: object
    wizard_driver: object


@dataclass
class ConversionResult:
    project_directory: str
    identifier: str
    answers: Tuple[str, ...]
    cloned: bool


class ConversionPipeline:
    """Runs acquisition, installs, manifest patch, and wizard in order."""

    def __init__(self, steps: PipelineSteps, state: PipelineState, quiet: bool = False):
        self._steps = steps
        self._state = state
        self._quiet = quiet

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def steps(self) -> PipelineSteps:
        return self._steps

    def _announce(self, message):
        if not self._quiet:
            click.echo(f"==> {message}")

    def run(self, context) -> ConversionResult:
        project_dir = context.project_directory

        self._announce(f"Cloning {context.repository_url} into {project_dir}")
        cloned = self._steps.repo_acquirer.acquire(context)
        if not cloned:
            self._announce(f"Reusing existing checkout in {project_dir}")
        self._state.advance_to(PipelineStage.ACQUIRED)

        # Reject a missing or malformed package.json before npm touches the tree.
        self._steps.manifest_patcher.load(project_dir)

        self._announce("Installing project dependencies")
        self._steps.dependency_installer.install_base(project_dir)
        self._announce("Adding Tauri CLI")
        self._steps.dependency_installer.add_toolchain(project_dir)
        self._state.advance_to(PipelineStage.DEPENDENCIES_INSTALLED)

        self._announce("Registering the tauri script in package.json")
        manifest = self._steps.manifest_patcher.patch(project_dir)
        self._state.advance_to(PipelineStage.MANIFEST_PATCHED)

        identifier = app_identifier(manifest.name)
        contract = PromptContract.for_identifier(identifier)
        self._announce(f"Running tauri init for {identifier}")
        result = self._steps.wizard_driver.run(project_dir, contract)
        if not self._quiet and result.output.strip():
            click.echo(result.output.rstrip())
        self._state.advance_to(PipelineStage.WIZARD_INITIALIZED)

        self._announce("Adding Tauri API")
        self._steps.dependency_installer.add_client_binding(project_dir)
        self._state.advance_to(PipelineStage.COMPLETE)

        return ConversionResult(
            project_directory=project_dir,
            identifier=identifier,
            answers=contract.answers(),
            cloned=cloned,
        )
