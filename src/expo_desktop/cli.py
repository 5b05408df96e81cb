"""Click entry point for expo-desktop."""

import sys

import click

from expo_desktop.convert.command_runner import CommandRunner
from expo_desktop.convert.completion import completion_message
from expo_desktop.convert.convert_opts import ConvertOpts
from expo_desktop.convert.dependency_installer import DependencyInstaller
from expo_desktop.convert.errors import ConversionError
from expo_desktop.convert.manifest_patcher import ManifestPatcher
from expo_desktop.convert.pipeline import ConversionPipeline, PipelineSteps
from expo_desktop.convert.pipeline_state import PipelineState
from expo_desktop.convert.project_context import ProjectContext
from expo_desktop.convert.prompt_contract import PromptContract
from expo_desktop.convert.repo_acquirer import IF_EXISTS_CHOICES, RepoAcquirer
from expo_desktop.convert.wizard_driver import WIZARD_MODES, WizardDriver


def build_pipeline(opts: ConvertOpts, command_runner=None) -> ConversionPipeline:
    runner = command_runner or CommandRunner()
    steps = PipelineSteps(
        repo_acquirer=RepoAcquirer(if_exists=opts.if_exists),
        dependency_installer=DependencyInstaller(
            runner,
            npm=opts.npm,
            toolchain_package=opts.toolchain_package,
            client_binding_package=opts.client_binding_package,
        ),
        manifest_patcher=ManifestPatcher(),
        wizard_driver=WizardDriver(
            runner,
            npx=opts.npx,
            mode=opts.wizard_mode,
            timeout=opts.wizard_timeout,
            retries=opts.wizard_retries,
        ),
    )
    state = PipelineState(opts.repository_url, state_file=opts.state_file)
    return ConversionPipeline(steps, state, quiet=opts.quiet)


def print_dry_run(opts: ConvertOpts, context: ProjectContext, pipeline: ConversionPipeline):
    steps = pipeline.steps
    installer = steps.dependency_installer
    wizard = steps.wizard_driver
    contract = PromptContract.for_identifier("<name from package.json>")
    click.echo(f"Repository: {context.repository_url}")
    click.echo(f"Directory: {context.project_directory}")
    click.echo(f"Run: git clone {context.repository_url} {context.project_directory}")
    for cmd in (installer.base_command(), installer.toolchain_command()):
        click.echo(f"Run: {' '.join(cmd)}")
    click.echo("Patch: package.json scripts.tauri = \"tauri\"")
    click.echo(f"Run: {' '.join(wizard.command(contract))} ({opts.wizard_mode} mode)")
    click.echo(f"Run: {' '.join(installer.client_binding_command())}")


def _usage_error(ctx, message):
    click.echo(ctx.get_usage(), err=True)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("repo_urls", nargs=-1, metavar="REPO_URL")
@click.option("--parent-dir", default=".", envvar="EXPO_DESKTOP_PARENT_DIR", show_default=True,
              type=click.Path(file_okay=False), help="Directory to create the project directory in.")
@click.option("--if-exists", type=click.Choice(IF_EXISTS_CHOICES), default="fail",
              envvar="EXPO_DESKTOP_IF_EXISTS", show_default=True,
              help="What to do when the project directory already has content.")
@click.option("--npm", default="npm", envvar="EXPO_DESKTOP_NPM", show_default=True,
              help="npm executable.")
@click.option("--npx", default="npx", envvar="EXPO_DESKTOP_NPX", show_default=True,
              help="npx executable used to run the Tauri CLI.")
@click.option("--wizard-mode", type=click.Choice(WIZARD_MODES), default="pipe",
              envvar="EXPO_DESKTOP_WIZARD_MODE", show_default=True,
              help="Answer tauri init through stdin (pipe) or command-line flags (flags).")
@click.option("--wizard-timeout", type=float, default=300, envvar="EXPO_DESKTOP_WIZARD_TIMEOUT",
              show_default=True, help="Seconds to wait for tauri init before stopping it.")
@click.option("--wizard-retries", type=int, default=0, envvar="EXPO_DESKTOP_WIZARD_RETRIES",
              show_default=True, help="Extra tauri init attempts after a failure.")
@click.option("--state-file", default=None, envvar="EXPO_DESKTOP_STATE_FILE",
              type=click.Path(dir_okay=False), help="Record the stage reached in this JSON file.")
@click.option("--dry-run", is_flag=True, help="Print what would run and exit.")
@click.option("--quiet", "-q", is_flag=True, help="Only print errors and the final instructions.")
@click.pass_context
def main(ctx, repo_urls, parent_dir, if_exists, npm, npx, wizard_mode, wizard_timeout,
         wizard_retries, state_file, dry_run, quiet):
    """Clone an Expo project from REPO_URL and set it up as a Tauri desktop app."""
    if len(repo_urls) != 1:
        _usage_error(ctx, "expected exactly one REPO_URL")
    if not repo_urls[0].strip():
        _usage_error(ctx, "REPO_URL must not be empty")

    opts = ConvertOpts(
        repository_url=repo_urls[0],
        parent_dir=parent_dir,
        if_exists=if_exists,
        npm=npm,
        npx=npx,
        wizard_mode=wizard_mode,
        wizard_timeout=wizard_timeout,
        wizard_retries=wizard_retries,
        state_file=state_file,
        dry_run=dry_run,
        quiet=quiet,
    )
    opts.validate()

    try:
        context = ProjectContext.from_url(opts.repository_url, parent_dir=opts.parent_dir)
    except ConversionError as e:
        _usage_error(ctx, str(e))

    pipeline = build_pipeline(opts)
    if opts.dry_run:
        print_dry_run(opts, context, pipeline)
        return

    try:
        result = pipeline.run(context)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Stopped after stage: {pipeline.state.stage.value}", file=sys.stderr)
        sys.exit(e.exit_code)

    click.echo()
    click.echo(completion_message(result.project_directory, result.identifier, npm=opts.npm), nl=False)
