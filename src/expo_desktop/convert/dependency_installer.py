"""DependencyInstaller: thin pass-through to npm."""

from expo_desktop.convert.errors import ExternalToolError

TOOLCHAIN_PACKAGE = "@tauri-apps/cli@latest"
CLIENT_BINDING_PACKAGE = "@tauri-apps/api@latest"


class DependencyInstaller:
    """Runs npm in the project directory; any non-zero exit is fatal."""

    def __init__(
        self, command_runner, npm="npm",
        toolchain_package=TOOLCHAIN_PACKAGE,
        client_binding_package=CLIENT_BINDING_PACKAGE,
    ):
        self._runner = command_runner
        self._npm = npm
        self._toolchain_package = toolchain_package
        self._client_binding_package = client_binding_package

    def base_command(self):
        return [self._npm, "install"]

    def toolchain_command(self):
        return [self._npm, "install", "--save-dev", self._toolchain_package]

    def client_binding_command(self):
        return [self._npm, "install", self._client_binding_package]

    def install_base(self, project_dir):
        self._run("npm install", self.base_command(), project_dir)

    def add_toolchain(self, project_dir):
        self._run(f"npm install {self._toolchain_package}", self.toolchain_command(), project_dir)

    def add_client_binding(self, project_dir):
        self._run(
            f"npm install {self._client_binding_package}",
            self.client_binding_command(),
            project_dir,
        )

    def _run(self, step, cmd, project_dir):
        result = self._runner.run(cmd, cwd=project_dir)
        if result.returncode != 0:
            raise ExternalToolError(step, result.returncode, result.output)
