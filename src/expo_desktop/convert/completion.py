"""Human-readable instructions printed after a successful conversion."""

from expo_desktop.convert.manifest_patcher import RUN_TARGET_NAME
from expo_desktop.templates.template_renderer import render_template


def completion_message(project_directory, identifier, npm="npm"):
    return render_template(
        "completion.j2",
        package=__package__,
        project_directory=project_directory,
        identifier=identifier,
        npm=npm,
        run_target=RUN_TARGET_NAME,
    )
