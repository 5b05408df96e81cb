"""ProjectContext: the repository URL and the directory derived from it."""

import os
import re
from dataclasses import dataclass

from expo_desktop.convert.errors import InputError

VCS_SUFFIX = ".git"


def project_directory_for(repository_url: str) -> str:
    """Return the local directory name for a repository URL.

    The final path segment is taken and a trailing ``.git`` removed. Case
    is preserved:
        https://example.com/Foo-App.git -> Foo-App
        git@host:org/app.git -> app
    """
    url = repository_url.strip().rstrip("/")
    name = re.split(r"[/:]", url)[-1]
    if name.endswith(VCS_SUFFIX):
        name = name[: -len(VCS_SUFFIX)]
    if not name or name in (".", ".."):
        raise InputError(f"Cannot derive a project directory from URL: {repository_url!r}")
    return name


@dataclass(frozen=True)
class ProjectContext:
    repository_url: str
    project_directory: str

    @classmethod
    def from_url(cls, repository_url: str, parent_dir: str = ".") -> "ProjectContext":
        if not repository_url or not repository_url.strip():
            raise InputError("Repository URL must not be empty")
        name = project_directory_for(repository_url)
        return cls(
            repository_url=repository_url.strip(),
            project_directory=os.path.join(parent_dir, name),
        )
