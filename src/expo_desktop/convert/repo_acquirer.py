"""RepoAcquirer: materializes the repository into the project directory."""

import os

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandNotFound

from expo_desktop.convert.errors import AcquisitionError, InputError

IF_EXISTS_FAIL = "fail"
IF_EXISTS_REUSE = "reuse"
IF_EXISTS_CHOICES = (IF_EXISTS_FAIL, IF_EXISTS_REUSE)
GIT_NOT_FOUND_EXIT_CODE = 127


def _is_git_working_tree(directory):
    try:
        Repo(directory)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False
    return True


class RepoAcquirer:
    """Clones a repository into a freshly created directory.

    Args:
        if_exists: What to do when the target directory already has
            content: "fail" raises AcquisitionError, "reuse" keeps an
            existing git working tree and skips the clone.
    """

    def __init__(self, if_exists=IF_EXISTS_FAIL):
        if if_exists not in IF_EXISTS_CHOICES:
            raise ValueError(f"Unknown if_exists policy: {if_exists}")
        self._if_exists = if_exists

    def acquire(self, context):
        """Clone context.repository_url into context.project_directory.

        Returns True if a clone was made, False if an existing working
        tree was reused.
        """
        if not context.repository_url:
            raise InputError("Repository URL must not be empty")

        directory = context.project_directory
        if self._has_content(directory):
            return self._handle_existing(directory)

        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise AcquisitionError(f"Cannot create directory {directory}: {e.strerror}") from e

        try:
            Repo.clone_from(context.repository_url, directory)
        except GitCommandNotFound as e:
            raise AcquisitionError(
                f"git clone of {context.repository_url} failed: git executable not found",
                returncode=GIT_NOT_FOUND_EXIT_CODE,
            ) from e
        except GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise AcquisitionError(
                f"git clone of {context.repository_url} failed: {stderr}",
                returncode=e.status if isinstance(e.status, int) else None,
            ) from e
        return True

    def _has_content(self, directory):
        if not os.path.isdir(directory):
            return False
        try:
            return bool(os.listdir(directory))
        except OSError as e:
            raise AcquisitionError(f"Cannot read directory {directory}: {e.strerror}") from e

    def _handle_existing(self, directory):
        if self._if_exists == IF_EXISTS_REUSE and _is_git_working_tree(directory):
            return False
        if self._if_exists == IF_EXISTS_REUSE:
            raise AcquisitionError(
                f"Directory {directory} exists but is not a git working tree"
            )
        raise AcquisitionError(
            f"Directory {directory} already exists and is not empty "
            f"(use --if-exists reuse to keep it)"
        )
