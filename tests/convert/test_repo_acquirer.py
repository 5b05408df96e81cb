"""Tests for RepoAcquirer against local git repositories."""

import os
from unittest.mock import patch

import pytest
from git import Repo
from git.exc import GitCommandNotFound

from expo_desktop.convert.errors import AcquisitionError, InputError
from expo_desktop.convert.project_context import ProjectContext
from expo_desktop.convert.repo_acquirer import RepoAcquirer


def _context(url, parent):
    return ProjectContext.from_url(url, parent_dir=str(parent))


@pytest.mark.integration
class TestRepoAcquirerClone:

    def test_clones_into_derived_directory(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path / "work")

        cloned = RepoAcquirer().acquire(context)

        assert cloned is True
        assert context.project_directory == str(tmp_path / "work" / "sample-proj")
        assert os.path.isfile(os.path.join(context.project_directory, "package.json"))
        assert os.path.isdir(os.path.join(context.project_directory, ".git"))

    def test_creates_missing_parent_directories(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path / "a" / "b" / "c")

        RepoAcquirer().acquire(context)

        assert os.path.isdir(context.project_directory)

    def test_clones_into_existing_empty_directory(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path)
        os.makedirs(context.project_directory)

        assert RepoAcquirer().acquire(context) is True

    def test_missing_repository_is_acquisition_error(self, tmp_path):
        context = _context(str(tmp_path / "nowhere" / "missing.git"), tmp_path / "work")

        with pytest.raises(AcquisitionError) as excinfo:
            RepoAcquirer().acquire(context)

        assert "git clone" in str(excinfo.value)
        assert excinfo.value.exit_code != 0


@pytest.mark.integration
class TestRepoAcquirerExistingDirectory:

    def test_fail_policy_rejects_non_empty_directory(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path)
        os.makedirs(context.project_directory)
        (tmp_path / "sample-proj" / "stray.txt").write_text("x")

        with pytest.raises(AcquisitionError, match="already exists"):
            RepoAcquirer().acquire(context)

        assert os.listdir(context.project_directory) == ["stray.txt"]

    def test_reuse_policy_keeps_existing_working_tree(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path)
        RepoAcquirer().acquire(context)
        head = Repo(context.project_directory).head.commit.hexsha

        cloned = RepoAcquirer(if_exists="reuse").acquire(context)

        assert cloned is False
        assert Repo(context.project_directory).head.commit.hexsha == head

    def test_reuse_policy_rejects_non_repository(self, tmp_path, sample_repo):
        context = _context(sample_repo, tmp_path)
        os.makedirs(context.project_directory)
        (tmp_path / "sample-proj" / "stray.txt").write_text("x")

        with pytest.raises(AcquisitionError, match="not a git working tree"):
            RepoAcquirer(if_exists="reuse").acquire(context)


@pytest.mark.unit
class TestRepoAcquirerInput:

    def test_empty_url_raises_before_creating_anything(self, tmp_path):
        context = ProjectContext(repository_url="", project_directory=str(tmp_path / "x"))

        with pytest.raises(InputError):
            RepoAcquirer().acquire(context)

        assert not os.path.exists(tmp_path / "x")

    def test_unknown_policy_is_rejected(self):
        with pytest.raises(ValueError):
            RepoAcquirer(if_exists="overwrite")

    def test_uncreatable_directory_is_acquisition_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        context = ProjectContext(
            repository_url="https://h/app.git",
            project_directory=str(blocker / "app"),
        )

        with pytest.raises(AcquisitionError, match="Cannot create directory"):
            RepoAcquirer().acquire(context)


    def test_missing_git_executable_is_acquisition_error(self, tmp_path):
        context = _context("https://h/app.git", tmp_path / "work")
        missing_git = GitCommandNotFound(["git", "clone"], FileNotFoundError(2, "No such file or directory"))

        with patch("expo_desktop.convert.repo_acquirer.Repo.clone_from", side_effect=missing_git):
            with pytest.raises(AcquisitionError, match="git executable not found") as excinfo:
                RepoAcquirer().acquire(context)

        assert excinfo.value.exit_code == 127

    def test_unreadable_existing_directory_is_acquisition_error(self, tmp_path):
        (tmp_path / "app").mkdir()
        context = ProjectContext(repository_url="https://h/app.git", project_directory=str(tmp_path / "app"))

        with patch("expo_desktop.convert.repo_acquirer.os.listdir",
                   side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(AcquisitionError, match="Cannot read directory"):
                RepoAcquirer().acquire(context)
