"""Shared fixtures and utilities for convert tests."""

import json
import os
import stat
import sys

import pytest
from git import Repo

# Ensure tests/convert/ is on sys.path so test files can import the
# fakes unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.dirname(__file__))

from fake_command_runner import FakeCommandRunner  # noqa: E402, F401
from fake_repo_acquirer import FakeRepoAcquirer  # noqa: E402, F401

FAKE_TAURI_INIT = os.path.join(os.path.dirname(__file__), "fake_tauri_init.py")


def write_manifest(directory, data):
    """Write data as package.json in directory and return its path."""
    path = os.path.join(directory, "package.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def read_manifest(directory):
    with open(os.path.join(directory, "package.json"), encoding="utf-8") as f:
        return json.load(f)


def create_source_repo(path, manifest):
    """Create a git repository at path with package.json committed.

    Returns:
        The path, usable as a clone URL.
    """
    os.makedirs(path, exist_ok=True)
    repo = Repo.init(path)
    repo.config_writer().set_value("user", "email", "test@test.com").release()
    repo.config_writer().set_value("user", "name", "Test").release()
    write_manifest(path, manifest)
    repo.index.add(["package.json"])
    repo.index.commit("Initial commit")
    return str(path)


def make_fake_npx(tmp_path):
    """Write an executable that behaves like `npx` for `npx tauri init ...`."""
    script = tmp_path / "fake-npx"
    script.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{FAKE_TAURI_INIT}" "$@"\n')
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


@pytest.fixture
def sample_repo(tmp_path):
    """A local repository named like a remote URL with a .git suffix."""
    return create_source_repo(
        str(tmp_path / "remote" / "sample-proj.git"),
        {"name": "Sample Proj!!", "version": "1.0.0", "private": True},
    )
