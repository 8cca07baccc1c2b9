"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

TAGS = [
    "v1.0.0",
    "v1.0.1",
    "v1.0.2",
    "v2.2.1",
    "v1.1.0",
    "v2.0.0",
    "v2.1.0",
    "v2.1.1",
    "v2.1.2",
    "v2.2.0",
    "z4.0.0",
]

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def commit(cwd: Path, message: str) -> str:
    """Create an empty commit and return its sha."""
    run_git(cwd, "commit", "--allow-empty", "--quiet", "-m", message)
    return run_git(cwd, "rev-parse", "HEAD")


@pytest.fixture
def tags() -> list[str]:
    """Tag names shared by the version model tests."""
    return list(TAGS)


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a git repository with one commit on main and chdir into it."""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "--quiet", "--initial-branch=main")
    run_git(repo, "config", "user.name", "name")
    run_git(repo, "config", "user.email", "email@example.com")
    run_git(repo, "config", "commit.gpgsign", "false")
    run_git(repo, "config", "tag.gpgsign", "false")
    commit(repo, "Initial commit")
    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def remote_repo(git_repo: Path, tmp_path: Path) -> Path:
    """Create a bare remote, add it as origin and push main to it."""
    remote = tmp_path / "remote.git"
    run_git(tmp_path, "init", "--quiet", "--bare", "--initial-branch=main", str(remote))
    run_git(git_repo, "remote", "add", "origin", str(remote))
    run_git(git_repo, "push", "--quiet", "origin", "main")
    return remote
