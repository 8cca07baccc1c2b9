"""Version sources: where candidate names live in git.

A version source lists candidate names, checks one out, creates a new one
at HEAD and pushes it. The version model in ``flopha.versions`` only ever
sees the list of names; everything git-specific stays here.

git failures are not caught: ``shell.git`` raises CalledProcessError and
it propagates to the caller unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import SourceKind
from .shell import git, git_ok


def has_remote(remote: str) -> bool:
    """Return True if ``remote`` is configured in the current repository."""
    return remote in git("remote").splitlines()


def fetch_remote(remote: str) -> None:
    """Fetch branches and all tags from ``remote``."""
    git("fetch", "--tags", "--quiet", remote)


class VersionSource(ABC):
    """Capability over a set of git refs used as version names."""

    kind: SourceKind

    @abstractmethod
    def list_names(self) -> list[str]:
        """Return every candidate name, in a stable order."""

    @abstractmethod
    def checkout(self, name: str) -> None:
        """Switch the working tree to ``name``."""

    @abstractmethod
    def create(self, name: str) -> None:
        """Create ``name`` at the current HEAD."""

    @abstractmethod
    def push(self, name: str, remote: str) -> None:
        """Push ``name`` to ``remote``."""


class TagVersionSource(VersionSource):
    """Versions are tags; checkout leaves HEAD detached at the tag."""

    kind = SourceKind.TAG

    def list_names(self) -> list[str]:
        return git("tag", "--list").splitlines()

    def checkout(self, name: str) -> None:
        git("checkout", "--quiet", f"refs/tags/{name}")

    def create(self, name: str) -> None:
        git("tag", name, "HEAD")

    def push(self, name: str, remote: str) -> None:
        git("push", remote, f"refs/tags/{name}")


class BranchVersionSource(VersionSource):
    """Versions are branches.

    Candidates are the local branches plus the branches of ``remote`` that
    have no local counterpart yet, named without the ``<remote>/`` prefix.
    """

    kind = SourceKind.BRANCH

    def __init__(self, remote: str = "origin") -> None:
        self.remote = remote

    def list_names(self) -> list[str]:
        # refname:short would give "heads/<name>" when a tag shares the name
        local = git(
            "for-each-ref", "--format=%(refname:lstrip=2)", "refs/heads/"
        ).splitlines()
        names = list(local)
        seen = set(local)

        prefix = f"refs/remotes/{self.remote}/"
        remote_refs = git("for-each-ref", "--format=%(refname)", prefix).splitlines()
        for ref in remote_refs:
            name = ref[len(prefix) :]
            # refs/remotes/<remote>/HEAD is a symbolic pointer, not a branch
            if name == "HEAD" or name in seen:
                continue
            names.append(name)
            seen.add(name)
        return names

    def exists(self, name: str) -> bool:
        return git_ok("show-ref", "--verify", "--quiet", f"refs/heads/{name}")

    def checkout(self, name: str, create: bool = False) -> None:
        """Switch to branch ``name``.

        With ``create``, a missing branch is first created at HEAD. Without
        it, git resolves remote-only names to a new tracking branch.
        """
        if create and not self.exists(name):
            git("branch", name)
        git("checkout", "--quiet", name)

    def create(self, name: str) -> None:
        self.checkout(name, create=True)

    def push(self, name: str, remote: str) -> None:
        git("push", remote, f"refs/heads/{name}")


def get_source(kind: SourceKind | str, remote: str = "origin") -> VersionSource:
    """Build the version source for ``kind``."""
    kind = SourceKind(kind)
    if kind is SourceKind.BRANCH:
        return BranchVersionSource(remote=remote)
    return TagVersionSource()
