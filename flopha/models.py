"""Data models for flopha.

These Pydantic models are the value types shared by the version model and
the git-facing layers. None of them is mutated after construction.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Increment(str, Enum):
    """Which component of a version to bump."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


class SourceKind(str, Enum):
    """Where candidate version names come from."""

    TAG = "tag"
    BRANCH = "branch"


class Version(BaseModel):
    """A candidate name that matched a version pattern.

    Attributes:
        name: The candidate exactly as it appears in git (tag or branch name).
        major: Value bound to {major}, or None when the pattern has no
               {major} placeholder.
        minor: Value bound to {minor}, or None when unscoped.
        patch: Value bound to {patch}, or None when unscoped.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    major: int | None = None
    minor: int | None = None
    patch: int | None = None

    def parts(self) -> tuple[int | None, int | None, int | None]:
        """Return (major, minor, patch) in priority order."""
        return (self.major, self.minor, self.patch)
