"""Project configuration from pyproject.toml.

Reads the optional ``[tool.flopha]`` table of the repository's
pyproject.toml with tomlkit:

    [tool.flopha]
    pattern = "release-{major}.{minor}.{patch}"
    source = "branch"
    remote = "origin"

Command-line options take precedence over these values.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import tomlkit
import tomlkit.exceptions
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError
from .models import SourceKind
from .shell import git
from .versions import DEFAULT_PATTERN


class Settings(BaseModel):
    """Defaults for every flopha command.

    Attributes:
        pattern: Version pattern used when --pattern is not given.
        source: Whether versions are tags or branches.
        remote: Remote to fetch from and push to.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pattern: str = DEFAULT_PATTERN
    source: SourceKind = SourceKind.TAG
    remote: str = "origin"


def find_repo_root() -> Path:
    """Return the top level of the current git work tree, or the cwd."""
    top = git("rev-parse", "--show-toplevel", check=False)
    return Path(top) if top else Path.cwd()


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_tool_table(doc: tomlkit.TOMLDocument) -> object:
    """Extract [tool.flopha] as plain Python data, an empty dict when absent.

    The result is whatever the file holds; callers check that it is a table.
    """
    tool = doc.get("tool", {})
    table = tool.get("flopha", {}) if isinstance(tool, Mapping) else {}
    return table.unwrap() if hasattr(table, "unwrap") else table


def load_settings(root: Path | None = None) -> Settings:
    """Load settings from ``<root>/pyproject.toml``.

    Missing files and missing tables yield the defaults.

    Raises:
        ConfigError: If the file cannot be parsed, [tool.flopha] is not a
            table, or the table has unknown keys or invalid values.
    """
    root = root if root is not None else find_repo_root()
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return Settings()

    try:
        table = get_tool_table(load_pyproject(pyproject))
    except tomlkit.exceptions.ParseError as exc:
        raise ConfigError(f"Cannot parse {pyproject}: {exc}") from exc
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.flopha] in {pyproject} must be a table")

    try:
        return Settings(**table)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.flopha] in {pyproject}:\n{exc}") from exc
