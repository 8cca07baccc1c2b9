"""Command orchestration: fetch → list → select → bump → checkout/create.

Each command runs once against the current repository:
1. Fetch tags and branches from the remote (when it is configured)
2. List candidate names from the version source
3. Pick the latest name matching the pattern
4. For next-version, bump it and render the new name
5. Optionally check out, create or push the resulting name

"No version found" is a normal outcome: it is printed, nothing is checked
out or created, and None is returned.
"""

from __future__ import annotations

from .models import Increment, Version
from .shell import detail, step
from .sources import VersionSource, fetch_remote, has_remote
from .versions import compile_pattern, next_version, select_latest, sort_versions

NO_VERSION_FOUND = "No version found"


def sync_remote(remote: str, *, verbose: bool = False) -> None:
    """Fetch from ``remote`` if the repository has it configured."""
    if not has_remote(remote):
        if verbose:
            detail(f"remote {remote!r} not configured, skipping fetch")
        return
    if verbose:
        step(f"Fetching from {remote}")
    fetch_remote(remote)


def find_latest(
    source: VersionSource, pattern: str, *, verbose: bool = False
) -> Version | None:
    """Return the latest version in ``source`` matching ``pattern``."""
    compiled = compile_pattern(pattern)
    names = source.list_names()

    if verbose:
        step(f"Matching {len(names)} {source.kind.value}s against {pattern}")
        for version in sort_versions(compiled, names):
            detail(version.name)

    latest = select_latest(compiled, names)
    if verbose:
        detail(f"latest: {latest.name if latest else '<none>'}")
    return latest


def find_last_version(
    source: VersionSource,
    pattern: str,
    *,
    checkout: bool = False,
    fetch: bool = True,
    remote: str = "origin",
    verbose: bool = False,
) -> str | None:
    """Print the latest version name and optionally check it out.

    Args:
        source: Where candidate names come from.
        pattern: Version pattern, e.g. "v{major}.{minor}.{patch}".
        checkout: Switch the working tree to the latest version.
        fetch: Fetch from ``remote`` before listing candidates.
        remote: Remote name.
        verbose: Print progress to stderr.

    Returns:
        The latest version name, or None if nothing matched.
    """
    if fetch:
        sync_remote(remote, verbose=verbose)

    latest = find_latest(source, pattern, verbose=verbose)
    if latest is None:
        print(NO_VERSION_FOUND)
        return None

    if checkout:
        if verbose:
            step(f"Checking out {latest.name}")
        source.checkout(latest.name)

    print(latest.name)
    return latest.name


def find_next_version(
    source: VersionSource,
    pattern: str,
    increment: Increment,
    *,
    create: bool = False,
    push: bool = False,
    fetch: bool = True,
    remote: str = "origin",
    verbose: bool = False,
) -> str | None:
    """Print the version that follows the latest one, optionally creating it.

    Args:
        source: Where candidate names come from and where the new one goes.
        pattern: Version pattern used both to match and to render.
        increment: Which component to bump.
        create: Create the new tag or branch at HEAD.
        push: Push the new name to ``remote``. Implies ``create``.
        fetch: Fetch from ``remote`` before listing candidates.
        remote: Remote name.
        verbose: Print progress to stderr.

    Returns:
        The next version name, or None if no current version matched.

    Raises:
        IncrementFieldMissingError: If ``pattern`` cannot support ``increment``.
    """
    if fetch:
        sync_remote(remote, verbose=verbose)

    latest = find_latest(source, pattern, verbose=verbose)
    if latest is None:
        print(NO_VERSION_FOUND)
        return None

    bumped = next_version(latest, increment, pattern)
    if verbose:
        detail(f"{Increment(increment).value}: {latest.name} → {bumped.name}")

    if create or push:
        if verbose:
            step(f"Creating {source.kind.value} {bumped.name}")
        source.create(bumped.name)
    if push:
        if verbose:
            step(f"Pushing {bumped.name} to {remote}")
        source.push(bumped.name, remote)

    print(bumped.name)
    return bumped.name
