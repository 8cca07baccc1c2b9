"""CLI entry point for flopha."""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from contextlib import contextmanager

import click

from .errors import FlophaError
from .models import Increment, SourceKind
from .service import find_last_version, find_next_version
from .sources import get_source
from .toml import load_settings

PATTERN_HELP = (
    "Pattern for version matching and generation. Use {major}, {minor} and "
    "{patch} as placeholders, e.g. 'v{major}.{minor}.{patch}' or "
    "'release-{major}.{minor}'. Defaults to [tool.flopha].pattern or "
    "'v{major}.{minor}.{patch}'."
)


@contextmanager
def _errors() -> Iterator[None]:
    """Turn flopha and git failures into click errors (exit code 1)."""
    try:
        yield
    except FlophaError as exc:
        raise click.ClickException(str(exc)) from exc
    except subprocess.CalledProcessError as exc:
        cmd = " ".join(exc.cmd) if isinstance(exc.cmd, list) else str(exc.cmd)
        stderr = (exc.stderr or "").strip()
        msg = f"`{cmd}` failed with exit code {exc.returncode}"
        raise click.ClickException(f"{msg}\n{stderr}" if stderr else msg) from exc


def _common_options(f):
    """Options shared by every version command."""
    f = click.option(
        "-v", "--verbose", is_flag=True, help="Print progress details to stderr."
    )(f)
    f = click.option(
        "--no-fetch", is_flag=True, help="Do not fetch from the remote first."
    )(f)
    f = click.option(
        "--remote", default=None, help="Remote to fetch from and push to."
    )(f)
    f = click.option(
        "-s",
        "--source",
        type=click.Choice([k.value for k in SourceKind]),
        default=None,
        help="Versions are tags (default) or branches.",
    )(f)
    f = click.option("-p", "--pattern", default=None, help=PATTERN_HELP)(f)
    return f


@click.group()
@click.version_option(package_name="flopha")
def cli() -> None:
    """Find and create semantic version tags and branches."""


@cli.command("last-version")
@_common_options
@click.option("--checkout", is_flag=True, help="Check out the last version.")
def last_version(
    pattern: str | None,
    source: str | None,
    remote: str | None,
    no_fetch: bool,
    verbose: bool,
    checkout: bool,
) -> None:
    """Find the latest tag or branch matching a pattern. (alias: lv)"""
    with _errors():
        settings = load_settings()
        remote = remote or settings.remote
        find_last_version(
            get_source(source or settings.source, remote=remote),
            pattern or settings.pattern,
            checkout=checkout,
            fetch=not no_fetch,
            remote=remote,
            verbose=verbose,
        )


@cli.command("next-version")
@_common_options
@click.option(
    "-i",
    "--increment",
    type=click.Choice([i.value for i in Increment]),
    default=Increment.PATCH.value,
    show_default=True,
    help="Version part to increment.",
)
@click.option("--create", is_flag=True, help="Create the tag or branch at HEAD.")
@click.option("--push", is_flag=True, help="Create and push it to the remote.")
def next_version(
    pattern: str | None,
    source: str | None,
    remote: str | None,
    no_fetch: bool,
    verbose: bool,
    increment: str,
    create: bool,
    push: bool,
) -> None:
    """Compute the next version after the latest matching one. (alias: nv)"""
    with _errors():
        settings = load_settings()
        remote = remote or settings.remote
        find_next_version(
            get_source(source or settings.source, remote=remote),
            pattern or settings.pattern,
            Increment(increment),
            create=create,
            push=push,
            fetch=not no_fetch,
            remote=remote,
            verbose=verbose,
        )


cli.add_command(last_version, name="lv")
cli.add_command(next_version, name="nv")
