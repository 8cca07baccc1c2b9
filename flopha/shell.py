"""Shell and git utilities.

Provides a thin wrapper around subprocess for git operations, plus output
helpers. Results go to stdout; progress and diagnostics go to stderr so
that ``flopha lv`` can be used in command substitution.
"""

from __future__ import annotations

import subprocess
import sys


def git(*args: str, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--list").
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., ref lookup).

    Returns:
        Stripped stdout from the git command.

    Raises:
        subprocess.CalledProcessError: If git exits non-zero and check is set.
            The captured stderr is available on the exception.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True, check=check)
    return result.stdout.strip()


def git_ok(*args: str) -> bool:
    """Run a git command and report whether it exited with status 0."""
    result = subprocess.run(["git", *args], capture_output=True, text=True)
    return result.returncode == 0


def step(msg: str) -> None:
    """Print a visually distinct step header to stderr."""
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}", file=sys.stderr)


def detail(msg: str) -> None:
    """Print an indented detail line under the current step."""
    print(f"  {msg}", file=sys.stderr)

