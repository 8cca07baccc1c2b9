"""Exceptions raised by flopha.

"No version found" is not an error: it is reported as ``None`` by the
functions that search for versions.
"""

from __future__ import annotations


class FlophaError(Exception):
    """Base class for all flopha errors."""


class PatternError(FlophaError):
    """The version pattern cannot be compiled."""


class IncrementFieldMissingError(FlophaError):
    """The pattern does not scope a field the requested increment needs."""

    def __init__(self, placeholder: str, increment: str) -> None:
        self.placeholder = placeholder
        self.increment = increment
        super().__init__(
            f"Can't find {placeholder} in the pattern, "
            f"which is required for a {increment} increment"
        )


class MalformedCandidateError(FlophaError):
    """A matched candidate has a numeric group that is not an integer.

    Digit-only groups make this unreachable; seeing it means the compiled
    pattern is broken.
    """


class ConfigError(FlophaError):
    """The [tool.flopha] configuration table is invalid."""
