"""Pattern compilation, version parsing, ordering and bumping.

A pattern is a template such as ``v{major}.{minor}.{patch}`` or
``release-{major}.{minor}``. Compiling it yields a matcher that recognizes
candidate names (tags or branches) and extracts the numbers bound to each
placeholder. Placeholders missing from the pattern are "unscoped": their
value is None and they are ignored when versions are compared.

Nothing in this module talks to git; callers hand in plain strings.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import cmp_to_key

import semver
from pydantic import BaseModel, ConfigDict

from .errors import IncrementFieldMissingError, MalformedCandidateError, PatternError
from .models import Increment, Version

DEFAULT_PATTERN = "v{major}.{minor}.{patch}"

# Priority order; also the order fields are compared in.
FIELDS = ("major", "minor", "patch")

_PLACEHOLDER_RE = re.compile(r"\{(major|minor|patch)\}")

# Fields that must be scoped for each increment to make sense.
_REQUIRED_FIELDS: dict[Increment, tuple[str, ...]] = {
    Increment.MAJOR: ("major",),
    Increment.MINOR: ("major", "minor"),
    Increment.PATCH: ("major", "minor", "patch"),
}


class CompiledPattern(BaseModel):
    """A version pattern compiled into an anchored regular expression.

    Attributes:
        template: The pattern as supplied by the user.
        regex: Regular expression with one named group per placeholder.
        fields: Placeholders present in the template, in priority order.
    """

    model_config = ConfigDict(frozen=True)

    template: str
    regex: re.Pattern[str]
    fields: tuple[str, ...]


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a version pattern into a matcher.

    Literal text is escaped before the placeholders are turned into digit
    groups, so ``v{major}.{minor}`` requires a real ``.`` between the
    numbers. The expression is applied with ``fullmatch``; candidates with
    leading or trailing extra text never match.

    Raises:
        PatternError: If a placeholder appears more than once.
    """
    seen: set[str] = set()
    parts: list[str] = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(pattern):
        field = m.group(1)
        if field in seen:
            raise PatternError(
                f"Placeholder {{{field}}} appears more than once in pattern {pattern!r}"
            )
        seen.add(field)
        parts.append(re.escape(pattern[pos : m.start()]))
        parts.append(f"(?P<{field}>[0-9]+)")
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))

    return CompiledPattern(
        template=pattern,
        regex=re.compile("".join(parts)),
        fields=tuple(f for f in FIELDS if f in seen),
    )


def parse_version(compiled: CompiledPattern, candidate: str) -> Version | None:
    """Match a candidate name against a compiled pattern.

    Returns:
        A Version holding the verbatim name and the scoped numbers, or None
        if the candidate does not match.

    Raises:
        MalformedCandidateError: If a captured group is not an integer.
    """
    m = compiled.regex.fullmatch(candidate)
    if m is None:
        return None

    values: dict[str, int] = {}
    for field in compiled.fields:
        raw = m.group(field)
        try:
            values[field] = int(raw)
        except ValueError as exc:
            raise MalformedCandidateError(
                f"Matched {candidate!r} but {{{field}}}={raw!r} is not an integer"
            ) from exc
    return Version(name=candidate, **values)


def compare_versions(a: Version, b: Version) -> int:
    """Three-way compare two versions by major, then minor, then patch.

    A position that is unscoped on either side compares equal, so versions
    parsed with ``v1.{minor}.{patch}`` are ranked on minor and patch only.
    Returns a negative number, zero or a positive number.
    """
    for left, right in zip(a.parts(), b.parts()):
        if left is None or right is None or left == right:
            continue
        return -1 if left < right else 1
    return 0


def sort_versions(compiled: CompiledPattern, candidates: Iterable[str]) -> list[Version]:
    """Parse candidates and return the matching ones in ascending order.

    The sort is stable: equal versions keep their input order.
    """
    parsed = (parse_version(compiled, c) for c in candidates)
    versions = [v for v in parsed if v is not None]
    return sorted(versions, key=cmp_to_key(compare_versions))


def select_latest(compiled: CompiledPattern, candidates: Iterable[str]) -> Version | None:
    """Return the highest matching version, or None when nothing matches.

    When several names parse to the same numbers, the last one seen wins.
    """
    latest: Version | None = None
    for candidate in candidates:
        version = parse_version(compiled, candidate)
        if version is None:
            continue
        if latest is None or compare_versions(version, latest) >= 0:
            latest = version
    return latest


def render_version(pattern: str, major: int, minor: int, patch: int) -> str:
    """Substitute each placeholder of ``pattern`` with its decimal value.

    Examples:
        ("v{major}.{minor}.{patch}", 1, 2, 3) → "v1.2.3"
        ("release-{major}", 4, 0, 0) → "release-4"
    """
    return (
        pattern.replace("{major}", str(major))
        .replace("{minor}", str(minor))
        .replace("{patch}", str(patch))
    )


def next_version(current: Version, increment: Increment, pattern: str) -> Version:
    """Bump ``current`` and render the result through ``pattern``.

    Major resets minor and patch, minor resets patch. The returned Version
    only carries the fields ``pattern`` scopes, so parsing its name with the
    same pattern gives back an equal Version.

    Raises:
        IncrementFieldMissingError: If the increment needs a field that was
            never captured (e.g. a major bump with ``v1.{minor}.{patch}``).
    """
    increment = Increment(increment)
    for field in _REQUIRED_FIELDS[increment]:
        if getattr(current, field) is None:
            raise IncrementFieldMissingError(f"{{{field}}}", increment.value)

    base = semver.Version(current.major, current.minor or 0, current.patch or 0)
    if increment is Increment.MAJOR:
        bumped = base.bump_major()
    elif increment is Increment.MINOR:
        bumped = base.bump_minor()
    else:
        bumped = base.bump_patch()

    compiled = compile_pattern(pattern)
    name = render_version(pattern, bumped.major, bumped.minor, bumped.patch)
    values = {field: getattr(bumped, field) for field in compiled.fields}
    return Version(name=name, **values)
