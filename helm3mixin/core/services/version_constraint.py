"""
Version constraint validation (pure).

Parses semantic versions and semantic-version ranges and checks one
against the other.  No I/O, no subprocess.

Supported range syntax::

    ^3.x  ^v3.8      caret — same major (same minor/patch below 1.0.0)
    ~3.8             tilde — same major.minor
    >=3.1 <3.9       comparisons, AND-joined by whitespace or commas
    3  3.8  3.x  *   bare / wildcard versions
    ^2.x || ^3.x     OR-joined groups
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Only helm clients on the v3 line install the ``helm3`` layout we emit.
CLIENT_VERSION_CONSTRAINT = "^v3.x"

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

_VERSION_RE = re.compile(
    rf"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-({_IDENT}))?(?:\+({_IDENT}))?$"
)

_PARTIAL_RE = re.compile(
    rf"^v?(\d+|[xX*])(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?(?:-({_IDENT}))?(?:\+({_IDENT}))?$"
)

_TERM_RE = re.compile(r"[\s,]*(\^|~>?|!=|>=|<=|=|>|<)?\s*([^\s,|<>=!^~]+)")

_WILDCARDS = ("x", "X", "*")


class SemverParseError(ValueError):
    """Raised when a version or constraint is not valid semver syntax."""


@dataclass(frozen=True)
class Version:
    """A parsed semantic version."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    metadata: str = ""

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    def _key(self) -> tuple:
        # A release sorts after all of its pre-releases; metadata never counts.
        if not self.prerelease:
            pre: tuple = (1,)
        else:
            pre = (0, tuple(
                (0, int(part), "") if part.isdigit() else (1, 0, part)
                for part in self.prerelease.split(".")
            ))
        return (self.major, self.minor, self.patch, pre)

    def __lt__(self, other: Version) -> bool:
        return self._key() < other._key()

    def __le__(self, other: Version) -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: Version) -> bool:
        return self._key() > other._key()

    def __ge__(self, other: Version) -> bool:
        return self._key() >= other._key()

    def same(self, other: Version) -> bool:
        return self._key() == other._key()


@dataclass(frozen=True)
class Comparator:
    """A single ``<op> <version>`` bound."""

    op: str
    version: Version

    def check(self, v: Version) -> bool:
        if self.op == "=":
            return v.same(self.version)
        if self.op == "!=":
            return not v.same(self.version)
        if self.op == ">":
            return v > self.version
        if self.op == ">=":
            return v >= self.version
        if self.op == "<":
            return v < self.version
        return v <= self.version


@dataclass(frozen=True)
class Constraint:
    """A parsed range: OR of AND-groups of comparators."""

    text: str
    groups: tuple[tuple[Comparator, ...], ...]

    def check(self, v: Version) -> bool:
        for group in self.groups:
            if v.prerelease and not any(c.version.prerelease for c in group):
                continue
            if all(c.check(v) for c in group):
                return True
        return False

    def __str__(self) -> str:
        return self.text


def parse_version(text: str) -> Version:
    """Parse a semantic version such as ``v3.8.2`` or ``3.9.0-rc.1``.

    Missing minor/patch parts default to zero.

    Raises:
        SemverParseError: If ``text`` is not a valid version.
    """
    match = _VERSION_RE.match(text.strip()) if text else None
    if match is None:
        raise SemverParseError(f"{text!r} cannot be parsed as semver")
    major, minor, patch, pre, meta = match.groups()
    return Version(
        major=int(major),
        minor=int(minor or 0),
        patch=int(patch or 0),
        prerelease=pre or "",
        metadata=meta or "",
    )


def parse_constraint(text: str) -> Constraint:
    """Parse a semantic-version range such as ``^v3.x``.

    Raises:
        SemverParseError: If ``text`` is not a valid range.
    """
    if not text or not text.strip():
        raise SemverParseError(f"unable to parse version constraint {text!r}")

    groups: list[tuple[Comparator, ...]] = []
    for raw_group in text.split("||"):
        group = raw_group.strip()
        if not group:
            raise SemverParseError(f"unable to parse version constraint {text!r}")

        comparators: list[Comparator] = []
        pos = 0
        while pos < len(group):
            match = _TERM_RE.match(group, pos)
            if match is None:
                if group[pos:].strip(" ,"):
                    raise SemverParseError(f"unable to parse version constraint {text!r}")
                break
            op, version_text = match.groups()
            try:
                comparators.extend(_expand(op or "=", version_text))
            except SemverParseError as e:
                raise SemverParseError(
                    f"unable to parse version constraint {text!r}: {e}"
                ) from e
            pos = match.end()

        if not comparators:
            raise SemverParseError(f"unable to parse version constraint {text!r}")
        groups.append(tuple(comparators))

    return Constraint(text=text, groups=tuple(groups))


def validate(version: str, constraint: str) -> bool:
    """Check that ``version`` satisfies ``constraint``.

    Raises:
        SemverParseError: If either side cannot be parsed.
    """
    parsed_constraint = parse_constraint(constraint)
    try:
        parsed_version = parse_version(version)
    except SemverParseError as e:
        raise SemverParseError(
            f"supplied client version {version!r} cannot be parsed as semver"
        ) from e
    return parsed_constraint.check(parsed_version)


# ── Range expansion ─────────────────────────────────────────────


def _expand(op: str, text: str) -> list[Comparator]:
    """Turn one ``<op><partial version>`` term into primitive comparators."""
    match = _PARTIAL_RE.match(text)
    if match is None:
        raise SemverParseError(f"{text!r} cannot be parsed as semver")

    parts = match.groups()[:3]
    pre = match.group(4) or ""
    specified: list[int] = []
    for part in parts:
        if part is None or part in _WILDCARDS:
            break
        specified.append(int(part))

    n = len(specified)
    if n == 0:
        # "*" / "x" — any release
        if op in ("<", "!="):
            raise SemverParseError(f"{op}{text} matches no version")
        return [Comparator(">=", Version(0))]

    base = Version(*(specified + [0] * (3 - n)), prerelease=pre if n == 3 else "")
    major = specified[0]
    minor = specified[1] if n > 1 else 0

    if op == "^":
        if major > 0 or n == 1:
            upper = Version(major + 1)
        elif minor > 0 or n == 2:
            upper = Version(0, minor + 1)
        else:
            upper = Version(0, 0, specified[2] + 1)
        return [Comparator(">=", base), Comparator("<", upper)]

    if op in ("~", "~>"):
        upper = Version(major, minor + 1) if n > 1 else Version(major + 1)
        return [Comparator(">=", base), Comparator("<", upper)]

    if n == 3 or op in (">=", "<", "!="):
        return [Comparator(op, base)]

    next_up = Version(major, minor + 1) if n == 2 else Version(major + 1)
    if op == "=":
        return [Comparator(">=", base), Comparator("<", next_up)]
    if op == ">":
        return [Comparator(">=", next_up)]
    # "<=" on a partial version covers the whole partial range
    return [Comparator("<", next_up)]
