"""Matcher tree: ranges combined with not/all/any."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from .version import Version


@dataclass(frozen=True, slots=True)
class Range:
    """Interval of versions; a missing bound leaves that side open.

    ``Range()`` matches every version, prereleases included.
    """

    min: Version | None = None
    max: Version | None = None
    exclusive_min: bool = False
    exclusive_max: bool = False

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Range minimum {self.min} is above maximum {self.max}")

    @property
    def is_unbounded(self) -> bool:
        return self.min is None and self.max is None

    def match(self, version: Version) -> bool:
        return match(self, version)

    def __str__(self) -> str:
        parts = []
        if self.min is not None:
            parts.append((">" if self.exclusive_min else ">=") + str(self.min))
        if self.max is not None:
            parts.append(("<" if self.exclusive_max else "<=") + str(self.max))
        return " ".join(parts) or "*"


@dataclass(frozen=True, slots=True)
class LogicalNot:
    matcher: Matcher

    def match(self, version: Version) -> bool:
        return match(self, version)

    def __str__(self) -> str:
        return "!" + str(self.matcher)


@dataclass(frozen=True, slots=True)
class LogicalAll:
    """Matches when every child matches (space separated terms)."""

    matchers: tuple[Matcher, ...]

    def match(self, version: Version) -> bool:
        return match(self, version)

    def __str__(self) -> str:
        return " ".join(str(m) for m in self.matchers)


@dataclass(frozen=True, slots=True)
class LogicalAny:
    """Matches when any child matches (``||`` separated groups)."""

    matchers: tuple[Matcher, ...]

    def match(self, version: Version) -> bool:
        return match(self, version)

    def __str__(self) -> str:
        return " || ".join(str(m) for m in self.matchers)


Matcher: TypeAlias = Union[Range, LogicalNot, LogicalAll, LogicalAny, Version]


def _match_range(r: Range, version: Version) -> bool:
    if r.min is not None:
        result = r.min.compare(version)
        if result > 0 or (result == 0 and r.exclusive_min):
            return False
    if r.max is not None:
        result = r.max.compare(version)
        if result < 0 or (result == 0 and r.exclusive_max):
            return False
    return True


def match(matcher: Matcher, version: Version) -> bool:
    """Return True when ``version`` satisfies ``matcher``."""
    if isinstance(matcher, Range):
        return _match_range(matcher, version)
    if isinstance(matcher, LogicalNot):
        return not match(matcher.matcher, version)
    if isinstance(matcher, LogicalAll):
        return all(match(m, version) for m in matcher.matchers)
    if isinstance(matcher, LogicalAny):
        return any(match(m, version) for m in matcher.matchers)
    if isinstance(matcher, Version):
        return matcher.compare(version) == 0
    raise TypeError(f"Unsupported matcher type: {type(matcher).__name__}")
