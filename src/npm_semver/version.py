"""Version value type and semver precedence ordering."""

from __future__ import annotations

from dataclasses import dataclass, field

# Largest integer JavaScript can represent exactly; npm rejects anything above it.
MAX_SAFE_INTEGER = 2**53 - 1


def _compare_identifiers(a: str, b: str) -> int:
    a_numeric = a.isdigit()
    b_numeric = b.isdigit()
    if a_numeric and b_numeric:
        left, right = int(a), int(b)
    elif a_numeric:
        return -1
    elif b_numeric:
        return 1
    else:
        left, right = a, b
    return (left > right) - (left < right)


def compare_prerelease(a: tuple[str, ...], b: tuple[str, ...]) -> int:
    """Compare two prerelease lists; an empty list (a release) sorts last."""
    if not a and not b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in zip(a, b):
        result = _compare_identifiers(left, right)
        if result:
            return result
    return (len(a) > len(b)) - (len(a) < len(b))


@dataclass(frozen=True, eq=False)
class Version:
    """A fully resolved semantic version.

    Equality, hashing and ordering follow semver precedence, so two versions
    differing only in build metadata compare equal. ``build`` is kept for
    rendering only.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        # Accept lists from callers but store tuples so the value stays hashable.
        object.__setattr__(self, "prerelease", tuple(self.prerelease))
        object.__setattr__(self, "build", tuple(self.build))

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as ``self`` sorts before, with or after ``other``."""
        left = (self.major, self.minor, self.patch)
        right = (other.major, other.minor, other.patch)
        if left != right:
            return -1 if left < right else 1
        return compare_prerelease(self.prerelease, other.prerelease)

    def match(self, version: Version) -> bool:
        return self.compare(version) == 0

    def release(self) -> Version:
        """Return the same version with prerelease and build stripped."""
        return Version(self.major, self.minor, self.patch)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text
