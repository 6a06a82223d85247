"""Pure rewrites that turn fuzzy terms and operators into concrete ranges.

Every function here takes values and returns new values; a parsed fuzzy
range is never modified in place.
"""

from __future__ import annotations

from .matchers import LogicalNot, Matcher, Range
from .version import Version

NOTHING: Matcher = LogicalNot(Range())


def fuzzy_range(
    major: int | None,
    minor: int | None = None,
    patch: int | None = None,
    prerelease: tuple[str, ...] = (),
) -> Range:
    """Expand a partial version into the range it stands for.

    ``None`` marks a component given as a placeholder or left out.
    """
    if major is None:
        return Range()
    if minor is None:
        return Range(
            min=Version(major, 0, 0),
            max=Version(major + 1, 0, 0),
            exclusive_max=True,
        )
    if patch is None:
        return Range(
            min=Version(major, minor, 0),
            max=Version(major, minor + 1, 0),
            exclusive_max=True,
        )
    return Range(
        min=Version(major, minor, patch, prerelease),
        max=Version(major, minor, patch),
    )


def _is_exact(r: Range) -> bool:
    return r.min is not None and r.max is not None and not r.exclusive_max


def rewrite_caret(r: Range) -> Range:
    """``^``: allow changes that keep the first nonzero component."""
    if r.min is None or r.max is None:
        return r
    low = r.min
    if low.major > 0:
        high = Version(low.major + 1, 0, 0)
    elif low.minor > 0:
        high = Version(0, low.minor + 1, 0)
    elif low.patch > 0:
        high = Version(0, 0, low.patch + 1)
    else:
        # 0.0.0 exact stays exact; 0.x / 0.0 keep their own upper edge.
        return Range(min=low, max=r.max.release(), exclusive_max=r.exclusive_max)
    return Range(min=low, max=high, exclusive_max=True)


def rewrite_tilde(r: Range) -> Range:
    """``~``: bump the minor when it is nonzero, else the patch when nonzero.

    When both are zero the fuzzy term's own upper edge stands, so ``~1`` is
    ``[1.0.0, 2.0.0)`` and an exact ``~0.0.0`` stays exact.
    """
    if r.min is None or r.max is None:
        return r
    low = r.min
    if low.minor > 0:
        high = Version(low.major, low.minor + 1, 0)
    elif low.patch > 0:
        high = Version(low.major, low.minor, low.patch + 1)
    else:
        return Range(min=low, max=r.max.release(), exclusive_max=r.exclusive_max)
    return Range(min=low, max=high, exclusive_max=True)


def rewrite_comparison(operator: str, has_eq: bool, r: Range) -> Matcher:
    """Reduce a fuzzy range to the one-sided bound of ``<``, ``<=``, ``>``, ``>=`` or ``=``."""
    if operator == "=":
        return r
    if operator == "<":
        if has_eq:
            return Range(max=r.max, exclusive_max=r.exclusive_max)
        if r.min is None:
            return NOTHING
        return Range(max=r.min, exclusive_max=True)
    if operator == ">":
        if has_eq:
            return Range(min=r.min, exclusive_min=r.exclusive_min)
        if r.max is None:
            return NOTHING
        if _is_exact(r):
            return Range(min=r.min, exclusive_min=True)
        # Past an exclusive upper edge the edge itself is the first match.
        return Range(min=r.max)
    raise ValueError(f"Unknown comparison operator: {operator!r}")


def hyphen_range(low: Range, high: Range) -> Range:
    """``A - B``: from the bottom of ``A`` to the top of ``B``."""
    return Range(
        min=low.min,
        max=high.max,
        exclusive_min=low.exclusive_min,
        exclusive_max=high.exclusive_max,
    )
