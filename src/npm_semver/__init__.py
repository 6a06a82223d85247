"""npm-semver core package.

Parses npm-style version ranges (``^1.2.3``, ``~1.2.x``, ``>=1 <2``,
``1.x || 2.x``) into matchers and versions into comparable values. The
checker in :mod:`npm_semver.core` and the CLI build on the same entrypoints.
"""

from .errors import NumericOverflowError, SemverSyntaxError
from .matchers import LogicalAll, LogicalAny, LogicalNot, Matcher, Range, match
from .parser import Parser, parse_range, parse_version, satisfies
from .version import Version

__all__ = [
    "LogicalAll",
    "LogicalAny",
    "LogicalNot",
    "Matcher",
    "NumericOverflowError",
    "Parser",
    "Range",
    "SemverSyntaxError",
    "Version",
    "match",
    "parse_range",
    "parse_version",
    "satisfies",
]
