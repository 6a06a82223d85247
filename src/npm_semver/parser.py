"""Recursive-descent parser for versions and npm range expressions.

Supported expressions:
- exact versions (e.g., "1.2.3", "1.2.3-rc.1+build.5")
- partial versions and placeholders ("1", "1.2", "1.x", "*")
- caret and tilde ranges ("^1.2.3", "~1.2")
- comparators ("<1.2.3", ">=1.0.0", "=1.2"), negation ("!1.2.3")
- hyphen ranges ("1.2.3 - 2.3")
- space separated comparator sets joined by "||"
"""

from __future__ import annotations

import logging
from typing import TextIO

from .algebra import fuzzy_range, hyphen_range, rewrite_caret, rewrite_comparison, rewrite_tilde
from .errors import NumericOverflowError, SemverSyntaxError
from .matchers import LogicalAll, LogicalAny, LogicalNot, Matcher, Range, match
from .scanner import OPERATOR_KINDS, Scanner, Token, TokenKind
from .version import MAX_SAFE_INTEGER, Version

logger = logging.getLogger(__name__)

_TERM_START = frozenset({TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.PLACEHOLDER})
_COMPARISONS = {TokenKind.LT: "<", TokenKind.GT: ">", TokenKind.EQ: "="}


def _to_int(token: Token) -> int:
    value = int(token.text)
    if value > MAX_SAFE_INTEGER:
        raise NumericOverflowError(
            f"numeric component {token.text} exceeds {MAX_SAFE_INTEGER}",
            kind=token.kind.value,
            text=token.text,
            position=token.position,
        )
    return value


def _all_of(terms: list[Matcher]) -> Matcher:
    if len(terms) == 1:
        return terms[0]
    return LogicalAll(tuple(terms))


class Parser:
    """Pull tokens from a :class:`Scanner` with one token of lookahead."""

    def __init__(self, source: str | TextIO) -> None:
        self._scanner = Scanner(source)
        self._last: Token | None = None
        self._buffered: Token | None = None

    def scan(self) -> Token:
        if self._buffered is not None:
            token, self._buffered = self._buffered, None
        else:
            token = self._scanner.next()
        self._last = token
        return token

    def unscan(self) -> None:
        self._buffered = self._last

    def scan_ignore_whitespace(self) -> Token:
        token = self.scan()
        if token.kind is TokenKind.WS:
            token = self.scan()
        return token

    def _expect(self, token: Token, *kinds: TokenKind) -> Token:
        if token.kind not in kinds:
            raise SemverSyntaxError.unexpected(token)
        return token

    def _identifiers(self) -> tuple[str, ...]:
        """Read ``ident ('.' ident)*`` after a prerelease or build marker."""
        parts: list[str] = []
        while True:
            token = self._expect(self.scan(), TokenKind.IDENTIFIER, TokenKind.NUMBER)
            parts.append(token.text)
            if self.scan().kind is not TokenKind.SEPARATOR:
                self.unscan()
                return tuple(parts)

    def _tags(self) -> tuple[tuple[str, ...], tuple[str, ...]]:
        prerelease: tuple[str, ...] = ()
        build: tuple[str, ...] = ()
        token = self.scan()
        if token.kind is TokenKind.PRERELEASE:
            prerelease = self._identifiers()
            token = self.scan()
        if token.kind is TokenKind.BUILD:
            build = self._identifiers()
        else:
            self.unscan()
        return prerelease, build

    def parse_version(self) -> Version:
        """Parse a strict ``major.minor.patch[-pre][+build]`` version."""
        major = _to_int(self._expect(self.scan_ignore_whitespace(), TokenKind.NUMBER))
        self._expect(self.scan(), TokenKind.SEPARATOR)
        minor = _to_int(self._expect(self.scan(), TokenKind.NUMBER))
        self._expect(self.scan(), TokenKind.SEPARATOR)
        patch = _to_int(self._expect(self.scan(), TokenKind.NUMBER))
        prerelease, build = self._tags()
        return Version(major, minor, patch, prerelease, build)

    def parse_fuzzy(self) -> Range:
        """Parse a possibly partial version and expand it into a range."""
        components: list[int | None] = []
        token = self.scan_ignore_whitespace()
        while True:
            if token.kind is TokenKind.NUMBER and None not in components:
                components.append(_to_int(token))
            elif token.kind is TokenKind.PLACEHOLDER:
                components.append(None)
            else:
                raise SemverSyntaxError.unexpected(token)
            if len(components) == 3:
                break
            if self.scan().kind is not TokenKind.SEPARATOR:
                self.unscan()
                break
            token = self.scan()

        components.extend([None] * (3 - len(components)))
        # Build metadata never narrows a range.
        prerelease, _ = self._tags()
        return fuzzy_range(*components, prerelease=prerelease)

    def parse_operator_range(self) -> Matcher:
        token = self.scan_ignore_whitespace()
        if token.kind is TokenKind.NOT:
            return LogicalNot(self.parse_version())
        if token.kind is TokenKind.CARET:
            return rewrite_caret(self.parse_fuzzy())
        if token.kind is TokenKind.TILDE:
            return rewrite_tilde(self.parse_fuzzy())
        if token.kind in _COMPARISONS:
            has_eq = False
            while self.scan().kind is TokenKind.EQ:
                has_eq = True
            self.unscan()
            return rewrite_comparison(_COMPARISONS[token.kind], has_eq, self.parse_fuzzy())
        raise SemverSyntaxError.unexpected(token)

    def _parse_term(self) -> Matcher:
        low = self.parse_fuzzy()
        token = self.scan_ignore_whitespace()
        if token.kind is not TokenKind.HYPHEN:
            self.unscan()
            return low
        high = self.parse_fuzzy()
        if low.min is not None and high.max is not None and low.min > high.max:
            raise SemverSyntaxError(
                f"hyphen range {low.min} - {high.max} is empty",
                kind=token.kind.value,
                text=token.text,
                position=token.position,
            )
        return hyphen_range(low, high)

    def parse(self) -> Matcher:
        """Parse a full range expression."""
        groups: list[Matcher] = []
        terms: list[Matcher] = []
        while True:
            token = self.scan_ignore_whitespace()
            if token.kind is TokenKind.EOF:
                if terms:
                    groups.append(_all_of(terms))
                elif groups:
                    # Trailing "||" leaves an empty, unconstrained alternative.
                    return Range()
                break
            if token.kind in OPERATOR_KINDS:
                self.unscan()
                terms.append(self.parse_operator_range())
                continue
            if token.kind in _TERM_START:
                self.unscan()
                terms.append(self._parse_term())
                continue
            if token.kind is TokenKind.OR:
                if not terms:
                    # "||anything" is the same as "*"
                    return Range()
                groups.append(_all_of(terms))
                terms = []
                continue
            raise SemverSyntaxError.unexpected(token)

        if not groups:
            return Range()
        if len(groups) == 1:
            return groups[0]
        return LogicalAny(tuple(groups))

    def expect_end(self) -> None:
        self._expect(self.scan_ignore_whitespace(), TokenKind.EOF)


def parse_version(text: str | TextIO) -> Version:
    """Parse a single strict semver version."""
    parser = Parser(text)
    version = parser.parse_version()
    parser.expect_end()
    return version


def parse_range(text: str | TextIO) -> Matcher:
    """Parse an npm range expression into a matcher."""
    matcher = Parser(text).parse()
    logger.debug("Parsed range %r as %s", text, matcher)
    return matcher


def satisfies(installed: str | Version, expr: str | Matcher) -> bool:
    version = parse_version(installed) if isinstance(installed, str) else installed
    matcher = parse_range(expr) if isinstance(expr, str) else expr
    return match(matcher, version)
