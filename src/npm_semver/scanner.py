"""Lexical scanner for version and range expressions.

Which token a character produces depends on where the scanner is inside a
version literal: ``-`` is a prerelease marker right after the patch number
and a hyphen anywhere else, ``x`` is a placeholder in the first three
components and an ordinary identifier character afterwards. That context is
tracked by :class:`ScanState`.
"""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from typing import TextIO

_EOF = ""
_WHITESPACE = " \t\r\n"
_PLACEHOLDERS = "xX*"
_OPERATORS = {
    ">": "GT",
    "<": "LT",
    "=": "EQ",
    "!": "NOT",
    "~": "TILDE",
    "^": "CARET",
}


class TokenKind(enum.Enum):
    """Token classes produced by :class:`Scanner`."""

    EOF = "end of input"
    ILLEGAL = "illegal character"
    WS = "whitespace"

    NUMBER = "number"
    IDENTIFIER = "identifier"
    PLACEHOLDER = "placeholder"

    SEPARATOR = "separator"
    HYPHEN = "hyphen"
    PRERELEASE = "prerelease marker"
    BUILD = "build marker"

    TILDE = "tilde"
    CARET = "caret"
    GT = "greater-than"
    LT = "less-than"
    EQ = "equals"
    NOT = "not"
    OR = "or"


OPERATOR_KINDS = frozenset(
    {TokenKind.TILDE, TokenKind.CARET, TokenKind.GT, TokenKind.LT, TokenKind.EQ, TokenKind.NOT}
)
VALUE_KINDS = frozenset({TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.PLACEHOLDER})


class ScanState(enum.Enum):
    """Position of the scanner relative to a version literal."""

    BEFORE_VERSION = 0
    IN_MAJOR = 1
    IN_MINOR = 2
    IN_PATCH = 3
    IN_PRERELEASE = 4
    IN_BUILD = 5

    @property
    def in_core(self) -> bool:
        """True while still inside major/minor/patch."""
        return self.value <= ScanState.IN_PATCH.value


_NEXT_COMPONENT = {
    ScanState.BEFORE_VERSION: ScanState.IN_MAJOR,
    ScanState.IN_MAJOR: ScanState.IN_MINOR,
    ScanState.IN_MINOR: ScanState.IN_PATCH,
    ScanState.IN_PATCH: ScanState.IN_PATCH,
    ScanState.IN_PRERELEASE: ScanState.IN_PRERELEASE,
    ScanState.IN_BUILD: ScanState.IN_BUILD,
}


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    position: int


def _is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alnum(ch: str) -> bool:
    return _is_digit(ch) or _is_letter(ch)


def _is_ident(ch: str) -> bool:
    return ch == "-" or _is_alnum(ch)


class Scanner:
    """Turn a character source into tokens, one :meth:`next` call at a time.

    The scanner never raises on bad input; unknown characters come back as
    ``ILLEGAL`` tokens and the parser decides what to do with them.
    """

    def __init__(self, source: str | TextIO) -> None:
        self._reader: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._pushback: list[str] = []
        self._offset = 0
        self.state = ScanState.BEFORE_VERSION
        self._last = TokenKind.WS

    def _read(self) -> str:
        if self._pushback:
            ch = self._pushback.pop()
        else:
            ch = self._reader.read(1)
        if ch != _EOF:
            self._offset += 1
        return ch

    def _unread(self, ch: str) -> None:
        if ch == _EOF:
            return
        self._pushback.append(ch)
        self._offset -= 1

    def _peek(self) -> str:
        ch = self._read()
        self._unread(ch)
        return ch

    def _read_while(self, first: str, predicate) -> str:
        chars = [first]
        while True:
            ch = self._read()
            if ch == _EOF:
                break
            if not predicate(ch):
                self._unread(ch)
                break
            chars.append(ch)
        return "".join(chars)

    def _emit(self, kind: TokenKind, text: str, start: int, state: ScanState) -> Token:
        self.state = state
        self._last = kind
        return Token(kind, text, start)

    def next(self) -> Token:
        start = self._offset
        ch = self._read()

        if ch == _EOF:
            return self._emit(TokenKind.EOF, "", start, self.state)

        if ch in _WHITESPACE:
            text = self._read_while(ch, lambda c: c in _WHITESPACE)
            return self._emit(TokenKind.WS, text, start, ScanState.BEFORE_VERSION)

        if self.state.in_core:
            token = self._scan_core(ch, start)
        else:
            token = self._scan_tag(ch, start)
        if token is not None:
            return token

        if ch == ".":
            if self._last in VALUE_KINDS:
                return self._emit(TokenKind.SEPARATOR, ch, start, _NEXT_COMPONENT[self.state])
            return self._emit(TokenKind.ILLEGAL, ch, start, self.state)

        if ch == "+":
            if self._last in (TokenKind.NUMBER, TokenKind.IDENTIFIER) and self.state in (
                ScanState.IN_PATCH,
                ScanState.IN_PRERELEASE,
            ):
                return self._emit(TokenKind.BUILD, ch, start, ScanState.IN_BUILD)
            return self._emit(TokenKind.ILLEGAL, ch, start, self.state)

        if ch in _OPERATORS:
            return self._emit(TokenKind[_OPERATORS[ch]], ch, start, ScanState.BEFORE_VERSION)

        if ch == "|":
            nxt = self._read()
            if nxt != "|":
                return self._emit(TokenKind.ILLEGAL, ch + nxt, start, self.state)
            return self._emit(TokenKind.OR, "||", start, ScanState.BEFORE_VERSION)

        return self._emit(TokenKind.ILLEGAL, ch, start, self.state)

    def _scan_core(self, ch: str, start: int) -> Token | None:
        # Major, minor or patch: numbers and placeholders only.
        state = ScanState.IN_MAJOR if self.state is ScanState.BEFORE_VERSION else self.state
        if _is_digit(ch):
            return self._emit(TokenKind.NUMBER, self._read_while(ch, _is_digit), start, state)
        if ch == "*" or (ch in _PLACEHOLDERS and not _is_alnum(self._peek())):
            return self._emit(TokenKind.PLACEHOLDER, ch, start, state)
        if _is_letter(ch):
            text = self._read_while(ch, _is_alnum)
            return self._emit(TokenKind.IDENTIFIER, text, start, state)
        if ch == "-":
            if self.state is ScanState.IN_PATCH and self._last is TokenKind.NUMBER:
                return self._emit(TokenKind.PRERELEASE, ch, start, ScanState.IN_PRERELEASE)
            return self._emit(TokenKind.HYPHEN, ch, start, ScanState.BEFORE_VERSION)
        return None

    def _scan_tag(self, ch: str, start: int) -> Token | None:
        # Prerelease or build identifiers: letters, digits and hyphens.
        if _is_ident(ch):
            text = self._read_while(ch, _is_ident)
            kind = TokenKind.NUMBER if text.isdigit() else TokenKind.IDENTIFIER
            return self._emit(kind, text, start, self.state)
        return None

    def __iter__(self):
        while True:
            token = self.next()
            yield token
            if token.kind is TokenKind.EOF:
                return
