"""Errors raised while parsing versions and range expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scanner import Token


class SemverSyntaxError(ValueError):
    """Raised when the input does not match the version or range grammar."""

    def __init__(self, message: str, *, kind: str, text: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.kind = kind
        self.text = text
        self.position = position

    @classmethod
    def unexpected(cls, token: Token) -> SemverSyntaxError:
        return cls(
            f"unexpected {token.kind.value} {token.text!r}",
            kind=token.kind.value,
            text=token.text,
            position=token.position,
        )


class NumericOverflowError(SemverSyntaxError):
    """Raised when a numeric component exceeds the safe integer range."""
