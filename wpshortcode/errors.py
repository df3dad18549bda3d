from __future__ import annotations

from enum import Enum

from . import t


class ErrorKind(Enum):
    INVALID_NAME = "invalid-name"
    UNTERMINATED_QUOTE = "unterminated-quote"
    UNEXPECTED_QUOTE = "unexpected-quote"
    MISSING_ATTRIBUTE_VALUE = "missing-attribute-value"
    INVALID_SHORTCODE = "invalid-shortcode"
    MISMATCHED_END_TAG = "mismatched-end-tag"
    UNTERMINATED_SHORTCODE = "unterminated-shortcode"


class ShortcodeError(ValueError):
    """
    A failure to recognize a shortcode.

    `offset` is a character index into whatever text was being parsed;
    the stream parser shifts it so it indexes the whole input.
    """

    def __init__(self, kind: ErrorKind, msg: str, offset: int = 0) -> None:
        super().__init__(msg)
        self.kind = kind
        self.msg = msg
        self.offset = offset

    def shifted(self, by: int) -> ShortcodeError:
        return ShortcodeError(self.kind, self.msg, self.offset + by)

    def __eq__(self, other: t.Any) -> bool:
        if not isinstance(other, ShortcodeError):
            return NotImplemented
        return (self.kind, self.msg, self.offset) == (other.kind, other.msg, other.offset)

    def __hash__(self) -> int:
        return hash((self.kind, self.msg, self.offset))

    def __repr__(self) -> str:
        return f"ShortcodeError({self.kind.name}, {self.msg!r}, offset={self.offset})"
