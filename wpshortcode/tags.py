from __future__ import annotations

from .attributes import parseAttributes
from .errors import ErrorKind, ShortcodeError
from .shortcode import Shortcode


def isNameChar(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


def validateName(name: str) -> str:
    for i, ch in enumerate(name):
        if not isNameChar(ch):
            msg = f"Invalid shortcode name '{name}'; names can only contain letters, digits, '_', and '-'."
            raise ShortcodeError(ErrorKind.INVALID_NAME, msg, i)
    return name


def parseStart(text: str) -> Shortcode:
    """
    Parses a complete start tag, like `[name attr="val" positional]`.

    Offsets in any raised ShortcodeError index into `text`.
    """
    leading = len(text) - len(text.lstrip())
    exp = text.strip()

    if len(exp) < 3:
        msg = f"Invalid shortcode '{text}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading)
    if exp[0] != "[":
        msg = f"Expected '[' at the start of '{text}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading)
    if exp[-1] != "]":
        msg = f"Expected ']' at the end of '{text}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading + len(exp) - 1)

    inner = exp[1:-1]
    innerStart = leading + 1 + (len(inner) - len(inner.lstrip()))
    inner = inner.strip()
    if not inner:
        msg = f"Invalid shortcode '{text}'; it has no name."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading)

    name, _, attrText = inner.partition(" ")
    try:
        validateName(name)
    except ShortcodeError as e:
        raise e.shifted(innerStart) from None
    if not attrText.strip():
        return Shortcode(name)

    attrStart = innerStart + len(name) + 1
    attrStart += len(attrText) - len(attrText.lstrip())
    try:
        attrs = parseAttributes(attrText.strip())
    except ShortcodeError as e:
        raise e.shifted(attrStart) from None
    return Shortcode(name, attrs)
