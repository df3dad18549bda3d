from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import t
from .errors import ErrorKind, ShortcodeError
from .shortcode import Shortcode, ShortcodeType
from .tags import parseStart

if t.TYPE_CHECKING:
    from .handlers import Handler


class ScanState(Enum):
    TEXT = "text"
    # Inside a `[...` start tag.
    START = "start"
    # Inside the body of an enclosing shortcode.
    CONTENT = "content"
    # Saw a `[` in the body; it must be followed by `/`.
    START_END = "start-end"
    # Inside a `[/...` end tag.
    END_NAME = "end-name"


@dataclass
class Scan:
    """
    All the mutable state of a single parse() call.

    Every index is into the full input text.
    """

    state: ScanState = ScanState.TEXT
    position: int = 0
    # Start of text that hasn't been handed to handler.text() yet.
    textStart: int = 0
    # The `[` of the start tag currently being parsed or held open.
    tagStart: int = 0
    contentStart: int = 0
    contentEnd: int = 0
    endNameStart: int = 0
    openTag: Shortcode | None = None


def parse(text: str, handler: Handler) -> None:
    """
    Scans `text` for shortcodes, reporting text, shortcodes, and errors
    to `handler` in document order.

    Malformed shortcodes are reported via handler.parseError()
    and scanning picks back up in plain text,
    so this never raises on its own account.

    Plain text is coalesced: everything between two shortcode or error events
    (including unrecognized shortcodes) arrives as a single text() call.

    The body of an enclosing shortcode is *not* scanned for nested shortcodes;
    the first `[` in it has to begin the end tag.
    """
    s = Scan()
    end = len(text)
    while s.position < end:
        ch = text[s.position]
        if s.state is ScanState.TEXT:
            if ch == "[":
                s.tagStart = s.position
                s.state = ScanState.START
            s.position += 1
        elif s.state is ScanState.START:
            s.position += 1
            if ch == "]":
                closeStartTag(text, s, handler)
        elif s.state is ScanState.CONTENT:
            if ch == "[":
                s.contentEnd = s.position
                s.state = ScanState.START_END
            s.position += 1
        elif s.state is ScanState.START_END:
            if ch == "/":
                s.position += 1
                s.endNameStart = s.position
                s.state = ScanState.END_NAME
            else:
                # Not an end tag, so the open tag never gets closed.
                # Leave `ch` unconsumed; it's rescanned as text.
                assert s.openTag is not None
                msg = f"Expected '[/{s.openTag.name}]' to end the [{s.openTag.name}] shortcode."
                emitError(
                    text,
                    s,
                    handler,
                    ShortcodeError(ErrorKind.UNTERMINATED_SHORTCODE, msg, s.position),
                )
        elif s.state is ScanState.END_NAME:
            s.position += 1
            if ch == "]":
                closeEndTag(text, s, handler)
        else:
            t.assert_never(s.state)

    if s.state is ScanState.TEXT:
        flushText(text, s, handler, end)
    else:
        preview = text[s.tagStart : s.tagStart + 20]
        msg = f"Hit the end of the text while still inside the shortcode starting with '{preview}'."
        emitError(text, s, handler, ShortcodeError(ErrorKind.UNTERMINATED_SHORTCODE, msg, end))


def closeStartTag(text: str, s: Scan, handler: Handler) -> None:
    # s.position is just past the `]`.
    try:
        shortcode = parseStart(text[s.tagStart : s.position])
    except ShortcodeError as e:
        emitError(text, s, handler, e.shifted(s.tagStart))
        return

    type = handler.shortcodeType(shortcode.name)
    if type is ShortcodeType.SELF_CLOSING:
        flushText(text, s, handler, s.tagStart)
        handler.shortcode(shortcode)
        s.textStart = s.position
        s.state = ScanState.TEXT
    elif type is ShortcodeType.ENCLOSING:
        s.openTag = shortcode
        s.contentStart = s.position
        s.state = ScanState.CONTENT
    else:
        # Unrecognized; the whole thing is just more text.
        s.state = ScanState.TEXT


def closeEndTag(text: str, s: Scan, handler: Handler) -> None:
    # s.position is just past the `]`.
    assert s.openTag is not None
    endName = text[s.endNameStart : s.position - 1]
    if endName == s.openTag.name:
        flushText(text, s, handler, s.tagStart)
        handler.shortcode(s.openTag.withContent(text[s.contentStart : s.contentEnd]))
        s.openTag = None
        s.textStart = s.position
        s.state = ScanState.TEXT
    else:
        msg = f"End tag '[/{endName}]' doesn't match the open [{s.openTag.name}] shortcode."
        emitError(
            text,
            s,
            handler,
            ShortcodeError(ErrorKind.MISMATCHED_END_TAG, msg, s.contentEnd),
        )


def flushText(text: str, s: Scan, handler: Handler, upTo: int) -> None:
    if upTo > s.textStart:
        handler.text(text[s.textStart : upTo])
    s.textStart = upTo


def emitError(text: str, s: Scan, handler: Handler, error: ShortcodeError) -> None:
    # Reports everything from the current tag's `[` up to the current position,
    # then drops back to plain text.
    flushText(text, s, handler, s.tagStart)
    handler.parseError(text[s.tagStart : s.position], error)
    s.openTag = None
    s.textStart = s.position
    s.state = ScanState.TEXT


def parseShortcode(text: str) -> Shortcode:
    """
    Parses a string consisting of exactly one shortcode,
    either `[name ...]` or `[name ...]content[/name]`.

    Raises ShortcodeError if it's anything else.
    """
    leading = len(text) - len(text.lstrip())
    exp = text.strip()
    if len(exp) < 3:
        msg = f"Invalid shortcode '{exp}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading)
    if exp[0] != "[":
        msg = f"Expected '[' at the start of '{exp}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading)
    tagEnd = exp.find("]")
    if tagEnd == -1:
        msg = f"Expected ']' to end the start tag of '{exp}'."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading + len(exp))

    try:
        startTag = parseStart(exp[: tagEnd + 1])
    except ShortcodeError as e:
        raise e.shifted(leading) from None

    rest = exp[tagEnd + 1 :]
    if not rest:
        return startTag

    endTagStart = rest.rfind("[/")
    if endTagStart == -1 or not rest.endswith("]"):
        msg = f"Unexpected text after the [{startTag.name}] start tag."
        raise ShortcodeError(ErrorKind.INVALID_SHORTCODE, msg, leading + tagEnd + 1)
    endName = rest[endTagStart + 2 : -1]
    if endName != startTag.name:
        msg = f"End tag '[/{endName}]' doesn't match the [{startTag.name}] start tag."
        raise ShortcodeError(ErrorKind.MISMATCHED_END_TAG, msg, leading + tagEnd + 1 + endTagStart)
    return startTag.withContent(rest[:endTagStart])
