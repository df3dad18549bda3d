from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorKind, ShortcodeError
from .shortcode import isPositionalKey

QUOTE_CHARS = "\"'"


@dataclass
class Token:
    text: str
    offset: int
    # Whether an `=` came after this token,
    # making it the name half of a name=value pair.
    followedByEquals: bool = False


class AttributeTokenizer:
    """
    Splits the attribute portion of a start tag into tokens.

    A token is either quoted (ended only by the same quote character)
    or bare (ended by a space or `=`).
    Call nextToken() until it returns None.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def eof(self) -> bool:
        return self.pos >= len(self.text)

    def skipSpaces(self) -> None:
        while not self.eof() and self.text[self.pos] == " ":
            self.pos += 1

    def nextToken(self) -> Token | None:
        self.skipSpaces()
        # An `=` with no name in front of it is just a delimiter.
        while not self.eof() and self.text[self.pos] == "=":
            self.pos += 1
            self.skipSpaces()
        if self.eof():
            return None

        start = self.pos
        if self.text[start] in QUOTE_CHARS:
            tokenText = self.consumeQuoted()
        else:
            tokenText = self.consumeBare()

        token = Token(tokenText, start)
        self.skipSpaces()
        if not self.eof() and self.text[self.pos] == "=":
            token.followedByEquals = True
            self.pos += 1
            self.skipSpaces()
        return token

    def consumeQuoted(self) -> str:
        quote = self.text[self.pos]
        end = self.text.find(quote, self.pos + 1)
        if end == -1:
            self.pos = len(self.text)
            msg = f"Expected a closing {quote} before the end of the attributes."
            raise ShortcodeError(ErrorKind.UNTERMINATED_QUOTE, msg, len(self.text))
        val = self.text[self.pos + 1 : end]
        self.pos = end + 1
        return val

    def consumeBare(self) -> str:
        start = self.pos
        while not self.eof():
            ch = self.text[self.pos]
            if ch in " =":
                break
            if ch in QUOTE_CHARS:
                msg = f"Unexpected {ch} in the middle of an unquoted value."
                raise ShortcodeError(ErrorKind.UNEXPECTED_QUOTE, msg, self.pos)
            self.pos += 1
        return self.text[start : self.pos]


def parseAttributes(text: str) -> dict[str, str]:
    # Named attributes are stored lower-cased;
    # everything else is positional, keyed $0, $1, ...
    tokens = AttributeTokenizer(text)
    attrs: dict[str, str] = {}
    positionalCount = 0
    while True:
        token = tokens.nextToken()
        if token is None:
            break
        if token.followedByEquals:
            val = tokens.nextToken()
            if val is None:
                msg = f"Attribute '{token.text}' is missing a value."
                raise ShortcodeError(ErrorKind.MISSING_ATTRIBUTE_VALUE, msg, token.offset)
            if isPositionalKey(token.text):
                msg = f"Attribute name '{token.text}' is reserved for positional values."
                raise ShortcodeError(ErrorKind.INVALID_NAME, msg, token.offset)
            attrs[token.text.lower()] = val.text
        else:
            attrs[f"${positionalCount}"] = token.text
            positionalCount += 1
    return attrs
