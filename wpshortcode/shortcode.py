from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from . import t


class ShortcodeType(Enum):
    # How a handler classifies a shortcode name.
    SELF_CLOSING = "self-closing"
    ENCLOSING = "enclosing"
    UNKNOWN = "unknown"

    @staticmethod
    def fromStr(text: str) -> ShortcodeType:
        for type in ShortcodeType:
            if type.value == text.strip().lower():
                return type
        msg = f"Unknown shortcode type '{text}'; expected one of {', '.join(x.value for x in ShortcodeType)}."
        raise ValueError(msg)


@dataclass(frozen=True)
class Shortcode:
    """
    A parsed shortcode: `[name attr="val"]`, or `[name]content[/name]`.

    Named attributes are keyed by their lower-cased name;
    positional attributes are keyed `$0`, `$1`, etc in order of appearance.
    `content` is None unless this came from a matched start/end tag pair.
    """

    name: str
    attributes: t.AttributesT = dataclasses.field(default_factory=dict)
    content: str | None = None

    def __post_init__(self) -> None:
        # Freeze a private copy, so the caller's dict can't change us later.
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __hash__(self) -> int:
        return hash((self.name, frozenset(self.attributes.items()), self.content))

    def withContent(self, content: str) -> Shortcode:
        return dataclasses.replace(self, content=content)

    @property
    def isEnclosing(self) -> bool:
        return self.content is not None

    def value(self, name: str) -> str | None:
        return self.attributes.get(name.lower())

    def positionalValue(self, pos: int) -> str | None:
        return self.attributes.get(f"${pos}")

    def positionalValues(self) -> list[str]:
        positions = []
        for key in self.attributes:
            match = re.fullmatch(r"\$(\d+)", key)
            if match:
                positions.append(int(match.group(1)))
        return [self.attributes[f"${i}"] for i in sorted(positions)]

    def __str__(self) -> str:
        s = "[" + self.name
        for k, v in self.attributes.items():
            if isPositionalKey(k):
                s += " " + (quoteAttr(v) if needsQuotes(v) else v)
            else:
                s += f" {k}={quoteAttr(v)}"
        s += "]"
        if self.content is not None:
            s += f"{self.content}[/{self.name}]"
        return s


def isPositionalKey(key: str) -> bool:
    return re.fullmatch(r"\$\d+", key) is not None


def needsQuotes(val: str) -> bool:
    # A bare value has to survive the attribute tokenizer unchanged.
    return val == "" or any(ch in val for ch in " =\"'")


def quoteAttr(val: str) -> str:
    # There's no escaping in shortcode attributes,
    # so the only option is picking the quote that isn't in the value.
    if '"' in val:
        return f"'{val}'"
    return f'"{val}"'
