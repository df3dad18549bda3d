from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field

from . import t
from .config import ShortcodeRegistry
from .errors import ShortcodeError
from .parser import parse
from .shortcode import Shortcode, ShortcodeType

ParseEventT: t.TypeAlias = "TextEvent | ShortcodeEvent | ErrorEvent"


class Handler(metaclass=ABCMeta):
    """
    Receives the results of parse(), in document order.
    """

    @abstractmethod
    def text(self, text: str) -> None:
        pass

    @abstractmethod
    def shortcode(self, shortcode: Shortcode) -> None:
        pass

    @abstractmethod
    def parseError(self, text: str, error: ShortcodeError | None) -> None:
        pass

    @abstractmethod
    def shortcodeType(self, name: str) -> ShortcodeType:
        # Called once a start tag is parsed, to decide whether
        # to emit it, wait for its end tag, or treat it as plain text.
        pass


@dataclass
class TextEvent:
    text: str

    def toJson(self) -> dict[str, t.Any]:
        return {"type": "text", "text": self.text}


@dataclass
class ShortcodeEvent:
    shortcode: Shortcode

    def toJson(self) -> dict[str, t.Any]:
        return {
            "type": "shortcode",
            "name": self.shortcode.name,
            "attributes": dict(self.shortcode.attributes),
            "content": self.shortcode.content,
        }


@dataclass
class ErrorEvent:
    text: str
    error: ShortcodeError | None

    def toJson(self) -> dict[str, t.Any]:
        return {
            "type": "error",
            "kind": self.error.kind.value if self.error is not None else None,
            "offset": self.error.offset if self.error is not None else None,
            "text": self.text,
        }


@dataclass
class RegistryHandler(Handler, metaclass=ABCMeta):
    # Classifies shortcodes by looking them up in a registry.
    registry: ShortcodeRegistry = field(default_factory=ShortcodeRegistry)

    def shortcodeType(self, name: str) -> ShortcodeType:
        return self.registry.typeOf(name)


@dataclass
class EventCollector(RegistryHandler):
    """
    Records every event, for later inspection.
    """

    events: list[ParseEventT] = field(default_factory=list)

    def text(self, text: str) -> None:
        self.events.append(TextEvent(text))

    def shortcode(self, shortcode: Shortcode) -> None:
        self.events.append(ShortcodeEvent(shortcode))

    def parseError(self, text: str, error: ShortcodeError | None) -> None:
        self.events.append(ErrorEvent(text, error))

    @property
    def shortcodes(self) -> list[Shortcode]:
        return [e.shortcode for e in self.events if isinstance(e, ShortcodeEvent)]

    @property
    def errors(self) -> list[ErrorEvent]:
        return [e for e in self.events if isinstance(e, ErrorEvent)]

    def toJson(self) -> list[dict[str, t.Any]]:
        return [e.toJson() for e in self.events]


@dataclass
class EchoHandler(RegistryHandler):
    """
    Reassembles the parsed text.

    Text and unparseable spans come back verbatim;
    shortcodes come back in their canonical serialization.
    """

    output: list[str] = field(default_factory=list)

    def text(self, text: str) -> None:
        self.output.append(text)

    def shortcode(self, shortcode: Shortcode) -> None:
        self.output.append(self.serialize(shortcode))

    def parseError(self, text: str, error: ShortcodeError | None) -> None:
        self.output.append(text)

    def serialize(self, shortcode: Shortcode) -> str:
        return str(shortcode)

    def result(self) -> str:
        return "".join(self.output)


@dataclass
class Renderer(EchoHandler):
    """
    Replaces each recognized shortcode with the output of its render function.

    Shortcodes without a render function are echoed back unchanged.
    """

    renderers: dict[str, t.RenderFnT] = field(default_factory=dict)

    def serialize(self, shortcode: Shortcode) -> str:
        fn = self.renderers.get(shortcode.name)
        if fn is None:
            return str(shortcode)
        return fn(shortcode)


def render(
    text: str,
    renderers: t.Mapping[str, t.RenderFnT],
    registry: ShortcodeRegistry | None = None,
) -> str:
    # Names with a renderer but no registry entry are treated as self-closing.
    registry = ShortcodeRegistry() if registry is None else registry.copy()
    for name in renderers:
        if registry.typeOf(name) is ShortcodeType.UNKNOWN:
            registry.register(name, ShortcodeType.SELF_CLOSING)
    renderer = Renderer(registry=registry, renderers=dict(renderers))
    parse(text, renderer)
    return renderer.result()
