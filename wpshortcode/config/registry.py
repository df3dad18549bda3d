from __future__ import annotations

import dataclasses

import kdl

from .. import t
from ..shortcode import ShortcodeType
from .main import scriptPath


@dataclasses.dataclass
class ShortcodeRegistry:
    """
    Which shortcode names are known, and whether they take content.

    Loaded from KDL, one node per shortcode:

        shortcode "caption" type="enclosing"
        shortcode "gallery" type="self-closing"

    `type` defaults to self-closing.
    """

    types: dict[str, ShortcodeType] = dataclasses.field(default_factory=dict)

    @staticmethod
    def fromKdlStr(data: str) -> ShortcodeRegistry:
        self = ShortcodeRegistry()
        kdlDoc = kdl.parse(data)
        for node in kdlDoc.getAll("shortcode"):
            if len(node.args) != 1 or not isinstance(node.args[0], str):
                msg = f"Each shortcode node needs exactly one string argument, its name. Got: {node}"
                raise ValueError(msg)
            name = t.cast(str, node.args[0])
            type = ShortcodeType.fromStr(str(node.props.get("type", "self-closing")))
            self.register(name, type)
        return self

    @staticmethod
    def fromFile(path: str) -> ShortcodeRegistry:
        with open(path, encoding="utf-8") as fh:
            return ShortcodeRegistry.fromKdlStr(fh.read())

    @staticmethod
    def default() -> ShortcodeRegistry:
        # The shortcodes WordPress registers out of the box.
        return ShortcodeRegistry.fromFile(scriptPath("shortcodes.kdl"))

    def register(self, name: str, type: ShortcodeType) -> ShortcodeRegistry:
        if type is ShortcodeType.UNKNOWN:
            self.types.pop(name, None)
        else:
            self.types[name] = type
        return self

    def typeOf(self, name: str) -> ShortcodeType:
        return self.types.get(name, ShortcodeType.UNKNOWN)

    def merge(self, other: ShortcodeRegistry) -> ShortcodeRegistry:
        # Entries in `other` win.
        self.types.update(other.types)
        return self

    def copy(self) -> ShortcodeRegistry:
        return ShortcodeRegistry(dict(self.types))

    def __contains__(self, name: str) -> bool:
        return name in self.types

    def __len__(self) -> int:
        return len(self.types)
