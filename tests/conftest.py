from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from wpshortcode import messages as m  # noqa: E402
from wpshortcode.config import ShortcodeRegistry  # noqa: E402
from wpshortcode.shortcode import ShortcodeType  # noqa: E402


@pytest.fixture
def messageLog() -> io.StringIO:
    fh = io.StringIO()
    with m.withMessageState(fh, printMode="plain"):
        yield fh


def makeRegistry(enclosing: tuple[str, ...] = (), selfClosing: tuple[str, ...] = ()) -> ShortcodeRegistry:
    registry = ShortcodeRegistry()
    for name in enclosing:
        registry.register(name, ShortcodeType.ENCLOSING)
    for name in selfClosing:
        registry.register(name, ShortcodeType.SELF_CLOSING)
    return registry
