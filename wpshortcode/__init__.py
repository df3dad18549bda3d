# pylint: disable=wrong-import-position

from __future__ import annotations

import platform
import sys


def verify_python_version() -> None:
    if sys.version_info < (3, 9):
        print(
            """wpshortcode requires Python 3.9 or higher; you are on {}.""".format(
                platform.python_version(),
            ),
        )
        sys.exit(1)


verify_python_version()

from . import config, messages
from .cli import main
from .config import ShortcodeRegistry
from .errors import ErrorKind, ShortcodeError
from .handlers import (
    EchoHandler,
    ErrorEvent,
    EventCollector,
    Handler,
    Renderer,
    ShortcodeEvent,
    TextEvent,
    render,
)
from .parser import parse, parseShortcode
from .shortcode import Shortcode, ShortcodeType
