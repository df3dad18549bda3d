from __future__ import annotations

import argparse
import json
import os
import sys

from . import config
from . import messages as m
from .config import ShortcodeRegistry
from .errors import ShortcodeError
from .handlers import ErrorEvent, EventCollector, ShortcodeEvent, TextEvent
from .parser import parse, parseShortcode
from .shortcode import ShortcodeType
from .stream import Stream


def main(argv: list[str] | None = None) -> None:
    try:
        with open(config.scriptPath("semver.txt"), encoding="utf-8") as fh:
            semver = fh.read().strip()
            semverText = f"wpshortcode v{semver}: "
    except FileNotFoundError:
        semver = "???"
        semverText = ""

    argparser = argparse.ArgumentParser(description=f"{semverText}Parses WordPress-style [shortcodes] out of text.")
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Silences one level of message, least-important first.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Shorthand for 'as many -q as you need to shut it up'",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Force all messages to be ASCII-only.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="How messages are formatted. Options are 'plain' (just text), 'console' (text with console color codes), 'markup' (XML), and 'json' (JSON stream). Defaults to 'console'.",
    )
    argparser.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS.keys()),
        help="Determines what sorts of messages cause a non-zero exit. Default is 'fatal'.",
    )
    argparser.add_argument(
        "--die-when",
        dest="errorTiming",
        choices=m.DEATH_TIMING,
        default="late",
        help="When a disallowed error should stop processing. 'early' stops at the first one; 'late' reports every error in the input first and only stops at the end.",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    parseParser = subparsers.add_parser("parse", help="Parse a file and print the resulting text/shortcode/error events.")
    parseParser.add_argument(
        "infile",
        help='Path to the source file, or "-" for stdin.',
    )
    parseParser.add_argument(
        "--registry",
        dest="registry",
        default=None,
        help="A KDL file of additional shortcode definitions.",
    )
    parseParser.add_argument(
        "--enclosing",
        dest="enclosing",
        default=[],
        nargs="+",
        help="Names of shortcodes that take content and an end tag.",
    )
    parseParser.add_argument(
        "--self-closing",
        dest="selfClosing",
        default=[],
        nargs="+",
        help="Names of shortcodes that have no end tag.",
    )
    parseParser.add_argument(
        "--json",
        dest="json",
        action="store_true",
        help="Print the events as a JSON array instead of one per line.",
    )

    showParser = subparsers.add_parser("show", help="Parse a single shortcode and print its canonical form.")
    showParser.add_argument("shortcode", help="The shortcode text, like '[gallery ids=\"1,2\"]'.")

    testParser = subparsers.add_parser("test", help="Tools for running the golden-file testsuite.")
    testParser.add_argument(
        "--rebase",
        default=False,
        action="store_true",
        help="Rebase the specified files.",
    )
    testParser.add_argument(
        "--file",
        dest="files",
        default=None,
        nargs="+",
        help="Only run tests whose filenames contain any of these strings as substrings.",
    )

    options = argparser.parse_args(argv)

    if options.silent:
        m.state.silent = True
    m.state.printOn = m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        m.state.dieOn = options.errorLevel
    m.state.dieWhen = options.errorTiming
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is None:
        if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
            m.state.printMode = "plain"
        else:
            m.state.printMode = "console"
    else:
        m.state.printMode = options.printMode

    if options.subparserName == "parse":
        handleParse(options)
    elif options.subparserName == "show":
        handleShow(options)
    elif options.subparserName == "test":
        handleTest(options)
    else:
        argparser.print_help()


def registryFromOptions(options: argparse.Namespace) -> ShortcodeRegistry:
    registry = ShortcodeRegistry.default()
    if options.registry:
        registry.merge(ShortcodeRegistry.fromFile(options.registry))
    for name in options.selfClosing:
        registry.register(name, ShortcodeType.SELF_CLOSING)
    for name in options.enclosing:
        registry.register(name, ShortcodeType.ENCLOSING)
    return registry


def handleParse(options: argparse.Namespace) -> None:
    if options.infile == "-":
        text = sys.stdin.read()
        context = "stdin"
    else:
        try:
            with open(options.infile, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            m.die(f"Couldn't read '{options.infile}':\n{e}")
            m.retroactivelyCheckErrorLevel()
            return
        context = options.infile

    collector = EventCollector(registryFromOptions(options))
    parse(text, collector)

    s = Stream(text, context=context)
    for event in collector.errors:
        if event.error is None:
            m.warn(f"Couldn't parse '{event.text}'.")
        else:
            m.warn(f"{event.error.msg} ({event.error.kind.value})", lineNum=s.loc(event.error.offset))

    if options.json:
        print(json.dumps(collector.toJson(), indent=2, ensure_ascii=False))  # noqa: T201
    else:
        for event in collector.events:
            if isinstance(event, TextEvent):
                print(f"text      {event.text!r}")  # noqa: T201
            elif isinstance(event, ShortcodeEvent):
                print(f"shortcode {event.shortcode}")  # noqa: T201
            elif isinstance(event, ErrorEvent):
                print(f"error     {event.text!r}")  # noqa: T201
    m.retroactivelyCheckErrorLevel()


def handleShow(options: argparse.Namespace) -> None:
    try:
        shortcode = parseShortcode(options.shortcode)
    except ShortcodeError as e:
        m.die(f"{e.msg} ({e.kind.value})", lineNum=Stream(options.shortcode).loc(e.offset))
        m.retroactivelyCheckErrorLevel()
        return
    print(shortcode)  # noqa: T201
    for k, v in shortcode.attributes.items():
        print(f"  {k} = {v!r}")  # noqa: T201
    if shortcode.content is not None:
        print(f"  content = {shortcode.content!r}")  # noqa: T201


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    m.state.dieOn = "nothing"
    filters = test.TestFilter.fromOptions(options)
    if options.rebase:
        test.rebase(filters)
    else:
        result = test.run(filters)
        sys.exit(0 if result else 1)
