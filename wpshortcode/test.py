from __future__ import annotations

import dataclasses
import difflib
import json
import os

from alive_progress import alive_it

from . import config, t
from . import messages as m
from .config import ShortcodeRegistry
from .handlers import EventCollector
from .parser import parse

if t.TYPE_CHECKING:
    import argparse

TEST_DIR = os.path.abspath(os.path.join(config.scriptPath(), "..", "tests", "suite"))
TEST_FILE_EXTENSIONS = (".txt",)
REGISTRY_FILENAME = "shortcodes.kdl"


@dataclasses.dataclass
class TestFilter:
    files: list[str] | None = None

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> TestFilter:
        return TestFilter(files=options.files)


def testPaths(filters: TestFilter, testDir: str = TEST_DIR) -> list[str]:
    return sorted(findTestFiles(filters, testDir))


def findTestFiles(filters: TestFilter, testDir: str) -> t.Generator[str, None, None]:
    for root, _, filenames in os.walk(testDir):
        for filename in filenames:
            if os.path.splitext(filename)[1] not in TEST_FILE_EXTENSIONS:
                continue
            if filters.files and not any(fileSubstring in filename for fileSubstring in filters.files):
                continue
            yield os.path.join(root, filename)


def testNameForPath(path: str, testDir: str = TEST_DIR) -> str:
    if path.startswith(testDir):
        return path[len(testDir) + 1 :]
    return path


def loadRegistry(testDir: str) -> ShortcodeRegistry:
    path = os.path.join(testDir, REGISTRY_FILENAME)
    if os.path.exists(path):
        return ShortcodeRegistry.fromFile(path)
    return ShortcodeRegistry.default()


def run(filters: TestFilter, testDir: str = TEST_DIR) -> bool:
    paths = testPaths(filters, testDir)
    if len(paths) == 0:
        m.p("No tests were found")
        return True
    registry = loadRegistry(testDir)
    numPassed = 0
    total = 0
    fails = []
    pathProgress = alive_it(paths, dual_line=True, length=20)
    for path in pathProgress:
        testName = testNameForPath(path, testDir)
        pathProgress.text(testName)
        total += 1
        testOutput = processTest(path, registry)
        goldenPath = replaceExtension(path, ".json")
        if not os.path.exists(goldenPath):
            m.p(m.printColor(f"Missing expected output {goldenPath}; run with --rebase to create it.", color="red"))
            fails.append(testName)
            continue
        with open(goldenPath, encoding="utf-8") as golden:
            goldenOutput = golden.read()
        if compare(testOutput, goldenOutput, path=path):
            numPassed += 1
        else:
            fails.append(testName)
    if numPassed == total:
        m.p(m.printColor("✔ All tests passed.", color="green"))
        return True
    m.p(m.printColor(f"✘ {numPassed}/{total} tests passed.", color="red"))
    m.p(m.printColor("Failed Tests:", color="red"))
    for fail in fails:
        m.p("* " + fail)
    return False


def rebase(filters: TestFilter, testDir: str = TEST_DIR) -> bool:
    paths = testPaths(filters, testDir)
    if len(paths) == 0:
        m.p("No tests were found.")
        return True
    registry = loadRegistry(testDir)
    pathProgress = alive_it(paths, dual_line=True, length=20)
    for path in pathProgress:
        pathProgress.text(testNameForPath(path, testDir))
        with open(replaceExtension(path, ".json"), "w", encoding="utf-8", newline="\n") as fh:
            fh.write(processTest(path, registry))
    return True


def processTest(path: str, registry: ShortcodeRegistry) -> str:
    with open(path, encoding="utf-8", newline="") as fh:
        text = fh.read()
    collector = EventCollector(registry)
    parse(text, collector)
    return json.dumps(collector.toJson(), indent=2, ensure_ascii=False) + "\n"


def compare(suspect: str, golden: str, path: str) -> bool:
    if suspect == golden:
        return True
    m.p(f"FILE: {path}")
    for line in difflib.unified_diff(golden.split("\n"), suspect.split("\n"), fromfile="golden", tofile="suspect"):
        if line[0] == "-":
            m.p(m.printColor(line, color="red"))
        elif line[0] == "+":
            m.p(m.printColor(line, color="green"))
        else:
            m.p(line)
    m.p("")
    return False


def replaceExtension(path: str, newExt: str) -> str:
    assert newExt[0] == "."
    trunk = os.path.splitext(path)[0]
    return f"{trunk}{newExt}"
