from __future__ import annotations

import os

from wpshortcode import test as suite


def test_golden_suite(messageLog) -> None:
    assert suite.run(suite.TestFilter())
    assert "All tests passed" in messageLog.getvalue()


def test_suite_has_tests() -> None:
    names = [suite.testNameForPath(p) for p in suite.testPaths(suite.TestFilter())]
    assert "enclosing.txt" in names
    assert names == sorted(names)


def test_file_filter(messageLog) -> None:
    paths = suite.testPaths(suite.TestFilter(files=["enclos"]))
    assert [os.path.basename(p) for p in paths] == ["enclosing.txt"]


def test_rebase_then_run(tmp_path, messageLog) -> None:
    (tmp_path / "post.txt").write_text("A [gallery ids=1] B\n", encoding="utf-8")
    assert suite.rebase(suite.TestFilter(), testDir=str(tmp_path))
    assert (tmp_path / "post.json").exists()
    assert suite.run(suite.TestFilter(), testDir=str(tmp_path))


def test_mismatch_reports_diff(tmp_path, messageLog) -> None:
    (tmp_path / "post.txt").write_text("A [gallery] B\n", encoding="utf-8")
    (tmp_path / "post.json").write_text("[]\n", encoding="utf-8")
    assert not suite.run(suite.TestFilter(), testDir=str(tmp_path))
    log = messageLog.getvalue()
    assert "FILE:" in log
    assert "* post.txt" in log


def test_no_tests_found(tmp_path, messageLog) -> None:
    assert suite.run(suite.TestFilter(), testDir=str(tmp_path))
    assert "No tests were found" in messageLog.getvalue()
