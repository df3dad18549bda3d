from __future__ import annotations

import json

import pytest

from wpshortcode.cli import main


def test_parse_json(tmp_path, capsys, messageLog) -> None:
    path = tmp_path / "post.txt"
    path.write_text("Hi [icon name=x] [note]a[/note]", encoding="utf-8")
    main(["--print", "plain", "parse", str(path), "--self-closing", "icon", "--enclosing", "note", "--json"])
    assert json.loads(capsys.readouterr().out) == [
        {"type": "text", "text": "Hi "},
        {"type": "shortcode", "name": "icon", "attributes": {"name": "x"}, "content": None},
        {"type": "text", "text": " "},
        {"type": "shortcode", "name": "note", "attributes": {}, "content": "a"},
    ]
    assert messageLog.getvalue() == ""


def test_parse_uses_default_and_file_registries(tmp_path, capsys, messageLog) -> None:
    registry = tmp_path / "codes.kdl"
    registry.write_text('shortcode "box" type="enclosing"\n', encoding="utf-8")
    path = tmp_path / "post.txt"
    path.write_text("[gallery][box]in[/box]", encoding="utf-8")
    main(["--print", "plain", "parse", str(path), "--registry", str(registry)])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["shortcode [gallery]", "shortcode [box]in[/box]"]


def test_parse_warns_with_location(tmp_path, capsys, messageLog) -> None:
    path = tmp_path / "post.txt"
    path.write_text("line one\nbad [icon x=] here", encoding="utf-8")
    main(["--print", "plain", "parse", str(path), "--self-closing", "icon"])
    log = messageLog.getvalue()
    assert "LINE 2:11" in log
    assert "missing-attribute-value" in log
    assert "error     '[icon x=]'" in capsys.readouterr().out


def test_parse_dies_on_warning_when_asked(tmp_path, messageLog) -> None:
    path = tmp_path / "post.txt"
    path.write_text("[icon x=]", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--print", "plain", "--die-on", "warning", "parse", str(path), "--self-closing", "icon"])
    assert excinfo.value.code == 2


def test_parse_missing_file(tmp_path, messageLog) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--print", "plain", "parse", str(tmp_path / "nope.txt")])
    assert excinfo.value.code == 2
    assert "Couldn't read" in messageLog.getvalue()


def test_show(capsys, messageLog) -> None:
    main(["--print", "plain", "show", '[gallery ids="1,2" Link]'])
    assert capsys.readouterr().out.splitlines() == [
        '[gallery ids="1,2" Link]',
        "  ids = '1,2'",
        "  $0 = 'Link'",
    ]


def test_show_invalid(messageLog) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--print", "plain", "show", "[a b=]"])
    assert excinfo.value.code == 2
    assert "missing-attribute-value" in messageLog.getvalue()


def test_test_subcommand_runs_suite(messageLog) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--print", "plain", "test"])
    assert excinfo.value.code == 0
    assert "All tests passed" in messageLog.getvalue()


def test_parse_dies_early_at_first_warning(tmp_path, capsys, messageLog) -> None:
    path = tmp_path / "post.txt"
    path.write_text("[icon x=] [icon y=]", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--print",
                "plain",
                "--die-on",
                "warning",
                "--die-when",
                "early",
                "parse",
                str(path),
                "--self-closing",
                "icon",
            ],
        )
    assert excinfo.value.code == 2
    log = messageLog.getvalue()
    assert "LINE 1:7" in log
    assert "LINE 1:17" not in log
    assert capsys.readouterr().out == ""
