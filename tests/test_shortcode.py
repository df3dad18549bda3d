from __future__ import annotations

import dataclasses

import pytest

from wpshortcode.shortcode import Shortcode, ShortcodeType


def test_positional_serialization() -> None:
    assert str(Shortcode("testcode", {"$0": "testval"})) == "[testcode testval]"
    assert str(Shortcode("testcode", {"$0": "test val"})) == '[testcode "test val"]'
    assert str(Shortcode("testcode", {"$0": ""})) == '[testcode ""]'
    assert str(Shortcode("testcode", {"$0": "a=b"})) == '[testcode "a=b"]'


def test_named_serialization_picks_quote() -> None:
    assert str(Shortcode("testcode", {"testval": "test'test"})) == "[testcode testval=\"test'test\"]"
    assert str(Shortcode("testcode", {"testval": 'test"test'})) == "[testcode testval='test\"test']"
    assert str(Shortcode("testcode", {"testval": "test2"})) == '[testcode testval="test2"]'


def test_serialization_keeps_attribute_order() -> None:
    code = Shortcode("x", {"$0": "a", "k": "v", "$1": "b"})
    assert str(code) == '[x a k="v" b]'


def test_with_content() -> None:
    code = Shortcode("a", {"k": "v"})
    enclosing = code.withContent("body")
    assert enclosing is not code
    assert code.content is None
    assert not code.isEnclosing
    assert enclosing.content == "body"
    assert enclosing.isEnclosing
    assert enclosing.attributes == code.attributes
    assert str(enclosing) == '[a k="v"]body[/a]'


def test_empty_content_is_still_enclosing() -> None:
    code = Shortcode("a").withContent("")
    assert code.isEnclosing
    assert str(code) == "[a][/a]"


def test_value_is_case_insensitive() -> None:
    code = Shortcode("a", {"key": "v"})
    assert code.value("KEY") == "v"
    assert code.value("Key") == "v"
    assert code.value("missing") is None


def test_positional_values() -> None:
    code = Shortcode("a", {"$1": "second", "x": "y", "$0": "first"})
    assert code.positionalValue(0) == "first"
    assert code.positionalValue(1) == "second"
    assert code.positionalValue(2) is None
    assert code.positionalValues() == ["first", "second"]
    assert Shortcode("a", {"x": "y"}).positionalValues() == []


def test_immutable() -> None:
    attrs = {"k": "v"}
    code = Shortcode("a", attrs)
    attrs["k"] = "changed"
    assert code.value("k") == "v"
    with pytest.raises(TypeError):
        code.attributes["k"] = "x"  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        code.name = "b"  # type: ignore[misc]


def test_equality_and_hashing() -> None:
    assert Shortcode("a", {"x": "1"}) == Shortcode("a", {"x": "1"})
    assert Shortcode("a", {"x": "1"}) != Shortcode("a", {"x": "2"})
    assert Shortcode("a") != Shortcode("a").withContent("")
    assert len({Shortcode("a", {"x": "1"}), Shortcode("a", {"x": "1"})}) == 1
    forward = Shortcode("a", {"x": "1", "y": "2"})
    backward = Shortcode("a", {"y": "2", "x": "1"})
    assert forward == backward
    assert hash(forward) == hash(backward)
    assert len({forward, backward}) == 1


def test_shortcode_type_from_str() -> None:
    assert ShortcodeType.fromStr("Enclosing") is ShortcodeType.ENCLOSING
    assert ShortcodeType.fromStr("self-closing") is ShortcodeType.SELF_CLOSING
    with pytest.raises(ValueError, match="Unknown shortcode type"):
        ShortcodeType.fromStr("block")
