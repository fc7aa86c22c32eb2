from __future__ import annotations

import pytest

from tagsmith.core.events import (
    CloseTag,
    ElementTag,
    OpenTag,
    StandaloneTag,
    TemplateEnd,
    TemplateStart,
    Text,
    first_element,
    is_element,
    is_well_formed,
    iter_with_depth,
    nesting_delta,
    split_name,
)


def test_split_name_handles_prefixed_and_plain_names() -> None:
    assert split_name("pl:button") == ("pl", "button")
    assert split_name("div") == (None, "div")
    assert split_name("pl:a:b") == ("pl", "a:b")


def test_events_compare_by_identity() -> None:
    first = OpenTag("i", {"class": "x"})
    second = OpenTag("i", {"class": "x"})

    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_attributes_are_read_only_and_ordered() -> None:
    tag = OpenTag("a", {"href": "/", "pl:title": "t", "id": None})

    assert list(tag.attributes) == ["href", "pl:title", "id"]
    with pytest.raises(TypeError):
        tag.attributes["href"] = "/other"  # type: ignore[index]


def test_attribute_helpers_use_prefix() -> None:
    tag = StandaloneTag("pl:card", {"pl:title": "Hello", "class": "box"}, minimized=True)

    assert tag.prefix == "pl"
    assert tag.local_name == "card"
    assert tag.has_attribute("pl", "title")
    assert tag.has_attribute(None, "class")
    assert not tag.has_attribute("pl", "class")
    assert tag.attribute_value("pl", "title") == "Hello"
    assert tag.attribute_value("pl", "missing") is None


def test_with_attributes_keeps_variant() -> None:
    standalone = StandaloneTag("br", {"a": "1"}, minimized=True)
    updated = standalone.with_attributes({"b": "2"})

    assert isinstance(updated, StandaloneTag)
    assert updated.minimized is True
    assert dict(updated.attributes) == {"b": "2"}
    assert dict(standalone.attributes) == {"a": "1"}

    opened = OpenTag("div", {"pl:slot": "a", "id": "x"}).without_attributes("pl:slot")
    assert isinstance(opened, OpenTag)
    assert dict(opened.attributes) == {"id": "x"}


def test_element_tag_base_is_abstract() -> None:
    with pytest.raises(TypeError):
        ElementTag("div")  # type: ignore[abstract]


def test_nesting_delta() -> None:
    assert nesting_delta(OpenTag("div")) == 1
    assert nesting_delta(CloseTag("div")) == -1
    assert nesting_delta(StandaloneTag("br")) == 0
    assert nesting_delta(Text("x")) == 0
    assert nesting_delta(TemplateStart()) == 0
    assert nesting_delta(TemplateEnd()) == 0
    with pytest.raises(TypeError):
        nesting_delta("<div>")  # type: ignore[arg-type]


def test_iter_with_depth_shares_depth_between_open_and_close() -> None:
    outer, inner = OpenTag("div"), OpenTag("p")
    events = [outer, inner, Text("x"), CloseTag("p"), CloseTag("div")]

    depths = [depth for depth, _event in iter_with_depth(events)]

    assert depths == [0, 1, 2, 1, 0]


def test_is_well_formed() -> None:
    assert is_well_formed([OpenTag("a"), OpenTag("b"), CloseTag("b"), CloseTag("a")])
    assert is_well_formed([TemplateStart(), StandaloneTag("br"), Text("x"), TemplateEnd()])
    assert not is_well_formed([OpenTag("a")])
    assert not is_well_formed([CloseTag("a")])
    assert not is_well_formed([OpenTag("a"), OpenTag("b"), CloseTag("a"), CloseTag("b")])


def test_first_element_and_is_element() -> None:
    tag = StandaloneTag("pl:simple")
    events = [TemplateStart(), Text(" "), tag, TemplateEnd()]

    assert first_element(events) is tag
    assert first_element([Text("only text")]) is None
    assert is_element(tag)
    assert not is_element(CloseTag("x"))


def test_blank_text() -> None:
    assert Text("  \n\t").is_blank()
    assert not Text(" x ").is_blank()
    assert not Text("   ", raw=True).is_blank()
