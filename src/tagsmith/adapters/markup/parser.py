"""Flatten BeautifulSoup trees into template event sequences."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, PreformattedString, Tag

from tagsmith.core.events import (
    CloseTag,
    Event,
    OpenTag,
    StandaloneTag,
    TemplateEnd,
    TemplateStart,
    Text,
)


logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


def build_soup(markup: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse ``markup`` keeping every attribute value as a plain string."""
    try:
        return BeautifulSoup(markup, parser, multi_valued_attributes=None)
    except FeatureNotFound:
        logger.debug("Parser backend '%s' unavailable, using %s", parser, DEFAULT_PARSER)
        return BeautifulSoup(markup, DEFAULT_PARSER, multi_valued_attributes=None)


def parse_markup(
    markup: str,
    *,
    parser: str = DEFAULT_PARSER,
    template: str | None = None,
) -> list[Event]:
    """Return the event sequence for ``markup`` framed by start/end markers."""
    soup = build_soup(markup, parser)
    events: list[Event] = [TemplateStart(template)]
    _flatten(soup, events)
    events.append(TemplateEnd(template))
    return events


def _flatten(node: Tag, events: list[Event]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            attributes = {key: _attribute_value(value) for key, value in child.attrs.items()}
            if not child.contents and child.can_be_empty_element:
                events.append(StandaloneTag(child.name, attributes))
                continue
            events.append(OpenTag(child.name, attributes))
            _flatten(child, events)
            events.append(CloseTag(child.name))
        elif isinstance(child, PreformattedString):
            events.append(Text(child.output_ready(formatter=None), raw=True))
        elif isinstance(child, NavigableString):
            raw = node.name in RAW_TEXT_ELEMENTS
            events.append(Text(str(child), raw=raw))


def _attribute_value(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


__all__ = ["DEFAULT_PARSER", "build_soup", "parse_markup"]
