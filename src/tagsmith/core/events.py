"""Flat event model used to represent markup trees.

A parsed template is not kept as a node tree. It is an ordered list of
events where every :class:`OpenTag` is balanced by exactly one
:class:`CloseTag` at the same depth. Structure is recovered on demand by
counting opens and closes while walking the list.

Events are immutable and compared by identity: two ``<i>`` tags with the
same attributes are still distinct events, which lets positional lookups
tell sibling subtrees apart.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias


def split_name(qualified_name: str) -> tuple[str | None, str]:
    """Split ``prefix:local`` into its parts; unprefixed names yield ``None``."""
    prefix, separator, local = qualified_name.partition(":")
    if not separator:
        return None, qualified_name
    return prefix, local


@dataclass(frozen=True, eq=False, slots=True)
class TemplateStart:
    """Marker emitted before the first event of a parsed template."""

    template: str | None = None


@dataclass(frozen=True, eq=False, slots=True)
class TemplateEnd:
    """Marker emitted after the last event of a parsed template."""

    template: str | None = None


@dataclass(frozen=True, eq=False, slots=True)
class ElementTag(ABC):
    """Common behaviour of tags that carry attributes."""

    name: str
    attributes: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def prefix(self) -> str | None:
        return split_name(self.name)[0]

    @property
    def local_name(self) -> str:
        return split_name(self.name)[1]

    def has_attribute(self, prefix: str | None, name: str) -> bool:
        """Return True when ``prefix:name`` (or ``name`` without prefix) is set."""
        return _qualify(prefix, name) in self.attributes

    def attribute_value(self, prefix: str | None, name: str) -> str | None:
        return self.attributes.get(_qualify(prefix, name))

    @abstractmethod
    def with_attributes(self, attributes: Mapping[str, str | None]) -> ElementTag:
        """Return a copy of this tag carrying ``attributes`` instead."""

    def without_attributes(self, *names: str) -> ElementTag:
        """Return a copy of this tag with the qualified ``names`` removed."""
        remaining = {key: value for key, value in self.attributes.items() if key not in names}
        return self.with_attributes(remaining)


@dataclass(frozen=True, eq=False, slots=True)
class OpenTag(ElementTag):
    """Opening tag of an element that has a body."""

    def with_attributes(self, attributes: Mapping[str, str | None]) -> OpenTag:
        return OpenTag(self.name, attributes)


@dataclass(frozen=True, eq=False, slots=True)
class StandaloneTag(ElementTag):
    """Element without a body; forms a complete one-event subtree."""

    minimized: bool = False

    def with_attributes(self, attributes: Mapping[str, str | None]) -> StandaloneTag:
        return StandaloneTag(self.name, attributes, minimized=self.minimized)


@dataclass(frozen=True, eq=False, slots=True)
class CloseTag:
    """Closing tag matching the most recent unclosed :class:`OpenTag`."""

    name: str


@dataclass(frozen=True, eq=False, slots=True)
class Text:
    """Character data; ``raw`` text is emitted without escaping."""

    content: str
    raw: bool = False

    def is_blank(self) -> bool:
        return not self.raw and not self.content.strip()


Event: TypeAlias = TemplateStart | TemplateEnd | OpenTag | CloseTag | StandaloneTag | Text
EventSequence: TypeAlias = list[Event]


def _qualify(prefix: str | None, name: str) -> str:
    return f"{prefix}:{name}" if prefix else name


def nesting_delta(event: Event) -> int:
    """Return how ``event`` changes the open/close balance."""
    match event:
        case OpenTag():
            return 1
        case CloseTag():
            return -1
        case StandaloneTag() | Text() | TemplateStart() | TemplateEnd():
            return 0
        case _:
            raise TypeError(f"Unsupported template event: {event!r}")


def is_element(event: Event) -> bool:
    """Return True for open and standalone tags."""
    return isinstance(event, (OpenTag, StandaloneTag))


def iter_with_depth(events: Iterable[Event]) -> Iterator[tuple[int, Event]]:
    """Yield ``(depth, event)`` pairs; depth is the nesting level the event sits at.

    An open tag and its matching close tag share the same depth, and children
    sit one level deeper.
    """
    depth = 0
    for event in events:
        delta = nesting_delta(event)
        if delta < 0:
            depth += delta
        yield depth, event
        if delta > 0:
            depth += delta


def is_well_formed(events: Iterable[Event]) -> bool:
    """Check that every open tag is closed, in order, by a same-named close tag."""
    stack: list[str] = []
    for event in events:
        if isinstance(event, OpenTag):
            stack.append(event.name)
        elif isinstance(event, CloseTag):
            if not stack or stack.pop() != event.name:
                return False
    return not stack


def first_element(events: Iterable[Event]) -> OpenTag | StandaloneTag | None:
    """Return the first open or standalone tag, if any."""
    for event in events:
        if isinstance(event, (OpenTag, StandaloneTag)):
            return event
    return None


__all__ = [
    "CloseTag",
    "ElementTag",
    "Event",
    "EventSequence",
    "OpenTag",
    "StandaloneTag",
    "TemplateEnd",
    "TemplateStart",
    "Text",
    "first_element",
    "is_element",
    "is_well_formed",
    "iter_with_depth",
    "nesting_delta",
    "split_name",
]
