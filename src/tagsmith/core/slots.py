"""Slot discovery and substitution.

Callers hand content to a component through the direct children of the
invocation tag. A child carrying ``<prefix>:slot="name"`` fills the named
slot; every other child goes to the default slot. Fragments declare where
content goes with ``<prefix>:slot`` placeholders, optionally named and
optionally carrying a fallback body used when the caller supplies nothing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence as SequenceABC
import logging

from .events import ElementTag, Event, OpenTag, Text, first_element
from .exceptions import DuplicateSlotError
from .subtree import replace_subtree, subtree_below, top_level_children


logger = logging.getLogger(__name__)

DEFAULT_SLOT = "tagsmith.slots.default"
"""Key under which unnamed slot content and placeholders are stored."""


def slot_name_of(placeholder: ElementTag, prefix: str) -> str:
    """Return the resolved name of a slot placeholder.

    ``<prefix>:name`` takes precedence over a plain ``name`` attribute; a
    placeholder without either is the default slot.
    """
    candidates = (placeholder.attribute_value(prefix, "name"), placeholder.attributes.get("name"))
    for candidate in candidates:
        if candidate:
            return candidate
    return DEFAULT_SLOT


def is_slot_placeholder(event: Event, prefix: str) -> bool:
    return isinstance(event, ElementTag) and event.name == f"{prefix}:slot"


def extract_slot_contents(invocation: SequenceABC[Event], prefix: str) -> dict[str, list[Event]]:
    """Group the direct children of an invocation by the slot they target.

    Only depth-one children are considered, so ``slot`` attributes that belong
    to nested component invocations stay untouched. The slot attribute is
    removed from claimed children. Raises :class:`DuplicateSlotError` when two
    children claim the same named slot.
    """
    root = first_element(invocation)
    contents: dict[str, list[Event]] = {}
    default_content: list[Event] = []
    if root is None:
        contents[DEFAULT_SLOT] = default_content
        return contents

    slot_attribute = f"{prefix}:slot"
    for child in top_level_children(invocation, root):
        head = child[0]
        if not isinstance(head, ElementTag) or not head.has_attribute(prefix, "slot"):
            default_content.extend(child)
            continue
        claimed = [head.without_attributes(slot_attribute), *child[1:]]
        slot_name = head.attribute_value(prefix, "slot")
        if not slot_name:
            default_content.extend(claimed)
            continue
        if slot_name in contents:
            raise DuplicateSlotError(slot_name)
        contents[slot_name] = claimed

    contents[DEFAULT_SLOT] = default_content
    return contents


def extract_slots(fragment: SequenceABC[Event], prefix: str) -> dict[str, list[ElementTag]]:
    """Collect slot placeholders keyed by name, in document order."""
    slots: dict[str, list[ElementTag]] = {}
    for event in fragment:
        if isinstance(event, ElementTag) and is_slot_placeholder(event, prefix):
            slots.setdefault(slot_name_of(event, prefix), []).append(event)
    return slots


def has_content(content: SequenceABC[Event] | None) -> bool:
    """Return True when ``content`` holds anything besides blank text."""
    if not content:
        return False
    return any(not (isinstance(event, Text) and event.is_blank()) for event in content)


def fallback_slot_content(body: SequenceABC[Event], placeholder: ElementTag) -> list[Event]:
    """Return the placeholder's own body, or nothing for a bodiless placeholder."""
    if isinstance(placeholder, OpenTag):
        return subtree_below(body, placeholder)
    return []


def fill_slot(body: list[Event], placeholder: ElementTag, content: SequenceABC[Event]) -> bool:
    """Replace the placeholder subtree inside ``body`` with ``content``."""
    return replace_subtree(body, placeholder, content)


def fill_slots(
    body: list[Event],
    slots: Mapping[str, SequenceABC[ElementTag]],
    contents: Mapping[str, SequenceABC[Event]],
) -> set[str]:
    """Substitute every placeholder in ``body`` in place.

    Returns the names of the slots that received caller content. When a name
    is declared by several placeholders, only the first one receives the
    content; the others fall back to their own body.
    """
    filled: set[str] = set()
    for slot_name, placeholders in slots.items():
        for position, placeholder in enumerate(placeholders):
            content = contents.get(slot_name) if position == 0 else None
            if content is not None and has_content(content):
                filled.add(slot_name)
                resolved = list(content)
            else:
                resolved = fallback_slot_content(body, placeholder)
            if not fill_slot(body, placeholder, resolved):
                logger.debug("Slot placeholder '%s' no longer present in fragment body", slot_name)
            elif position > 0:
                logger.warning("Duplicate slot placeholder '%s' rendered with its fallback", slot_name)
    return filled


__all__ = [
    "DEFAULT_SLOT",
    "extract_slot_contents",
    "extract_slots",
    "fallback_slot_content",
    "fill_slot",
    "fill_slots",
    "has_content",
    "is_slot_placeholder",
    "slot_name_of",
]
