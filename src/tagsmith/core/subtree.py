"""Subtree extraction and splicing over flat event sequences.

Lookups use event identity rather than equality: sibling tags that look alike
are common and must not be confused with each other.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence as SequenceABC

from .events import Event, nesting_delta


def index_of(events: SequenceABC[Event], target: Event, start: int = 0) -> int:
    """Return the position of ``target`` in ``events`` or ``-1`` when absent."""
    for index in range(start, len(events)):
        if events[index] is target:
            return index
    return -1


def subtree_end(events: SequenceABC[Event], start_index: int) -> int:
    """Return the exclusive end index of the subtree starting at ``start_index``.

    Truncated input (an open tag never closed) extends the subtree to the end
    of ``events``.
    """
    balance = 0
    for index in range(start_index, len(events)):
        balance += nesting_delta(events[index])
        if balance <= 0:
            return index + 1
    return len(events)


def subtree_from(events: SequenceABC[Event], start: Event) -> list[Event]:
    """Return the events forming the subtree rooted at ``start``, inclusive.

    A missing ``start`` yields an empty list.
    """
    start_index = index_of(events, start)
    if start_index < 0:
        return []
    return list(events[start_index : subtree_end(events, start_index)])


def subtree_below(events: SequenceABC[Event], start: Event) -> list[Event]:
    """Return the children of ``start``, without its own open and close tags."""
    subtree = subtree_from(events, start)
    if len(subtree) < 2:
        return []
    return subtree[1:-1]


def top_level_children(events: SequenceABC[Event], parent: Event) -> list[list[Event]]:
    """Split the children of ``parent`` into their direct child subtrees."""
    children = subtree_below(events, parent)
    groups: list[list[Event]] = []
    index = 0
    while index < len(children):
        end = subtree_end(children, index)
        groups.append(children[index:end])
        index = end
    return groups


def replace_subtree(events: list[Event], start: Event, replacement: Iterable[Event]) -> bool:
    """Splice ``replacement`` in place of the subtree rooted at ``start``.

    Positions are looked up against the current state of ``events`` so that
    earlier splices never leave stale indices behind. Returns False when
    ``start`` is not part of ``events``.
    """
    start_index = index_of(events, start)
    if start_index < 0:
        return False
    events[start_index : subtree_end(events, start_index)] = list(replacement)
    return True


__all__ = [
    "index_of",
    "replace_subtree",
    "subtree_below",
    "subtree_end",
    "subtree_from",
    "top_level_children",
]
