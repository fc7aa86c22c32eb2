"""Render template event sequences back into markup text."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

from bs4.dammit import EntitySubstitution

from tagsmith.core.events import (
    CloseTag,
    Event,
    OpenTag,
    StandaloneTag,
    TemplateEnd,
    TemplateStart,
    Text,
)


def render_attributes(attributes: Mapping[str, str | None]) -> str:
    """Serialise attributes; ``None`` values render as bare attribute names."""
    parts: list[str] = []
    for name, value in attributes.items():
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f" {name}={EntitySubstitution.substitute_xml(value, True)}")
    return "".join(parts)


def render_event(event: Event) -> str:
    """Return the markup for a single event."""
    match event:
        case TemplateStart() | TemplateEnd():
            return ""
        case OpenTag(name=name, attributes=attributes):
            return f"<{name}{render_attributes(attributes)}>"
        case StandaloneTag(name=name, attributes=attributes, minimized=minimized):
            closing = " />" if minimized else ">"
            return f"<{name}{render_attributes(attributes)}{closing}"
        case CloseTag(name=name):
            return f"</{name}>"
        case Text(content=content, raw=True):
            return content
        case Text(content=content):
            return EntitySubstitution.substitute_xml(content)
        case _:
            raise TypeError(f"Unsupported template event: {event!r}")


def render_events(events: Iterable[Event], *, unwrap: Collection[str] = ()) -> str:
    """Serialise ``events``; tags named in ``unwrap`` are dropped, keeping their children."""
    parts: list[str] = []
    for event in events:
        if isinstance(event, (OpenTag, StandaloneTag, CloseTag)) and event.name in unwrap:
            continue
        parts.append(render_event(event))
    return "".join(parts)


__all__ = ["render_attributes", "render_event", "render_events"]
