"""Utility helpers for resolving simple mustache-style placeholders."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Any

from .diagnostics import DiagnosticEmitter
from .events import ElementTag, Event, Text


_MUSTACHE_RE = re.compile(r"\{\{\s*([^\}\s][^\}]*)\s*\}\}")
_MISSING = object()


def _lookup(context: Mapping[str, Any] | None, path: str) -> Any:
    current: Any = context
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
        elif hasattr(current, part) and not part.startswith("_"):
            current = getattr(current, part)
        else:
            return _MISSING
    return current


def replace_mustaches(
    text: str,
    scope: Mapping[str, Any],
    *,
    emitter: DiagnosticEmitter | None = None,
    source: str | None = None,
) -> str:
    """Replace ``{{path.to.value}}`` placeholders in ``text`` using ``scope``.

    Unknown names are left as-is and reported; ``None`` renders as nothing.
    """

    def _replacement(match: re.Match[str]) -> str:
        raw_path = match.group(1).strip()
        value = _lookup(scope, raw_path)
        if value is _MISSING:
            if emitter:
                location = f" in {source}" if source else ""
                emitter.warning(
                    f"Unresolved placeholder '{{{{{raw_path}}}}}'{location}; leaving it as-is."
                )
                emitter.event("unresolved_placeholder", {"placeholder": raw_path, "source": source})
            return match.group(0)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    if "{{" not in text:
        return text
    return _MUSTACHE_RE.sub(_replacement, text)


def interpolate_event(
    event: Event,
    scope: Mapping[str, Any],
    *,
    emitter: DiagnosticEmitter | None = None,
    source: str | None = None,
) -> Event:
    """Return ``event`` with placeholders resolved in its text or attribute values.

    Events without placeholders are returned unchanged, preserving identity.
    """
    if isinstance(event, Text):
        if event.raw or "{{" not in event.content:
            return event
        return Text(replace_mustaches(event.content, scope, emitter=emitter, source=source))
    if isinstance(event, ElementTag):
        if not any(value and "{{" in value for value in event.attributes.values()):
            return event
        attributes = {
            key: None
            if value is None
            else replace_mustaches(value, scope, emitter=emitter, source=source)
            for key, value in event.attributes.items()
        }
        return event.with_attributes(attributes)
    return event


__all__ = ["interpolate_event", "replace_mustaches"]
