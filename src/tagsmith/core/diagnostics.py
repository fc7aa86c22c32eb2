"""Diagnostics raised while components are expanded.

Library code never prints. It reports through a :class:`DiagnosticEmitter`:
``warning`` and ``error`` for messages aimed at the user, ``event`` for
structured records such as ``component_expanded``. The CLI installs a
rich-backed emitter; library callers get :class:`NullEmitter` unless they pass
:class:`LoggingEmitter` or :class:`RecordingEmitter`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Sink for warnings, errors, and structured expansion events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Forward diagnostics to a :mod:`logging` logger.

    Events with a readable summary are logged at INFO when ``debug_enabled``
    is set; everything else goes to DEBUG.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.warning(message, exc_info=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._logger.error(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        summary = format_event_message(name, payload)
        if summary and self.debug_enabled:
            self._logger.info(summary)
        else:
            self._logger.debug("%s %s", name, dict(payload))


@dataclass
class RecordingEmitter:
    """Keep every diagnostic in memory for later inspection."""

    debug_enabled: bool = False
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def events_named(self, name: str) -> list[dict[str, Any]]:
        return [payload for event_name, payload in self.events if event_name == name]


def _expanded_message(data: Mapping[str, Any]) -> str:
    component = data.get("component") or "<unknown>"
    template = data.get("template") or "<unknown>"
    details: list[str] = []
    if data.get("wrapped"):
        details.append("wrapped")
    slots = data.get("slots")
    if slots:
        details.append(f"slots={', '.join(sorted(slots))}")
    suffix = f" ({'; '.join(details)})" if details else ""
    return f"Expanded component '{component}' from {template}{suffix}"


def _fallback_message(data: Mapping[str, Any]) -> str:
    return f"Attribute '{data.get('attribute') or '<unknown>'}' kept as literal {data.get('value')!r}"


def _placeholder_message(data: Mapping[str, Any]) -> str:
    location = f" in {data['source']}" if data.get("source") else ""
    return f"Placeholder '{{{{ {data.get('placeholder')} }}}}' left unresolved{location}"


def _dropped_message(data: Mapping[str, Any]) -> str:
    names = ", ".join(data.get("attributes") or ())
    return (
        f"Attributes {names} on {data.get('component') or '<unknown>'} not forwarded; "
        f"{data.get('template') or '<unknown>'} has no passthrough target"
    )


_EVENT_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "component_expanded": _expanded_message,
    "expression_fallback": _fallback_message,
    "unresolved_placeholder": _placeholder_message,
    "passthrough_dropped": _dropped_message,
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary for known events, ``None`` otherwise."""
    formatter = _EVENT_FORMATTERS.get(name)
    return formatter(payload) if formatter else None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "RecordingEmitter",
    "format_event_message",
]
