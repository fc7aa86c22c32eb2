"""Rich-backed diagnostic emitter used by CLI commands."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tagsmith.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Print warnings and errors on stderr and record expansion events.

    Event summaries are printed only from ``-v`` upwards; the raw payloads stay
    available through :meth:`CLIState.consume_events`.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self.state = state or get_cli_state()
        self.debug_enabled = (
            self.state.show_tracebacks if debug_enabled is None else bool(debug_enabled)
        )

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.state.record_event(name, payload)
        summary = format_event_message(name, payload) if self.state.verbosity else None
        if summary:
            render_message("info", summary)


__all__ = ["CliEmitter"]
