"""Per-invocation CLI state: verbosity, rich consoles, and recorded events."""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import TYPE_CHECKING, Any

import click

from tagsmith.core.exceptions import exception_hint, exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


@dataclass(slots=True)
class CLIState:
    """Settings and output channels shared by the commands of one invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict, init=False)
    _consoles: dict[str, Console] = field(default_factory=dict, init=False, repr=False)

    def _console_for(self, stream_name: str) -> Console:
        from rich.console import Console

        stream = getattr(sys, stream_name)
        console = self._consoles.get(stream_name)
        # Test runners swap the standard streams between invocations.
        if console is None or console.file is not stream:
            console = Console(file=stream, highlight=stream_name == "stdout")
            self._consoles[stream_name] = console
        return console

    @property
    def console(self) -> Console:
        return self._console_for("stdout")

    @property
    def err_console(self) -> Console:
        return self._console_for("stderr")

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.setdefault(name, []).append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return and forget the events recorded under ``name``."""
        return self.events.pop(name, [])


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("tagsmith_cli_state", default=None)


def get_cli_state(ctx: click.Context | None = None, *, create: bool = True) -> CLIState:
    """Return the state bound to the active click context.

    Outside of a command the last bound state is reused, so helpers called from
    library code or tests still find one.
    """
    if ctx is None:
        ctx = click.get_current_context(silent=True)

    state: CLIState | None = None
    if ctx is not None:
        state = ctx.ensure_object(CLIState) if create else ctx.find_object(CLIState)
    if state is None:
        state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
    _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: click.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _detail_lines(state: CLIState, message: str, exception: BaseException) -> list[str]:
    lines: list[str] = []
    hint = exception_hint(exception)
    if hint and hint not in message:
        lines.append(f"hint: {hint}")
    if state.verbosity >= 1:
        lines.append(f"type: {type(exception).__name__}")
        causes = exception_messages(exception)[1:]
        if causes:
            lines.append("caused by:")
            lines.extend(f"  {cause}" for cause in causes)
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message`` on stderr, styled by ``level``.

    ``info`` messages go through ``Console.log``; warnings and errors get a
    coloured label and, when an exception is given, its hint and cause chain.
    """
    from rich.text import Text

    state = get_cli_state()
    if level == "info":
        state.err_console.log(message)
        return

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None:
        details = _detail_lines(state, message, exception)
        if details:
            text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether full tracebacks were requested with ``--debug``."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
