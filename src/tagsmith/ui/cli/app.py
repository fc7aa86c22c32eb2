"""Typer application wiring for the tagsmith CLI."""

from __future__ import annotations

import typer

from tagsmith.version import get_version

from .commands import components, render
from .state import debug_enabled, emit_error, get_cli_state


app = typer.Typer(
    help="Expand component tags in markup pages using fragment templates.",
    context_settings={"help_option_names": ["--help", "-h"]},
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tagsmith {get_version()}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the installed version and exit.",
    ),
) -> None:
    """Expand component tags in markup pages using fragment templates."""


app.command()(render)
app.command()(components)


def _report_crash(exc: BaseException) -> None:
    state = get_cli_state()
    if not state.show_tracebacks:
        emit_error(str(exc) or type(exc).__name__, exception=exc)
        return
    from rich.traceback import Traceback

    state.err_console.print(
        Traceback.from_exception(
            type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
        )
    )


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.")
        raise typer.Exit(code=130) from exc
    except Exception as exc:  # pragma: no cover - last-resort reporting
        _report_crash(exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
