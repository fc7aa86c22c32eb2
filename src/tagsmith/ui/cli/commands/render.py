"""Implementation of the ``tagsmith render`` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from tagsmith.api.service import CompositionService
from tagsmith.core.exceptions import ComponentError

from .._options import (
    DIAGNOSTICS_PANEL,
    OUTPUT_PANEL,
    ComponentDirOption,
    ConfigOption,
    DebugOption,
    PrefixOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..state import debug_enabled, emit_error, get_cli_state, set_cli_state
from ..utils import build_config, parse_bindings, write_output_file


def _read_page(page: str) -> tuple[str, str]:
    if page == "-":
        return typer.get_text_stream("stdin").read(), "<stdin>"
    path = Path(page)
    return path.read_text(encoding="utf-8"), str(path)


def render(
    page: Annotated[
        str,
        typer.Argument(
            metavar="PAGE",
            help="Markup page to expand, or '-' to read from standard input.",
        ),
    ],
    components: ComponentDirOption = None,
    config_path: ConfigOption = None,
    prefix: PrefixOption = None,
    define: Annotated[
        list[str] | None,
        typer.Option(
            "--define",
            "-D",
            metavar="KEY=VALUE",
            help="Bind a variable visible to the page and its components.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the expanded markup to this file instead of stdout.",
            dir_okay=False,
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = None,
    no_interpolate: Annotated[
        bool,
        typer.Option(
            "--no-interpolate",
            help="Leave '{{ name }}' placeholders untouched.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = False,
    show_events: Annotated[
        bool,
        typer.Option(
            "--show-events",
            help="Print a summary of expanded components after rendering.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Expand component tags in PAGE and print the merged markup."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    bindings = parse_bindings(define)

    try:
        config = build_config(
            config_path=config_path,
            component_dirs=components,
            prefix=prefix,
            interpolate=False if no_interpolate else None,
        )
        service = CompositionService(config, emitter=CliEmitter(state))
        markup, source = _read_page(page)
        result = service.render(markup, bindings, source=source)
        if output is not None:
            write_output_file(output, result.markup)
        else:
            typer.echo(result.markup, nl=not result.markup.endswith("\n"))
    except (ComponentError, OSError) as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if output is not None:
        state.err_console.print(f"[cyan]Output written to[/] {output}")
    if show_events:
        _print_expansions(state.consume_events("component_expanded"))


def _print_expansions(entries: list[dict[str, object]]) -> None:
    from rich.table import Table

    table = Table(title="Expanded Components", header_style="bold cyan")
    table.add_column("Component", style="magenta")
    table.add_column("Template")
    table.add_column("Slots")
    table.add_column("Wrapped", justify="center")
    for entry in entries:
        slots = entry.get("slots") or ()
        table.add_row(
            str(entry.get("component", "-")),
            str(entry.get("template", "-")),
            ", ".join(sorted(str(slot) for slot in slots)) or "-",
            "yes" if entry.get("wrapped") else "no",
        )
    get_cli_state().err_console.print(table)


__all__ = ["render"]
