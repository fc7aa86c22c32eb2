"""Implementation of the ``tagsmith components`` command."""

from __future__ import annotations

from rich.table import Table
import typer

from tagsmith.core.config import DialectConfig
from tagsmith.core.exceptions import ComponentError
from tagsmith.core.processor import default_template_path

from .._options import ComponentDirOption, ConfigOption, DebugOption, PrefixOption, VerboseOption
from ..state import debug_enabled, emit_error, set_cli_state
from ..utils import build_config


def _collect_entries(config: DialectConfig) -> list[tuple[str, str, str]]:
    entries = [
        (
            f"{config.prefix}:{component.name}",
            component.template or default_template_path(config.prefix, component.name),
            "configured",
        )
        for component in config.components
    ]
    if config.discover:
        entries.extend(
            (
                f"{config.prefix}:{component.name}",
                default_template_path(config.prefix, component.name),
                "discovered",
            )
            for component in config.discover_components()
        )
    return entries


def components(
    components_dirs: ComponentDirOption = None,
    config_path: ConfigOption = None,
    prefix: PrefixOption = None,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """List the components available to ``tagsmith render``."""
    state = set_cli_state(verbosity=verbose, debug=debug)
    try:
        config = build_config(
            config_path=config_path, component_dirs=components_dirs, prefix=prefix
        )
        config.build_dialect()
    except ComponentError as exc:
        if debug_enabled():
            raise
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    table = Table(title="Available Components", header_style="bold cyan")
    table.add_column("Element", style="magenta")
    table.add_column("Template")
    table.add_column("Origin", style="green")

    entries = _collect_entries(config)
    if not entries:
        table.add_row("-", "-", "No components found")
    for element, template, origin in entries:
        table.add_row(element, template, origin)
    state.console.print(table)


__all__ = ["components"]
