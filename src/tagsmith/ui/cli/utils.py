"""Utility helpers shared by CLI commands."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import typer
import yaml

from tagsmith.core.config import DialectConfig, load_config


def build_config(
    *,
    config_path: Path | None = None,
    component_dirs: Iterable[Path] | None = None,
    prefix: str | None = None,
    interpolate: bool | None = None,
) -> DialectConfig:
    """Combine an optional configuration file with command-line overrides.

    Directories given on the command line are searched after the configured
    ones and enable component discovery.
    """
    overrides: dict[str, Any] = {"prefix": prefix, "interpolate": interpolate}
    if config_path is not None:
        config = load_config(config_path, **overrides)
    else:
        config = DialectConfig.model_validate(
            {key: value for key, value in overrides.items() if value is not None}
        )

    extra_dirs = [Path(directory) for directory in component_dirs or ()]
    if extra_dirs:
        config = config.model_copy(
            update={"template_dirs": [*config.template_dirs, *extra_dirs], "discover": True}
        )
    return config


def parse_bindings(values: Iterable[str] | None) -> dict[str, Any]:
    """Parse ``key=value`` pairs, reading each value as a YAML scalar."""
    bindings: dict[str, Any] = {}
    for entry in values or ():
        key, separator, raw = entry.partition("=")
        key = key.strip()
        if not separator or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{entry}'.", param_hint="--define")
        try:
            bindings[key] = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError:
            bindings[key] = raw
    return bindings


def write_output_file(target: Path, content: str) -> None:
    """Persist rendered markup to disk, creating parent directories as needed."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem errors
        raise OSError(f"Failed to write output to '{target}': {exc}") from exc


__all__ = ["build_config", "parse_bindings", "write_output_file"]
