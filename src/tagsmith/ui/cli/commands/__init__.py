"""CLI command implementations exposed via ``tagsmith.ui.cli``."""

from __future__ import annotations

from .components import components
from .render import render


__all__ = ["components", "render"]
