"""Adapters connecting the composition core to concrete libraries."""

from __future__ import annotations

from .expressions import JinjaExpressionEvaluator
from .markup import parse_markup, render_events
from .store import JinjaTemplateStore


__all__ = [
    "JinjaExpressionEvaluator",
    "JinjaTemplateStore",
    "parse_markup",
    "render_events",
]
