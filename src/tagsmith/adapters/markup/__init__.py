"""Conversion between markup text and template event sequences."""

from __future__ import annotations

from .parser import DEFAULT_PARSER, build_soup, parse_markup
from .serializer import render_attributes, render_event, render_events


__all__ = [
    "DEFAULT_PARSER",
    "build_soup",
    "parse_markup",
    "render_attributes",
    "render_event",
    "render_events",
]
