"""Facade aggregating the high-level tagsmith composition API.

Usage Example
:
    >>> from tagsmith.api import render_markup
    >>> render_markup(
    ...     "<pl:card><b>Hi</b></pl:card>",
    ...     {"card": "<div class='card'><pl:slot></pl:slot></div>"},
    ... )
    '<div class="card"><b>Hi</b></div>'
"""

from __future__ import annotations

from .service import CompositionService, RenderResult, render_markup


__all__ = ["CompositionService", "RenderResult", "render_markup"]
