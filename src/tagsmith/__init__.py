"""Primary public API for tagsmith."""

from __future__ import annotations

from tagsmith.adapters import (
    JinjaExpressionEvaluator,
    JinjaTemplateStore,
    parse_markup,
    render_events,
)
from tagsmith.api import CompositionService, RenderResult, render_markup
from tagsmith.core import (
    DEFAULT_DIALECT_PREFIX,
    DEFAULT_SLOT,
    ComponentDialect,
    ComponentError,
    ComponentExpander,
    ComponentProcessor,
    ConfigurationError,
    DuplicateSlotError,
    ExpansionDepthError,
    MalformedModelError,
    MergeResult,
    TemplateResolutionError,
)
from tagsmith.core.config import ComponentRegistration, DialectConfig, load_config
from tagsmith.core.diagnostics import LoggingEmitter, NullEmitter, RecordingEmitter
from tagsmith.version import get_version


__version__ = get_version()

__all__ = [
    "DEFAULT_DIALECT_PREFIX",
    "DEFAULT_SLOT",
    "ComponentDialect",
    "ComponentError",
    "ComponentExpander",
    "ComponentProcessor",
    "ComponentRegistration",
    "CompositionService",
    "ConfigurationError",
    "DialectConfig",
    "DuplicateSlotError",
    "ExpansionDepthError",
    "JinjaExpressionEvaluator",
    "JinjaTemplateStore",
    "LoggingEmitter",
    "MalformedModelError",
    "MergeResult",
    "NullEmitter",
    "RecordingEmitter",
    "RenderResult",
    "TemplateResolutionError",
    "__version__",
    "load_config",
    "parse_markup",
    "render_events",
    "render_markup",
]
