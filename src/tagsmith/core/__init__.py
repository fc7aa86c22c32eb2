"""Component composition core operating on flat template event sequences."""

from __future__ import annotations

from .dialect import DEFAULT_DIALECT_PREFIX, ComponentDialect
from .events import (
    CloseTag,
    ElementTag,
    Event,
    EventSequence,
    OpenTag,
    StandaloneTag,
    TemplateEnd,
    TemplateStart,
    Text,
)
from .exceptions import (
    ComponentError,
    ConfigurationError,
    DuplicateSlotError,
    ExpansionDepthError,
    ExpressionError,
    MalformedModelError,
    RegistrationError,
    TemplateResolutionError,
)
from .expander import ComponentExpander
from .processor import ComponentProcessor, MergeResult
from .slots import DEFAULT_SLOT


__all__ = [
    "DEFAULT_DIALECT_PREFIX",
    "DEFAULT_SLOT",
    "CloseTag",
    "ComponentDialect",
    "ComponentError",
    "ComponentExpander",
    "ComponentProcessor",
    "ConfigurationError",
    "DuplicateSlotError",
    "ElementTag",
    "Event",
    "EventSequence",
    "ExpansionDepthError",
    "ExpressionError",
    "MalformedModelError",
    "MergeResult",
    "OpenTag",
    "RegistrationError",
    "StandaloneTag",
    "TemplateEnd",
    "TemplateResolutionError",
    "TemplateStart",
    "Text",
]
