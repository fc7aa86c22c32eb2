"""Expansion context shared with component processors."""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol, runtime_checkable

from .attributes import ExpressionEvaluator, LiteralEvaluator
from .diagnostics import DiagnosticEmitter, NullEmitter
from .events import Event


@runtime_checkable
class TemplateStore(Protocol):
    """Resolves logical fragment paths to parsed event sequences."""

    def load_fragment(self, path: str) -> list[Event]:
        """Return a new list of events or raise ``TemplateResolutionError``."""
        ...


@dataclass
class ExpansionContext:
    """Variable scope and collaborators for one level of component expansion."""

    store: TemplateStore
    evaluator: ExpressionEvaluator = field(default_factory=LiteralEvaluator)
    emitter: DiagnosticEmitter = field(default_factory=NullEmitter)
    scope: ChainMap[str, Any] = field(default_factory=ChainMap)
    depth: int = 0
    trail: tuple[str, ...] = ()

    def load_fragment(self, path: str) -> list[Event]:
        return list(self.store.load_fragment(path))

    def child(self, bindings: Mapping[str, Any], component: str) -> ExpansionContext:
        """Return a nested context whose scope layers ``bindings`` on top."""
        return replace(
            self,
            scope=self.scope.new_child(dict(bindings)),
            depth=self.depth + 1,
            trail=(*self.trail, component),
        )


__all__ = ["ExpansionContext", "TemplateStore"]
