"""Composition service wiring configuration, adapters, and the expander."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import BaseLoader, DictLoader

from tagsmith.adapters.expressions import JinjaExpressionEvaluator
from tagsmith.adapters.markup import parse_markup, render_events
from tagsmith.adapters.store import JinjaTemplateStore
from tagsmith.core.attributes import ExpressionEvaluator
from tagsmith.core.config import DialectConfig, load_config
from tagsmith.core.diagnostics import DiagnosticEmitter, NullEmitter
from tagsmith.core.events import Event
from tagsmith.core.expander import ComponentExpander
from tagsmith.core.processor import BLOCK_ELEMENT, default_template_path


__all__ = ["CompositionService", "RenderResult", "render_markup"]


@dataclass(slots=True)
class RenderResult:
    """Markup produced by a composition run together with its events."""

    markup: str
    events: list[Event]


class CompositionService:
    """High-level entry point expanding component markup."""

    def __init__(
        self,
        config: DialectConfig | None = None,
        *,
        loader: BaseLoader | None = None,
        evaluator: ExpressionEvaluator | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or DialectConfig()
        self.emitter = emitter or NullEmitter()
        self.dialect = self.config.build_dialect()
        options = {"suffix": self.config.template_suffix, "parser": self.config.parser}
        if loader is None:
            self.store = JinjaTemplateStore.from_directories(self.config.template_dirs, **options)
        else:
            self.store = JinjaTemplateStore(loader, **options)
        self.evaluator = evaluator or JinjaExpressionEvaluator()
        self.expander = ComponentExpander(
            self.dialect,
            self.store,
            self.evaluator,
            emitter=self.emitter,
            max_depth=self.config.max_depth,
            interpolate=self.config.interpolate,
        )

    @classmethod
    def from_config_file(
        cls, path: Path | str, *, emitter: DiagnosticEmitter | None = None, **overrides: Any
    ) -> CompositionService:
        return cls(load_config(path, **overrides), emitter=emitter)

    @property
    def block_element(self) -> str:
        return f"{self.config.prefix}:{BLOCK_ELEMENT}"

    def add_component(self, name: str, template: str | None = None) -> CompositionService:
        self.dialect.add_component(name, template)
        return self

    def expand(self, events: list[Event], bindings: Mapping[str, Any] | None = None) -> list[Event]:
        return self.expander.expand(events, bindings)

    def render(
        self,
        markup: str,
        bindings: Mapping[str, Any] | None = None,
        *,
        source: str | None = None,
    ) -> RenderResult:
        """Parse ``markup``, expand its components, and serialise the result."""
        events = parse_markup(markup, parser=self.config.parser, template=source)
        expanded = self.expand(events, bindings)
        return RenderResult(
            markup=render_events(expanded, unwrap={self.block_element}),
            events=expanded,
        )

    def render_file(self, path: Path | str, bindings: Mapping[str, Any] | None = None) -> RenderResult:
        page = Path(path)
        return self.render(page.read_text(encoding="utf-8"), bindings, source=str(page))


def render_markup(
    markup: str,
    components: Mapping[str, str],
    bindings: Mapping[str, Any] | None = None,
    *,
    prefix: str = "pl",
    emitter: DiagnosticEmitter | None = None,
) -> str:
    """Expand ``markup`` against in-memory component fragments.

    ``components`` maps element names to their fragment markup.
    """
    config = DialectConfig(prefix=prefix)
    sources = {
        f"{default_template_path(prefix, name)}{config.template_suffix}": fragment
        for name, fragment in components.items()
    }
    service = CompositionService(config, loader=DictLoader(sources), emitter=emitter)
    for name in components:
        service.add_component(name)
    return service.render(markup, bindings).markup
