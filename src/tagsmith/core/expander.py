"""Reference host engine driving component expansion over a whole sequence.

The expander scans a sequence for registered component invocations, hands
each invocation subtree to its processor and re-scans the merged result in
a child scope carrying the component bindings. Nested components therefore
expand naturally, without the processors themselves recursing.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterable, Mapping
import logging
from typing import Any

from .attributes import ExpressionEvaluator
from .context import ExpansionContext, TemplateStore
from .diagnostics import DiagnosticEmitter, NullEmitter
from .dialect import ComponentDialect
from .events import ElementTag, Event
from .exceptions import ExpansionDepthError
from .mustache import interpolate_event
from .processor import MergeResult
from .subtree import subtree_end


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class ComponentExpander:
    """Expand every component invocation found in an event sequence."""

    def __init__(
        self,
        dialect: ComponentDialect,
        store: TemplateStore,
        evaluator: ExpressionEvaluator | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        interpolate: bool = True,
    ) -> None:
        self.dialect = dialect
        self.store = store
        self.evaluator = evaluator
        self.emitter = emitter or NullEmitter()
        self.max_depth = max_depth
        self.interpolate = interpolate

    def create_context(self, bindings: Mapping[str, Any] | None = None) -> ExpansionContext:
        context = ExpansionContext(
            store=self.store,
            emitter=self.emitter,
            scope=ChainMap(dict(bindings or {})),
        )
        if self.evaluator is not None:
            context.evaluator = self.evaluator
        return context

    def expand(
        self, events: Iterable[Event], bindings: Mapping[str, Any] | None = None
    ) -> list[Event]:
        """Return a new sequence with all component invocations expanded."""
        return self._expand(list(events), self.create_context(bindings))

    def _expand(self, events: list[Event], context: ExpansionContext) -> list[Event]:
        output: list[Event] = []
        index = 0
        while index < len(events):
            event = events[index]
            processor = self.dialect.processor_for(event) if isinstance(event, ElementTag) else None
            if processor is None:
                output.append(self._finish(event, context))
                index += 1
                continue

            end = subtree_end(events, index)
            result = processor.process(events[index:end], context)
            if result is None:
                output.append(self._finish(event, context))
                index += 1
                continue

            if context.depth >= self.max_depth:
                chain = " > ".join((*context.trail, result.component))
                raise ExpansionDepthError(
                    f"Component nesting exceeds {self.max_depth} levels: {chain}"
                )
            logger.debug("Expanded %s at depth %d", result.component, context.depth)
            if result.wrapped:
                self._report_unforwarded(result)
            output.extend(self._expand(result.events, context.child(result.bindings, result.component)))
            index = end
        return output

    def _report_unforwarded(self, result: MergeResult) -> None:
        """Warn when invocation attributes only reached the transparent wrapper.

        The wrapper is unwrapped on output, so its attributes never render.
        """
        wrapper = result.events[0] if result.events else None
        if not isinstance(wrapper, ElementTag) or not wrapper.attributes:
            return
        names = sorted(wrapper.attributes)
        self.emitter.warning(
            f"Attributes {', '.join(names)} on {result.component} are not forwarded: "
            f"{result.template} has no passthrough target"
        )
        self.emitter.event(
            "passthrough_dropped",
            {"component": result.component, "template": result.template, "attributes": names},
        )

    def _finish(self, event: Event, context: ExpansionContext) -> Event:
        """Strip leftover slot markers and resolve placeholders in an output event."""
        slot_attribute = f"{self.dialect.prefix}:slot"
        if isinstance(event, ElementTag) and slot_attribute in event.attributes:
            event = event.without_attributes(slot_attribute)
        if not self.interpolate:
            return event
        source = context.trail[-1] if context.trail else None
        return interpolate_event(event, context.scope, emitter=self.emitter, source=source)


__all__ = ["DEFAULT_MAX_DEPTH", "ComponentExpander"]
