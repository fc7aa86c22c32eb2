"""Component merge processor.

A :class:`ComponentProcessor` turns the local event sequence of one component
invocation into the component's fragment markup:

1. locate the invocation tag and check it is exactly ``<prefix>:<name>``;
2. load the fragment template and find its root;
3. resolve component attributes (local bindings) and additional attributes;
4. route the invocation's children into slots and fill the fragment's
   placeholders, falling back to their declared bodies;
5. forward additional attributes onto tags marked with
   ``<prefix>:pass-additional-attributes``, or wrap the whole body in a
   transparent ``<prefix>:block`` carrying them;
6. replace the invocation sequence with the merged result.

All failures are raised before step 6, so an invocation is never left
half-spliced.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence as SequenceABC
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable

from .attributes import (
    AttributeResolver,
    ExpressionEvaluator,
    merge_fragment_defaults,
    stringify_attributes,
)
from .diagnostics import DiagnosticEmitter
from .events import (
    CloseTag,
    ElementTag,
    Event,
    OpenTag,
    TemplateEnd,
    TemplateStart,
    first_element,
)
from .exceptions import MalformedModelError
from .slots import extract_slot_contents, extract_slots, fill_slots
from .subtree import subtree_below


logger = logging.getLogger(__name__)

FRAGMENT_MARKER = "fragment"
PASSTHROUGH_MARKER = "pass-additional-attributes"
BLOCK_ELEMENT = "block"


@runtime_checkable
class ProcessingContext(Protocol):
    """Services a processor needs from the surrounding template engine."""

    scope: Mapping[str, Any]
    evaluator: ExpressionEvaluator
    emitter: DiagnosticEmitter

    def load_fragment(self, path: str) -> list[Event]:
        """Return a freshly owned, parsed event sequence for ``path``."""
        ...


@dataclass(slots=True)
class MergeResult:
    """Outcome of processing one component invocation."""

    component: str
    template: str
    events: list[Event]
    bindings: dict[str, Any] = field(default_factory=dict)
    wrapped: bool = False
    filled_slots: frozenset[str] = frozenset()


def default_template_path(prefix: str, element_name: str) -> str:
    """Return the conventional ``<prefix>/<name>/<name>`` template path."""
    return f"{prefix}/{element_name}/{element_name}"


def find_fragment_root(fragment: SequenceABC[Event], prefix: str) -> ElementTag | None:
    """Return the first tag marked with ``<prefix>:fragment``."""
    for event in fragment:
        if isinstance(event, ElementTag) and event.has_attribute(prefix, FRAGMENT_MARKER):
            return event
    return None


def fragment_body(fragment: SequenceABC[Event], root: ElementTag | None) -> list[Event]:
    """Return the reusable part of a fragment.

    With a marked root, the body is everything strictly inside it. Without
    one, the whole template is used, minus its start and end markers.
    """
    if root is not None:
        return subtree_below(fragment, root)
    return [event for event in fragment if not isinstance(event, (TemplateStart, TemplateEnd))]


class ComponentProcessor:
    """Expand invocations of a single registered component."""

    def __init__(self, prefix: str, element_name: str, template_path: str | None = None) -> None:
        self.prefix = prefix
        self.element_name = element_name
        self.template_path = template_path or default_template_path(prefix, element_name)

    @property
    def element_complete_name(self) -> str:
        return f"{self.prefix}:{self.element_name}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(element={self.element_complete_name!r}, "
            f"template={self.template_path!r})"
        )

    def is_valid_component_tag(self, tag: ElementTag) -> bool:
        """Require the literal ``prefix:name`` form.

        Hyphenated custom elements such as ``pl-button`` share the textual
        prefix but are not dialect components.
        """
        return tag.name == self.element_complete_name

    def process(self, model: list[Event], context: ProcessingContext) -> MergeResult | None:
        """Merge the invocation held in ``model`` with the component fragment.

        ``model`` is replaced in place by the merged sequence. Returns ``None``
        and leaves ``model`` untouched when the invocation tag does not match
        this component exactly.
        """
        component_tag = first_element(model)
        if component_tag is None:
            raise MalformedModelError(f"no component element tag found in model {model!r}")

        if not self.is_valid_component_tag(component_tag):
            logger.debug("Leaving '%s' untouched: not a dialect component", component_tag.name)
            return None

        fragment = context.load_fragment(self.template_path)
        fragment_root = find_fragment_root(fragment, self.prefix)

        resolver = AttributeResolver(self.prefix, context.evaluator, emitter=context.emitter)
        additional_attributes = resolver.resolve_additional_attributes(component_tag, context.scope)
        bindings = resolver.resolve_component_attributes(component_tag, context.scope)
        if fragment_root is not None:
            defaults = resolver.resolve_component_attributes(
                fragment_root, context.scope, exclude={FRAGMENT_MARKER}
            )
            bindings = merge_fragment_defaults(bindings, defaults)

        slot_contents = extract_slot_contents(model, self.prefix)
        body = fragment_body(fragment, fragment_root)
        slots = extract_slots(body, self.prefix)

        merged, wrapped, filled = self._prepare_model(body, additional_attributes, slots, slot_contents)

        model[:] = merged
        context.emitter.event(
            "component_expanded",
            {
                "component": self.element_complete_name,
                "template": self.template_path,
                "wrapped": wrapped,
                "slots": sorted(filled),
            },
        )
        return MergeResult(
            component=self.element_complete_name,
            template=self.template_path,
            events=merged,
            bindings=bindings,
            wrapped=wrapped,
            filled_slots=frozenset(filled),
        )

    def _prepare_model(
        self,
        body: list[Event],
        additional_attributes: Mapping[str, Any],
        slots: Mapping[str, SequenceABC[ElementTag]],
        slot_contents: Mapping[str, SequenceABC[Event]],
    ) -> tuple[list[Event], bool, set[str]]:
        fragment_events: set[Event] = set(body)
        filled = fill_slots(body, slots, slot_contents)

        passed_down = self._pass_additional_attributes(body, additional_attributes, fragment_events)
        if passed_down:
            return body, False, filled

        logger.debug(
            "No passthrough target in '%s'; wrapping in %s:%s",
            self.template_path,
            self.prefix,
            BLOCK_ELEMENT,
        )
        block_name = f"{self.prefix}:{BLOCK_ELEMENT}"
        wrapped = [
            OpenTag(block_name, stringify_attributes(additional_attributes)),
            *body,
            CloseTag(block_name),
        ]
        return wrapped, True, filled

    def _pass_additional_attributes(
        self,
        body: list[Event],
        additional_attributes: Mapping[str, Any],
        eligible: set[Event],
    ) -> bool:
        """Merge additional attributes into every marked fragment tag.

        The tag's own attributes win on collision and the marker is dropped.
        Caller content placed into slots is never a passthrough target.
        """
        marker = f"{self.prefix}:{PASSTHROUGH_MARKER}"
        replaced = False
        for index, event in enumerate(body):
            if not isinstance(event, ElementTag) or event not in eligible:
                continue
            if marker not in event.attributes:
                continue
            attributes = stringify_attributes(additional_attributes)
            attributes.update(event.attributes)
            attributes.pop(marker, None)
            body[index] = event.with_attributes(attributes)
            replaced = True
        return replaced


__all__ = [
    "BLOCK_ELEMENT",
    "ComponentProcessor",
    "FRAGMENT_MARKER",
    "MergeResult",
    "PASSTHROUGH_MARKER",
    "ProcessingContext",
    "default_template_path",
    "find_fragment_root",
    "fragment_body",
]
