"""Attribute partitioning and value resolution for component invocations.

Attributes written in the dialect prefix (``pl:title``) are component
attributes: they become local bindings, keyed by their unprefixed name, while
the fragment is processed. Every other attribute is an additional attribute
that is forwarded to the fragment markup.

Component attribute values are passed through an :class:`ExpressionEvaluator`.
Expression syntax is optional, so a value the evaluator rejects is kept as its
literal string. Additional attributes are only evaluated when they read a
bound variable.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Set
import logging
from typing import Any, Protocol, runtime_checkable

from .diagnostics import DiagnosticEmitter, NullEmitter
from .events import ElementTag, split_name
from .exceptions import ExpressionError


logger = logging.getLogger(__name__)


@runtime_checkable
class ExpressionEvaluator(Protocol):
    """Evaluates attribute values against the active variable scope."""

    def evaluate(self, scope: Mapping[str, Any], expression: str) -> Any:
        """Return the value of ``expression`` or raise :class:`ExpressionError`."""
        ...

    def referenced_names(self, expression: str) -> Set[str]:
        """Return the variable names ``expression`` reads."""
        ...


class LiteralEvaluator:
    """Evaluator that treats every value as a plain string."""

    def evaluate(self, scope: Mapping[str, Any], expression: str) -> Any:
        return expression

    def referenced_names(self, expression: str) -> Set[str]:
        return frozenset()


class AttributeResolver:
    """Split element attributes into component and additional buckets."""

    def __init__(
        self,
        prefix: str,
        evaluator: ExpressionEvaluator | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.prefix = prefix
        self.evaluator = evaluator or LiteralEvaluator()
        self.emitter = emitter or NullEmitter()

    def resolve_value(self, attribute: str, raw: str | None, scope: Mapping[str, Any]) -> Any:
        if raw is None:
            return None
        try:
            return self.evaluator.evaluate(scope, raw)
        except ExpressionError as exc:
            logger.debug("Keeping literal value for '%s': %s", attribute, exc)
            self.emitter.event("expression_fallback", {"attribute": attribute, "value": raw})
            return raw

    def is_component_attribute(self, qualified_name: str) -> bool:
        return split_name(qualified_name)[0] == self.prefix

    def resolve_component_attributes(
        self,
        element: ElementTag,
        scope: Mapping[str, Any],
        *,
        exclude: Collection[str] = (),
    ) -> dict[str, Any]:
        """Return the dialect attributes of ``element`` keyed by their local name."""
        attributes: dict[str, Any] = {}
        for qualified_name, raw in element.attributes.items():
            if not self.is_component_attribute(qualified_name):
                continue
            local_name = split_name(qualified_name)[1]
            if local_name in exclude:
                continue
            attributes[local_name] = self.resolve_value(qualified_name, raw, scope)
        return attributes

    def resolve_additional_attributes(
        self, element: ElementTag, scope: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Return every non-dialect attribute of ``element`` keyed by its full name.

        Forwarded attributes are ordinary markup, so a value is only evaluated
        when it reads a name bound in ``scope``. Anything else, including
        tokens such as ``None``, ``1e3`` or ``range(2)``, keeps its exact text.
        """
        return {
            qualified_name: (
                self.resolve_value(qualified_name, raw, scope)
                if self._reads_scope(raw, scope)
                else raw
            )
            for qualified_name, raw in element.attributes.items()
            if not self.is_component_attribute(qualified_name)
        }

    def _reads_scope(self, raw: str | None, scope: Mapping[str, Any]) -> bool:
        if raw is None:
            return False
        try:
            names = self.evaluator.referenced_names(raw)
        except ExpressionError:
            return False
        return any(name in scope for name in names)


def merge_fragment_defaults(
    component_attributes: Mapping[str, Any], defaults: Mapping[str, Any]
) -> dict[str, Any]:
    """Layer fragment-declared defaults below the invocation's own attributes."""
    merged = dict(component_attributes)
    for key, value in defaults.items():
        merged.setdefault(key, value)
    return merged


def stringify_attributes(attributes: Mapping[str, Any]) -> dict[str, str | None]:
    """Convert resolved attribute values back into markup attribute strings."""
    return {key: _attribute_text(value) for key, value in attributes.items()}


def _attribute_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = [
    "AttributeResolver",
    "ExpressionEvaluator",
    "LiteralEvaluator",
    "merge_fragment_defaults",
    "stringify_attributes",
]
