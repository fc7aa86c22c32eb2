from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tagsmith.adapters.expressions import JinjaExpressionEvaluator
from tagsmith.core.attributes import (
    AttributeResolver,
    LiteralEvaluator,
    merge_fragment_defaults,
    stringify_attributes,
)
from tagsmith.core.diagnostics import RecordingEmitter
from tagsmith.core.events import OpenTag
from tagsmith.core.exceptions import ExpressionError


class _UpperEvaluator:
    def evaluate(self, scope: Mapping[str, Any], expression: str) -> Any:
        if expression.startswith("!"):
            raise ExpressionError(f"cannot evaluate {expression}")
        return scope.get(expression, expression.upper())

    def referenced_names(self, expression: str) -> frozenset[str]:
        return frozenset({expression})


def test_literal_evaluator_returns_raw_text() -> None:
    assert LiteralEvaluator().evaluate({"a": 1}, "a") == "a"


def test_resolver_partitions_attributes() -> None:
    tag = OpenTag(
        "pl:button",
        {"pl:label": "label", "class": "btn", "th:if": "flag", "pl:kind": "primary"},
    )
    resolver = AttributeResolver("pl", _UpperEvaluator())

    component = resolver.resolve_component_attributes(tag, {"label": "Save"})
    additional = resolver.resolve_additional_attributes(tag, {"flag": "yes"})

    assert component == {"label": "Save", "kind": "PRIMARY"}
    assert additional == {"class": "btn", "th:if": "yes"}


def test_resolver_keeps_none_values() -> None:
    resolver = AttributeResolver("pl", _UpperEvaluator())

    assert resolver.resolve_value("disabled", None, {}) is None


def test_resolver_falls_back_to_literal_and_reports() -> None:
    emitter = RecordingEmitter()
    tag = OpenTag("pl:button", {"pl:label": "!raw"})
    resolver = AttributeResolver("pl", _UpperEvaluator(), emitter=emitter)

    assert resolver.resolve_component_attributes(tag, {}) == {"label": "!raw"}
    assert emitter.events == [("expression_fallback", {"attribute": "pl:label", "value": "!raw"})]


def test_resolver_excludes_marker_attributes() -> None:
    root = OpenTag("div", {"pl:fragment": "", "pl:size": "m"})
    resolver = AttributeResolver("pl")

    assert resolver.resolve_component_attributes(root, {}, exclude={"fragment"}) == {"size": "m"}


def test_other_prefixes_are_additional_attributes() -> None:
    resolver = AttributeResolver("ui")
    tag = OpenTag("ui:card", {"pl:title": "x", "ui:title": "y"})

    assert resolver.resolve_component_attributes(tag, {}) == {"title": "y"}
    assert resolver.resolve_additional_attributes(tag, {}) == {"pl:title": "x"}


def test_merge_fragment_defaults_prefers_invocation() -> None:
    merged = merge_fragment_defaults({"size": "l"}, {"size": "m", "tone": "calm"})

    assert merged == {"size": "l", "tone": "calm"}


def test_stringify_attributes() -> None:
    assert stringify_attributes({"a": 1, "b": True, "c": False, "d": None, "e": "x"}) == {
        "a": "1",
        "b": "true",
        "c": "false",
        "d": None,
        "e": "x",
    }


def test_additional_attributes_keep_literal_tokens() -> None:
    emitter = RecordingEmitter()
    tag = OpenTag(
        "pl:c",
        {
            "title": "None",
            "value": "1e3",
            "maxlength": "010",
            "alt": "True",
            "data-r": "range(2)",
            "class": "btn primary",
            "data-user": "user.name",
        },
    )
    resolver = AttributeResolver("pl", JinjaExpressionEvaluator(), emitter=emitter)

    additional = resolver.resolve_additional_attributes(tag, {"user": {"name": "Ada"}})

    assert additional == {
        "title": "None",
        "value": "1e3",
        "maxlength": "010",
        "alt": "True",
        "data-r": "range(2)",
        "class": "btn primary",
        "data-user": "Ada",
    }
    assert emitter.events == []
