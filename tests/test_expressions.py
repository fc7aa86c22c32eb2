from __future__ import annotations

import pytest

from tagsmith.adapters.expressions import JinjaExpressionEvaluator
from tagsmith.core.exceptions import ExpressionError


def test_evaluates_literals_and_scope_lookups() -> None:
    evaluator = JinjaExpressionEvaluator()

    assert evaluator.evaluate({}, "'text'") == "text"
    assert evaluator.evaluate({}, "1 + 2") == 3
    assert evaluator.evaluate({"user": {"name": "Ada"}}, "user.name | upper") == "ADA"
    assert evaluator.evaluate({"flag": True}, "'on' if flag else 'off'") == "on"


def test_unknown_names_raise() -> None:
    evaluator = JinjaExpressionEvaluator()

    with pytest.raises(ExpressionError):
        evaluator.evaluate({}, "primary")
    with pytest.raises(ExpressionError):
        evaluator.evaluate({}, "btn-primary")


def test_invalid_and_empty_expressions_raise() -> None:
    evaluator = JinjaExpressionEvaluator()

    with pytest.raises(ExpressionError):
        evaluator.evaluate({}, "key=value")
    with pytest.raises(ExpressionError):
        evaluator.evaluate({}, "   ")
    with pytest.raises(ExpressionError):
        evaluator.evaluate({}, "1 / 0")


def test_compiled_expressions_are_cached() -> None:
    evaluator = JinjaExpressionEvaluator()

    assert evaluator.compile("a + 1") is evaluator.compile("a + 1")


def test_sandbox_blocks_unsafe_attributes() -> None:
    evaluator = JinjaExpressionEvaluator()

    with pytest.raises(ExpressionError):
        evaluator.evaluate({"value": ""}, "value.__class__.__mro__")


def test_compile_cache_is_bounded() -> None:
    evaluator = JinjaExpressionEvaluator(cache_size=2)

    first = evaluator.compile("a + 1")
    evaluator.compile("a + 2")
    evaluator.compile("a + 3")

    assert evaluator.compile.cache_info().currsize == 2
    assert evaluator.compile("a + 1") is not first


def test_referenced_names_lists_free_variables() -> None:
    evaluator = JinjaExpressionEvaluator()

    assert evaluator.referenced_names("user.name | upper") == {"user"}
    assert evaluator.referenced_names("range(2)") == {"range"}
    assert evaluator.referenced_names("None") == frozenset()
    assert evaluator.referenced_names("1e3") == frozenset()
    with pytest.raises(ExpressionError):
        evaluator.referenced_names("key=value")
