"""Jinja2-backed attribute expression evaluator."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from jinja2 import StrictUndefined, TemplateError, Undefined, meta
from jinja2.sandbox import SandboxedEnvironment

from tagsmith.core.exceptions import ExpressionError


DEFAULT_CACHE_SIZE = 512


class JinjaExpressionEvaluator:
    """Evaluate attribute values as sandboxed Jinja2 expressions.

    Unknown names raise instead of rendering as empty values, so a plain word
    such as ``primary`` fails evaluation and is kept as a literal by the
    attribute resolver. Compiled expressions are kept in a bounded LRU cache.
    """

    def __init__(
        self,
        environment: SandboxedEnvironment | None = None,
        *,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ) -> None:
        self.environment = environment or SandboxedEnvironment(undefined=StrictUndefined)
        self.compile: Callable[[str], Callable[..., Any]] = lru_cache(maxsize=cache_size)(
            self._compile
        )
        self.referenced_names: Callable[[str], frozenset[str]] = lru_cache(
            maxsize=cache_size
        )(self._referenced_names)

    def _compile(self, expression: str) -> Callable[..., Any]:
        if not expression.strip():
            raise ExpressionError("empty expression")
        try:
            return self.environment.compile_expression(expression, undefined_to_none=False)
        except TemplateError as exc:
            raise ExpressionError(f"Invalid expression {expression!r}: {exc}") from exc

    def _referenced_names(self, expression: str) -> frozenset[str]:
        """Return the free variable names read by ``expression``."""
        if not expression.strip():
            return frozenset()
        try:
            ast = self.environment.parse(f"{{{{ {expression} }}}}")
        except TemplateError as exc:
            raise ExpressionError(f"Invalid expression {expression!r}: {exc}") from exc
        return frozenset(meta.find_undeclared_variables(ast))

    def evaluate(self, scope: Mapping[str, Any], expression: str) -> Any:
        compiled = self.compile(expression)
        try:
            value = compiled(**dict(scope))
        except (TemplateError, ArithmeticError, LookupError, TypeError, ValueError) as exc:
            raise ExpressionError(f"Unable to evaluate {expression!r}: {exc}") from exc
        if isinstance(value, Undefined):
            raise ExpressionError(f"Expression {expression!r} is undefined")
        return value


__all__ = ["DEFAULT_CACHE_SIZE", "JinjaExpressionEvaluator"]
