"""Custom exception hierarchy for the component composition pipeline."""

from __future__ import annotations


class ComponentError(RuntimeError):
    """Base exception for component composition failures."""


class MalformedModelError(ComponentError):
    """Raised when an invocation sequence does not contain any element tag."""


class DuplicateSlotError(ComponentError):
    """Raised when two children of an invocation claim the same named slot."""

    def __init__(self, slot_name: str) -> None:
        super().__init__(f"duplicate slot definition '{slot_name}'")
        self.slot_name = slot_name


class TemplateResolutionError(ComponentError):
    """Raised when a fragment template cannot be located or parsed."""


class ExpressionError(ComponentError):
    """Raised by expression evaluators when an attribute value cannot be evaluated."""


class RegistrationError(ComponentError):
    """Raised when component registrations are inconsistent."""


class ConfigurationError(ComponentError):
    """Raised when a configuration file cannot be loaded or validated."""


class ExpansionDepthError(ComponentError):
    """Raised when nested component expansion exceeds the configured depth."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ComponentError",
    "ConfigurationError",
    "DuplicateSlotError",
    "ExpansionDepthError",
    "ExpressionError",
    "MalformedModelError",
    "RegistrationError",
    "TemplateResolutionError",
    "exception_hint",
    "exception_messages",
]
