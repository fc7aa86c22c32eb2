"""Component registration surface."""

from __future__ import annotations

from collections.abc import Iterator

from .events import ElementTag
from .exceptions import RegistrationError
from .processor import ComponentProcessor


DEFAULT_DIALECT_PREFIX = "pl"
RESERVED_ELEMENTS = frozenset({"block", "slot"})


class ComponentDialect:
    """Set of components sharing one namespace prefix.

    Both ``pl:button`` and the hyphenated ``pl-button`` select the ``button``
    processor. The processor itself only expands the exact ``prefix:name``
    form, so hyphenated custom elements come out unchanged.
    """

    def __init__(self, prefix: str = DEFAULT_DIALECT_PREFIX) -> None:
        if not prefix or ":" in prefix:
            raise RegistrationError(f"Invalid dialect prefix '{prefix}'")
        self.prefix = prefix
        self._processors: dict[str, ComponentProcessor] = {}

    def add_component(self, element_name: str, template_path: str | None = None) -> ComponentDialect:
        """Register ``element_name`` backed by ``template_path``."""
        name = element_name.strip().lower()
        if not name:
            raise RegistrationError("Component element name must not be empty")
        if name in RESERVED_ELEMENTS:
            raise RegistrationError(f"Component name '{name}' is reserved by the dialect")
        if name in self._processors:
            raise RegistrationError(f"Component '{name}' is already registered")
        self._processors[name] = ComponentProcessor(self.prefix, name, template_path)
        return self

    def processor_for(self, tag: ElementTag) -> ComponentProcessor | None:
        """Return the processor whose element ``tag`` addresses, if any."""
        tag_name = tag.name.lower()
        for separator in (":", "-"):
            head = f"{self.prefix}{separator}"
            if tag_name.startswith(head):
                return self._processors.get(tag_name[len(head) :])
        return None

    def registrations(self) -> list[tuple[str, str]]:
        """Return ``(element name, template path)`` pairs in registration order."""
        return [(name, processor.template_path) for name, processor in self._processors.items()]

    def __contains__(self, element_name: object) -> bool:
        return element_name in self._processors

    def __iter__(self) -> Iterator[ComponentProcessor]:
        return iter(self._processors.values())

    def __len__(self) -> int:
        return len(self._processors)


__all__ = ["DEFAULT_DIALECT_PREFIX", "RESERVED_ELEMENTS", "ComponentDialect"]
