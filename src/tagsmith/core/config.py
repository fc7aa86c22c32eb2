"""Configuration models used by the composition pipeline.

ComponentRegistration

`name` (`str`)
: Element name of the component, used as ``<prefix>:<name>`` in markup.

`template` (`str | None`)
: Logical template path of the fragment. Defaults to
  ``<prefix>/<name>/<name>`` when omitted.

DialectConfig

`prefix` (`str`)
: Namespace prefix identifying component tags and attributes.

`components` (`list[ComponentRegistration]`)
: Registered components. Element names must be unique.

`template_dirs` (`list[Path]`)
: Directories searched for fragment templates, in order.

`template_suffix` (`str`)
: File suffix appended to logical template paths.

`parser` (`str`)
: BeautifulSoup parser backend used to read markup.

`max_depth` (`int`)
: Maximum component nesting depth before expansion is aborted.

`interpolate` (`bool`)
: Resolve ``{{ name }}`` placeholders from component bindings in text and
  attribute values.

`discover` (`bool`)
: Register every ``<prefix>/<name>/<name><suffix>`` template found under
  ``template_dirs`` in addition to the explicit ``components``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
import yaml

from .dialect import DEFAULT_DIALECT_PREFIX, ComponentDialect
from .exceptions import ConfigurationError


class ComponentRegistration(BaseModel):
    """Single component declaration."""

    model_config = ConfigDict(extra="forbid")

    name: str
    template: str | None = None

    @field_validator("name")
    @classmethod
    def normalise_name(cls, value: str) -> str:
        name = value.strip().lower()
        if not name:
            raise ValueError("component name must not be empty")
        return name


class DialectConfig(BaseModel):
    """Configuration of a component dialect and its template sources."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = DEFAULT_DIALECT_PREFIX
    components: list[ComponentRegistration] = Field(default_factory=list)
    template_dirs: list[Path] = Field(default_factory=list)
    template_suffix: str = ".html"
    parser: str = "html.parser"
    max_depth: int = Field(default=32, ge=1)
    interpolate: bool = True
    discover: bool = False

    @field_validator("prefix")
    @classmethod
    def check_prefix(cls, value: str) -> str:
        prefix = value.strip()
        if not prefix or ":" in prefix:
            raise ValueError("prefix must be a non-empty token without ':'")
        return prefix

    @model_validator(mode="after")
    def check_unique_components(self) -> DialectConfig:
        """Reject two registrations sharing an element name."""
        seen: set[str] = set()
        for component in self.components:
            if component.name in seen:
                raise ValueError(f"component '{component.name}' is registered more than once")
            seen.add(component.name)
        return self

    def discover_components(self) -> list[ComponentRegistration]:
        """Return registrations for conventional templates under ``template_dirs``."""
        known = {component.name for component in self.components}
        found: list[ComponentRegistration] = []
        for root in self.template_dirs:
            base = Path(root) / self.prefix
            if not base.is_dir():
                continue
            for candidate in sorted(base.iterdir()):
                name = candidate.name.lower()
                template = candidate / f"{candidate.name}{self.template_suffix}"
                if not candidate.is_dir() or name in known or not template.is_file():
                    continue
                known.add(name)
                found.append(ComponentRegistration(name=name))
        return found

    def iter_registrations(self) -> Iterable[ComponentRegistration]:
        yield from self.components
        if self.discover:
            yield from self.discover_components()

    def build_dialect(self) -> ComponentDialect:
        """Return a dialect populated with the configured components."""
        dialect = ComponentDialect(self.prefix)
        for component in self.iter_registrations():
            dialect.add_component(component.name, component.template)
        return dialect


def load_config(path: Path | str, **overrides: Any) -> DialectConfig:
    """Load a YAML configuration file, applying keyword ``overrides`` on top.

    Relative ``template_dirs`` are resolved against the file's directory.
    """
    config_path = Path(path)
    try:
        payload = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigurationError(f"Unable to read configuration '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in '{config_path}': {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Configuration '{config_path}' must be a mapping")

    payload.update({key: value for key, value in overrides.items() if value is not None})
    try:
        config = DialectConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration '{config_path}': {exc}") from exc

    base_dir = config_path.parent
    config.template_dirs = [
        directory if directory.is_absolute() else (base_dir / directory)
        for directory in config.template_dirs
    ]
    return config


__all__ = ["ComponentRegistration", "DialectConfig", "load_config"]
