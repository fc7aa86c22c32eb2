"""Fragment template store backed by Jinja2 loaders."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from jinja2 import BaseLoader, Environment, FileSystemLoader, TemplateNotFound

from tagsmith.adapters.markup.parser import DEFAULT_PARSER, parse_markup
from tagsmith.core.events import Event
from tagsmith.core.exceptions import TemplateResolutionError


logger = logging.getLogger(__name__)


class JinjaTemplateStore:
    """Load fragment templates through any Jinja2 loader.

    Only the loader's source lookup is used; the markup itself is parsed into
    an event sequence, not rendered by Jinja. Parsed sequences are cached per
    path and every call returns a new list.
    """

    def __init__(
        self,
        loader: BaseLoader,
        *,
        suffix: str = ".html",
        parser: str = DEFAULT_PARSER,
        cache: bool = True,
    ) -> None:
        self.loader = loader
        self.suffix = suffix
        self.parser = parser
        self.cache_enabled = cache
        self._environment = Environment(loader=loader, autoescape=False)
        self._cache: dict[str, list[Event]] = {}

    @classmethod
    def from_directories(
        cls, directories: Iterable[Path | str], **options: object
    ) -> JinjaTemplateStore:
        search_paths = [str(Path(directory)) for directory in directories]
        return cls(FileSystemLoader(search_paths), **options)  # type: ignore[arg-type]

    def template_name(self, path: str) -> str:
        name = path.strip().lstrip("/")
        if self.suffix and not name.endswith(self.suffix):
            name = f"{name}{self.suffix}"
        return name

    def load_source(self, path: str) -> str:
        name = self.template_name(path)
        try:
            source, _filename, _uptodate = self.loader.get_source(self._environment, name)
        except TemplateNotFound as exc:
            raise TemplateResolutionError(f"Unable to resolve fragment template '{name}'") from exc
        return source

    def load_fragment(self, path: str) -> list[Event]:
        cached = self._cache.get(path) if self.cache_enabled else None
        if cached is None:
            logger.debug("Parsing fragment template '%s'", path)
            cached = parse_markup(self.load_source(path), parser=self.parser, template=path)
            if self.cache_enabled:
                self._cache[path] = cached
        return list(cached)

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = ["JinjaTemplateStore"]
