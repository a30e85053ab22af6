"""Class resolution adapters used when an id has no explicit definition."""

from __future__ import annotations

import importlib
import inspect
from threading import Lock
from typing import Iterable, Mapping, Optional

from locator_engine.core.config import settings
from locator_engine.core.logging import get_logger
from locator_engine.core.ports import ClassResolverPort

logger = get_logger(__name__)


class ImportClassResolver(ClassResolverPort):
    """Resolve class names by importing them.

    Lookup order: configured aliases, then a dotted ``module.ClassName`` path,
    then the bare name inside each search module. Anything that is not a class
    resolves to ``None``.
    """

    def __init__(
        self,
        search_modules: Iterable[str] = (),
        aliases: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._search_modules = tuple(search_modules)
        self._aliases = dict(aliases or {})
        self._cache: dict[str, type] = {}
        self._cache_lock = Lock()

    @classmethod
    def from_settings(cls) -> "ImportClassResolver":
        """Build a resolver from ``LOCATOR_CLASS_*`` settings."""
        return cls(
            search_modules=getattr(settings, "LOCATOR_CLASS_SEARCH_MODULES", ()),
            aliases=getattr(settings, "LOCATOR_CLASS_ALIASES", None),
        )

    @property
    def search_modules(self) -> tuple[str, ...]:
        return self._search_modules

    def resolve(self, type_name: str) -> Optional[type]:
        with self._cache_lock:
            cached = self._cache.get(type_name)
        if cached is not None:
            return cached

        cls = self._lookup(self._aliases.get(type_name, type_name))
        if cls is not None:
            with self._cache_lock:
                self._cache[type_name] = cls
        return cls

    def _lookup(self, type_name: str) -> Optional[type]:
        if "." in type_name:
            module_name, _, attribute = type_name.rpartition(".")
            # Relative or empty module paths never name an importable class.
            if module_name and not module_name.startswith(".") and attribute:
                cls = self._from_module(module_name, attribute)
                if cls is not None:
                    return cls
        for module_name in self._search_modules:
            cls = self._from_module(module_name, type_name)
            if cls is not None:
                return cls
        return None

    def _from_module(self, module_name: str, attribute: str) -> Optional[type]:
        try:
            module = importlib.import_module(module_name)
        except (ImportError, ValueError, TypeError) as exc:
            logger.debug(
                "class module %s not importable",
                module_name,
                extra={"event": "class_lookup_miss", "error": repr(exc)},
            )
            return None
        candidate = getattr(module, attribute, None)
        if inspect.isclass(candidate):
            return candidate
        return None


class MappingClassResolver(ClassResolverPort):
    """In-memory name to class table."""

    def __init__(self, classes: Optional[Mapping[str, type]] = None) -> None:
        self._classes: dict[str, type] = dict(classes or {})
        self._lock = Lock()

    def register(self, name: str, cls: type) -> None:
        """Make ``cls`` resolvable as ``name``."""
        if not inspect.isclass(cls):
            raise TypeError(f"Expected a class for '{name}', got {type(cls).__name__}")
        with self._lock:
            self._classes[name] = cls

    def resolve(self, type_name: str) -> Optional[type]:
        with self._lock:
            return self._classes.get(type_name)


__all__ = ["ImportClassResolver", "MappingClassResolver"]
