"""Service registry mapping ids to definitions, with a shared-instance cache."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Union

from locator_engine.core.definition import ServiceDefinition
from locator_engine.core.exceptions import CircularDependencyError, ServiceNotFoundError
from locator_engine.core.logging import get_logger
from locator_engine.core.models import DefinitionInfo
from locator_engine.core.ports import ClassResolverPort

from .resolver import ResolutionContext, Resolver

logger = get_logger(__name__)

_MISSING = object()


class Container:
    """Dependency injection container and service locator.

    Definitions are registered once (usually at startup) and resolved lazily on
    every :meth:`get`. Shared definitions are built at most once per container
    and then served from the cache until the id is re-registered or removed.
    Ids without a definition fall back to the class resolver so that any
    resolvable class name can be used as an implicit service.
    """

    def __init__(self, class_resolver: Optional[ClassResolverPort] = None) -> None:
        if class_resolver is None:
            # pylint: disable-next=import-outside-toplevel
            from locator_engine.adapters.class_resolver import ImportClassResolver

            class_resolver = ImportClassResolver.from_settings()
        self._definitions: dict[str, ServiceDefinition] = {}
        self._shared: dict[str, Any] = {}
        self._lock = threading.RLock()
        # Shared ids under construction and the thread building each one.
        self._owners: dict[str, int] = {}
        # Threads blocked in _claim and the id each one waits for.
        self._waiting: dict[int, str] = {}
        self._builders = threading.Condition()
        self._resolver = Resolver(self, class_resolver)

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    @property
    def class_resolver(self) -> ClassResolverPort:
        return self._resolver.class_resolver

    # Registration

    def set(self, service_id: str, spec: Any, shared: bool = False) -> ServiceDefinition:
        """Register ``spec`` under ``service_id``, replacing any previous definition.

        Args:
            service_id: Unique id of the service.
            spec: Class name or class, factory callable, pre-built instance,
                declarative mapping, :class:`DefinitionSpec` or
                :class:`ServiceDefinition`.
            shared: Cache the first resolved instance for the container's lifetime.

        Returns:
            The stored definition, which may still be mutated before resolution.
        """
        definition = ServiceDefinition.from_spec(service_id, spec, shared=shared)
        return self.set_definition(definition)

    def set_shared(self, service_id: str, spec: Any) -> ServiceDefinition:
        """Register ``spec`` as a shared service."""
        return self.set(service_id, spec, shared=True)

    def set_definition(self, definition: ServiceDefinition) -> ServiceDefinition:
        """Store a prepared definition under its own id."""
        service_id = definition.service_id
        with self._lock:
            replaced = service_id in self._definitions
            self._definitions[service_id] = definition
            evicted = self._shared.pop(service_id, _MISSING) is not _MISSING
        logger.debug(
            "service %s registered",
            service_id,
            extra={
                "event": "service_registered",
                "strategy": definition.strategy.value,
                "shared": definition.is_shared(),
                "replaced": replaced,
                "evicted": evicted,
            },
        )
        return definition

    def attempt(self, service_id: str, spec: Any, shared: bool = False) -> Optional[ServiceDefinition]:
        """Register ``spec`` only if ``service_id`` is free; return ``None`` otherwise."""
        definition = ServiceDefinition.from_spec(service_id, spec, shared=shared)
        with self._lock:
            if service_id in self._definitions:
                return None
            return self.set_definition(definition)

    def load(self, services: Mapping[str, Any]) -> list[ServiceDefinition]:
        """Register every ``id -> spec`` pair of a configuration mapping in order."""
        return [self.set(service_id, spec) for service_id, spec in services.items()]

    def remove(self, service_id: str) -> None:
        """Delete the definition and any cached shared instance for ``service_id``."""
        with self._lock:
            self._definitions.pop(service_id, None)
            self._shared.pop(service_id, None)
        logger.debug("service %s removed", service_id, extra={"event": "service_removed"})

    def clear_shared(self, service_id: Optional[str] = None) -> None:
        """Evict one cached shared instance, or all of them when no id is given."""
        with self._lock:
            if service_id is None:
                self._shared.clear()
            else:
                self._shared.pop(service_id, None)

    # Lookup

    def get(self, service_id: str, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Resolve ``service_id`` honoring the definition's own shared flag.

        Raises:
            ServiceNotFoundError: No definition and no resolvable fallback class.
            CircularDependencyError: The service depends on itself, within this
                thread or through shared services another thread is building.
            ResolutionError: Construction, a setter or a property assignment failed.
        """
        definition = self._lookup(service_id)
        if definition is not None and definition.is_shared():
            return self._shared_instance(service_id, arguments)
        with ResolutionContext.enter(service_id):
            return self._create(service_id, definition, arguments)

    def get_shared(self, service_id: str, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Resolve ``service_id`` through the shared cache regardless of its shared flag."""
        return self._shared_instance(service_id, arguments)

    def build(self, class_name: Union[str, type], arguments: Sequence[Any] = ()) -> Any:
        """Construct an unregistered object; it is neither cached nor discoverable."""
        return self._resolver.build(class_name, arguments)

    def get_definition(self, service_id: str) -> ServiceDefinition:
        """Return the stored definition for in-place mutation."""
        definition = self._lookup(service_id)
        if definition is None:
            raise ServiceNotFoundError(service_id)
        return definition

    def get_raw(self, service_id: str) -> Any:
        """Return the stored target: class name, class, factory or instance."""
        return self.get_definition(service_id).target

    def has(self, service_id: str) -> bool:
        with self._lock:
            return service_id in self._definitions

    def is_cached(self, service_id: str) -> bool:
        with self._lock:
            return service_id in self._shared

    def get_services(self) -> dict[str, ServiceDefinition]:
        """Return a snapshot of the registered definitions."""
        with self._lock:
            return dict(self._definitions)

    def describe(self) -> list[DefinitionInfo]:
        with self._lock:
            return [
                definition.info(cached=service_id in self._shared)
                for service_id, definition in sorted(self._definitions.items())
            ]

    def _lookup(self, service_id: str) -> Optional[ServiceDefinition]:
        with self._lock:
            return self._definitions.get(service_id)

    def _create(
        self,
        service_id: str,
        definition: Optional[ServiceDefinition],
        arguments: Optional[Sequence[Any]],
    ) -> Any:
        if definition is None:
            return self._resolver.resolve_unregistered(service_id, arguments)
        return self._resolver.resolve(definition, arguments)

    def _owner_waits_on(self, service_id: str, thread_id: int) -> bool:
        """Whether blocking on ``service_id`` would close a wait-for cycle back to ``thread_id``.

        Must be called with ``_builders`` held.
        """
        seen: set[int] = set()
        owner = self._owners.get(service_id)
        while owner is not None and owner not in seen:
            if owner == thread_id:
                return True
            seen.add(owner)
            blocked_on = self._waiting.get(owner)
            owner = self._owners.get(blocked_on) if blocked_on is not None else None
        return False

    @contextmanager
    def _claim(self, service_id: str) -> Iterator[None]:
        """Hold the exclusive right to build the shared instance of ``service_id``.

        Raises:
            CircularDependencyError: If waiting would deadlock with another thread
                that is itself waiting on a service this thread is building.
        """
        thread_id = threading.get_ident()
        with self._builders:
            while service_id in self._owners:
                if self._owner_waits_on(service_id, thread_id):
                    raise CircularDependencyError(ResolutionContext.chain())
                self._waiting[thread_id] = service_id
                try:
                    self._builders.wait()
                finally:
                    del self._waiting[thread_id]
            self._owners[service_id] = thread_id
        try:
            yield
        finally:
            with self._builders:
                del self._owners[service_id]
                self._builders.notify_all()

    def _shared_instance(self, service_id: str, arguments: Optional[Sequence[Any]]) -> Any:
        cached = self._shared.get(service_id, _MISSING)
        if cached is not _MISSING:
            return cached

        # Enter the context before blocking so a same-thread cycle raises instead of waiting.
        with ResolutionContext.enter(service_id), self._claim(service_id):
            cached = self._shared.get(service_id, _MISSING)
            if cached is not _MISSING:
                return cached
            definition = self._lookup(service_id)
            instance = self._create(service_id, definition, arguments)
            with self._lock:
                # A definition replaced mid-construction must not be shadowed by a stale instance.
                if self._definitions.get(service_id) is definition:
                    self._shared[service_id] = instance
            return instance

    # Mapping-style sugar

    def __getitem__(self, service_id: str) -> Any:
        return self.get(service_id)

    def __setitem__(self, service_id: str, spec: Any) -> None:
        self.set(service_id, spec)

    def __delitem__(self, service_id: str) -> None:
        self.remove(service_id)

    def __contains__(self, service_id: object) -> bool:
        return isinstance(service_id, str) and self.has(service_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_services())

    def __repr__(self) -> str:
        return f"Container(services={len(self)}, shared={len(self._shared)})"


__all__ = ["Container"]
