"""Turn service definitions into instances.

The resolver knows the four construction strategies and the argument
descriptors; it never touches the container's registry or shared cache
directly. Nested service references re-enter the container through
:class:`~locator_engine.core.ports.ContainerPort`, and every nested lookup is
tracked in a call-tree-local :class:`ResolutionContext` so that cycles fail
fast instead of recursing.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional, Sequence, Union

from locator_engine.core.arguments import Argument, as_arguments
from locator_engine.core.definition import ServiceDefinition, Strategy, describe_target
from locator_engine.core.exceptions import (
    CircularDependencyError,
    ContainerError,
    ResolutionError,
    ServiceNotFoundError,
)
from locator_engine.core.logging import get_logger, service_id_context
from locator_engine.core.ports import ClassResolverPort, ContainerAware, ContainerPort

logger = get_logger(__name__)

_active_chain: ContextVar[tuple[str, ...]] = ContextVar("locator_resolution_chain", default=())


class ResolutionContext:
    """Ids currently being resolved by this thread or task, outermost first."""

    @staticmethod
    def chain() -> tuple[str, ...]:
        return _active_chain.get()

    @staticmethod
    @contextmanager
    def enter(service_id: str) -> Iterator[tuple[str, ...]]:
        """Push ``service_id`` for the duration of the block.

        Raises:
            CircularDependencyError: If ``service_id`` is already being resolved.
        """
        chain = _active_chain.get()
        if service_id in chain:
            raise CircularDependencyError(chain + (service_id,))
        token = _active_chain.set(chain + (service_id,))
        try:
            with service_id_context(service_id):
                yield chain + (service_id,)
        finally:
            _active_chain.reset(token)


class Resolver:
    """Build instances for a container from definitions and argument descriptors."""

    def __init__(self, container: ContainerPort, class_resolver: ClassResolverPort) -> None:
        self._container = container
        self._class_resolver = class_resolver

    @property
    def class_resolver(self) -> ClassResolverPort:
        return self._class_resolver

    def resolve(self, definition: ServiceDefinition, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Construct the service described by ``definition``.

        Call-time ``arguments`` replace the definition's own constructor
        arguments (they are never merged); they are forwarded to factories and
        ignored for pre-built instances.
        """
        service_id = definition.service_id
        try:
            instance = self._construct(definition, arguments)
            self.inject_container(instance)
        except ContainerError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning(
                "service resolution failed",
                extra={"event": "service_failed", "error": repr(exc)},
            )
            raise ResolutionError(service_id, exc) from exc
        definition.mark_resolved()
        logger.debug(
            "service resolved",
            extra={"event": "service_resolved", "strategy": definition.strategy.value},
        )
        return instance

    def resolve_unregistered(self, type_name: str, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Instantiate ``type_name`` itself when no definition exists for it.

        Raises:
            ServiceNotFoundError: If the class resolver does not know ``type_name``.
            ResolutionError: If the class resolver itself or the constructor fails.
        """
        try:
            cls = self._class_resolver.resolve(type_name)
        except Exception as exc:  # pylint: disable=broad-except
            raise ResolutionError(type_name, exc) from exc
        if cls is None:
            raise ServiceNotFoundError(type_name)
        try:
            instance = cls(*arguments) if arguments else cls()
            self.inject_container(instance)
        except ContainerError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise ResolutionError(type_name, exc) from exc
        logger.debug("service resolved from class fallback", extra={"event": "service_resolved"})
        return instance

    def build(self, class_name: Union[str, type], arguments: Sequence[Any] = ()) -> Any:
        """Construct an inline, unregistered instance from argument descriptors."""
        chain = ResolutionContext.chain()
        owner = chain[-1] if chain else describe_target(class_name)
        try:
            cls = self._load_class(class_name)
            instance = cls(*self.resolve_arguments(as_arguments(arguments)))
            self.inject_container(instance)
        except ContainerError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            raise ResolutionError(owner, exc) from exc
        return instance

    def resolve_arguments(self, arguments: Sequence[Argument]) -> list[Any]:
        """Resolve descriptors in declared order."""
        return [argument.resolve(self._container) for argument in arguments]

    def inject_container(self, instance: Any) -> None:
        """Hand the container to instances exposing the container-aware capability."""
        if isinstance(instance, ContainerAware):
            instance.set_container(self._container)

    def _load_class(self, target: Union[str, type]) -> type:
        if isinstance(target, type):
            return target
        cls = self._class_resolver.resolve(target)
        if cls is None:
            raise LookupError(f"Class '{target}' could not be resolved")
        return cls

    def _construct(self, definition: ServiceDefinition, arguments: Optional[Sequence[Any]]) -> Any:
        strategy = definition.strategy
        target = definition.target

        if strategy is Strategy.INSTANCE:
            return target

        if strategy is Strategy.FACTORY:
            return target(*arguments) if arguments else target()

        cls = self._load_class(target)
        if strategy is Strategy.CLASS_NAME:
            return cls(*arguments) if arguments else cls()

        if arguments:
            constructor_args = list(arguments)
        else:
            constructor_args = self.resolve_arguments(definition.arguments)
        instance = cls(*constructor_args)

        for call in definition.calls:
            method = getattr(instance, call.method, None)
            if not callable(method):
                raise AttributeError(
                    f"'{type(instance).__qualname__}' has no method '{call.method}'"
                )
            method(*self.resolve_arguments(call.arguments))

        for assignment in definition.properties:
            setattr(instance, assignment.name, assignment.value.resolve(self._container))

        return instance


__all__ = ["ResolutionContext", "Resolver"]
