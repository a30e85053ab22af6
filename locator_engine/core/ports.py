"""Protocol definitions for the container's collaborators."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable


class ClassResolverPort(Protocol):
    """Port mapping a bare type name to a constructible class."""

    def resolve(self, type_name: str) -> Optional[type]:
        """Return the class registered under ``type_name`` or ``None`` if unknown."""
        ...


class ContainerPort(Protocol):
    """Port exposing the lookup side of the container to argument descriptors."""

    def get(self, service_id: str, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Resolve ``service_id`` honoring its definition's shared flag."""
        ...

    def get_shared(self, service_id: str, arguments: Optional[Sequence[Any]] = None) -> Any:
        """Resolve ``service_id`` through the shared-instance cache."""
        ...

    def has(self, service_id: str) -> bool:
        """Return whether ``service_id`` has a definition."""
        ...

    def build(self, class_name: Any, arguments: Sequence[Any] = ()) -> Any:
        """Construct an unregistered object from a class name and descriptors."""
        ...


@runtime_checkable
class ContainerAware(Protocol):
    """Capability of components that accept the container which created them."""

    def set_container(self, container: ContainerPort) -> None:
        """Receive the owning container right after construction."""
        ...

    def get_container(self) -> Optional[ContainerPort]:
        """Return the container previously injected, if any."""
        ...


class ContainerAwareMixin:  # pylint: disable=too-few-public-methods
    """Ready-made implementation of the :class:`ContainerAware` capability."""

    _container: Optional[ContainerPort] = None

    def set_container(self, container: ContainerPort) -> None:
        """Store the owning container."""
        self._container = container

    def get_container(self) -> Optional[ContainerPort]:
        """Return the owning container or ``None`` before injection."""
        return self._container


__all__ = ["ClassResolverPort", "ContainerPort", "ContainerAware", "ContainerAwareMixin"]
