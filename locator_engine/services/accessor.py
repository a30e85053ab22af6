"""Attribute-style access to container services."""

from __future__ import annotations

from typing import Any

from .container import Container


class ServiceAccessor:
    """Expose ``container.get(name)`` as ``accessor.name``.

    This is sugar on top of the container's explicit lookups and adds no
    resolution behavior of its own. Use :attr:`shared` for the
    ``get_shared`` flavour.

    ``container`` and ``shared`` are the accessor's own attributes, as is any
    name starting with an underscore; services registered under those ids are
    reached with item access instead (``accessor["shared"]``).
    """

    __slots__ = ("_container", "_shared")

    def __init__(self, container: Container, *, shared: bool = False) -> None:
        self._container = container
        self._shared = shared

    @property
    def container(self) -> Container:
        return self._container

    @property
    def shared(self) -> "ServiceAccessor":
        return ServiceAccessor(self._container, shared=True)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, service_id: str) -> Any:
        if self._shared:
            return self._container.get_shared(service_id)
        return self._container.get(service_id)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._container.get_services()))


__all__ = ["ServiceAccessor"]
