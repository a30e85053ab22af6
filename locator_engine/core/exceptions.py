"""Core exception types shared across layers."""

from __future__ import annotations

from typing import Sequence


class ContainerError(Exception):
    """Base class for every error raised by the service container."""


class ServiceNotFoundError(ContainerError, LookupError):
    """Raised when an id has no definition and no resolvable fallback class."""

    def __init__(self, service_id: str) -> None:
        super().__init__(f"Service '{service_id}' wasn't found in the container")
        self.service_id = service_id


class CircularDependencyError(ContainerError):
    """Raised when a service transitively depends on itself."""

    def __init__(self, chain: Sequence[str]) -> None:
        self.chain = tuple(chain)
        super().__init__("Circular dependency detected: " + " -> ".join(self.chain))


class ResolutionError(ContainerError):
    """Raised when constructing, calling a setter on, or assigning a property of a service fails."""

    def __init__(self, service_id: str, cause: BaseException) -> None:
        super().__init__(f"Service '{service_id}' cannot be resolved: {cause}")
        self.service_id = service_id
        self.cause = cause


class InvalidDefinitionError(ContainerError, ValueError):
    """Raised when a definition spec is malformed or a mutator does not apply."""


class DefaultContainerNotSetError(ContainerError, RuntimeError):
    """Raised when the process-wide default container is required but absent."""

    def __init__(self) -> None:
        super().__init__("A default container has not been configured.")


__all__ = [
    "ContainerError",
    "ServiceNotFoundError",
    "CircularDependencyError",
    "ResolutionError",
    "InvalidDefinitionError",
    "DefaultContainerNotSetError",
]
