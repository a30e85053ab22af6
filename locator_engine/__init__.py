"""Dependency injection container and service locator."""

from locator_engine.core.arguments import InlineInstance, LiteralArg, ServiceRef
from locator_engine.core.definition import ServiceDefinition, Strategy
from locator_engine.core.exceptions import (
    CircularDependencyError,
    ContainerError,
    DefaultContainerNotSetError,
    InvalidDefinitionError,
    ResolutionError,
    ServiceNotFoundError,
)
from locator_engine.core.ports import ContainerAware, ContainerAwareMixin
from locator_engine.services import Container, ServiceAccessor
from locator_engine.services.runtime import clear_default, get_default, require_default, set_default

__all__ = [
    "CircularDependencyError",
    "Container",
    "ContainerAware",
    "ContainerAwareMixin",
    "ContainerError",
    "DefaultContainerNotSetError",
    "InlineInstance",
    "InvalidDefinitionError",
    "LiteralArg",
    "ResolutionError",
    "ServiceAccessor",
    "ServiceDefinition",
    "ServiceNotFoundError",
    "ServiceRef",
    "Strategy",
    "clear_default",
    "get_default",
    "require_default",
    "set_default",
]
