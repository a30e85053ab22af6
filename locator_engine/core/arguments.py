"""Argument descriptors used by declarative definitions.

A descriptor describes one constructor, setter or property argument and knows
how to turn itself into a concrete value given the container performing the
resolution. Service references are only followed at resolution time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from pydantic import TypeAdapter, ValidationError

from locator_engine.core.exceptions import InvalidDefinitionError
from locator_engine.core.models import (
    ArgumentSpec,
    InstanceArgumentSpec,
    ParameterArgumentSpec,
    ServiceArgumentSpec,
)
from locator_engine.core.ports import ContainerPort

_argument_adapter: TypeAdapter[Any] = TypeAdapter(ArgumentSpec)


@dataclass(frozen=True, slots=True)
class LiteralArg:
    """A value handed to the constructor unchanged."""

    value: Any

    def resolve(self, container: ContainerPort) -> Any:  # pylint: disable=unused-argument
        return self.value


@dataclass(frozen=True, slots=True)
class ServiceRef:
    """A reference to another service, resolved through the container."""

    name: str
    shared: bool = False

    def resolve(self, container: ContainerPort) -> Any:
        if self.shared:
            return container.get_shared(self.name)
        return container.get(self.name)


@dataclass(frozen=True, slots=True)
class InlineInstance:
    """A throwaway object built from its own arguments, never registered."""

    class_name: Union[str, type]
    arguments: tuple["Argument", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", as_arguments(self.arguments))

    def resolve(self, container: ContainerPort) -> Any:
        return container.build(self.class_name, self.arguments)


Argument = Union[LiteralArg, ServiceRef, InlineInstance]
ARGUMENT_TYPES = (LiteralArg, ServiceRef, InlineInstance)


def _from_spec(spec: Any) -> Argument:
    if isinstance(spec, ParameterArgumentSpec):
        return LiteralArg(spec.value)
    if isinstance(spec, ServiceArgumentSpec):
        return ServiceRef(spec.name, shared=spec.shared)
    if isinstance(spec, InstanceArgumentSpec):
        return InlineInstance(spec.class_name, as_arguments(spec.arguments))
    raise InvalidDefinitionError(f"Unsupported argument spec: {spec!r}")


def as_argument(value: Any) -> Argument:
    """Coerce ``value`` into an argument descriptor.

    Descriptors are returned as-is, pydantic argument specs and mappings carrying
    a ``type`` key are parsed as the wire shape, anything else becomes a literal.
    """
    if isinstance(value, ARGUMENT_TYPES):
        return value
    if isinstance(value, (ParameterArgumentSpec, ServiceArgumentSpec, InstanceArgumentSpec)):
        return _from_spec(value)
    if isinstance(value, Mapping) and "type" in value:
        try:
            spec = _argument_adapter.validate_python(dict(value))
        except ValidationError as exc:
            raise InvalidDefinitionError(f"Invalid argument descriptor {dict(value)!r}: {exc}") from exc
        return _from_spec(spec)
    return LiteralArg(value)


def as_arguments(values: Iterable[Any]) -> tuple[Argument, ...]:
    """Coerce every item of ``values`` with :func:`as_argument`."""
    return tuple(as_argument(value) for value in values)


__all__ = [
    "ARGUMENT_TYPES",
    "Argument",
    "InlineInstance",
    "LiteralArg",
    "ServiceRef",
    "as_argument",
    "as_arguments",
]
