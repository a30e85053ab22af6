"""Service definitions: the stored recipe for one service id."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from locator_engine.core.arguments import Argument, as_argument, as_arguments
from locator_engine.core.exceptions import InvalidDefinitionError
from locator_engine.core.models import DefinitionInfo, DefinitionSpec


class Strategy(str, Enum):
    """How a definition turns into an instance."""

    CLASS_NAME = "class_name"
    FACTORY = "factory"
    INSTANCE = "instance"
    DECLARATIVE = "declarative"


@dataclass(frozen=True, slots=True)
class SetterCall:
    """A method invoked on the new instance with resolved arguments."""

    method: str
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True, slots=True)
class PropertyAssignment:
    """An attribute assigned on the new instance with a resolved value."""

    name: str
    value: Argument


def describe_target(target: Any) -> str:
    """Return a short human readable description of a definition target."""
    if isinstance(target, str):
        return target
    if isinstance(target, type):
        return f"{target.__module__}.{target.__qualname__}"
    if callable(target):
        name = getattr(target, "__qualname__", None) or type(target).__qualname__
        return f"<factory {name}>"
    return f"<instance {type(target).__qualname__}>"


def is_declarative_mapping(spec: Any) -> bool:
    """Mappings naming a class are recipes; any other mapping is a plain instance."""
    return isinstance(spec, Mapping) and ("className" in spec or "class_name" in spec)


class ServiceDefinition:
    """Recipe describing how to construct the service registered under ``service_id``."""

    def __init__(
        self,
        service_id: str,
        strategy: Strategy,
        target: Any,
        *,
        shared: bool = False,
        arguments: Iterable[Any] = (),
        calls: Iterable[SetterCall] = (),
        properties: Iterable[PropertyAssignment] = (),
    ) -> None:
        self.service_id = service_id
        self._strategy = Strategy(strategy)
        self._target = target
        self._shared = bool(shared)
        self._arguments: list[Argument] = list(as_arguments(arguments))
        self._calls: list[SetterCall] = list(calls)
        self._properties: list[PropertyAssignment] = list(properties)
        self._resolved = False

    @classmethod
    def from_spec(cls, service_id: str, spec: Any, shared: bool = False) -> "ServiceDefinition":
        """Build a definition from any registration form accepted by the container.

        Args:
            service_id: Id the definition is registered under.
            spec: A ``ServiceDefinition``, a class name or class, a declarative
                mapping or :class:`DefinitionSpec`, a factory callable, or a
                pre-built instance.
            shared: Whether the container should cache the resolved instance.

        Returns:
            A new definition (or ``spec`` itself, rebound to ``service_id``).

        Raises:
            InvalidDefinitionError: If a declarative mapping is malformed.
        """
        if isinstance(spec, ServiceDefinition):
            spec.service_id = service_id
            if shared:
                spec.set_shared(True)
            return spec
        if isinstance(spec, (str, type)):
            if isinstance(spec, str) and not spec.strip():
                raise InvalidDefinitionError(f"Empty class name for service '{service_id}'")
            return cls(service_id, Strategy.CLASS_NAME, spec, shared=shared)
        if is_declarative_mapping(spec):
            try:
                spec = DefinitionSpec.model_validate(dict(spec))
            except ValidationError as exc:
                raise InvalidDefinitionError(
                    f"Invalid definition for service '{service_id}': {exc}"
                ) from exc
        if isinstance(spec, DefinitionSpec):
            return cls(
                service_id,
                Strategy.DECLARATIVE,
                spec.class_name,
                shared=shared or spec.shared,
                arguments=spec.arguments,
                calls=[SetterCall(call.method, as_arguments(call.arguments)) for call in spec.calls],
                properties=[
                    PropertyAssignment(prop.name, as_argument(prop.value)) for prop in spec.properties
                ],
            )
        if callable(spec):
            return cls(service_id, Strategy.FACTORY, spec, shared=shared)
        return cls(service_id, Strategy.INSTANCE, spec, shared=shared)

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def get_strategy(self) -> Strategy:
        return self._strategy

    @property
    def target(self) -> Any:
        """Class name, class, factory or instance, depending on the strategy."""
        return self._target

    @property
    def arguments(self) -> tuple[Argument, ...]:
        return tuple(self._arguments)

    @property
    def calls(self) -> tuple[SetterCall, ...]:
        return tuple(self._calls)

    @property
    def properties(self) -> tuple[PropertyAssignment, ...]:
        return tuple(self._properties)

    def is_shared(self) -> bool:
        return self._shared

    def set_shared(self, shared: bool) -> "ServiceDefinition":
        self._shared = bool(shared)
        return self

    def is_resolved(self) -> bool:
        """Return whether this recipe has produced an instance at least once."""
        return self._resolved

    def mark_resolved(self) -> None:
        self._resolved = True

    def _require_declarative(self, operation: str) -> None:
        if self._strategy is not Strategy.DECLARATIVE:
            raise InvalidDefinitionError(
                f"Cannot {operation} on service '{self.service_id}' "
                f"with strategy '{self._strategy.value}'"
            )

    def set_class_name(self, class_name: Union[str, type]) -> "ServiceDefinition":
        if self._strategy is not Strategy.CLASS_NAME:
            self._require_declarative("set the class name")
        self._target = class_name
        return self

    def append_constructor_argument(self, argument: Any) -> "ServiceDefinition":
        self._require_declarative("append a constructor argument")
        self._arguments.append(as_argument(argument))
        return self

    def append_setter_call(self, method: str, arguments: Iterable[Any] = ()) -> "ServiceDefinition":
        self._require_declarative("append a setter call")
        self._calls.append(SetterCall(method, as_arguments(arguments)))
        return self

    def append_property_assignment(self, name: str, argument: Any) -> "ServiceDefinition":
        self._require_declarative("append a property assignment")
        self._properties.append(PropertyAssignment(name, as_argument(argument)))
        return self

    def get_argument(self, position: int) -> Optional[Argument]:
        """Return the constructor argument at ``position`` or ``None`` when absent."""
        self._require_declarative("read a constructor argument")
        if 0 <= position < len(self._arguments):
            return self._arguments[position]
        return None

    def set_argument(self, position: int, argument: Any) -> "ServiceDefinition":
        """Replace the constructor argument at ``position``."""
        self._require_declarative("replace a constructor argument")
        if not 0 <= position < len(self._arguments):
            raise InvalidDefinitionError(
                f"Service '{self.service_id}' has no constructor argument at position {position}"
            )
        self._arguments[position] = as_argument(argument)
        return self

    def info(self, *, cached: bool = False) -> DefinitionInfo:
        return DefinitionInfo(
            id=self.service_id,
            strategy=self._strategy.value,
            shared=self._shared,
            resolved=self._resolved,
            cached=cached,
            target=describe_target(self._target),
            arguments=len(self._arguments),
            calls=len(self._calls),
            properties=len(self._properties),
        )

    def __repr__(self) -> str:
        return (
            f"ServiceDefinition(id={self.service_id!r}, strategy={self._strategy.value}, "
            f"target={describe_target(self._target)!r}, shared={self._shared})"
        )


__all__ = [
    "PropertyAssignment",
    "ServiceDefinition",
    "SetterCall",
    "Strategy",
    "describe_target",
    "is_declarative_mapping",
]
