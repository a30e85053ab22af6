"""Pydantic models for the configuration shapes accepted by the container."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ParameterArgumentSpec(BaseModel):
    """``{"type": "parameter", "value": ...}``: a literal passed as-is."""

    type: Literal["parameter"]
    value: Any = None


class ServiceArgumentSpec(BaseModel):
    """``{"type": "service", "name": ...}``: a reference to another service."""

    type: Literal["service"]
    name: str = Field(..., min_length=1)
    shared: bool = Field(default=False, description="Resolve through the shared cache")


class InstanceArgumentSpec(BaseModel):
    """``{"type": "instance", "className": ..., "arguments": [...]}``: an inline object."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["instance"]
    class_name: str = Field(..., alias="className", min_length=1)
    arguments: list[Any] = Field(default_factory=list)


ArgumentSpec = Annotated[
    Union[ParameterArgumentSpec, ServiceArgumentSpec, InstanceArgumentSpec],
    Field(discriminator="type"),
]


class CallSpec(BaseModel):
    """One setter invocation performed after construction."""

    method: str = Field(..., min_length=1)
    arguments: list[Any] = Field(default_factory=list)


class PropertySpec(BaseModel):
    """One attribute assignment performed after the setter calls."""

    name: str = Field(..., min_length=1)
    value: Any = None


class DefinitionSpec(BaseModel):
    """Declarative recipe: class name plus constructor, setter and property injection."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    class_name: str = Field(..., alias="className", min_length=1)
    arguments: list[Any] = Field(default_factory=list)
    calls: list[CallSpec] = Field(default_factory=list)
    properties: list[PropertySpec] = Field(default_factory=list)
    shared: bool = Field(default=False)


class DefinitionInfo(BaseModel):
    """Read-only summary of a registered definition used for introspection."""

    id: str = Field(..., description="Service id")
    strategy: str = Field(..., description="Construction strategy")
    shared: bool = Field(..., description="Whether instances are cached")
    resolved: bool = Field(..., description="Whether the recipe has produced an instance")
    cached: bool = Field(..., description="Whether a shared instance is currently cached")
    target: str = Field(..., description="Class, factory or instance description")
    arguments: int = Field(default=0, description="Constructor argument count")
    calls: int = Field(default=0, description="Setter call count")
    properties: int = Field(default=0, description="Property assignment count")


__all__ = [
    "ArgumentSpec",
    "CallSpec",
    "DefinitionInfo",
    "DefinitionSpec",
    "InstanceArgumentSpec",
    "ParameterArgumentSpec",
    "PropertySpec",
    "ServiceArgumentSpec",
]
