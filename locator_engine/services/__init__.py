"""Application service layer: resolver, container and the default registry."""

from __future__ import annotations

from .accessor import ServiceAccessor
from .container import Container
from .resolver import ResolutionContext, Resolver

__all__ = ["Container", "ResolutionContext", "Resolver", "ServiceAccessor"]
