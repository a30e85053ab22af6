"""API route modules."""

from . import health, services

__all__ = ["health", "services"]
