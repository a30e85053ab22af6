"""Process-wide default container registry.

This tiny module provides a single place where the application can register the
container that code unable to receive it by injection should use. Nothing is
created implicitly: until :func:`set_default` is called the default is absent
and :func:`get_default` returns ``None``.

The registry is process-wide; the FastAPI app and the bootstrap helper set it
during startup, and tests may override or clear it as needed.
"""

from __future__ import annotations

import threading
from typing import Optional

from locator_engine.core.exceptions import DefaultContainerNotSetError

from .container import Container

_registry: dict[str, Optional[Container]] = {"default": None}
_registry_lock = threading.Lock()


def set_default(container: Container) -> None:
    """Register ``container`` as the default, replacing any previous one."""
    with _registry_lock:
        _registry["default"] = container


def get_default() -> Optional[Container]:
    """Return the default container, or ``None`` when none was registered."""
    return _registry.get("default")


def require_default() -> Container:
    """Return the default container or raise if missing."""
    container = _registry.get("default")
    if container is None:
        raise DefaultContainerNotSetError()
    return container


def clear_default() -> None:
    """Reset the registry (used primarily in tests)."""
    with _registry_lock:
        _registry["default"] = None


__all__ = ["set_default", "get_default", "require_default", "clear_default"]
