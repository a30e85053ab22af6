"""Shared FastAPI dependencies for token validation and service access."""

import hmac
from typing import Annotated, Any, Optional

from fastapi import Depends, Header, HTTPException, status

from locator_engine.core.config import config
from locator_engine.core.exceptions import ContainerError
from locator_engine.services import Container, runtime


async def require_admin_token(
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_admin_token: Annotated[Optional[str], Header(alias="X-Admin-Token")] = None,
) -> None:
    """Validate bearer/X-Admin-Token headers for the introspection endpoints."""
    if not config.ENABLE_ADMIN_AUTH:
        return
    expected = config.ADMIN_API_TOKEN
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token not configured",
            headers={"WWW-Authenticate": "Bearer"},
        )

    provided = None
    if authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1].strip()
    elif x_admin_token:
        provided = x_admin_token.strip()

    if not provided:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not hmac.compare_digest(provided, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_container() -> Container:
    """Resolve the process-wide default container."""
    container = runtime.get_default()
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service container not configured",
        )
    return container


def Inject(service_id: str, *, shared: bool = False) -> Any:  # pylint: disable=invalid-name
    """Return a ``Depends`` marker resolving ``service_id`` from the default container.

    Example::

        @router.get("/now")
        def now(clock=Inject("clock")):
            return {"now": clock.now().isoformat()}
    """

    def _resolve(container: Annotated[Container, Depends(get_container)]) -> Any:
        try:
            if shared:
                return container.get_shared(service_id)
            return container.get(service_id)
        except ContainerError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Service '{service_id}' could not be resolved",
            ) from exc

    return Depends(_resolve)


__all__ = ["Inject", "get_container", "require_admin_token"]
