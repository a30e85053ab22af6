"""Read-only introspection routes for the registered service definitions."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from locator_engine.core.exceptions import ServiceNotFoundError
from locator_engine.core.models import DefinitionInfo
from locator_engine.services import Container

from ..dependencies import get_container, require_admin_token

router = APIRouter(prefix="/services", dependencies=[Depends(require_admin_token)])


@router.get("", response_model=list[DefinitionInfo])
async def list_services(
    container: Annotated[Container, Depends(get_container)],
) -> list[DefinitionInfo]:
    """Return every registered definition sorted by id."""
    return container.describe()


@router.get("/{service_id}", response_model=DefinitionInfo)
async def get_service(
    service_id: str,
    container: Annotated[Container, Depends(get_container)],
) -> DefinitionInfo:
    """Return one definition; resolving it is left to the application."""
    try:
        definition = container.get_definition(service_id)
    except ServiceNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return definition.info(cached=container.is_cached(service_id))


__all__ = ["router"]
