"""Health and readiness routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from locator_engine.services import Container

from ..dependencies import get_container

router = APIRouter()


@router.get("/alive")
async def alive_check(
    container: Annotated[Container, Depends(get_container)],
) -> JSONResponse:
    """Health check endpoint for infrastructure probes."""
    return JSONResponse({"status": "ok", "services": len(container)})


__all__ = ["router"]
