"""FastAPI application factory bound to a service container."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from locator_engine.apps.api.middleware import CorrelationIdMiddleware
from locator_engine.core.logging import get_logger
from locator_engine.services import Container, runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make the app's container the process-wide default while serving."""
    container = getattr(app.state, "container", None)
    if isinstance(container, Container):
        runtime.set_default(container)
    logger.info("service container ready", extra={"event": "startup"})
    try:
        yield
    finally:
        logger.info("shutting down", extra={"event": "shutdown"})


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if container is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    runtime.set_default(container)
    app.add_middleware(CorrelationIdMiddleware)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import health, services  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(services.router)
    return app


__all__ = ["create_app", "lifespan"]
