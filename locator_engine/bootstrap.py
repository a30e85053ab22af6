"""Application bootstrap helpers for assembling the default container."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from locator_engine.adapters.class_resolver import ImportClassResolver
from locator_engine.adapters.definition_file import load_definitions_file
from locator_engine.core.config import settings
from locator_engine.core.logging import get_logger
from locator_engine.services import Container, runtime

logger = get_logger(__name__)


def build_default_container(
    definitions_file: Optional[Path] = None,
    *,
    make_default: bool = True,
) -> Container:
    """Return a container wired to the import-based class resolver.

    Services listed in ``definitions_file`` (or ``LOCATOR_DEFINITIONS_FILE``)
    are registered, and the container becomes the process-wide default unless
    ``make_default`` is false.
    """

    container = Container(ImportClassResolver.from_settings())
    source = definitions_file or getattr(settings, "LOCATOR_DEFINITIONS_FILE", None)
    if source is not None:
        definitions = container.load(load_definitions_file(source))
        logger.info(
            "loaded %d service definitions",
            len(definitions),
            extra={"event": "definitions_loaded", "source": str(source)},
        )
    if make_default:
        runtime.set_default(container)
    return container


__all__ = ["build_default_container"]
