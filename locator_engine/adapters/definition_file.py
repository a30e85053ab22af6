"""JSON definition files consumed by the bootstrap and the CLI.

Expected layout::

    {
      "services": {
        "clock": "datetime.datetime",
        "store": {
          "className": "collections.OrderedDict",
          "shared": true
        }
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from locator_engine.core.exceptions import InvalidDefinitionError


def load_definitions_file(path: Path | str) -> dict[str, Any]:
    """Return the ``services`` mapping of a JSON definition file.

    Raises:
        InvalidDefinitionError: If the file is unreadable, not JSON, or lacks a
            ``services`` object.
    """
    file_path = Path(path)
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidDefinitionError(f"Cannot read definitions file {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidDefinitionError(f"Definitions file {file_path} is not valid JSON: {exc}") from exc

    services = payload.get("services") if isinstance(payload, dict) else None
    if not isinstance(services, dict):
        raise InvalidDefinitionError(
            f"Definitions file {file_path} must contain a 'services' object"
        )
    return services


__all__ = ["load_definitions_file"]
