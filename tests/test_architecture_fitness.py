"""Architectural fitness functions to enforce clean architecture principles.

These tests ensure the codebase maintains its hexagonal layout: a
framework-free core, services that only depend on the core, and adapters
and apps at the edges.
"""

import re
from pathlib import Path

ROOT = Path(__file__).parent.parent
PACKAGE_DIR = ROOT / "locator_engine"


def _imports(layer: str, *modules: str) -> list[Path]:
    layer_dir = PACKAGE_DIR / layer
    violations = []
    for py_file in layer_dir.rglob("*.py"):
        content = py_file.read_text()
        for module in modules:
            if re.search(rf"^\s*(from|import) {module}\b", content, re.MULTILINE):
                violations.append(py_file.relative_to(layer_dir))
    return violations


def test_no_python_modules_at_root():
    """Only packaging and entry point files may live at the repository root.

    Code that other modules import belongs inside ``locator_engine/`` where the
    layer checks below can see it.
    """
    allowed = {"conftest.py", "main.py", "__main__.py"}
    violations = [f.name for f in ROOT.glob("*.py") if f.name not in allowed]

    assert not violations, (
        f"Unexpected Python modules at root: {violations}\n"
        "Move them into the locator_engine package."
    )


def test_no_fastapi_in_core():
    """Core layer must not import FastAPI.

    The core is framework-agnostic and should not depend on web frameworks.
    """
    violations = _imports("core", "fastapi", "starlette")
    assert not violations, (
        f"Core layer imports FastAPI: {violations}\n" "Core must remain framework-agnostic."
    )


def test_services_do_not_depend_on_delivery_frameworks():
    """The container must stay usable without the web app or the CLI installed."""
    violations = _imports("services", "fastapi", "starlette", "typer", "rich")
    assert not violations, f"Services layer imports a delivery framework: {violations}"


def test_core_does_not_import_outer_layers():
    """Core depends on nothing inside the package but itself."""
    violations = _imports(
        "core",
        r"locator_engine\.services",
        r"locator_engine\.adapters",
        r"locator_engine\.apps",
        r"locator_engine\.cli",
    )
    assert not violations, f"Core layer imports an outer layer: {violations}"
