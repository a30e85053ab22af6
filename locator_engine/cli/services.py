"""CLI commands for inspecting and resolving service definition files."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from locator_engine.adapters.class_resolver import ImportClassResolver
from locator_engine.adapters.definition_file import load_definitions_file
from locator_engine.core.exceptions import ContainerError
from locator_engine.services import Container

app = typer.Typer(name="services", help="Inspect and resolve service definitions")
console = Console()


def _load_container(definitions_file: Path) -> Container:
    """Build a container populated from ``definitions_file``."""
    container = Container(ImportClassResolver.from_settings())
    container.load(load_definitions_file(definitions_file))
    return container


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(1)


@app.command("list")
def list_services(
    definitions_file: Path = typer.Argument(..., help="JSON file with a 'services' object"),
) -> None:
    """List the services defined in a definitions file."""
    try:
        container = _load_container(definitions_file)
    except ContainerError as exc:
        raise _fail(exc) from exc

    infos = container.describe()
    if not infos:
        console.print("[dim]No services defined.[/dim]")
        return

    table = Table(title="Services")
    table.add_column("Id", style="cyan")
    table.add_column("Strategy")
    table.add_column("Shared")
    table.add_column("Target")
    table.add_column("Args / Calls / Props")

    for info in infos:
        table.add_row(
            info.id,
            info.strategy,
            "[green]yes[/green]" if info.shared else "no",
            escape(info.target),
            f"{info.arguments} / {info.calls} / {info.properties}",
        )

    console.print(table)


@app.command("resolve")
def resolve_service(
    definitions_file: Path = typer.Argument(..., help="JSON file with a 'services' object"),
    service_id: str = typer.Argument(..., help="Id (or importable class name) to resolve"),
    shared: bool = typer.Option(False, "--shared", "-s", help="Resolve through the shared cache"),
) -> None:
    """Resolve one service and print the resulting instance."""
    try:
        container = _load_container(definitions_file)
        instance = container.get_shared(service_id) if shared else container.get(service_id)
    except ContainerError as exc:
        raise _fail(exc) from exc

    kind = type(instance)
    console.print(
        f"[green]Resolved[/green] [bold]{escape(service_id)}[/bold] "
        f"-> {escape(kind.__module__ + '.' + kind.__qualname__)}"
    )
    console.print(repr(instance), markup=False)
