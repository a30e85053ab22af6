"""CLI commands for locator-engine."""

import typer

from locator_engine.cli.services import app as services_app

main_app = typer.Typer(
    name="locator",
    help="Service locator CLI",
    no_args_is_help=True,
)
main_app.add_typer(services_app, name="services")


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
