"""Main CLI application module.

This module provides the main entry point for the meshstack CLI.

Commands:
- init, validate, generate: Project setup and scaffolding
- install, update, bootstrap: Infrastructure components and local clusters
- deploy, destroy, status: Application services and releases
- plan: Read-only previews of install/deploy/destroy/update/status/bootstrap
"""

from typing import Annotated

import typer

from meshstack import __version__

from .commands import (
    bootstrap,
    deploy,
    destroy,
    generate_app,
    init,
    install,
    plan_app,
    status,
    update,
    validate,
)
from .context import build_cli_context
from .shared.logging_setup import setup_logging

# Create the main CLI application
app = typer.Typer(
    help="🕸️  meshstack - Service mesh and platform orchestration CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"meshstack {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging on stderr"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    setup_logging(verbose)
    if ctx.obj is None:
        ctx.obj = build_cli_context()


# Project commands
app.command()(init)
app.command()(validate)
app.add_typer(generate_app, name="generate")

# Infrastructure commands
app.command()(install)
app.command()(update)
app.command()(bootstrap)

# Service commands
app.command()(deploy)
app.command()(destroy)
app.command()(status)

# Previews
app.add_typer(plan_app, name="plan")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
