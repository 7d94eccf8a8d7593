"""Main Typer application for the gridpager CLI."""

from pathlib import Path
from typing import Annotated

import typer

from gridpager import __version__

app = typer.Typer(
    help="gridpager - Page through a dataset with single-flight asynchronous fetches",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"gridpager version {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """gridpager CLI main callback."""
    pass


@app.command()
def page(
    number: Annotated[
        int,
        typer.Argument(min=1, help="Page number to fetch (1-based)"),
    ] = 1,
    data: Annotated[
        Path | None,
        typer.Option("--data", "-d", help="Dataset file (.json or .msgpack)"),
    ] = None,
    rows: Annotated[
        int | None,
        typer.Option("--rows", "-r", min=1, help="Rows per page (default: from config)"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help='Output format: "table" or "json"'),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Fetch a single page of records and print it."""
    from .commands import page as page_module

    page_module.run(number, data, rows, output, config, verbose, debug)


@app.command()
def browse(
    data: Annotated[
        Path | None,
        typer.Option("--data", "-d", help="Dataset file (.json or .msgpack)"),
    ] = None,
    rows: Annotated[
        int | None,
        typer.Option("--rows", "-r", min=1, help="Initial rows per page (default: from config)"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Page through a dataset interactively."""
    from .commands import browse as browse_module

    browse_module.run(data, rows, config, verbose, debug)


if __name__ == "__main__":
    app()
