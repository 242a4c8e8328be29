"""Main Typer application for GraphVault CLI."""

from pathlib import Path
from typing import Annotated

import typer

from graphvault import __version__

app = typer.Typer(
    help="GraphVault - Restore tool for HugeGraph dumps",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"GraphVault version {__version__}")
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
    """GraphVault CLI main callback."""
    pass


@app.command()
def check(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(
            "--output", "-o", help='Output format: "table" or "json" (default: config file)'
        ),
    ] = None,
) -> None:
    """Check connectivity to the HugeGraph server and graph."""
    from .commands import check as check_module

    check_module.run(config, output)


@app.command()
def restore(
    directory: Annotated[
        Path,
        typer.Argument(
            help="Directory holding the dump files",
            exists=True,
            file_okay=False,
            dir_okay=True,
            readable=True,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    types: Annotated[
        str | None,
        typer.Option(
            "--types",
            "-t",
            help="Comma-separated types to restore (e.g., 'vertex,edge') or 'all'. "
            "Valid types: propertykey, vertexlabel, edgelabel, indexlabel, vertex, edge. "
            "Types are always restored in dependency order.",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            min=1,
            max=50,
            help="Worker threads for vertex/edge dump files "
            "(default: config or CPU count up to 8, max 50)",
        ),
    ] = None,
    batch_size: Annotated[
        int | None,
        typer.Option(
            "--batch-size", "-b", min=1, max=500, help="Vertices/edges per batch upload"
        ),
    ] = None,
    max_retries: Annotated[
        int | None,
        typer.Option("--max-retries", min=1, max=20, help="Attempts per batch upload"),
    ] = None,
    continue_on_error: Annotated[
        bool,
        typer.Option(
            "--continue-on-error", help="Keep restoring remaining types after a failure"
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results in JSON format"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress all non-error output"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Restore schema, vertices and edges from a dump directory."""
    from .commands import restore as restore_module

    restore_module.run(
        directory,
        config,
        types,
        workers,
        batch_size,
        max_retries,
        continue_on_error,
        json_output,
        verbose,
        quiet,
        debug,
    )


if __name__ == "__main__":
    app()
