"""Restore command implementation for replaying a HugeGraph dump directory."""

import logging
from pathlib import Path

import typer

from graphvault.cli.output import format_json, format_restore_summary_table
from graphvault.cli.rich_logging import (
    configure_rich_logging,
    console,
    log_level_for,
    print_error,
    print_success,
)
from graphvault.cli.types import parse_restore_types
from graphvault.config.loader import load_config
from graphvault.exceptions import ConfigError, RestorationError
from graphvault.hugegraph.client import HugeGraphClient
from graphvault.restoration.orchestrator import RestoreOrchestrator

logger = logging.getLogger(__name__)

# Exit codes (matching CLI interface contract)
EXIT_SUCCESS = 0
EXIT_RESTORE_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def run(
    directory: Path,
    config: Path | None = None,
    types: str | None = None,
    workers: int | None = None,
    batch_size: int | None = None,
    max_retries: int | None = None,
    continue_on_error: bool = False,
    json_output: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    debug: bool = False,
) -> None:
    """Restore dump files from a directory into the configured graph.

    Args:
        directory: Directory holding the dump files
        config: Optional path to config file
        types: Comma-separated restore types, or "all" (default: all)
        workers: Worker threads for vertex/edge files (default: config file)
        batch_size: Vertices/edges per batch upload (default: config file, max 500)
        max_retries: Attempts per batch upload (default: config file)
        continue_on_error: Keep restoring later types after a type failed
        json_output: Output results in JSON format
        verbose: Enable verbose logging
        quiet: Suppress all non-error output
        debug: Enable debug logging

    Exit codes:
        0: Success
        1: Restore failed (some type or file did not restore)
        2: Configuration error
        130: Interrupted
    """
    configure_rich_logging(
        level=log_level_for(quiet=quiet, verbose=verbose, debug=debug),
        show_time=debug,
        show_path=debug,
        enable_link_path=debug,
    )

    try:
        restore_types = parse_restore_types(types)

        try:
            cfg = load_config(config)
        except ConfigError as e:
            print_error(f"Configuration error: {e}")
            raise typer.Exit(EXIT_CONFIG_ERROR) from None

        json_output = json_output or cfg.output.default_format == "json"

        # CLI > config file > defaults
        overrides = {
            "workers": workers,
            "batch_size": batch_size,
            "max_retries": max_retries,
        }
        update = {key: value for key, value in overrides.items() if value is not None}
        if continue_on_error:
            update["stop_on_error"] = False
        try:
            restore_config = cfg.restore.model_validate(cfg.restore.model_dump() | update)
        except ValueError as e:
            print_error(f"Configuration error: {e}")
            raise typer.Exit(EXIT_CONFIG_ERROR) from None

        client = HugeGraphClient(
            url=str(cfg.hugegraph.url),
            graph=cfg.hugegraph.graph,
            username=cfg.hugegraph.username,
            password=cfg.hugegraph.password,
            timeout=cfg.hugegraph.timeout,
            verify_ssl=cfg.hugegraph.verify_ssl,
        )

        if not json_output and not quiet:
            console.print(
                f"\n[bold]Restoring {', '.join(t.tag for t in restore_types)} "
                f"into graph '{cfg.hugegraph.graph}'...[/bold]"
            )
            console.print(f"[dim]Using {restore_config.workers} worker thread(s)[/dim]\n")

        orchestrator = RestoreOrchestrator(client, restore_config)
        try:
            summary = orchestrator.restore(restore_types, directory)
        except RestorationError as e:
            if e.summary is None:
                raise
            summary = e.summary

        if json_output:
            print(format_json(summary))
        elif not quiet:
            format_restore_summary_table(summary)

        if not summary.succeeded:
            if not json_output:
                print_error("Restore did not complete")
            raise typer.Exit(EXIT_RESTORE_FAILED)

        if not json_output and not quiet:
            print_success("Restore complete")
        raise typer.Exit(EXIT_SUCCESS)

    except typer.Exit:
        raise
    except typer.BadParameter:
        raise
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise typer.Exit(EXIT_INTERRUPTED) from None
    except Exception as e:
        logger.debug("Unexpected error during restore", exc_info=True)
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(EXIT_RESTORE_FAILED) from None
