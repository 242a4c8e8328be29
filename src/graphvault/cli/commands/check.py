"""Check command implementation for HugeGraph connectivity."""

from pathlib import Path

import typer

from graphvault.cli.output import format_connection_status_table, format_json
from graphvault.cli.rich_logging import console, print_error
from graphvault.config.loader import load_config
from graphvault.exceptions import ConfigError
from graphvault.hugegraph.client import HugeGraphClient


def run(config: Path | None, output: str | None = None) -> None:
    """
    Connect to the configured graph and display server information.

    Args:
        config: Optional path to config file
        output: Output format ("table" or "json"); falls back to the config file
    """
    try:
        try:
            cfg = load_config(config)
        except ConfigError as e:
            print_error(f"Configuration error: {e}")
            console.print("\n[bold]Troubleshooting:[/bold]")
            console.print("  - Check that config file exists and is valid TOML")
            console.print("  - Ensure [hugegraph] url is a valid HTTP(S) URL")
            raise typer.Exit(2) from None

        output = output or cfg.output.default_format

        client = HugeGraphClient(
            url=str(cfg.hugegraph.url),
            graph=cfg.hugegraph.graph,
            username=cfg.hugegraph.username,
            password=cfg.hugegraph.password,
            timeout=cfg.hugegraph.timeout,
            verify_ssl=cfg.hugegraph.verify_ssl,
        )
        status = client.test_connection()

        if output == "json":
            # Use print() for JSON to ensure it goes to stdout
            print(format_json(status))
        else:
            format_connection_status_table(status)

        if status.connected and status.authenticated:
            raise typer.Exit(0)
        raise typer.Exit(3)

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        print_error("Interrupted by user")
        raise typer.Exit(130) from None
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(3) from None
