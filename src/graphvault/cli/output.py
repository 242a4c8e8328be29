"""Output formatting utilities for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from graphvault.config.models import ConnectionStatus
from graphvault.restoration.results import RestoreSummary


def format_json(data: Any) -> str:
    """
    Format data as JSON string.

    Args:
        data: Data to format (must be JSON-serializable)

    Returns:
        Pretty-printed JSON string
    """
    # Convert Pydantic models and result objects to dict if needed
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    elif hasattr(data, "to_dict"):
        data = data.to_dict()
    return json.dumps(data, indent=2, default=str)


def format_duration(seconds: float) -> str:
    """Format a duration as "1m 5s" or "4.2s"."""
    if seconds >= 60:
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"
    return f"{seconds:.1f}s"


def format_restore_summary_table(summary: RestoreSummary, console: Console | None = None) -> None:
    """
    Print restore counters per type, elapsed time and failures.

    Args:
        summary: RestoreSummary to format
        console: Optional console (stdout console by default)
    """
    console = console or Console()

    table = Table(title="Restore Summary", show_header=True, header_style="bold")
    table.add_column("Type")
    table.add_column("Restored", justify="right")
    table.add_column("Status")

    failed_types = {failure.restore_type for failure in summary.failures}
    for restore_type, count in summary.counts.items():
        if restore_type in failed_types:
            status = "[red]failed[/red]"
        elif restore_type in summary.skipped_types:
            status = "[yellow]skipped[/yellow]"
        else:
            status = "[green]ok[/green]"
        table.add_row(restore_type.tag, str(count), status)

    console.print(table)
    console.print(f"  Total: {summary.total} records")
    console.print(f"  Total Duration: [cyan]{format_duration(summary.duration_seconds)}[/cyan]")

    if summary.failures:
        console.print(f"\n[bold red]✗ {len(summary.failures)} failure(s):[/bold red]")
        for failure in summary.failures:
            console.print(f"  • {failure}", markup=False)


def format_connection_status_table(status: ConnectionStatus) -> None:
    """
    Format HugeGraph connection information as a table.

    Args:
        status: ConnectionStatus with server info
    """
    console = Console()

    if not (status.connected and status.authenticated):
        console.print("\n[bold red]Error: Failed to connect to HugeGraph[/bold red]\n")
        console.print(f"Reason: {status.error_message}\n", markup=False)
        console.print("[bold]Troubleshooting:[/bold]")
        console.print("  - Verify GRAPHVAULT_URL points at the HugeGraph REST server")
        console.print("  - Check GRAPHVAULT_GRAPH names an existing graph")
        console.print("  - Set GRAPHVAULT_USERNAME and GRAPHVAULT_PASSWORD if auth is enabled\n")
        return

    console.print("\n[bold]HugeGraph Server Information[/bold]")
    console.print("━" * 50)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Property", style="bold")
    table.add_column("Value")

    table.add_row("Server URL", status.instance_url or "")
    table.add_row("Graph", status.graph or "")
    table.add_row("Server Version", status.server_version or "unknown")
    table.add_row("API Version", status.api_version or "unknown")
    table.add_row("Status", "[green]Connected[/green]")

    console.print(table)
    console.print()
