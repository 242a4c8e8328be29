"""Rich logging utilities for CLI output."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for consistent colors
GRAPHVAULT_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
        "highlight": "bold magenta",
    }
)

# Global console instance with custom theme
console = Console(theme=GRAPHVAULT_THEME, stderr=True)


def log_level_for(quiet: bool = False, verbose: bool = False, debug: bool = False) -> int:
    """Map CLI verbosity flags to a logging level (quiet wins over debug and verbose)."""
    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def configure_rich_logging(
    level: int = logging.INFO,
    show_time: bool = True,
    show_path: bool = False,
    enable_link_path: bool = False,
) -> None:
    """Configure rich logging handler for log output.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.)
        show_time: Show timestamp in log output
        show_path: Show file path in log output
        enable_link_path: Enable clickable file paths in log output
    """
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        enable_link_path=enable_link_path,
        rich_tracebacks=True,
        tracebacks_show_locals=level <= logging.DEBUG,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logging.basicConfig(
        level=level,
        handlers=[rich_handler],
        force=True,
    )

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


def print_error(message: str, console_obj: Console | None = None) -> None:
    """Print error message in red.

    Args:
        message: Error message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[error]✗ {message}[/error]")


def print_success(message: str, console_obj: Console | None = None) -> None:
    """Print success message in green.

    Args:
        message: Success message to print
        console_obj: Optional console instance (uses global if None)
    """
    c = console_obj or console
    c.print(f"[success]✓ {message}[/success]")
