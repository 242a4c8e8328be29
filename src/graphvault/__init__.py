"""GraphVault - Restore tool for HugeGraph dumps."""

__version__ = "0.1.0"


def main() -> None:
    """Main entry point for the CLI."""
    from graphvault.cli.main import app

    app()
