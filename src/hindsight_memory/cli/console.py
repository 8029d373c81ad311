"""Shared console utilities for CLI commands."""

from rich.console import Console

# Shared console instance for all CLI commands
console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{msg}[/red]", markup=True)


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{msg}[/green]", markup=True)
