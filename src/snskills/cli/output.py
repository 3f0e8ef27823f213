"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import json
import logging
from typing import Any

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler

# Global console instances
console = Console()
err_console = Console(stderr=True)

COMPLEXITY_MARKERS = {
    "beginner": "[green]●[/green]",
    "intermediate": "[yellow]●●[/yellow]",
    "advanced": "[red]●●●[/red]",
    "expert": "[magenta]●●●●[/magenta]",
}


def configure_logging(level: str = "WARNING") -> None:
    """Route package logging to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("snskills")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_json(data: Any) -> None:
    """Print models or plain data as indented JSON, unwrapped."""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    elif isinstance(data, list):
        data = [item.model_dump() if isinstance(item, BaseModel) else item for item in data]
    typer.echo(json.dumps(data, indent=2, default=str))


def complexity_marker(complexity: str) -> str:
    """Get the colored marker for a complexity tier."""
    return COMPLEXITY_MARKERS.get(complexity, "[dim]○[/dim]")
