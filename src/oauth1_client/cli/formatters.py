"""Output formatters for CLI commands."""

import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

from oauth1_client.cli.config import OutputFormat

console = Console()
error_console = Console(stderr=True)

_SECRET_KEYS = ("secret", "rsa_private_key")


def mask_secret(value: str) -> str:
    """Show only the last four characters of a secret."""
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


def masked(data: dict[str, Any]) -> dict[str, Any]:
    """Copy of data with secret-looking values masked."""
    return {
        key: mask_secret(str(value)) if value and any(s in key for s in _SECRET_KEYS) else value
        for key, value in data.items()
    }


def format_output(
    data: BaseModel | dict[str, Any],
    output_format: OutputFormat,
    *,
    title: str | None = None,
) -> None:
    """Format and print a single record in the specified format.

    Args:
        data: Pydantic model or dict to print
        output_format: Output format (table, json)
        title: Optional title for table output
    """
    converted: dict[str, Any]
    if isinstance(data, BaseModel):
        converted = data.model_dump(exclude_none=True)
    else:
        converted = data

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(converted, default=str))
    else:
        _format_table(converted, title)


def _snake_to_title(s: str) -> str:
    """Convert snake_case to Title Case for table headers."""
    return " ".join(word.capitalize() for word in s.split("_"))


def _format_table(data: dict[str, Any], title: str | None) -> None:
    """Format as a two-column rich table."""
    if not data:
        console.print("[dim]No data[/dim]")
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(_snake_to_title(key), str(value))

    console.print(table)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")
