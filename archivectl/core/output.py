"""Output formatting for archivectl.

Results go to stdout, either as JSON or as aligned key/value lines rendered
with Rich. Errors and the transfer progress bar go to stderr so JSON output
stays machine readable.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TransferSpeedColumn,
)

# =============================================================================
# Console Instances
# =============================================================================

console = Console()
err_console = Console(stderr=True)

SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


# =============================================================================
# Output Format
# =============================================================================


class OutputFormat(Enum):
    """Output format options."""

    JSON = "json"
    TABLE = "table"

    @classmethod
    def from_string(cls, value: str) -> OutputFormat:
        return cls(value.lower())


def format_size(num_bytes: int) -> str:
    """Render a byte count with a binary unit, e.g. ``2.4 MiB``."""
    size = float(num_bytes)
    for unit in SIZE_UNITS[:-1]:
        if abs(size) < 1024:
            return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {SIZE_UNITS[-1]}"


# =============================================================================
# Key/Value and JSON Output
# =============================================================================


def print_key_value(
    data: dict[str, Any],
    *,
    title: str | None = None,
    key_labels: dict[str, str] | None = None,
) -> None:
    """Print a mapping as aligned ``Label  value`` lines.

    Missing values are shown as a dim dash.
    """
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")

    labels = key_labels or {}
    display = {key: labels.get(key, key.replace("_", " ").title()) for key in data}
    width = max((len(label) for label in display.values()), default=0)

    for key, value in data.items():
        if value is None or value == "":
            rendered = "[dim]-[/dim]"
        elif isinstance(value, bool):
            rendered = "[green]Yes[/green]" if value else "[red]No[/red]"
        elif isinstance(value, (list, dict)):
            rendered = escape(json.dumps(value))
        else:
            rendered = escape(str(value))
        console.print(f"  {display[key]:<{width}}  {rendered}")


def print_json(data: Any, *, indent: int = 2) -> None:
    """Print data as JSON on plain stdout."""
    print(json.dumps(data, indent=indent, default=str))


def print_output(
    data: dict[str, Any],
    *,
    format: OutputFormat = OutputFormat.TABLE,
    column_labels: dict[str, str] | None = None,
    title: str | None = None,
) -> None:
    """Print a result mapping in the requested format."""
    if format == OutputFormat.JSON:
        print_json(data)
    else:
        print_key_value(data, title=title, key_labels=column_labels)


# =============================================================================
# Status Messages
# =============================================================================


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


# =============================================================================
# Progress
# =============================================================================


def create_progress() -> Progress:
    """Create a byte transfer progress bar on stderr."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        DownloadColumn(binary_units=True),
        TransferSpeedColumn(),
        console=err_console,
        transient=True,
    )
