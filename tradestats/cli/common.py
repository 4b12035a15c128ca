"""Helpers shared by CLI commands."""

from datetime import date
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradestats.config import get_db_path, load_config
from tradestats.db.store import DataStore

console = Console()


def get_config(ctx: click.Context) -> dict:
    """Load configuration from the path given to the root command."""
    obj = ctx.find_root().obj or {}
    return load_config(obj.get("config_path"))


def get_data_store(config: dict) -> DataStore:
    """Get the data store instance."""
    return DataStore(get_db_path(config))


def fail(message: str) -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def parse_date(value: Optional[str], label: str = "date") -> Optional[date]:
    """Parse a YYYY-MM-DD option value."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(f"Invalid {label}: {value}. Use YYYY-MM-DD.")


def pnl_text(value: float, decimals: int = 2) -> str:
    """Rich markup for a signed, colored P&L amount."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}${abs(value):,.{decimals}f}[/{color}]"
