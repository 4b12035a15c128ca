"""Trade commands for tradestats CLI.

Handles logging, closing, listing, importing and deleting trades.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.table import Table

from tradestats.cli.common import console, fail, get_config, get_data_store, parse_date, pnl_text
from tradestats.engine.daily import parse_trades
from tradestats.models import Trade
from tradestats.models.trade import ASSET_TYPES


@click.command()
@click.argument("ticker")
@click.option("--pnl", type=float, default=None, help="Realized P&L (omit with --open).")
@click.option("--date", "trade_date", default=None, help="Open date, YYYY-MM-DD (default: today).")
@click.option("--close-date", default=None, help="Close date, YYYY-MM-DD, if different from open date.")
@click.option("--time", "trade_time", default=None, help="Intraday time, HH:MM.")
@click.option("--short", is_flag=True, default=False, help="Short trade (default: long).")
@click.option(
    "--asset",
    type=click.Choice(ASSET_TYPES, case_sensitive=False),
    default="STOCK",
    help="Asset type.",
)
@click.option("--entry", type=float, default=None, help="Entry price.")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price.")
@click.option("--size", type=float, default=None, help="Position size.")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--notes", default=None, help="Notes.")
@click.option("--open", "is_open", is_flag=True, default=False, help="Log as an open position.")
@click.pass_context
def add(
    ctx: click.Context,
    ticker: str,
    pnl: Optional[float],
    trade_date: Optional[str],
    close_date: Optional[str],
    trade_time: Optional[str],
    short: bool,
    asset: str,
    entry: Optional[float],
    exit_price: Optional[float],
    size: Optional[float],
    tags: tuple[str, ...],
    notes: Optional[str],
    is_open: bool,
) -> None:
    """Log a trade.

    \b
    Examples:
      tradestats add AAPL --pnl 250 --tag breakout
      tradestats add ES --asset futures --short --pnl -120 --date 2024-03-01
      tradestats add TSLA --open --entry 180 --size 10
    """
    if is_open and pnl is not None:
        fail("An open trade has no realized P&L; omit --pnl or --open.")
    if not is_open and pnl is None:
        fail("Closed trades need --pnl. Use --open for an open position.")

    opened = parse_date(trade_date, "date") or date.today()
    closed_on = parse_date(close_date, "close date")

    try:
        trade = Trade(
            date=opened,
            close_date=None if is_open else closed_on,
            time=trade_time,
            ticker=ticker.upper(),
            direction="SHORT" if short else "LONG",
            asset_type=asset.upper(),
            status="OPEN" if is_open else "CLOSED",
            entry_price=entry,
            exit_price=exit_price,
            size=size,
            pnl=pnl or 0.0,
            tags=frozenset(tags),
            notes=notes,
        )
    except ValidationError as e:
        fail(f"Invalid trade: {e.errors()[0]['msg']}")

    get_data_store(get_config(ctx)).log_trade(trade)
    status = "[yellow]OPEN[/yellow]" if is_open else pnl_text(trade.pnl)
    console.print(f"[green]✓[/green] Logged {trade.ticker} {status} [dim]({trade.id})[/dim]")


@click.command()
@click.argument("trade_id")
@click.option("--pnl", type=float, required=True, help="Realized P&L.")
@click.option("--date", "close_date", default=None, help="Close date, YYYY-MM-DD (default: today).")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price.")
@click.pass_context
def close(
    ctx: click.Context,
    trade_id: str,
    pnl: float,
    close_date: Optional[str],
    exit_price: Optional[float],
) -> None:
    """Close an open trade."""
    closed_on = parse_date(close_date, "close date") or date.today()
    store = get_data_store(get_config(ctx))

    try:
        trade = store.close_trade(trade_id, closed_on, pnl, exit_price)
    except ValueError as e:
        fail(str(e))

    console.print(
        f"[green]✓[/green] Closed {trade.ticker} on {closed_on.isoformat()}: {pnl_text(trade.pnl)}"
    )


@click.command()
@click.option(
    "--status",
    type=click.Choice(["open", "closed", "all"], case_sensitive=False),
    default="all",
    help="Filter by status.",
)
@click.option("--from", "from_date", default=None, help="From open date, YYYY-MM-DD.")
@click.option("--to", "to_date", default=None, help="To open date, YYYY-MM-DD.")
@click.option("--limit", type=int, default=None, help="Show only the most recent N trades.")
@click.pass_context
def trades(
    ctx: click.Context,
    status: str,
    from_date: Optional[str],
    to_date: Optional[str],
    limit: Optional[int],
) -> None:
    """List trades."""
    store = get_data_store(get_config(ctx))
    rows = store.get_trades(
        status=None if status.lower() == "all" else status.upper(),
        from_date=parse_date(from_date, "from date"),
        to_date=parse_date(to_date, "to date"),
    )
    if limit is not None:
        rows = rows[-limit:] if limit > 0 else []

    if not rows:
        console.print("[dim]No trades found[/dim]")
        return

    table = Table(title="Trades", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Closed")
    table.add_column("Ticker", style="bold")
    table.add_column("Side")
    table.add_column("Asset")
    table.add_column("P&L", justify="right")
    table.add_column("Tags")

    for trade in rows:
        table.add_row(
            trade.id[:8],
            trade.date.isoformat(),
            trade.close_date.isoformat() if trade.close_date else "-",
            trade.ticker,
            trade.direction,
            trade.asset_type,
            pnl_text(trade.pnl) if trade.is_closed else "[yellow]OPEN[/yellow]",
            ", ".join(sorted(trade.tags)) or "-",
        )

    console.print(table)


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_trades(ctx: click.Context, path: Path) -> None:
    """Import trades from a JSON array of trade records.

    Records that fail validation are skipped with a warning.
    """
    try:
        records = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        fail(f"Invalid JSON in {path}: {e}")

    if not isinstance(records, list):
        fail(f"{path} must contain a JSON array of trades")

    parsed = parse_trades(records)
    count = get_data_store(get_config(ctx)).log_trades(parsed)
    skipped = len(records) - count
    message = f"[green]✓[/green] Imported {count} trades"
    if skipped:
        message += f" [yellow]({skipped} skipped)[/yellow]"
    console.print(message)


@click.command()
@click.argument("trade_id")
@click.pass_context
def delete(ctx: click.Context, trade_id: str) -> None:
    """Delete a trade."""
    store = get_data_store(get_config(ctx))
    if store.get_trade(trade_id) is None:
        fail(f"Trade not found: {trade_id}")
    store.delete_trade(trade_id)
    console.print(f"[green]✓[/green] Deleted {trade_id}")
