"""Equity curve command for tradestats CLI."""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradestats.cli.common import console, fail, get_config, get_data_store, parse_date, pnl_text
from tradestats.config import get_starting_equity
from tradestats.engine.periods import resolve_period
from tradestats.models import CustomFilter
from tradestats.models.trade import ASSET_TYPES


def build_custom_filter(
    from_date: Optional[str],
    to_date: Optional[str],
    days: Optional[int],
    last: Optional[int],
) -> Optional[CustomFilter]:
    """Build a custom filter from mutually exclusive CLI options.

    Returns:
        The filter, or None when no custom option was given.

    Raises:
        click.UsageError: If options from more than one filter kind are combined.
    """
    given = [from_date is not None or to_date is not None, days is not None, last is not None]
    if sum(given) > 1:
        raise click.UsageError("Use only one of --from/--to, --days or --last.")
    if given[0]:
        if from_date is None or to_date is None:
            raise click.UsageError("--from and --to must be used together.")
        return CustomFilter(
            kind="dateRange",
            start=parse_date(from_date, "from date"),
            end=parse_date(to_date, "to date"),
        )
    if days is not None:
        return CustomFilter(kind="daysBack", days_back=days)
    if last is not None:
        return CustomFilter(kind="tradesBack", trades_back=last)
    return None


@click.command()
@click.option(
    "--period",
    type=click.Choice(["all", "ytd", "mtd", "wtd"], case_sensitive=False),
    default="all",
    help="Period to display.",
)
@click.option("--from", "from_date", default=None, help="Custom range start, YYYY-MM-DD.")
@click.option("--to", "to_date", default=None, help="Custom range end, YYYY-MM-DD.")
@click.option("--days", type=click.IntRange(min=0), default=None, help="Last N days.")
@click.option("--last", type=click.IntRange(min=0), default=None, help="Last N trades.")
@click.option("--tag", "tags", multiple=True, help="Only trades carrying this tag (repeatable, all must match).")
@click.option(
    "--asset",
    "assets",
    multiple=True,
    type=click.Choice(ASSET_TYPES, case_sensitive=False),
    help="Only these asset types (repeatable).",
)
@click.pass_context
def equity(
    ctx: click.Context,
    period: str,
    from_date: Optional[str],
    to_date: Optional[str],
    days: Optional[int],
    last: Optional[int],
    tags: tuple[str, ...],
    assets: tuple[str, ...],
) -> None:
    """Display the equity curve for a period.

    The curve starts from the account equity at the start of the period,
    replayed from every earlier trade regardless of --tag/--asset filters.

    \b
    Examples:
      tradestats equity --period ytd
      tradestats equity --from 2024-01-01 --to 2024-03-31 --tag breakout
      tradestats equity --last 20
    """
    config = get_config(ctx)

    try:
        custom = build_custom_filter(from_date, to_date, days, last)
    except ValidationError as e:
        fail(f"Invalid custom period: {e.errors()[0]['msg']}")

    result = resolve_period(
        get_data_store(config).get_trades(),
        period="custom" if custom else period.lower(),
        tag_filter=tags,
        asset_filter=[asset.upper() for asset in assets],
        custom=custom,
        starting_equity=get_starting_equity(config),
    )

    header = f"[bold]Starting equity:[/bold] ${result.starting_equity:,.2f}"
    if result.date_range:
        header += (
            f"\n[bold]Range:[/bold] {result.date_range.start.isoformat()} "
            f"to {result.date_range.end.isoformat()}"
        )

    if not result.data:
        console.print(Panel(
            header + "\n\n[dim]No closed trades in this period[/dim]",
            title=f"[bold]Equity ({result.period})[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=f"Equity ({result.period})", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Drawdown", justify="right")

    for point in result.data:
        table.add_row(
            point.date.isoformat() + (f" {point.time}" if point.time else ""),
            str(point.trade_count),
            pnl_text(point.pnl),
            f"${point.cumulative:,.2f}",
            f"[red]-${point.drawdown:,.2f} ({point.drawdown_percent:.1f}%)[/red]" if point.drawdown else "-",
        )

    console.print(Panel(header, border_style="cyan"))
    console.print(table)
    console.print(
        f"\n[bold]Period P&L:[/bold] {pnl_text(result.period_pnl)}  "
        f"[bold]Ending equity:[/bold] ${result.ending_equity:,.2f}  "
        f"[bold]Trades:[/bold] {result.trade_count}"
    )
