"""Calendar command for tradestats CLI.

Shows a month grid of daily P&L with Sunday-Saturday week totals clamped to
the displayed month. Trades are placed on the date they were opened.
"""

from datetime import date, timedelta
from typing import Optional

import click
from rich.table import Table

from tradestats.cli.common import console, fail, get_config, get_data_store, pnl_text
from tradestats.engine.calendar_grid import month_calendar
from tradestats.engine.periods import week_start

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def parse_month(value: Optional[str]) -> date:
    """Parse YYYY-MM into the first day of that month (default: this month)."""
    if value is None:
        return date.today().replace(day=1)
    try:
        year, month = value.split("-")
        return date(int(year), int(month), 1)
    except ValueError:
        fail(f"Invalid month: {value}. Use YYYY-MM.")


@click.command()
@click.option("--month", default=None, help="Month to display, YYYY-MM (default: this month).")
@click.pass_context
def calendar(ctx: click.Context, month: Optional[str]) -> None:
    """Display a month calendar with daily and weekly P&L.

    \b
    Examples:
      tradestats calendar
      tradestats calendar --month 2024-03
    """
    first = parse_month(month)
    grid = month_calendar(first, get_data_store(get_config(ctx)).get_trades())

    days = {day.date: day for day in grid.days}
    weeks = {week.saturday: week for week in grid.weeks}

    table = Table(
        title=first.strftime("%B %Y"),
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for header in WEEKDAY_HEADERS:
        table.add_column(header, justify="center")
    table.add_column("Week", justify="right", style="bold")

    sunday = week_start(first)
    while sunday.month == first.month or sunday < first:
        cells = []
        for offset in range(7):
            day = sunday + timedelta(days=offset)
            if day.month != first.month:
                cells.append("")
                continue
            cell = f"[dim]{day.day}[/dim]"
            if day in days:
                cell += f"\n{pnl_text(days[day].pnl, 0)}\n[dim]{days[day].trades}t[/dim]"
            cells.append(cell)

        week = weeks.get(sunday + timedelta(days=6))
        if week is not None and week.totals.week_days > 0:
            cells.append(
                f"{pnl_text(week.totals.week_pnl, 0)}\n"
                f"[dim]{week.totals.week_trades}t / {week.totals.week_days}d[/dim]"
            )
        else:
            cells.append("")
        table.add_row(*cells)
        sunday += timedelta(days=7)

    console.print(table)

    if not grid.days:
        console.print("[dim]No closed trades this month[/dim]")
        return

    console.print(
        f"\n[bold]Month:[/bold] {pnl_text(grid.total_pnl)} over {grid.trading_days} days "
        f"({grid.total_trades} trades)  "
        f"[green]{grid.win_days}W[/green] / [red]{grid.loss_days}L[/red]  "
        f"[bold]Day win rate:[/bold] {grid.day_win_rate:.1f}%"
    )
    console.print(
        f"[bold]Avg/day:[/bold] {pnl_text(grid.average_daily_pnl)}  "
        f"[bold]Avg trades/day:[/bold] {grid.average_daily_trades:.1f}"
    )
    if grid.best_day:
        console.print(f"[bold]Best day:[/bold] {grid.best_day.date.isoformat()} {pnl_text(grid.best_day.pnl)}")
    if grid.worst_day:
        console.print(f"[bold]Worst day:[/bold] {grid.worst_day.date.isoformat()} {pnl_text(grid.worst_day.pnl)}")
