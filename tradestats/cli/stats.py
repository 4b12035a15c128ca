"""Statistics commands for tradestats CLI.

Handles the performance summary, consistency score and goal progress.
"""

from datetime import date

import click
from rich.panel import Panel
from rich.table import Table

from tradestats.cli.common import console, fail, get_config, get_data_store, pnl_text
from tradestats.config import get_consistency_settings, get_goals, get_starting_equity
from tradestats.engine.metrics import METRICS, evaluate_metrics
from tradestats.engine.periods import filter_trades
from tradestats.engine.summary import (
    compute_goal_progress,
    compute_period_summary,
    compute_trade_stats,
)
from tradestats.models.trade import ASSET_TYPES

TIER_STYLES = {"good": "green", "neutral": "yellow", "bad": "red"}

DEFAULT_METRICS = [
    "total_pnl",
    "win_rate",
    "profit_factor",
    "expectancy",
    "average_win",
    "average_loss",
    "sharpe_ratio",
    "recovery_factor",
    "max_drawdown",
    "max_drawdown_percent",
    "current_streak",
    "trading_days",
]


@click.command()
@click.option("--tag", "tags", multiple=True, help="Only trades carrying this tag (repeatable, all must match).")
@click.option(
    "--asset",
    "assets",
    multiple=True,
    type=click.Choice(ASSET_TYPES, case_sensitive=False),
    help="Only these asset types (repeatable).",
)
@click.option(
    "--metric",
    "metrics",
    multiple=True,
    help=f"Metrics to show (repeatable). Available: {', '.join(METRICS)}.",
)
@click.pass_context
def stats(ctx: click.Context, tags: tuple[str, ...], assets: tuple[str, ...], metrics: tuple[str, ...]) -> None:
    """Display performance statistics and the consistency score.

    \b
    Examples:
      tradestats stats
      tradestats stats --tag breakout --asset options
      tradestats stats --metric win_rate --metric sharpe_ratio
    """
    config = get_config(ctx)
    all_trades = get_data_store(config).get_trades()
    selected = filter_trades(all_trades, tags, [asset.upper() for asset in assets])

    result = compute_trade_stats(
        selected,
        settings=get_consistency_settings(config),
        starting_equity=get_starting_equity(config),
    )

    if result.total_trades == 0:
        console.print(Panel(
            "[dim]No closed trades found[/dim]"
            + (f"\n[yellow]{result.open_trades} open trades excluded[/yellow]" if result.open_trades else ""),
            title="[bold]Statistics[/bold]",
            border_style="dim",
        ))
        return

    try:
        values = evaluate_metrics(result, list(metrics) or DEFAULT_METRICS)
    except ValueError as e:
        fail(str(e))

    table = Table(title="Performance", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for value in values:
        style = TIER_STYLES[value.tier]
        table.add_row(value.label, f"[{style}]{value.display}[/{style}]")
    console.print(table)

    console.print(
        f"\n[bold]Trades:[/bold] {result.total_trades} "
        f"([green]{result.winning_trades}W[/green] / [red]{result.losing_trades}L[/red] / "
        f"{result.break_even_trades} BE)"
        + (f"  [yellow]{result.open_trades} open[/yellow]" if result.open_trades else "")
    )
    streaks = result.streaks
    console.print(
        f"[bold]Streaks:[/bold] best [green]{streaks.longest_win_streak}W[/green], "
        f"worst [red]{streaks.longest_loss_streak}L[/red]"
    )

    consistency = result.consistency
    console.print(Panel(
        f"[bold]{consistency.grade}[/bold] ({consistency.score}/100)\n\n"
        f"Win Rate       {consistency.win_rate_score:5.1f}/25\n"
        f"Profit Factor  {consistency.profit_factor_score:5.1f}/25\n"
        f"Drawdown       {consistency.drawdown_score:5.1f}/25\n"
        f"Win Streaks    {consistency.streak_score:5.1f}/25",
        title="[bold]Consistency[/bold]",
        border_style="cyan",
    ))

    summary = compute_period_summary(all_trades)
    period_table = Table(title="Periods", show_header=True, header_style="bold cyan")
    period_table.add_column("Period", style="bold")
    period_table.add_column("Trades", justify="right")
    period_table.add_column("P&L", justify="right")
    for label, count, pnl in (
        ("Week to date", summary.wtd_trades, summary.wtd_pnl),
        ("Month to date", summary.mtd_trades, summary.mtd_pnl),
        ("Year to date", summary.ytd_trades, summary.ytd_pnl),
        (str(summary.last_year), summary.last_year_trades, summary.last_year_pnl),
        ("All time", summary.all_time_trades, summary.all_time_pnl),
    ):
        period_table.add_row(label, str(count), pnl_text(pnl))
    console.print(period_table)


@click.command()
@click.pass_context
def goals(ctx: click.Context) -> None:
    """Display progress toward yearly and monthly P&L goals.

    Set goals with `tradestats config --yearly-goal N --monthly-goal N`.
    """
    config = get_config(ctx)
    targets = get_goals(config)

    if targets.yearly_pnl_goal <= 0 and targets.monthly_pnl_goal <= 0:
        console.print(Panel(
            "[dim]No goals set[/dim]\n\n"
            "Run [cyan]tradestats config --yearly-goal 50000[/cyan] to set one.",
            title="[bold]Goals[/bold]",
            border_style="dim",
        ))
        return

    today = date.today()
    summary = compute_period_summary(get_data_store(config).get_trades(), today)
    progress = compute_goal_progress(summary, targets, today)

    lines = []
    if targets.yearly_pnl_goal > 0:
        lines.append(
            f"[bold]Yearly:[/bold]  {pnl_text(summary.ytd_pnl)} of ${targets.yearly_pnl_goal:,.0f} "
            f"({progress.yearly_progress:.1f}%)"
        )
        status = "[green]on track[/green]" if progress.on_track else "[red]behind[/red]"
        lines.append(f"[bold]Projected:[/bold] {pnl_text(progress.projected_year_end, 0)} ({status})")
    if targets.monthly_pnl_goal > 0:
        lines.append(
            f"[bold]Monthly:[/bold] {pnl_text(summary.mtd_pnl)} of ${targets.monthly_pnl_goal:,.0f} "
            f"({progress.monthly_progress:.1f}%)"
        )

    console.print(Panel("\n".join(lines), title="[bold]Goals[/bold]", border_style="cyan"))
