"""Configuration command for tradestats CLI."""

from typing import Optional

import click
from pydantic import ValidationError
from rich.table import Table

from tradestats.cli.common import console, fail, get_config
from tradestats.config import (
    get_consistency_settings,
    get_db_path,
    get_goals,
    get_starting_equity,
    save_config,
)
from tradestats.models import ConsistencySettings, TradingGoals

# CLI option name -> (config section, key)
SETTINGS_KEYS = {
    "starting_equity": ("account", "starting_equity"),
    "win_rate_target": ("consistency", "win_rate_target"),
    "profit_factor_target": ("consistency", "profit_factor_target"),
    "max_drawdown_limit": ("consistency", "max_drawdown_limit"),
    "streak_target": ("consistency", "streak_target"),
    "yearly_goal": ("goals", "yearly_pnl_goal"),
    "monthly_goal": ("goals", "monthly_pnl_goal"),
}


def apply_settings(config: dict, updates: dict[str, Optional[float]]) -> dict:
    """Return a copy of ``config`` with non-None updates applied.

    Raises:
        ValueError: If the resulting consistency or goal settings are invalid.
    """
    merged = {section: dict(values) for section, values in config.items() if isinstance(values, dict)}
    for option, value in updates.items():
        if value is None:
            continue
        section, key = SETTINGS_KEYS[option]
        merged.setdefault(section, {})[key] = value

    ConsistencySettings(**merged.get("consistency", {}))
    TradingGoals(**merged.get("goals", {}))
    return merged


@click.command()
@click.option("--starting-equity", type=float, default=None, help="Account equity before the first trade.")
@click.option("--win-rate-target", type=float, default=None, help="Win rate (%) worth full points.")
@click.option("--profit-factor-target", type=float, default=None, help="Profit factor worth full points.")
@click.option("--max-drawdown-limit", type=float, default=None, help="Drawdown (%) that zeroes the drawdown score.")
@click.option("--streak-target", type=float, default=None, help="Win-day streak worth full points.")
@click.option("--yearly-goal", type=float, default=None, help="Yearly P&L goal (0 to clear).")
@click.option("--monthly-goal", type=float, default=None, help="Monthly P&L goal (0 to clear).")
@click.pass_context
def config(ctx: click.Context, **updates: Optional[float]) -> None:
    """Show or update settings.

    \b
    Examples:
      tradestats config
      tradestats config --starting-equity 25000 --streak-target 5
    """
    current = get_config(ctx)

    if any(value is not None for value in updates.values()):
        try:
            current = apply_settings(current, updates)
        except ValidationError as e:
            fail(f"Invalid setting: {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}")
        path = save_config(current, ctx.find_root().obj.get("config_path"))
        console.print(f"[green]✓[/green] Saved settings to {path}")

    consistency = get_consistency_settings(current)
    targets = get_goals(current)

    table = Table(title="Settings", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Starting equity", f"${get_starting_equity(current):,.2f}")
    table.add_row("Win rate target", f"{consistency.win_rate_target:g}%")
    table.add_row("Profit factor target", f"{consistency.profit_factor_target:g}")
    table.add_row("Max drawdown limit", f"{consistency.max_drawdown_limit:g}%")
    table.add_row("Streak target", f"{consistency.streak_target:g} days")
    table.add_row("Yearly goal", f"${targets.yearly_pnl_goal:,.0f}" if targets.yearly_pnl_goal else "-")
    table.add_row("Monthly goal", f"${targets.monthly_pnl_goal:,.0f}" if targets.monthly_pnl_goal else "-")
    table.add_row("Database", str(get_db_path(current)))
    console.print(table)
