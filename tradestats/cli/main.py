"""Main CLI entry point for tradestats.

Subcommands are imported on first use, so ``tradestats --help`` and simple
commands start without loading the whole engine.
"""

import importlib
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler


class LazyGroup(click.Group):
    """A click Group whose subcommands are imported on demand."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the group.

        Args:
            lazy_subcommands: Command name -> ``"module.path:attribute"``.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = self.commands.get(cmd_name)
        if command is None and cmd_name in self._lazy_subcommands:
            command = self._import_command(cmd_name)
            self.add_command(command, cmd_name)
        return command

    def _import_command(self, cmd_name: str) -> click.Command:
        """Import the command registered under ``cmd_name``."""
        target = self._lazy_subcommands[cmd_name]
        module_path, _, attr_name = target.partition(":")
        command = getattr(importlib.import_module(module_path), attr_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(f"Could not load command '{cmd_name}' from {target}")
        return command


# Command name -> "module:attribute"
LAZY_SUBCOMMANDS = {
    "add": "tradestats.cli.trades:add",
    "close": "tradestats.cli.trades:close",
    "trades": "tradestats.cli.trades:trades",
    "import": "tradestats.cli.trades:import_trades",
    "delete": "tradestats.cli.trades:delete",
    "stats": "tradestats.cli.stats:stats",
    "goals": "tradestats.cli.stats:goals",
    "equity": "tradestats.cli.equity:equity",
    "calendar": "tradestats.cli.calendar_view:calendar",
    "config": "tradestats.cli.settings:config",
}

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradestats")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/tradestats/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """tradestats - trading journal performance analytics.

    Record trades, then review equity curves, drawdowns, streaks and a
    consistency score for any period.

    \b
    Getting started:
      tradestats add AAPL --pnl 250       # Log a closed trade
      tradestats stats                    # All-time statistics
      tradestats equity --period ytd      # Year-to-date equity curve
      tradestats calendar                 # This month's calendar
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
