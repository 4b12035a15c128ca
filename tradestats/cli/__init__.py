"""CLI commands for tradestats.

This package provides the command-line interface for tradestats,
including trade entry, statistics, equity curves and the calendar.
"""

from tradestats.cli.main import cli, main

__all__ = ["cli", "main"]
