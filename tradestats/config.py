"""Configuration loading for tradestats.

Settings live in ``~/.config/tradestats/config.toml``. Missing files,
sections or keys fall back to defaults; the engine itself never reads
configuration, callers pass the resulting value objects in.
"""

import logging
import math
from pathlib import Path
from typing import Any, Optional

import toml
from pydantic import ValidationError

from tradestats.models import ConsistencySettings, TradingGoals

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradestats"
CONFIG_PATH = CONFIG_DIR / "config.toml"
DB_PATH = CONFIG_DIR / "tradestats.db"

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "account": {"starting_equity": 0.0},
    "consistency": ConsistencySettings().model_dump(),
    "goals": TradingGoals().model_dump(),
}


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration, or an empty dict if it is missing or invalid.

    Args:
        config_path: Path to the config file; defaults to ``CONFIG_PATH``.
    """
    config_path = config_path or CONFIG_PATH
    if not config_path.exists():
        return {}
    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def save_config(config: dict[str, Any], config_path: Optional[Path] = None) -> Path:
    """Write configuration to disk.

    Args:
        config: Configuration dictionary.
        config_path: Path to the config file; defaults to ``CONFIG_PATH``.

    Returns:
        The path written.
    """
    config_path = config_path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        toml.dump(config, f)
    return config_path


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    """The ``[name]`` table, or an empty one when absent or not a table."""
    section = config.get(name, {})
    if not isinstance(section, dict):
        logger.warning("Ignoring [%s]: expected a table, got %r", name, section)
        return {}
    return section


def get_starting_equity(config: dict[str, Any]) -> float:
    """Starting account equity; 0 when absent or not a finite number."""
    value = _section(config, "account").get("starting_equity", 0.0)
    try:
        equity = float(value)
    except (TypeError, ValueError):
        equity = math.nan
    if not math.isfinite(equity):
        logger.warning("Invalid starting_equity %r, using 0", value)
        return 0.0
    return equity


def get_consistency_settings(config: dict[str, Any]) -> ConsistencySettings:
    """Consistency targets, with defaults for anything missing or invalid."""
    try:
        return ConsistencySettings(**_section(config, "consistency"))
    except ValidationError as e:
        logger.warning("Invalid [consistency] settings, using defaults: %s", e.errors()[0]["msg"])
        return ConsistencySettings()


def get_goals(config: dict[str, Any]) -> TradingGoals:
    """P&L goals, with defaults for anything missing or invalid."""
    try:
        return TradingGoals(**_section(config, "goals"))
    except ValidationError as e:
        logger.warning("Invalid [goals] settings, using defaults: %s", e.errors()[0]["msg"])
        return TradingGoals()


def get_db_path(config: dict[str, Any]) -> Path:
    """Trade database path from ``[database] path``, else ``DB_PATH``."""
    path = _section(config, "database").get("path")
    if path is not None and not isinstance(path, str):
        logger.warning("Invalid database path %r, using %s", path, DB_PATH)
        return DB_PATH
    return Path(path).expanduser() if path else DB_PATH
