"""SQLite trade store for tradestats."""

import json
import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradestats.models import Trade
from tradestats.models.trade import TradeStatus

logger = logging.getLogger(__name__)

TRADE_COLUMNS = [
    "id",
    "date",
    "close_date",
    "time",
    "ticker",
    "direction",
    "asset_type",
    "status",
    "entry_price",
    "exit_price",
    "size",
    "pnl",
    "tags",
    "notes",
    "option_type",
    "strike_price",
    "expiration_date",
    "premium",
    "underlying_ticker",
]


class DataStore:
    """SQLite-based trade store."""

    REQUIRED_TABLES = ["trades"]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    close_date TEXT,
                    time TEXT,
                    ticker TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    asset_type TEXT NOT NULL,
                    status TEXT NOT NULL,
                    entry_price REAL,
                    exit_price REAL,
                    size REAL,
                    pnl REAL NOT NULL DEFAULT 0,
                    tags TEXT NOT NULL DEFAULT '[]',
                    notes TEXT,
                    option_type TEXT,
                    strike_price REAL,
                    expiration_date TEXT,
                    premium REAL,
                    underlying_ticker TEXT
                )
            """)
            cursor.execute("CREATE INDEX IF NOT EXISTS idx_trades_date ON trades(date)")
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @staticmethod
    def _to_row(trade: Trade) -> tuple:
        return (
            trade.id,
            trade.date.isoformat(),
            trade.close_date.isoformat() if trade.close_date else None,
            trade.time,
            trade.ticker,
            trade.direction,
            trade.asset_type,
            trade.status,
            trade.entry_price,
            trade.exit_price,
            trade.size,
            trade.pnl,
            json.dumps(sorted(trade.tags)),
            trade.notes,
            trade.option_type,
            trade.strike_price,
            trade.expiration_date.isoformat() if trade.expiration_date else None,
            trade.premium,
            trade.underlying_ticker,
        )

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Optional[Trade]:
        """Build a trade from a row, or None if the row is malformed."""
        record = dict(row)
        try:
            record["tags"] = json.loads(record["tags"] or "[]")
            return Trade.model_validate(record)
        except (ValidationError, json.JSONDecodeError) as e:
            logger.warning("Skipping malformed trade row %s: %s", record.get("id"), e)
            return None

    # ==================== Trades ====================

    def log_trade(self, trade: Trade) -> None:
        """Insert or replace a trade.

        Args:
            trade: Trade to save.
        """
        placeholders = ", ".join("?" for _ in TRADE_COLUMNS)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT OR REPLACE INTO trades ({', '.join(TRADE_COLUMNS)}) VALUES ({placeholders})",
                self._to_row(trade),
            )
            conn.commit()
        finally:
            conn.close()

    def log_trades(self, trades: list[Trade]) -> int:
        """Insert or replace several trades in one transaction.

        Returns:
            Number of trades written.
        """
        placeholders = ", ".join("?" for _ in TRADE_COLUMNS)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.executemany(
                f"INSERT OR REPLACE INTO trades ({', '.join(TRADE_COLUMNS)}) VALUES ({placeholders})",
                [self._to_row(trade) for trade in trades],
            )
            conn.commit()
            return len(trades)
        finally:
            conn.close()

    def get_trades(
        self,
        status: Optional[TradeStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[Trade]:
        """Get trades from the database.

        Malformed rows are skipped with a warning rather than failing the
        whole read.

        Args:
            status: Optional status filter.
            from_date: Optional inclusive lower bound on the open date.
            to_date: Optional inclusive upper bound on the open date.

        Returns:
            List of trades ordered by date and time.
        """
        clauses = []
        params: list = []
        if status:
            clauses.append("status = ?")
            params.append(status)
        if from_date:
            clauses.append("date >= ?")
            params.append(from_date.isoformat())
        if to_date:
            clauses.append("date <= ?")
            params.append(to_date.isoformat())
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {', '.join(TRADE_COLUMNS)} FROM trades {where} ORDER BY date, time, id",
                params,
            )
            trades = [self._from_row(row) for row in cursor.fetchall()]
            return [trade for trade in trades if trade is not None]
        finally:
            conn.close()

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        """Get a trade by ID.

        Args:
            trade_id: Trade ID.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {', '.join(TRADE_COLUMNS)} FROM trades WHERE id = ?",
                (trade_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._from_row(row)
            return None
        finally:
            conn.close()

    def close_trade(
        self,
        trade_id: str,
        close_date: date,
        pnl: float,
        exit_price: Optional[float] = None,
    ) -> Trade:
        """Close an open trade.

        Args:
            trade_id: ID of the open trade.
            close_date: Date the position was closed.
            pnl: Realized P&L.
            exit_price: Optional exit price.

        Returns:
            The closed trade.

        Raises:
            ValueError: If the trade does not exist or is already closed.
        """
        trade = self.get_trade(trade_id)
        if trade is None:
            raise ValueError(f"Trade not found: {trade_id}")
        closed = trade.close(close_date, pnl, exit_price)
        self.log_trade(closed)
        return closed

    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with trade counts by status.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT status, COUNT(*) as count FROM trades GROUP BY status")
            stats = {"OPEN": 0, "CLOSED": 0}
            for row in cursor.fetchall():
                stats[row["status"]] = row["count"]
            stats["total"] = stats["OPEN"] + stats["CLOSED"]
            return stats
        finally:
            conn.close()
