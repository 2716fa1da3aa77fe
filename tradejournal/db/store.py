"""SQLite data store for TradeJournal."""

import logging
import sqlite3
from datetime import date
from pathlib import Path
from typing import Optional

from tradejournal.models import Trade, UserSettings

logger = logging.getLogger(__name__)

TRADE_COLUMNS = (
    "id, date, asset, direction, market_type, entry_price, exit_price, "
    "quantity, invested_value, pnl, stop_loss, take_profit, entry_reason, "
    "exit_reason, notes, image_url, strategy"
)


class DataStore:
    """SQLite-based data store for TradeJournal."""

    REQUIRED_TABLES = [
        "trades",
        "settings",
    ]

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
                    asset TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    market_type TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL NOT NULL,
                    quantity REAL NOT NULL,
                    invested_value REAL NOT NULL,
                    pnl REAL NOT NULL,
                    stop_loss REAL,
                    take_profit REAL,
                    entry_reason TEXT NOT NULL DEFAULT '',
                    exit_reason TEXT NOT NULL DEFAULT '',
                    notes TEXT NOT NULL DEFAULT '',
                    image_url TEXT,
                    strategy TEXT
                )
            """)

            # Single-row table, id is always 1
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    initial_capital REAL NOT NULL,
                    monthly_goal REAL NOT NULL,
                    risk_per_trade REAL NOT NULL
                )
            """)

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
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            asset=row["asset"],
            direction=row["direction"],
            market_type=row["market_type"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            quantity=row["quantity"],
            invested_value=row["invested_value"],
            pnl=row["pnl"],
            stop_loss=row["stop_loss"],
            take_profit=row["take_profit"],
            entry_reason=row["entry_reason"],
            exit_reason=row["exit_reason"],
            notes=row["notes"],
            image_url=row["image_url"],
            strategy=row["strategy"],
        )

    # ==================== Trades ====================

    def save_trade(self, trade: Trade) -> None:
        """Insert or update a trade.

        Args:
            trade: Trade to save. An existing trade with the same id is
                replaced.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT OR REPLACE INTO trades ({TRADE_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.id,
                    trade.date.isoformat(),
                    trade.asset,
                    trade.direction.value,
                    trade.market_type.value,
                    trade.entry_price,
                    trade.exit_price,
                    trade.quantity,
                    trade.invested_value,
                    trade.pnl,
                    trade.stop_loss,
                    trade.take_profit,
                    trade.entry_reason,
                    trade.exit_reason,
                    trade.notes,
                    trade.image_url,
                    trade.strategy,
                ),
            )
            conn.commit()
            logger.info("Saved trade %s (%s %s)", trade.id, trade.asset, trade.date)
        finally:
            conn.close()

    def get_trades(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[Trade]:
        """Get trades from the database.

        Args:
            from_date: Optional inclusive start date.
            to_date: Optional inclusive end date.

        Returns:
            List of trades ordered by date.

        Raises:
            ValueError: If from_date is after to_date.
        """
        if from_date and to_date and from_date > to_date:
            raise ValueError(f"from_date {from_date} is after to_date {to_date}")

        clauses = []
        params: list[str] = []
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
                f"SELECT {TRADE_COLUMNS} FROM trades {where} ORDER BY date, rowid",
                params,
            )
            return [self._row_to_trade(row) for row in cursor.fetchall()]
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
                f"SELECT {TRADE_COLUMNS} FROM trades WHERE id = ?",
                (trade_id,),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_trade(row)
            return None
        finally:
            conn.close()

    def delete_trade(self, trade_id: str) -> bool:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.

        Returns:
            True if a trade was deleted.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("Deleted trade %s", trade_id)
            return deleted
        finally:
            conn.close()

    # ==================== Settings ====================

    def get_settings(self) -> UserSettings:
        """Get user settings, or defaults if none were saved."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT initial_capital, monthly_goal, risk_per_trade
                FROM settings
                WHERE id = 1
                """
            )
            row = cursor.fetchone()
            if row:
                return UserSettings(
                    initial_capital=row["initial_capital"],
                    monthly_goal=row["monthly_goal"],
                    risk_per_trade=row["risk_per_trade"],
                )
            return UserSettings()
        finally:
            conn.close()

    def save_settings(self, settings: UserSettings) -> None:
        """Save user settings.

        Args:
            settings: Settings to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO settings
                (id, initial_capital, monthly_goal, risk_per_trade)
                VALUES (1, ?, ?, ?)
                """,
                (
                    settings.initial_capital,
                    settings.monthly_goal,
                    settings.risk_per_trade,
                ),
            )
            conn.commit()
            logger.info("Saved settings")
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
