"""Property-based tests for the database store.

**Feature: trade-journal**
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.db.store import DataStore
from tradejournal.models import MarketType, Trade, TradeDirection, UserSettings


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


def trade_strategy():
    """Generate valid Trade objects for testing."""
    prices = st.floats(min_value=0, max_value=100000, allow_nan=False, allow_infinity=False)
    return st.builds(
        Trade,
        date=st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31)),
        asset=st.text(
            alphabet=st.characters(whitelist_categories=("Lu", "Nd")),
            min_size=1,
            max_size=10,
        ),
        direction=st.sampled_from(list(TradeDirection)),
        market_type=st.sampled_from(list(MarketType)),
        entry_price=prices,
        exit_price=prices,
        quantity=prices,
        pnl=st.integers(min_value=-10_000_000, max_value=10_000_000).map(lambda c: c / 100),
        stop_loss=st.one_of(st.none(), prices),
        notes=st.text(
            alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
            max_size=50,
        ),
        strategy=st.one_of(st.none(), st.sampled_from(["breakout", "pullback"])),
    )


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trade-journal, Property 8: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopen_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "journal.db"
            DataStore(db_path).save_trade(Trade(date=date(2024, 5, 1), asset="A", pnl=1.0))

            assert len(DataStore(db_path).get_trades()) == 1


class TestTradeRoundTrip:
    """
    **Feature: trade-journal, Property 9: Trade Persistence**

    *For any* saved trade, it should be retrievable unchanged by ID;
    after deletion, it should not be retrievable.
    """

    @given(trade=trade_strategy())
    @settings(max_examples=50)
    def test_save_and_get(self, trade: Trade):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            store.save_trade(trade)

            assert store.get_trade(trade.id) == trade

    @given(trade=trade_strategy())
    @settings(max_examples=30)
    def test_save_then_delete(self, trade: Trade):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            store.save_trade(trade)
            assert store.delete_trade(trade.id) is True

            assert store.get_trade(trade.id) is None
            assert store.delete_trade(trade.id) is False

    def test_save_same_id_replaces(self, temp_db: DataStore):
        trade = Trade(id="abc", date=date(2024, 5, 1), asset="A", pnl=1.0)
        temp_db.save_trade(trade)
        temp_db.save_trade(trade.model_copy(update={"pnl": -3.0}))

        trades = temp_db.get_trades()

        assert len(trades) == 1
        assert trades[0].pnl == -3.0


class TestTradeQueries:
    """Tests for date-filtered trade retrieval."""

    def _seed(self, store: DataStore) -> None:
        for day, month in [(15, 4), (1, 5), (20, 5), (31, 5), (1, 6)]:
            store.save_trade(Trade(date=date(2024, month, day), asset="T", pnl=float(day)))

    def test_ordered_by_date(self, temp_db: DataStore):
        temp_db.save_trade(Trade(date=date(2024, 5, 3), asset="C", pnl=1.0))
        temp_db.save_trade(Trade(date=date(2024, 5, 1), asset="A", pnl=1.0))
        temp_db.save_trade(Trade(date=date(2024, 5, 2), asset="B", pnl=1.0))

        assert [t.asset for t in temp_db.get_trades()] == ["A", "B", "C"]

    def test_month_range_inclusive(self, temp_db: DataStore):
        self._seed(temp_db)

        trades = temp_db.get_trades(from_date=date(2024, 5, 1), to_date=date(2024, 5, 31))

        assert [t.date.day for t in trades] == [1, 20, 31]

    def test_open_ended_range(self, temp_db: DataStore):
        self._seed(temp_db)

        assert len(temp_db.get_trades(from_date=date(2024, 5, 20))) == 3
        assert len(temp_db.get_trades(to_date=date(2024, 5, 1))) == 2

    def test_inverted_range_rejected(self, temp_db: DataStore):
        with pytest.raises(ValueError):
            temp_db.get_trades(from_date=date(2024, 6, 1), to_date=date(2024, 5, 1))


class TestSettings:
    """Tests for user settings persistence."""

    def test_defaults_when_unsaved(self, temp_db: DataStore):
        assert temp_db.get_settings() == UserSettings()

    @given(
        capital=st.floats(min_value=0, max_value=1e9, allow_nan=False, allow_infinity=False),
        goal=st.floats(min_value=0, max_value=1e7, allow_nan=False, allow_infinity=False),
        risk=st.floats(min_value=0, max_value=100, allow_nan=False, allow_infinity=False),
    )
    @settings(max_examples=30)
    def test_save_and_load(self, capital: float, goal: float, risk: float):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            user_settings = UserSettings(
                initial_capital=capital, monthly_goal=goal, risk_per_trade=risk
            )

            store.save_settings(user_settings)
            store.save_settings(user_settings)

            assert store.get_settings() == user_settings
            assert store.get_stats()["settings"] == 1

    def test_stats_counts(self, temp_db: DataStore):
        temp_db.save_trade(Trade(date=date(2024, 5, 1), asset="A", pnl=1.0))

        assert temp_db.get_stats() == {"trades": 1, "settings": 0}
