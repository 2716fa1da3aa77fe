"""Property-based tests for shared P&L metrics.

**Feature: trade-journal**
"""

from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from tradejournal.analytics.metrics import (
    calculate_invested_value,
    calculate_trade_pnl,
    daily_pnl,
    equity_curve,
    max_consecutive_losses,
    portfolio_overview,
    summarize_trades,
)
from tradejournal.models import Trade, TradeDirection, TradeResult, UserSettings


# Strategy for generating valid trade data
def trade_strategy():
    """Generate valid Trade objects for testing."""
    return st.builds(
        Trade,
        date=st.dates(min_value=date(2020, 1, 1), max_value=date(2025, 12, 31)),
        asset=st.text(
            alphabet=st.characters(whitelist_categories=("Lu",)),
            min_size=1,
            max_size=10,
        ).filter(lambda x: x.strip() != ""),
        direction=st.sampled_from(list(TradeDirection)),
        pnl=st.integers(min_value=-10_000_000, max_value=10_000_000).map(lambda c: c / 100),
    )


class TestFiniteValues:
    """Non-finite amounts never enter the models."""

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_trade_pnl_must_be_finite(self, value: float):
        with pytest.raises(ValidationError):
            Trade(date=date(2024, 5, 1), asset="X", pnl=value)

    @pytest.mark.parametrize("field", ["entry_price", "exit_price", "quantity", "invested_value"])
    def test_trade_amounts_must_be_finite(self, field: str):
        with pytest.raises(ValidationError):
            Trade(date=date(2024, 5, 1), asset="X", pnl=0.0, **{field: float("inf")})

    @pytest.mark.parametrize("field", ["initial_capital", "monthly_goal", "risk_per_trade"])
    def test_settings_must_be_finite(self, field: str):
        with pytest.raises(ValidationError):
            UserSettings(**{field: float("nan")})


class TestTradePnL:
    """Tests for P&L calculated from prices."""

    def test_long_trade(self):
        assert calculate_trade_pnl(TradeDirection.LONG, 100.0, 110.0, 5) == 50.0

    def test_short_trade(self):
        assert calculate_trade_pnl(TradeDirection.SHORT, 100.0, 110.0, 5) == -50.0

    def test_accepts_string_direction(self):
        assert calculate_trade_pnl("SHORT", 38.5, 37.25, 100) == 125.0

    def test_rounded_to_cents(self):
        assert calculate_trade_pnl("LONG", 0.1, 0.2, 3) == 0.3

    def test_invested_value(self):
        assert calculate_invested_value(38.5, 100) == 3850.0

    @given(
        entry=st.floats(min_value=0.01, max_value=100000, allow_nan=False, allow_infinity=False),
        exit_=st.floats(min_value=0.01, max_value=100000, allow_nan=False, allow_infinity=False),
        qty=st.floats(min_value=0.0001, max_value=10000, allow_nan=False, allow_infinity=False),
    )
    @settings(max_examples=100)
    def test_long_and_short_are_opposite(self, entry: float, exit_: float, qty: float):
        """
        *For any* prices and quantity, LONG and SHORT P&L have
        opposite signs and equal magnitude.
        """
        long_pnl = calculate_trade_pnl(TradeDirection.LONG, entry, exit_, qty)
        short_pnl = calculate_trade_pnl(TradeDirection.SHORT, entry, exit_, qty)

        assert long_pnl == -short_pnl


class TestTradeSummary:
    """
    **Feature: trade-journal, Property 6: Summary Partition**

    *For any* set of trades, wins, losses and breakeven trades
    partition the set and the total P&L is the sum of trade P&Ls.
    """

    def test_empty_trades_returns_zero_summary(self):
        summary = summarize_trades([])

        assert summary["total_trades"] == 0
        assert summary["wins"] == 0
        assert summary["losses"] == 0
        assert summary["breakeven"] == 0
        assert summary["total_pnl"] == 0.0

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_counts_partition_trades(self, trades: list[Trade]):
        summary = summarize_trades(trades)

        assert summary["wins"] + summary["losses"] + summary["breakeven"] == len(trades)
        assert summary["wins"] == sum(1 for t in trades if t.result == TradeResult.WIN)
        assert summary["losses"] == sum(1 for t in trades if t.result == TradeResult.LOSS)

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=100)
    def test_pnl_sum_equals_total(self, trades: list[Trade]):
        summary = summarize_trades(trades)

        expected = sum(t.pnl for t in trades)
        assert abs(summary["total_pnl"] - expected) < 0.01
        assert abs(summary["gross_profit"] - summary["gross_loss"] - expected) < 0.01

    def test_zero_pnl_is_breakeven(self):
        trades = [
            Trade(date=date(2024, 5, 1), asset="WIN", pnl=100.0),
            Trade(date=date(2024, 5, 1), asset="LOSE", pnl=-50.0),
            Trade(date=date(2024, 5, 1), asset="ZERO", pnl=0.0),
        ]

        summary = summarize_trades(trades)

        assert summary["wins"] == 1
        assert summary["losses"] == 1
        assert summary["breakeven"] == 1
        assert trades[2].result == TradeResult.BREAKEVEN


class TestMaxConsecutiveLosses:
    """Tests for the shared streak detector."""

    def test_empty(self):
        assert max_consecutive_losses([]) == 0

    def test_longest_run_wins(self):
        pnls = [-1, -1, 5, -1, -1, -1, 0, -1]
        trades = [
            Trade(date=date(2024, 5, i + 1), asset="T", pnl=float(p))
            for i, p in enumerate(pnls)
        ]
        assert max_consecutive_losses(trades) == 3

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=50))
    @settings(max_examples=50)
    def test_bounded_by_loss_count(self, trades: list[Trade]):
        streak = max_consecutive_losses(trades)

        assert 0 <= streak <= sum(1 for t in trades if t.pnl < 0)


class TestEquityCurve:
    """
    **Feature: trade-journal, Property 7: Equity Curve Consistency**

    *For any* set of trades, the curve starts at the initial capital and
    ends at initial capital plus total P&L.
    """

    def test_empty_curve_has_start_point(self):
        curve = equity_curve([], 10000.0)

        assert curve == [{"label": "Start", "balance": 10000.0, "pnl": 0.0}]

    @given(
        trades=st.lists(trade_strategy(), min_size=0, max_size=50),
        initial=st.floats(min_value=0, max_value=1_000_000, allow_nan=False, allow_infinity=False),
    )
    @settings(max_examples=100)
    def test_final_balance(self, trades: list[Trade], initial: float):
        curve = equity_curve(trades, initial)

        assert len(curve) == len(trades) + 1
        assert curve[0]["balance"] == initial
        expected = initial + sum(t.pnl for t in trades)
        assert abs(curve[-1]["balance"] - expected) < 0.01

    def test_points_are_chronological(self):
        trades = [
            Trade(date=date(2024, 5, 3), asset="C", pnl=30.0),
            Trade(date=date(2024, 5, 1), asset="A", pnl=10.0),
            Trade(date=date(2024, 5, 2), asset="B", pnl=-20.0),
        ]

        curve = equity_curve(trades, 100.0)

        assert [p["label"] for p in curve] == ["Start", "2024-05-01", "2024-05-02", "2024-05-03"]
        assert [p["balance"] for p in curve] == [100.0, 110.0, 90.0, 120.0]


class TestPortfolioOverview:
    """Tests for wallet and goal calculations."""

    def _trades(self, *pnls: float) -> list[Trade]:
        return [Trade(date=date(2024, 5, 1), asset="T", pnl=p) for p in pnls]

    def test_balance_and_variation(self):
        overview = portfolio_overview(
            self._trades(300.0, -100.0),
            UserSettings(initial_capital=10000.0, monthly_goal=1000.0),
        )

        assert overview["current_balance"] == 10200.0
        assert overview["variation"] == pytest.approx(2.0)
        assert overview["goal_progress"] == pytest.approx(20.0)
        assert overview["remaining_goal"] == 800.0

    def test_zero_initial_capital(self):
        overview = portfolio_overview(
            self._trades(100.0), UserSettings(initial_capital=0.0)
        )
        assert overview["variation"] == 0.0

    def test_zero_goal_treated_as_one(self):
        overview = portfolio_overview(
            self._trades(0.5), UserSettings(monthly_goal=0.0)
        )

        assert overview["monthly_goal"] == 1.0
        assert overview["goal_progress"] == pytest.approx(50.0)
        assert overview["remaining_goal"] == pytest.approx(0.5)

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=30))
    @settings(max_examples=50)
    def test_goal_progress_bounds(self, trades: list[Trade]):
        overview = portfolio_overview(trades, UserSettings())

        assert 0 <= overview["goal_progress"] <= 100
        assert overview["remaining_goal"] >= 0


class TestDailyPnL:
    """Tests for the calendar aggregation."""

    def test_sums_per_day_within_month(self):
        trades = [
            Trade(date=date(2024, 5, 2), asset="A", pnl=10.0),
            Trade(date=date(2024, 5, 2), asset="B", pnl=-4.0),
            Trade(date=date(2024, 5, 9), asset="C", pnl=7.5),
            Trade(date=date(2024, 6, 2), asset="D", pnl=100.0),
        ]

        assert daily_pnl(trades, 2024, 5) == {2: 6.0, 9: 7.5}

    def test_empty_month(self):
        assert daily_pnl([], 2024, 5) == {}
