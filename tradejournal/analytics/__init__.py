"""Trade analytics: shared P&L metrics and behavioral scoring."""

from tradejournal.analytics.behavioral import (
    aggregate_statistics,
    apply_scoring_rules,
    classify_verdict,
    compute_behavioral_metrics,
    filter_month_trades,
)
from tradejournal.analytics.metrics import (
    calculate_invested_value,
    calculate_trade_pnl,
    daily_pnl,
    equity_curve,
    max_consecutive_losses,
    portfolio_overview,
    summarize_trades,
)

__all__ = [
    "aggregate_statistics",
    "apply_scoring_rules",
    "calculate_invested_value",
    "calculate_trade_pnl",
    "classify_verdict",
    "compute_behavioral_metrics",
    "daily_pnl",
    "equity_curve",
    "filter_month_trades",
    "max_consecutive_losses",
    "portfolio_overview",
    "summarize_trades",
]
