"""Data models for TradeJournal."""

from tradejournal.models.trade import MarketType, Trade, TradeDirection, TradeResult
from tradejournal.models.settings import UserSettings
from tradejournal.models.behavioral import BehavioralMetrics, Verdict

__all__ = [
    "BehavioralMetrics",
    "MarketType",
    "Trade",
    "TradeDirection",
    "TradeResult",
    "UserSettings",
    "Verdict",
]
