"""TradeJournal - personal trading journal with behavioral fitness scoring."""

__version__ = "0.1.0"
