"""Local persistence for TradeJournal."""
