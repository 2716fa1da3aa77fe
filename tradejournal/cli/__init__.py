"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including trade logging, dashboard statistics and behavioral scoring.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
