"""Settings commands for TradeJournal CLI.

Handles viewing and updating account settings.
"""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.cli.journal import _get_config, _get_data_store

console = Console()


@click.group(name="settings")
def settings_group() -> None:
    """View and update account settings.

    \b
    Examples:
      tradejournal settings show
      tradejournal settings set --capital 25000 --goal 2000
    """
    pass


@settings_group.command()
def show() -> None:
    """Display current account settings."""
    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")
    store = _get_data_store(config)
    settings = store.get_settings()
    counts = store.get_stats()

    console.print(Panel(
        f"Initial Capital: {symbol}{settings.initial_capital:,.2f}\n"
        f"Monthly Goal:    {symbol}{settings.monthly_goal:,.2f}\n"
        f"Risk per Trade:  {settings.risk_per_trade:.2f}%\n"
        f"{'─' * 30}\n"
        f"[dim]Database: {store.db_path}\n"
        f"Trades stored: {counts['trades']}[/dim]",
        title="[bold cyan]Settings[/bold cyan]",
        border_style="cyan",
    ))


@settings_group.command(name="set")
@click.option("--capital", type=float, default=None, help="Initial capital.")
@click.option("--goal", type=float, default=None, help="Monthly P&L goal.")
@click.option("--risk", type=float, default=None, help="Risk per trade (percent).")
def set_settings(
    capital: Optional[float],
    goal: Optional[float],
    risk: Optional[float],
) -> None:
    """Update account settings.

    Only the options given are changed.
    """
    from pydantic import ValidationError

    from tradejournal.models import UserSettings

    if capital is None and goal is None and risk is None:
        raise click.UsageError("Provide at least one of --capital, --goal or --risk.")

    config = _get_config()
    store = _get_data_store(config)
    current = store.get_settings()

    updates = {
        key: value
        for key, value in (
            ("initial_capital", capital),
            ("monthly_goal", goal),
            ("risk_per_trade", risk),
        )
        if value is not None
    }

    try:
        # model_copy skips validation, so rebuild instead
        new_settings = UserSettings(**{**current.model_dump(), **updates})
    except ValidationError as e:
        console.print(Panel(
            f"[red]Invalid settings:[/red]\n\n{e}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    store.save_settings(new_settings)
    console.print("[green]Settings saved.[/green]")
