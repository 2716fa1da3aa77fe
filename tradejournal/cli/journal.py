"""Journal commands for TradeJournal CLI.

Handles logging, listing and deleting trades.
"""

import calendar
from datetime import date
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.models import TradeResult

console = Console()

RESULT_COLORS = {
    TradeResult.WIN: "green",
    TradeResult.LOSS: "red",
    TradeResult.BREAKEVEN: "yellow",
}


def _get_config() -> dict:
    """Load configuration, exiting with an error panel if it is invalid."""
    from tradejournal.config import load_config

    try:
        return load_config()
    except ValueError as e:
        console.print(Panel(
            f"[red]{e}[/red]",
            title="[bold red]Configuration Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)


def _get_data_store(config: dict):
    """Get the data store instance."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import DataStore

    return DataStore(get_db_path(config))


def parse_month(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[date]:
    """Click callback turning YYYY-MM into the first day of that month."""
    if value is None:
        return None
    try:
        year, month = (int(part) for part in value.split("-"))
        return date(year, month, 1)
    except ValueError:
        raise click.BadParameter(f"Invalid month: {value}. Use YYYY-MM")


def month_bounds(month_start: date) -> tuple[date, date]:
    """Get the first and last day of a month."""
    last_day = calendar.monthrange(month_start.year, month_start.month)[1]
    return month_start, month_start.replace(day=last_day)


def format_money(value: float, symbol: str, signed: bool = False) -> str:
    """Format an amount with color and optional sign."""
    color = "green" if value >= 0 else "red"
    if value < 0:
        sign = "-"
    else:
        sign = "+" if signed else ""
    return f"[{color}]{sign}{symbol}{abs(value):,.2f}[/{color}]"


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      tradejournal init
      tradejournal init --force
    """
    from tradejournal.config import create_template_config, get_config_path

    config_path = get_config_path()
    if config_path.exists() and not force:
        console.print(Panel(
            f"Config already exists at [cyan]{config_path}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config Exists[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = create_template_config()
    console.print(Panel(
        f"Config written to [cyan]{path}[/cyan]",
        title="[bold green]Initialized[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("asset")
@click.option(
    "--date",
    "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the trade closed (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "--direction",
    type=click.Choice(["LONG", "SHORT"], case_sensitive=False),
    default="LONG",
    show_default=True,
    help="Trade direction.",
)
@click.option(
    "--market",
    "market_type",
    type=click.Choice(["SPOT", "FUTURES", "OPTIONS"], case_sensitive=False),
    default="SPOT",
    show_default=True,
    help="Market type.",
)
@click.option("--entry", "entry_price", type=float, required=True, help="Entry price.")
@click.option("--exit", "exit_price", type=float, required=True, help="Exit price.")
@click.option("--qty", "quantity", type=float, required=True, help="Quantity traded.")
@click.option("--pnl", type=float, default=None, help="Override the P&L computed from prices.")
@click.option("--stop-loss", type=float, default=None, help="Stop loss price.")
@click.option("--take-profit", type=float, default=None, help="Take profit price.")
@click.option("--entry-reason", default="", help="Why you entered.")
@click.option("--exit-reason", default="", help="Why you exited.")
@click.option("--notes", default="", help="Free-form notes.")
@click.option("--strategy", default=None, help="Strategy label.")
def add(
    asset: str,
    trade_date,
    direction: str,
    market_type: str,
    entry_price: float,
    exit_price: float,
    quantity: float,
    pnl: Optional[float],
    stop_loss: Optional[float],
    take_profit: Optional[float],
    entry_reason: str,
    exit_reason: str,
    notes: str,
    strategy: Optional[str],
) -> None:
    """Log a closed trade.

    P&L is calculated from entry/exit prices and quantity
    unless --pnl is given.

    \b
    Examples:
      tradejournal add PETR4 --entry 38.5 --exit 39.2 --qty 100
      tradejournal add BTCUSDT --direction short --entry 64000 --exit 65000 --qty 0.1
    """
    from pydantic import ValidationError

    from tradejournal.analytics.metrics import calculate_invested_value, calculate_trade_pnl
    from tradejournal.models import Trade

    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")

    direction = direction.upper()
    if pnl is None:
        pnl = calculate_trade_pnl(direction, entry_price, exit_price, quantity)

    try:
        trade = Trade(
            date=trade_date.date() if trade_date else date.today(),
            asset=asset.upper(),
            direction=direction,
            market_type=market_type.upper(),
            entry_price=entry_price,
            exit_price=exit_price,
            quantity=quantity,
            invested_value=calculate_invested_value(entry_price, quantity),
            pnl=pnl,
            stop_loss=stop_loss,
            take_profit=take_profit,
            entry_reason=entry_reason,
            exit_reason=exit_reason,
            notes=notes,
            strategy=strategy,
        )
    except ValidationError as e:
        console.print(Panel(
            f"[red]Invalid trade:[/red]\n\n{e}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    store = _get_data_store(config)
    store.save_trade(trade)

    console.print(Panel(
        f"[bold]{trade.asset}[/bold] {trade.direction.value} {trade.quantity:g} "
        f"@ {symbol}{trade.entry_price:,.2f} → {symbol}{trade.exit_price:,.2f}\n"
        f"Date: {trade.date.isoformat()}\n"
        f"P&L:  {format_money(trade.pnl, symbol, signed=True)}\n\n"
        f"[dim]ID: {trade.id}[/dim]",
        title="[bold green]Trade Logged[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option(
    "--month",
    type=str,
    default=None,
    callback=parse_month,
    help="Only show trades from this month (YYYY-MM).",
)
def trades(month: Optional[date]) -> None:
    """List logged trades.

    \b
    Examples:
      tradejournal trades                 # All trades
      tradejournal trades --month 2024-05 # One month
    """
    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")
    store = _get_data_store(config)

    if month is not None:
        from_date, to_date = month_bounds(month)
        trade_list = store.get_trades(from_date=from_date, to_date=to_date)
    else:
        trade_list = store.get_trades()

    if not trade_list:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Date", style="dim")
    table.add_column("Asset", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Qty", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("ID", style="dim")

    total_pnl = 0.0

    for trade in trade_list:
        side_color = "green" if trade.direction.value == "LONG" else "red"
        result_color = RESULT_COLORS[trade.result]
        table.add_row(
            trade.date.isoformat(),
            trade.asset,
            f"[{side_color}]{trade.direction.value}[/{side_color}]",
            f"{trade.quantity:g}",
            f"{symbol}{trade.entry_price:,.2f}",
            f"{symbol}{trade.exit_price:,.2f}",
            format_money(trade.pnl, symbol, signed=True),
            f"[{result_color}]{trade.result.value}[/{result_color}]",
            trade.id,
        )
        total_pnl += trade.pnl

    console.print(table)

    console.print(f"\n[bold]Total Trades:[/bold] {len(trade_list)}")
    console.print(f"[bold]Total P&L:[/bold] {format_money(total_pnl, symbol, signed=True)}")


@click.command()
@click.argument("trade_id")
def delete(trade_id: str) -> None:
    """Delete a trade by ID.

    \b
    Examples:
      tradejournal delete 3f2a9c0d41e84b0c9a1b2c3d4e5f6a7b
    """
    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")
    store = _get_data_store(config)

    trade = store.get_trade(trade_id)
    if trade is None:
        console.print(Panel(
            f"[red]Trade not found: {trade_id}[/red]",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    store.delete_trade(trade_id)
    console.print(
        f"[green]Deleted trade {trade_id}[/green] "
        f"({trade.date.isoformat()} {trade.asset} "
        f"{format_money(trade.pnl, symbol, signed=True)})"
    )
