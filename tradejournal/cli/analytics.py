"""Analytics commands for TradeJournal CLI.

Handles the dashboard summary, the P&L calendar and the
behavioral fitness verdict.
"""

import calendar
from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.journal import (
    _get_config,
    _get_data_store,
    format_money,
    month_bounds,
    parse_month,
)

console = Console()

VERDICT_STYLES = {
    "APTO": ("green", "Fit to Trade"),
    "CAUTELA": ("yellow", "Trade with Caution"),
    "NAO_RECOMENDADO": ("red", "Pause Recommended"),
}


@click.command()
@click.option(
    "--month",
    type=str,
    default=None,
    callback=parse_month,
    help="Restrict the summary to one month (YYYY-MM).",
)
def stats(month: Optional[date]) -> None:
    """Display wallet balance, goal progress and win/loss counts.

    \b
    Examples:
      tradejournal stats                 # All trades
      tradejournal stats --month 2024-05 # One month
    """
    from tradejournal.analytics.metrics import equity_curve, portfolio_overview

    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")
    store = _get_data_store(config)
    settings = store.get_settings()

    if month is not None:
        from_date, to_date = month_bounds(month)
        trade_list = store.get_trades(from_date=from_date, to_date=to_date)
    else:
        trade_list = store.get_trades()

    overview = portfolio_overview(trade_list, settings)

    variation_color = "green" if overview["variation"] >= 0 else "red"
    bar_width = 20
    filled = int(overview["goal_progress"] / 100 * bar_width)
    progress_bar = "█" * filled + "░" * (bar_width - filled)

    summary_text = (
        f"[bold]Wallet[/bold]\n\n"
        f"Initial Capital: {symbol}{overview['initial_capital']:,.2f}\n"
        f"Current Balance: {format_money(overview['current_balance'], symbol)}\n"
        f"Total P&L:       {format_money(overview['total_pnl'], symbol, signed=True)}\n"
        f"Variation:       [{variation_color}]{overview['variation']:+.2f}%[/{variation_color}]\n"
        f"{'─' * 30}\n"
        f"[bold]Monthly Goal[/bold] {symbol}{overview['monthly_goal']:,.2f}\n"
        f"[cyan]{progress_bar}[/cyan] {overview['goal_progress']:.1f}%\n"
        f"Remaining:       {symbol}{overview['remaining_goal']:,.2f}\n"
        f"{'─' * 30}\n"
        f"[dim]Trades: {overview['total_trades']} | "
        f"Wins: {overview['wins']} | "
        f"Losses: {overview['losses']} | "
        f"Breakeven: {overview['breakeven']}[/dim]"
    )

    console.print(Panel(
        summary_text,
        title="[bold cyan]Dashboard[/bold cyan]",
        border_style="cyan",
    ))

    curve = equity_curve(trade_list, settings.initial_capital)
    if len(curve) > 1:
        table = Table(
            title="Equity Curve",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Date", style="dim")
        table.add_column("P&L", justify="right")
        table.add_column("Balance", justify="right")

        # Last 10 points only
        for point in curve[-10:]:
            table.add_row(
                point["label"],
                format_money(point["pnl"], symbol, signed=True),
                f"{symbol}{point['balance']:,.2f}",
            )
        console.print(table)


@click.command(name="calendar")
@click.option(
    "--month",
    type=str,
    default=None,
    callback=parse_month,
    help="Month to display (YYYY-MM). Defaults to the current month.",
)
def calendar_view(month: Optional[date]) -> None:
    """Display daily P&L for a month.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar --month 2024-05
    """
    from tradejournal.analytics.metrics import daily_pnl

    if month is None:
        month = date.today().replace(day=1)

    config = _get_config()
    symbol = config["journal"].get("currency_symbol", "$")
    store = _get_data_store(config)

    from_date, to_date = month_bounds(month)
    trade_list = store.get_trades(from_date=from_date, to_date=to_date)
    by_day = daily_pnl(trade_list, month.year, month.month)

    table = Table(
        title=month.strftime("%B %Y"),
        show_header=True,
        header_style="bold cyan",
    )
    for day_name in calendar.day_abbr:
        table.add_column(day_name, justify="right")

    for week in calendar.Calendar().monthdayscalendar(month.year, month.month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("")
            elif day in by_day:
                cells.append(f"[bold]{day}[/bold]\n{format_money(by_day[day], symbol, signed=True)}")
            else:
                cells.append(f"[dim]{day}[/dim]")
        table.add_row(*cells)

    console.print(table)

    month_total = sum(by_day.values())
    console.print(
        f"\n[bold]Trading Days:[/bold] {len(by_day)}  "
        f"[bold]Month P&L:[/bold] {format_money(month_total, symbol, signed=True)}"
    )


@click.command()
@click.option(
    "--month",
    type=str,
    default=None,
    callback=parse_month,
    help="Month to score (YYYY-MM). Defaults to the current month.",
)
def fitness(month: Optional[date]) -> None:
    """Show the behavioral fitness verdict for a month.

    Scores win rate, profit factor, loss streaks and trade
    volume, then recommends whether to keep trading.

    \b
    Examples:
      tradejournal fitness
      tradejournal fitness --month 2024-05
    """
    from tradejournal.analytics.behavioral import (
        NO_FEEDBACK_MESSAGE,
        compute_behavioral_metrics,
    )

    config = _get_config()
    store = _get_data_store(config)

    reference = month if month is not None else datetime.now()

    try:
        metrics = compute_behavioral_metrics(
            store.get_trades(),
            settings=store.get_settings(),
            reference=reference,
        )
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to compute behavioral score:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    color, headline = VERDICT_STYLES[metrics.verdict.value]
    streak_color = "red" if metrics.consecutive_losses > 2 else "white"

    verdict_text = (
        f"[bold {color}]{headline}[/bold {color}] ({metrics.verdict.value})\n"
        f"Behavioral Score: [bold]{metrics.score:.0f}/100[/bold]\n"
        f"{'─' * 30}\n"
        f"Profit Factor:   {metrics.profit_factor:.2f}\n"
        f"Win Rate:        {metrics.win_rate:.1f}%\n"
        f"Trades:          {metrics.total_trades}\n"
        f"Loss Streak:     [{streak_color}]{metrics.consecutive_losses}[/{streak_color}]"
    )

    console.print(Panel(
        verdict_text,
        title="[bold]Behavioral Fitness[/bold]",
        border_style=color,
    ))

    if metrics.feedback:
        feedback_text = "\n".join(f"• {item}" for item in metrics.feedback)
    else:
        feedback_text = f"[dim italic]{NO_FEEDBACK_MESSAGE}[/dim italic]"

    console.print(Panel(
        feedback_text,
        title="[bold]Analysis[/bold]",
        border_style="dim",
    ))
