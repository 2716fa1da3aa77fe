"""Shared P&L calculations for the journal views.

These functions back the add, dashboard and calendar commands and
provide the streak detection used by the behavioral scoring engine.
"""

from collections import defaultdict

from tradejournal.models import Trade, TradeDirection, UserSettings


def calculate_trade_pnl(
    direction: TradeDirection,
    entry_price: float,
    exit_price: float,
    quantity: float,
) -> float:
    """Calculate realized P&L from entry/exit prices.

    Args:
        direction: LONG or SHORT.
        entry_price: Entry price.
        exit_price: Exit price.
        quantity: Traded quantity.

    Returns:
        P&L rounded to 2 decimal places.
    """
    if TradeDirection(direction) == TradeDirection.LONG:
        pnl = (exit_price - entry_price) * quantity
    else:
        pnl = (entry_price - exit_price) * quantity
    return round(pnl, 2)


def calculate_invested_value(entry_price: float, quantity: float) -> float:
    """Capital committed to a trade at entry."""
    return entry_price * quantity


def sort_by_date(trades: list[Trade]) -> list[Trade]:
    """Return trades in chronological order.

    The sort is stable, so same-day trades keep their input order.
    """
    return sorted(trades, key=lambda t: t.date)


def summarize_trades(trades: list[Trade]) -> dict:
    """Calculate summary counts and totals for a list of trades.

    Args:
        trades: List of Trade objects.

    Returns:
        Dictionary with trade counts and P&L totals.
    """
    if not trades:
        return {
            "total_trades": 0,
            "wins": 0,
            "losses": 0,
            "breakeven": 0,
            "total_pnl": 0.0,
            "gross_profit": 0.0,
            "gross_loss": 0.0,
        }

    wins = 0
    losses = 0
    breakeven = 0
    gross_profit = 0.0
    gross_loss = 0.0

    for trade in trades:
        if trade.pnl > 0:
            wins += 1
            gross_profit += trade.pnl
        elif trade.pnl < 0:
            losses += 1
            gross_loss += abs(trade.pnl)
        else:
            breakeven += 1

    return {
        "total_trades": len(trades),
        "wins": wins,
        "losses": losses,
        "breakeven": breakeven,
        "total_pnl": sum(t.pnl for t in trades),
        "gross_profit": gross_profit,
        "gross_loss": gross_loss,
    }


def max_consecutive_losses(trades: list[Trade]) -> int:
    """Find the longest run of losing trades in chronological order.

    Only strictly negative P&L extends a streak; wins and breakeven
    trades end it.

    Args:
        trades: List of Trade objects, in any order.

    Returns:
        Length of the longest losing streak.
    """
    longest = 0
    current = 0

    for trade in sort_by_date(trades):
        if trade.pnl < 0:
            current += 1
        else:
            longest = max(longest, current)
            current = 0

    return max(longest, current)


def equity_curve(trades: list[Trade], initial_capital: float) -> list[dict]:
    """Build the account balance series after each trade.

    Args:
        trades: List of Trade objects.
        initial_capital: Starting account balance.

    Returns:
        List of points with label, balance and pnl. The first point is
        always the "Start" balance.
    """
    points = [{"label": "Start", "balance": initial_capital, "pnl": 0.0}]

    balance = initial_capital
    for trade in sort_by_date(trades):
        balance += trade.pnl
        points.append({
            "label": trade.date.isoformat(),
            "balance": balance,
            "pnl": trade.pnl,
        })

    return points


def portfolio_overview(trades: list[Trade], settings: UserSettings) -> dict:
    """Calculate wallet and monthly goal figures.

    Args:
        trades: List of Trade objects.
        settings: User settings with initial capital and monthly goal.

    Returns:
        Dictionary with balance, variation and goal progress.
    """
    summary = summarize_trades(trades)
    total_pnl = summary["total_pnl"]

    initial_capital = settings.initial_capital
    variation = (total_pnl / initial_capital * 100) if initial_capital > 0 else 0.0

    # A zero goal would divide by zero
    monthly_goal = settings.monthly_goal or 1.0
    goal_progress = min(max(total_pnl / monthly_goal * 100, 0.0), 100.0)
    remaining_goal = max(monthly_goal - total_pnl, 0.0)

    return {
        **summary,
        "initial_capital": initial_capital,
        "current_balance": initial_capital + total_pnl,
        "variation": variation,
        "monthly_goal": monthly_goal,
        "goal_progress": goal_progress,
        "remaining_goal": remaining_goal,
    }


def daily_pnl(trades: list[Trade], year: int, month: int) -> dict[int, float]:
    """Sum P&L per day of a calendar month.

    Args:
        trades: List of Trade objects.
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        Mapping of day of month to summed P&L, for days with trades only.
    """
    by_day: dict[int, float] = defaultdict(float)
    for trade in trades:
        if trade.date.year == year and trade.date.month == month:
            by_day[trade.date.day] += trade.pnl
    return dict(sorted(by_day.items()))
