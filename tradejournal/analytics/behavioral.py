"""Behavioral scoring engine.

Turns the current month's trade history into a bounded fitness score
(0-100), a verdict and a list of feedback messages. Everything here is a
pure function of its inputs; the reference date is passed explicitly and
only defaults to the system clock in ``compute_behavioral_metrics``.

Pipeline:
    trades -> filter_month_trades -> aggregate_statistics
           -> apply_scoring_rules -> classify_verdict
"""

import logging
from datetime import date, datetime
from typing import Optional, Union

from tradejournal.analytics.metrics import max_consecutive_losses
from tradejournal.models import BehavioralMetrics, Trade, UserSettings, Verdict

logger = logging.getLogger(__name__)

BASELINE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

APTO_THRESHOLD = 75
NAO_RECOMENDADO_THRESHOLD = 40

HIGH_WIN_RATE = 60
LOW_WIN_RATE = 40
HEALTHY_PROFIT_FACTOR = 1.5
LOSING_PROFIT_FACTOR = 1.0
MAX_LOSS_STREAK = 3
MAX_MONTHLY_TRADES = 50

INSUFFICIENT_DATA_FEEDBACK = "Not enough data this month for an accurate analysis."
NO_FEEDBACK_MESSAGE = "No specific feedback at the moment."

FEEDBACK_HIGH_WIN_RATE = "Great win rate"
FEEDBACK_LOW_WIN_RATE = "Win rate below ideal"
FEEDBACK_HEALTHY_PROFIT_FACTOR = "Healthy profit factor"
FEEDBACK_NEGATIVE_PROFIT_FACTOR = "Negative profit factor — losing more than winning"
FEEDBACK_LOSS_STREAK = "Loss streak detected (tilt)"
FEEDBACK_OVERTRADING = "Excessive trade volume (overtrading)"


def _reference_date(reference: Union[date, datetime]) -> date:
    """Reduce a reference instant to a local calendar date."""
    if isinstance(reference, datetime):
        if reference.tzinfo is not None:
            reference = reference.astimezone()
        return reference.date()
    return reference


def filter_month_trades(
    trades: list[Trade], reference: Union[date, datetime]
) -> list[Trade]:
    """Select trades closed in the same calendar month as the reference.

    Args:
        trades: Full trade history.
        reference: Date or datetime identifying the month. Aware datetimes
            are converted to the local time zone first.

    Returns:
        Trades in the reference month, in input order.
    """
    ref = _reference_date(reference)
    return [
        t for t in trades
        if t.date.year == ref.year and t.date.month == ref.month
    ]


def aggregate_statistics(trades: list[Trade]) -> dict:
    """Compute the statistics the scoring rules read.

    Breakeven trades count toward the gross-loss set (contributing 0)
    but never as wins, and they end a losing streak.

    Args:
        trades: Non-empty list of trades in the scoring window.

    Returns:
        Dictionary with total_trades, win_rate, gross_profit, gross_loss,
        profit_factor and max_consecutive_losses.
    """
    wins = [t for t in trades if t.pnl > 0]
    losses = [t for t in trades if t.pnl <= 0]

    gross_profit = sum(t.pnl for t in wins)
    gross_loss = abs(sum(t.pnl for t in losses))

    win_rate = len(wins) / len(trades) * 100
    # Loss-free windows report raw gross profit as the factor
    profit_factor = gross_profit if gross_loss == 0 else gross_profit / gross_loss

    return {
        "total_trades": len(trades),
        "win_rate": win_rate,
        "gross_profit": gross_profit,
        "gross_loss": gross_loss,
        "profit_factor": profit_factor,
        "max_consecutive_losses": max_consecutive_losses(trades),
    }


def apply_scoring_rules(stats: dict) -> tuple[float, list[str]]:
    """Apply the weighted rules to aggregated statistics.

    Rules run in a fixed order and each one that fires appends its
    feedback message. Win rate and profit factor rules are each a single
    if/elif pair; the streak and volume checks are independent.

    Args:
        stats: Output of ``aggregate_statistics``.

    Returns:
        Tuple of (clamped score, feedback messages).
    """
    score = BASELINE_SCORE
    feedback: list[str] = []

    if stats["win_rate"] > HIGH_WIN_RATE:
        score += 20
        feedback.append(FEEDBACK_HIGH_WIN_RATE)
    elif stats["win_rate"] < LOW_WIN_RATE:
        score -= 10
        feedback.append(FEEDBACK_LOW_WIN_RATE)

    if stats["profit_factor"] > HEALTHY_PROFIT_FACTOR:
        score += 20
        feedback.append(FEEDBACK_HEALTHY_PROFIT_FACTOR)
    elif stats["profit_factor"] < LOSING_PROFIT_FACTOR:
        score -= 20
        feedback.append(FEEDBACK_NEGATIVE_PROFIT_FACTOR)

    if stats["max_consecutive_losses"] > MAX_LOSS_STREAK:
        score -= 15
        feedback.append(FEEDBACK_LOSS_STREAK)

    if stats["total_trades"] > MAX_MONTHLY_TRADES:
        score -= 10
        feedback.append(FEEDBACK_OVERTRADING)

    score = min(max(score, MIN_SCORE), MAX_SCORE)
    return score, feedback


def classify_verdict(score: float) -> Verdict:
    """Map a clamped score to a verdict."""
    if score >= APTO_THRESHOLD:
        return Verdict.APTO
    if score <= NAO_RECOMENDADO_THRESHOLD:
        return Verdict.NAO_RECOMENDADO
    return Verdict.CAUTELA


def default_metrics() -> BehavioralMetrics:
    """Metrics reported when the scoring window has no trades."""
    return BehavioralMetrics(
        score=BASELINE_SCORE,
        verdict=Verdict.CAUTELA,
        win_rate=0,
        profit_factor=0,
        consecutive_losses=0,
        total_trades=0,
        feedback=[INSUFFICIENT_DATA_FEEDBACK],
    )


def compute_behavioral_metrics(
    trades: list[Trade],
    settings: Optional[UserSettings] = None,
    reference: Optional[Union[date, datetime]] = None,
) -> BehavioralMetrics:
    """Score the trading behavior for the reference month.

    Args:
        trades: Full trade history. Not modified.
        settings: User settings. Accepted for symmetry with the dashboard
            views; the current rules do not read it.
        reference: Date or datetime selecting the month to score.
            Defaults to now.

    Returns:
        BehavioralMetrics for the month.
    """
    if reference is None:
        reference = datetime.now()

    month_trades = filter_month_trades(trades, reference)

    if not month_trades:
        logger.debug("No trades in scoring window for %s", reference)
        return default_metrics()

    stats = aggregate_statistics(month_trades)
    score, feedback = apply_scoring_rules(stats)
    verdict = classify_verdict(score)

    logger.debug(
        "Behavioral score %s (%s) from %d trades",
        score, verdict.value, stats["total_trades"],
    )

    return BehavioralMetrics(
        score=score,
        verdict=verdict,
        win_rate=stats["win_rate"],
        profit_factor=stats["profit_factor"],
        consecutive_losses=stats["max_consecutive_losses"],
        total_trades=stats["total_trades"],
        feedback=feedback,
    )
