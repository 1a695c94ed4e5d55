"""
Relative Strength Index (RSI) indicator.
"""

from typing import Any, Sequence

from .base import Series, closes_of, empty_series

# Substituted for a zero average loss. This keeps RSI just below 100 on
# all-gain windows instead of reaching the limit.
ZERO_LOSS_EPSILON = 0.001


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    rs = avg_gain / (ZERO_LOSS_EPSILON if avg_loss == 0 else avg_loss)
    return 100 - 100 / (1 + rs)


def compute_rsi(bars: Sequence[Any], period: int = 14) -> Series:
    """
    Compute RSI with Wilder smoothing.

    Averages are seeded with the simple mean of gains and losses over the
    first `period` close-to-close changes, so the first value lands at index
    `period`. Later values use avg = (avg * (period - 1) + current) / period.

    Args:
        bars: Bars sorted by date, ascending
        period: RSI period (default 14)

    Returns:
        List the same length as bars; all None unless len(bars) > period
    """
    closes = closes_of(bars)
    rsi = empty_series(len(closes))
    if period <= 0 or len(closes) <= period:
        return rsi

    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]

    avg_gain = sum(c for c in changes[:period] if c > 0) / period
    avg_loss = sum(-c for c in changes[:period] if c < 0) / period
    rsi[period] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period, len(changes)):
        change = changes[i]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0

        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

        # changes[i] is the move into bar i + 1
        rsi[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return rsi
