"""
Simple and exponential moving averages.
"""

from typing import Any, Sequence

from .base import Series, closes_of, empty_series


def compute_sma(bars: Sequence[Any], period: int) -> Series:
    """
    Compute the simple moving average of closing prices.

    Args:
        bars: Bars sorted by date, ascending
        period: Window length

    Returns:
        List the same length as bars; None for the first period-1 entries
    """
    closes = closes_of(bars)
    result = empty_series(len(closes))
    if period <= 0:
        return result

    for i in range(period - 1, len(closes)):
        window = closes[i - period + 1:i + 1]
        result[i] = sum(window) / period

    return result


def compute_ema(values: Sequence[float], period: int) -> Series:
    """
    Compute an exponential moving average seeded with an SMA.

    The first period-1 entries are None, entry period-1 holds the mean of the
    first period values and later entries follow
    ema[i] = (value[i] - ema[i-1]) * 2 / (period + 1) + ema[i-1].

    Args:
        values: Input values (no None entries)
        period: Smoothing period

    Returns:
        List the same length as values; all None when len(values) < period
    """
    result = empty_series(len(values))
    if period <= 0 or len(values) < period:
        return result

    multiplier = 2 / (period + 1)
    ema = sum(values[:period]) / period
    result[period - 1] = ema

    for i in range(period, len(values)):
        ema = (values[i] - ema) * multiplier + ema
        result[i] = ema

    return result
