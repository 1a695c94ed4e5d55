"""
Moving Average Convergence/Divergence (MACD) indicator.
"""

from typing import Any, Sequence

from .base import MACDResult, closes_of, empty_series
from .moving_average import compute_ema


def compute_macd(bars: Sequence[Any], fast_period: int = 12, slow_period: int = 26,
                 signal_period: int = 9) -> MACDResult:
    """
    Compute MACD line, signal line and histogram.

    The MACD line is EMA(fast) - EMA(slow) from index slow_period - 1 on. The
    signal line is the EMA of the non-null MACD values, mapped back onto the
    bar index space: it stays None until signal_period - 1 MACD values have
    accumulated. The histogram is defined where both lines are.

    Args:
        bars: Bars sorted by date, ascending
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: Signal EMA period

    Returns:
        MACDResult with three series aligned to bars
    """
    closes = closes_of(bars)
    length = len(closes)

    fast_ema = compute_ema(closes, fast_period)
    slow_ema = compute_ema(closes, slow_period)

    macd_line = empty_series(length)
    for i in range(max(slow_period - 1, 0), length):
        fast_value, slow_value = fast_ema[i], slow_ema[i]
        if fast_value is not None and slow_value is not None:
            macd_line[i] = fast_value - slow_value

    macd_values = [value for value in macd_line if value is not None]
    signal_ema = compute_ema(macd_values, signal_period)

    signal_line = empty_series(length)
    signal_index = 0
    for i, value in enumerate(macd_line):
        if value is None:
            continue
        if signal_index >= signal_period - 1:
            signal_line[i] = signal_ema[signal_index]
        signal_index += 1

    histogram = empty_series(length)
    for i in range(length):
        if macd_line[i] is not None and signal_line[i] is not None:
            histogram[i] = macd_line[i] - signal_line[i]

    return MACDResult(macd_line=macd_line, signal_line=signal_line, histogram=histogram)
