"""
Bollinger Bands.
"""

import math
from typing import Any, Sequence

from .base import BollingerBands, closes_of, empty_series
from .moving_average import compute_sma


def compute_bollinger_bands(bars: Sequence[Any], period: int = 20,
                            std_dev_multiplier: float = 2.0) -> BollingerBands:
    """
    Compute Bollinger Bands over closing prices.

    The middle band is the SMA; the band width uses the population standard
    deviation (denominator = period) of the same trailing window.

    Args:
        bars: Bars sorted by date, ascending
        period: Window length
        std_dev_multiplier: Number of standard deviations for the outer bands

    Returns:
        BollingerBands with upper/middle/lower series aligned to bars
    """
    closes = closes_of(bars)
    middle = compute_sma(bars, period)
    upper = empty_series(len(closes))
    lower = empty_series(len(closes))

    for i, mean in enumerate(middle):
        if mean is None:
            continue
        window = closes[i - period + 1:i + 1]
        variance = sum((close - mean) ** 2 for close in window) / period
        sigma = math.sqrt(variance)
        upper[i] = mean + std_dev_multiplier * sigma
        lower[i] = mean - std_dev_multiplier * sigma

    return BollingerBands(upper=upper, middle=middle, lower=lower)
