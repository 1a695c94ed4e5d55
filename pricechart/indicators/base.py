"""
Base indicator types and helpers.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

# Full-length indicator series; None marks warm-up bars.
Series = List[Optional[float]]


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger band series, each aligned with the input bars."""
    upper: Series
    middle: Series
    lower: Series


@dataclass(frozen=True)
class MACDResult:
    """MACD series, each aligned with the input bars."""
    macd_line: Series
    signal_line: Series
    histogram: Series


def closes_of(bars: Sequence[Any]) -> List[float]:
    """Extract closing prices from bars (anything with a `close` attribute)."""
    return [float(bar.close) for bar in bars]


def empty_series(length: int) -> Series:
    return [None] * length
