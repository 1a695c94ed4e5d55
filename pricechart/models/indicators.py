"""Technical indicator models: per-bar samples, settings and display toggles."""

from dataclasses import dataclass, fields, replace
from typing import Dict, Optional, Tuple

from .ohlcv import Bar

SMA_PERIODS: Tuple[int, ...] = (20, 50, 75, 100, 200)

BOLLINGER_PERIODS = (10, 20, 25, 50)
BOLLINGER_STD_DEVS = (1.0, 2.0, 2.5, 3.0)
RSI_PERIODS = (5, 9, 14, 21)
MACD_FAST_PERIODS = (8, 12, 16)
MACD_SLOW_PERIODS = (21, 26, 30)
MACD_SIGNAL_PERIODS = (7, 9, 12)


@dataclass(frozen=True)
class IndicatorSample:
    """Indicator values attached to one bar. None means warm-up not elapsed."""
    sma20: Optional[float] = None
    sma50: Optional[float] = None
    sma75: Optional[float] = None
    sma100: Optional[float] = None
    sma200: Optional[float] = None
    bollinger_upper: Optional[float] = None
    bollinger_middle: Optional[float] = None
    bollinger_lower: Optional[float] = None
    rsi: Optional[float] = None
    macd_line: Optional[float] = None
    signal_line: Optional[float] = None
    histogram: Optional[float] = None

    def sma(self, period: int) -> Optional[float]:
        """Moving average for one of the fixed SMA periods."""
        if period not in SMA_PERIODS:
            raise KeyError(f"No SMA tracked for period {period}")
        return getattr(self, f"sma{period}")


@dataclass(frozen=True)
class IndicatorBar:
    """Bar augmented with its indicator sample."""
    bar: Bar
    indicators: IndicatorSample

    @property
    def index(self) -> int:
        return self.bar.index


@dataclass(frozen=True)
class IndicatorSettings:
    """Indicator parameters restricted to the supported choices."""
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    def __post_init__(self):
        allowed = {
            'bollinger_period': BOLLINGER_PERIODS,
            'bollinger_std_dev': BOLLINGER_STD_DEVS,
            'rsi_period': RSI_PERIODS,
            'macd_fast': MACD_FAST_PERIODS,
            'macd_slow': MACD_SLOW_PERIODS,
            'macd_signal': MACD_SIGNAL_PERIODS,
        }
        for name, choices in allowed.items():
            value = getattr(self, name)
            if value not in choices:
                raise ValueError(f"{name} must be one of {list(choices)}, got {value!r}")

    def with_changes(self, **changes) -> "IndicatorSettings":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class IndicatorToggles:
    """Which indicators the rendering layer shows. Computation ignores this."""
    ma20: bool = False
    ma50: bool = False
    ma75: bool = False
    ma100: bool = False
    ma200: bool = False
    bollinger_bands: bool = False
    rsi: bool = False
    macd: bool = False

    def toggle(self, name: str) -> "IndicatorToggles":
        if name not in self.names():
            raise KeyError(f"Unknown indicator: {name}")
        return replace(self, **{name: not getattr(self, name)})

    def enabled_sma_periods(self) -> Tuple[int, ...]:
        return tuple(p for p in SMA_PERIODS if getattr(self, f"ma{p}"))

    @classmethod
    def names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in self.names()}
