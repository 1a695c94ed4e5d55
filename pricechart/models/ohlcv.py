"""
OHLCV data models for daily price bars and bar sequences.
"""

from datetime import date
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Bar:
    """Single daily OHLCV bar (immutable)."""
    index: int
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    turnover_value: float = 0.0
    code: str = ""

    def __post_init__(self):
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")

    @property
    def change(self) -> float:
        """Percent change from open to close."""
        if self.open == 0:
            return 0.0
        return (self.close - self.open) / self.open * 100

    @property
    def is_up(self) -> bool:
        return self.close >= self.open

    @property
    def ohlc(self) -> Tuple[float, float, float, float]:
        return (self.open, self.high, self.low, self.close)


@dataclass(frozen=True)
class BarSeries:
    """Ordered sequence of bars for one instrument."""
    code: str
    bars: Tuple[Bar, ...]

    @classmethod
    def from_rows(cls, code: str, rows: Iterable[Dict[str, Any]]) -> "BarSeries":
        """
        Build a series from unordered row dicts.

        Rows are sorted ascending by date and each bar receives its position
        in the sorted sequence as its index.

        Args:
            code: Instrument code
            rows: Dicts with date/open/high/low/close and optional
                volume/turnover_value keys

        Returns:
            BarSeries
        """
        ordered = sorted(rows, key=lambda row: row["date"])
        bars = tuple(
            Bar(
                index=i,
                date=row["date"],
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=float(row.get("volume") or 0.0),
                turnover_value=float(row.get("turnover_value") or 0.0),
                code=code,
            )
            for i, row in enumerate(ordered)
        )
        return cls(code=code, bars=bars)

    @property
    def latest_bar(self) -> Optional[Bar]:
        """Get the most recent bar."""
        return self.bars[-1] if self.bars else None

    @property
    def length(self) -> int:
        """Number of bars."""
        return len(self.bars)

    @property
    def closes(self) -> List[float]:
        return [bar.close for bar in self.bars]
