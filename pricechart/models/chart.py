"""Chart interaction models: viewport domain, drawing lines, crosshair samples."""

from datetime import date
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChartStyle(Enum):
    """Price series presentation."""
    CANDLESTICK = "candlestick"
    OHLC = "ohlc"
    LINE = "line"
    AREA = "area"


class DrawingMode(Enum):
    """Active annotation tool."""
    NONE = "none"
    TRENDLINE = "trendline"
    HORIZONTAL = "horizontal"


class LineKind(Enum):
    """Kinds of committed drawing lines."""
    TRENDLINE = "trendline"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Domain:
    """Visible index range [start, end] over the bar sequence."""
    start: float
    end: float

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError("Domain end must be >= start")

    @property
    def range(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2


@dataclass(frozen=True)
class PriceDomain:
    """Visible price range used for pixel/price mapping."""
    price_min: float
    price_max: float

    @property
    def span(self) -> float:
        return self.price_max - self.price_min


@dataclass(frozen=True)
class Surface:
    """Pixel size of the chart container."""
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Point:
    """Pixel position relative to the container's top-left corner."""
    x: float
    y: float


@dataclass(frozen=True)
class DataPoint:
    """Position in data space: bar index and price."""
    index: float
    price: float


@dataclass(frozen=True)
class DrawingLine:
    """Committed annotation line (immutable)."""
    line_id: str
    kind: LineKind
    start: DataPoint
    end: DataPoint
    color: str

    def __post_init__(self):
        if self.kind == LineKind.HORIZONTAL and self.start.price != self.end.price:
            raise ValueError("Horizontal line must keep a constant price")

    @property
    def is_degenerate(self) -> bool:
        """True for zero-length lines (start == end)."""
        return self.start == self.end


@dataclass(frozen=True)
class CrosshairSample:
    """Pointer projected into data space; recomputed on every move."""
    bar_index: int
    price: float
    x: float
    y: float
    date: Optional[date] = None
