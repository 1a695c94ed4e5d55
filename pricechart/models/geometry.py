"""Geometry structs handed to the rendering collaborator."""

from dataclasses import dataclass
from typing import Optional, Tuple

from .chart import CrosshairSample, Point


@dataclass(frozen=True)
class BarGeometry:
    """Pixel slot and price positions for one bar-shape renderer call."""
    x: float
    y: float
    width: float
    height: float
    index: int
    ohlc: Tuple[float, float, float, float]
    open_y: float
    high_y: float
    low_y: float
    close_y: float
    is_up: bool

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(frozen=True)
class CursorOverlay:
    """Crosshair overlay input: pointer points, visibility and readout."""
    points: Tuple[Point, ...]
    show_crosshair: bool
    sample: Optional[CrosshairSample] = None


@dataclass(frozen=True)
class LineGeometry:
    """Drawing line projected to pixel space."""
    line_id: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    selected: bool = False
