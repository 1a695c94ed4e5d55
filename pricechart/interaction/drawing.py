"""
Drawing tool controller - pan/draw state machine over the pointer surface.

With no drawing mode active, a drag pans the viewport. With a trendline or
horizontal mode active, a drag draws a provisional line which is committed on
pointer up.
"""

import logging
from hashlib import sha256
from typing import List, Optional, Tuple

from ..models.chart import (
    DataPoint, Domain, DrawingLine, DrawingMode, LineKind, Point, PriceDomain, Surface,
)
from .geometry import distance_to_segment, project_line
from .price_scale import round_half_up, x_to_index, y_to_price
from .viewport import ViewportController

logger = logging.getLogger(__name__)

LINE_PALETTE: Tuple[str, ...] = ("#FF5722", "#2196F3", "#4CAF50", "#9C27B0", "#E91E63")
PROVISIONAL_LINE_ID = "current-drawing"
PROVISIONAL_LINE_COLOR = "#FF9800"
DEFAULT_HIT_TOLERANCE = 4.0

_MODE_TO_KIND = {
    DrawingMode.TRENDLINE: LineKind.TRENDLINE,
    DrawingMode.HORIZONTAL: LineKind.HORIZONTAL,
}


def pixel_to_data(position: Point, surface: Surface, domain: Optional[Domain],
                  price_domain: Optional[PriceDomain]) -> Optional[DataPoint]:
    """
    Convert a container-relative pixel position to (bar index, price).

    The index is rounded to the nearest whole bar. Returns None when there is
    no domain, no price domain or the surface has no area.
    """
    if domain is None or price_domain is None or surface.is_empty:
        return None
    index = round_half_up(x_to_index(position.x, surface, domain))
    price = y_to_price(position.y, surface, price_domain)
    return DataPoint(index=float(index), price=price)


class DrawingToolController:
    """Annotation mode, provisional and committed lines, selection and panning."""

    def __init__(self, viewport: ViewportController):
        self.viewport = viewport
        self.mode = DrawingMode.NONE
        self.lines: List[DrawingLine] = []
        self.selected_line_id: Optional[str] = None
        self.draft_start: Optional[DataPoint] = None
        self.draft_end: Optional[DataPoint] = None
        self.drag_start_x: Optional[float] = None
        self._created = 0

    @property
    def is_panning(self) -> bool:
        return self.drag_start_x is not None

    @property
    def is_drawing(self) -> bool:
        return self.draft_start is not None

    def toggle_mode(self, mode: DrawingMode) -> DrawingMode:
        """Activate a drawing mode; re-activating the current one turns it off."""
        new_mode = DrawingMode.NONE if self.mode == mode else mode
        if new_mode != self.mode:
            self._clear_draft()
            self.drag_start_x = None
        self.mode = new_mode
        logger.debug("drawing_mode_changed", extra={"mode": self.mode.value})
        return self.mode

    def cancel(self) -> None:
        """Drop the drawing mode, any provisional line and an active drag."""
        self.mode = DrawingMode.NONE
        self._clear_draft()
        self.drag_start_x = None

    def _clear_draft(self) -> None:
        self.draft_start = None
        self.draft_end = None

    def _to_data(self, position: Point, surface: Surface,
                 price_domain: Optional[PriceDomain]) -> Optional[DataPoint]:
        return pixel_to_data(position, surface, self.viewport.resolved(), price_domain)

    def _constrain(self, end: DataPoint) -> DataPoint:
        if self.mode == DrawingMode.HORIZONTAL and self.draft_start is not None:
            return DataPoint(index=end.index, price=self.draft_start.price)
        return end

    def pointer_down(self, position: Point, surface: Surface,
                     price_domain: Optional[PriceDomain]) -> None:
        if self.mode == DrawingMode.NONE:
            self.drag_start_x = position.x
            return
        self.draft_start = self._to_data(position, surface, price_domain)
        self.draft_end = None

    def pointer_move(self, position: Point, surface: Surface,
                     price_domain: Optional[PriceDomain]) -> None:
        if self.mode != DrawingMode.NONE:
            if self.draft_start is None:
                return
            end = self._to_data(position, surface, price_domain)
            if end is not None:
                self.draft_end = self._constrain(end)
            return

        if self.drag_start_x is None:
            return
        self.viewport.pan(self.drag_start_x - position.x, surface.width)
        self.drag_start_x = position.x

    def pointer_up(self, position: Optional[Point], surface: Surface,
                   price_domain: Optional[PriceDomain]) -> Optional[DrawingLine]:
        """
        Finish a drag. In a drawing mode this commits the provisional line.

        Returns:
            The committed line, or None
        """
        self.drag_start_x = None
        if self.mode == DrawingMode.NONE or self.draft_start is None:
            return None

        if position is not None:
            end = self._to_data(position, surface, price_domain)
            if end is not None:
                self.draft_end = self._constrain(end)
        if self.draft_end is None:
            self._clear_draft()
            return None

        line = self._commit(self.draft_start, self.draft_end)
        self._clear_draft()
        return line

    def pointer_leave(self) -> None:
        self.drag_start_x = None

    def _commit(self, start: DataPoint, end: DataPoint) -> DrawingLine:
        kind = _MODE_TO_KIND[self.mode]
        line = DrawingLine(
            line_id=self._generate_id(kind, start, end),
            kind=kind,
            start=start,
            end=end,
            color=LINE_PALETTE[len(self.lines) % len(LINE_PALETTE)],
        )
        self.lines.append(line)
        self._created += 1
        logger.info("drawing_line_committed", extra={
            "line_id": line.line_id,
            "kind": kind.value,
            "start_index": start.index,
            "end_index": end.index,
            "degenerate": line.is_degenerate,
        })
        return line

    def _generate_id(self, kind: LineKind, start: DataPoint, end: DataPoint) -> str:
        """Deterministic line id (SHA256 hash, first 16 chars)."""
        data = f"{kind.value}_{self._created}_{start.index}_{start.price}_{end.index}_{end.price}"
        return sha256(data.encode()).hexdigest()[:16]

    def provisional_line(self) -> Optional[DrawingLine]:
        """The in-progress line, if a drag has both endpoints."""
        if self.mode == DrawingMode.NONE or self.draft_start is None or self.draft_end is None:
            return None
        return DrawingLine(
            line_id=PROVISIONAL_LINE_ID,
            kind=_MODE_TO_KIND[self.mode],
            start=self.draft_start,
            end=self.draft_end,
            color=PROVISIONAL_LINE_COLOR,
        )

    def get_line(self, line_id: str) -> Optional[DrawingLine]:
        return next((line for line in self.lines if line.line_id == line_id), None)

    def select_line(self, line_id: str) -> bool:
        if self.get_line(line_id) is None:
            return False
        self.selected_line_id = line_id
        return True

    def clear_selection(self) -> None:
        self.selected_line_id = None

    def delete_line(self, line_id: str) -> bool:
        """Remove a committed line; clears the selection if it pointed at it."""
        remaining = [line for line in self.lines if line.line_id != line_id]
        if len(remaining) == len(self.lines):
            return False
        self.lines = remaining
        if self.selected_line_id == line_id:
            self.selected_line_id = None
        logger.info("drawing_line_deleted", extra={"line_id": line_id})
        return True

    def line_at(self, position: Point, surface: Surface, price_domain: Optional[PriceDomain],
                tolerance: float = DEFAULT_HIT_TOLERANCE) -> Optional[DrawingLine]:
        """Topmost committed line within `tolerance` pixels of the position."""
        domain = self.viewport.resolved()
        if domain is None or price_domain is None or surface.is_empty:
            return None
        for line in reversed(self.lines):
            geometry = project_line(line, surface, domain, price_domain)
            if distance_to_segment(position, geometry) <= tolerance:
                return line
        return None
