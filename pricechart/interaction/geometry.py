"""Renderer geometry: bar slots, cursor overlay and drawing-line projection."""

import math
from typing import List, Optional, Sequence

from ..models.chart import CrosshairSample, Domain, DrawingLine, Point, PriceDomain, Surface
from ..models.geometry import BarGeometry, CursorOverlay, LineGeometry
from ..models.indicators import IndicatorBar
from .price_scale import index_to_x, price_to_y


def bar_geometries(visible: Sequence[IndicatorBar], surface: Surface, domain: Optional[Domain],
                   price_domain: Optional[PriceDomain]) -> List[BarGeometry]:
    """
    Lay out one slot per visible bar and map its prices to y.

    Each slot is one bar index wide and centered on index_to_x(bar.index),
    the same mapping the crosshair and drawing tools invert.

    Args:
        visible: Visible indicator bars, in order
        surface: Container size
        domain: Visible index range
        price_domain: Visible price range

    Returns:
        One BarGeometry per visible bar; empty when nothing can be laid out
    """
    if not visible or domain is None or price_domain is None or surface.is_empty:
        return []

    slot = surface.width / domain.range if domain.range > 0 else surface.width
    shapes = []
    for item in visible:
        bar = item.bar
        shapes.append(BarGeometry(
            x=index_to_x(bar.index, surface, domain) - slot / 2,
            y=0.0,
            width=slot,
            height=surface.height,
            index=bar.index,
            ohlc=bar.ohlc,
            open_y=price_to_y(bar.open, surface, price_domain),
            high_y=price_to_y(bar.high, surface, price_domain),
            low_y=price_to_y(bar.low, surface, price_domain),
            close_y=price_to_y(bar.close, surface, price_domain),
            is_up=bar.is_up,
        ))
    return shapes


def cursor_overlay(sample: Optional[CrosshairSample], show_crosshair: bool) -> CursorOverlay:
    if sample is None or not show_crosshair:
        return CursorOverlay(points=(), show_crosshair=show_crosshair, sample=None)
    return CursorOverlay(points=(Point(sample.x, sample.y),), show_crosshair=True, sample=sample)


def project_line(line: DrawingLine, surface: Surface, domain: Domain,
                 price_domain: PriceDomain, selected: bool = False) -> LineGeometry:
    """Map a drawing line from data space to pixel space."""
    return LineGeometry(
        line_id=line.line_id,
        x1=index_to_x(line.start.index, surface, domain),
        y1=price_to_y(line.start.price, surface, price_domain),
        x2=index_to_x(line.end.index, surface, domain),
        y2=price_to_y(line.end.price, surface, price_domain),
        color=line.color,
        selected=selected,
    )


def distance_to_segment(point: Point, geometry: LineGeometry) -> float:
    """Pixel distance from a point to a projected line segment."""
    dx = geometry.x2 - geometry.x1
    dy = geometry.y2 - geometry.y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(point.x - geometry.x1, point.y - geometry.y1)

    t = ((point.x - geometry.x1) * dx + (point.y - geometry.y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    nearest_x = geometry.x1 + t * dx
    nearest_y = geometry.y1 + t * dy
    return math.hypot(point.x - nearest_x, point.y - nearest_y)
