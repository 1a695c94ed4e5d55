"""
Viewport controller - visible index window with zoom and pan.

Domain functions are pure: they take the current domain (None = full range)
and the bar count and return a new domain. Nothing here raises on odd input;
values are clamped into range instead.
"""

import logging
import math
from typing import Optional, Tuple

from ..models.chart import Domain

logger = logging.getLogger(__name__)

MIN_VISIBLE_BARS = 5
WHEEL_ZOOM_OUT_FACTOR = 1.1
WHEEL_ZOOM_IN_FACTOR = 0.9
KEYBOARD_PAN_FRACTION = 0.1
KEYBOARD_ZOOM_IN_FACTOR = 0.8
KEYBOARD_ZOOM_OUT_FACTOR = 1.2


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def full_domain(bar_count: int) -> Optional[Domain]:
    """Domain covering every bar, or None when there are no bars."""
    if bar_count <= 0:
        return None
    return Domain(0.0, float(bar_count - 1))


def resolve_domain(domain: Optional[Domain], bar_count: int) -> Optional[Domain]:
    """Effective domain: the full range when unset."""
    if bar_count <= 0:
        return None
    return domain if domain is not None else full_domain(bar_count)


def clamp_domain(start: float, end: float, bar_count: int) -> Optional[Domain]:
    """
    Force 0 <= start <= end <= N-1 and end - start >= MIN_VISIBLE_BARS.

    The width is kept when possible by sliding the window back inside the
    bounds. Sequences too short for the minimum width get the full range.
    """
    if bar_count <= 0:
        return None
    last = float(bar_count - 1)
    if last < MIN_VISIBLE_BARS:
        return Domain(0.0, last)

    width = _clamp(end - start, MIN_VISIBLE_BARS, last)
    start = _clamp(start, 0.0, last - width)
    return Domain(start, min(last, start + width))


def zoom_domain(domain: Optional[Domain], bar_count: int, wheel_delta: float,
                anchor_ratio: float) -> Optional[Domain]:
    """
    Zoom around an anchor expressed as a fraction of the viewport width.

    Positive wheel_delta zooms out by 1.1, anything else zooms in by 0.9.
    """
    current = resolve_domain(domain, bar_count)
    if current is None:
        return None

    last = float(bar_count - 1)
    anchor = _clamp(anchor_ratio, 0.0, 1.0)
    factor = WHEEL_ZOOM_OUT_FACTOR if wheel_delta > 0 else WHEEL_ZOOM_IN_FACTOR

    span = current.range
    new_range = _clamp(span * factor, MIN_VISIBLE_BARS, float(bar_count))

    new_start = _clamp(current.start + (span - new_range) * anchor, 0.0, last)
    new_end = _clamp(new_start + new_range, 0.0, last)

    # Requested width no longer fits to the right: grow to the left instead
    if new_end == last:
        new_start = max(0.0, new_end - new_range)

    return clamp_domain(new_start, new_end, bar_count)


def zoom_domain_centered(domain: Optional[Domain], bar_count: int,
                         factor: float) -> Optional[Domain]:
    """Rescale the range around its midpoint."""
    current = resolve_domain(domain, bar_count)
    if current is None:
        return None

    new_range = _clamp(current.range * factor, MIN_VISIBLE_BARS, float(bar_count))
    center = current.midpoint
    return clamp_domain(center - new_range / 2, center + new_range / 2, bar_count)


def pan_domain(domain: Optional[Domain], bar_count: int, pixel_delta: float,
               viewport_pixel_width: float) -> Optional[Domain]:
    """
    Shift the window by a pixel distance converted to bar indices.

    Positive pixel_delta moves the window towards later bars. An unset domain
    already shows everything and stays unset.
    """
    if domain is None or bar_count <= 0 or viewport_pixel_width <= 0:
        return domain if bar_count > 0 else None

    index_delta = (pixel_delta / viewport_pixel_width) * domain.range
    return clamp_domain(domain.start + index_delta, domain.end + index_delta, bar_count)


def pan_domain_by_fraction(domain: Optional[Domain], bar_count: int,
                           fraction: float) -> Optional[Domain]:
    """Shift the window by a signed fraction of its own range."""
    if domain is None or bar_count <= 0:
        return domain if bar_count > 0 else None

    index_delta = fraction * domain.range
    return clamp_domain(domain.start + index_delta, domain.end + index_delta, bar_count)


class ViewportController:
    """Owns the visible domain over a bar sequence of known length."""

    def __init__(self, bar_count: int = 0):
        self.bar_count = max(0, bar_count)
        self.domain: Optional[Domain] = None

    def set_bar_count(self, bar_count: int) -> None:
        """New data load: adopt the length and show everything."""
        self.bar_count = max(0, bar_count)
        self.domain = None

    def resolved(self) -> Optional[Domain]:
        return resolve_domain(self.domain, self.bar_count)

    def visible_slice(self) -> Optional[Tuple[int, int]]:
        """Inclusive bar index bounds covering the domain."""
        current = self.resolved()
        if current is None:
            return None
        start = max(0, int(math.floor(current.start)))
        end = min(self.bar_count - 1, int(math.ceil(current.end)))
        return start, end

    def _apply(self, domain: Optional[Domain], action: str) -> Optional[Domain]:
        self.domain = domain
        logger.debug("viewport_update", extra={
            "action": action,
            "start": domain.start if domain else None,
            "end": domain.end if domain else None,
        })
        return domain

    def zoom(self, wheel_delta: float, anchor_ratio: float) -> Optional[Domain]:
        return self._apply(zoom_domain(self.domain, self.bar_count, wheel_delta, anchor_ratio), "zoom")

    def zoom_centered(self, factor: float) -> Optional[Domain]:
        return self._apply(zoom_domain_centered(self.domain, self.bar_count, factor), "zoom_centered")

    def pan(self, pixel_delta: float, viewport_pixel_width: float) -> Optional[Domain]:
        return self._apply(pan_domain(self.domain, self.bar_count, pixel_delta, viewport_pixel_width), "pan")

    def pan_by_fraction(self, fraction: float) -> Optional[Domain]:
        return self._apply(pan_domain_by_fraction(self.domain, self.bar_count, fraction), "pan_by_fraction")

    def reset(self) -> Optional[Domain]:
        return self._apply(None, "reset")
