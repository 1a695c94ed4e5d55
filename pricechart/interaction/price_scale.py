"""
Price scale helpers: visible price domain, window statistics and
pixel <-> data mappings shared by the drawing tools, crosshair and geometry.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models.chart import Domain, PriceDomain, Surface
from ..models.indicators import IndicatorBar, IndicatorToggles

DEFAULT_PRICE_PADDING = 0.05


@dataclass(frozen=True)
class VisibleStats:
    """High, low and average close of the visible window."""
    high: float
    low: float
    average_close: float


def compute_price_domain(visible: Sequence[IndicatorBar], toggles: IndicatorToggles = None,
                         padding: float = DEFAULT_PRICE_PADDING) -> Optional[PriceDomain]:
    """
    Price range of the visible window.

    Starts from the lowest low and highest high, widens to cover the values of
    every enabled moving average and, when enabled, the Bollinger outer bands,
    then pads both sides by `padding` times the span.

    Args:
        visible: Visible indicator bars
        toggles: Enabled indicators (None = none enabled)
        padding: Fraction of the span added on each side

    Returns:
        PriceDomain, or None for an empty window
    """
    if not visible:
        return None
    toggles = toggles or IndicatorToggles()

    price_min = min(item.bar.low for item in visible)
    price_max = max(item.bar.high for item in visible)

    extra: List[float] = []
    for period in toggles.enabled_sma_periods():
        extra.extend(v for v in (item.indicators.sma(period) for item in visible) if v is not None)
    if toggles.bollinger_bands:
        extra.extend(item.indicators.bollinger_upper for item in visible
                     if item.indicators.bollinger_upper is not None)
        extra.extend(item.indicators.bollinger_lower for item in visible
                     if item.indicators.bollinger_lower is not None)

    if extra:
        price_min = min(price_min, min(extra))
        price_max = max(price_max, max(extra))

    pad = (price_max - price_min) * padding
    return PriceDomain(price_min - pad, price_max + pad)


def compute_visible_stats(visible: Sequence[IndicatorBar]) -> VisibleStats:
    if not visible:
        return VisibleStats(high=0.0, low=0.0, average_close=0.0)
    return VisibleStats(
        high=max(item.bar.high for item in visible),
        low=min(item.bar.low for item in visible),
        average_close=sum(item.bar.close for item in visible) / len(visible),
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def x_to_index(x: float, surface: Surface, domain: Domain) -> float:
    return domain.start + (x / surface.width) * domain.range


def index_to_x(index: float, surface: Surface, domain: Domain) -> float:
    if domain.range == 0:
        return 0.0
    return (index - domain.start) / domain.range * surface.width


def y_to_price(y: float, surface: Surface, price_domain: PriceDomain) -> float:
    return price_domain.price_max - (y / surface.height) * price_domain.span


def price_to_y(price: float, surface: Surface, price_domain: PriceDomain) -> float:
    if price_domain.span == 0:
        return surface.height / 2
    return (price_domain.price_max - price) / price_domain.span * surface.height
