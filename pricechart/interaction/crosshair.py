"""Crosshair tracker - projects the pointer onto the nearest bar and price."""

from typing import Optional, Sequence

from ..models.chart import CrosshairSample, Point, PriceDomain, Surface
from ..models.ohlcv import Bar
from .price_scale import round_half_up, x_to_index, y_to_price
from .viewport import ViewportController


class CrosshairTracker:
    """Transient pointer readout; produces nothing while disabled."""

    def __init__(self, viewport: ViewportController, enabled: bool = True):
        self.viewport = viewport
        self.enabled = enabled
        self.sample: Optional[CrosshairSample] = None

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        if not self.enabled:
            self.sample = None
        return self.enabled

    def clear(self) -> None:
        self.sample = None

    def track(self, position: Point, surface: Surface, price_domain: Optional[PriceDomain],
              bars: Sequence[Bar] = ()) -> Optional[CrosshairSample]:
        """
        Recompute the sample for a pointer move.

        Args:
            position: Container-relative pointer position
            surface: Container size
            price_domain: Visible price range
            bars: Full bar sequence, used to attach the bar date

        Returns:
            CrosshairSample, or None when disabled or nothing is mapped
        """
        domain = self.viewport.resolved()
        if not self.enabled or domain is None or price_domain is None or surface.is_empty:
            self.sample = None
            return None

        index = round_half_up(x_to_index(position.x, surface, domain))
        index = max(0, min(self.viewport.bar_count - 1, index))
        bar_date = bars[index].date if index < len(bars) else None

        self.sample = CrosshairSample(
            bar_index=index,
            price=y_to_price(position.y, surface, price_domain),
            x=position.x,
            y=position.y,
            date=bar_date,
        )
        return self.sample
