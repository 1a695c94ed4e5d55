"""
Unit tests for the crosshair tracker.
"""

from datetime import date, timedelta

import pytest

from pricechart.interaction.crosshair import CrosshairTracker
from pricechart.interaction.viewport import ViewportController
from pricechart.models.chart import Domain, Point, PriceDomain, Surface
from pricechart.models.ohlcv import Bar

SURFACE = Surface(width=1000.0, height=500.0)
PRICES = PriceDomain(0.0, 200.0)


def make_bars(count):
    start = date(2024, 1, 1)
    return [
        Bar(index=i, date=start + timedelta(days=i), open=100.0, high=101.0, low=99.0, close=100.5)
        for i in range(count)
    ]


class TestCrosshairTracker:

    def setup_method(self):
        self.bars = make_bars(101)
        self.tracker = CrosshairTracker(ViewportController(bar_count=101))

    def test_nearest_bar_and_price(self):
        sample = self.tracker.track(Point(333.0, 125.0), SURFACE, PRICES, self.bars)

        assert sample.bar_index == 33
        assert sample.price == pytest.approx(150.0)
        assert (sample.x, sample.y) == (333.0, 125.0)
        assert sample.date == date(2024, 2, 3)
        assert self.tracker.sample == sample

    def test_index_clamped_to_sequence(self):
        sample = self.tracker.track(Point(1200.0, 0.0), SURFACE, PRICES, self.bars)
        assert sample.bar_index == 100

        sample = self.tracker.track(Point(-50.0, 0.0), SURFACE, PRICES, self.bars)
        assert sample.bar_index == 0

    def test_follows_zoomed_domain(self):
        self.tracker.viewport.domain = Domain(50.0, 60.0)

        sample = self.tracker.track(Point(500.0, 250.0), SURFACE, PRICES)

        assert sample.bar_index == 55
        assert sample.date is None

    def test_disabled_produces_nothing(self):
        self.tracker.track(Point(333.0, 125.0), SURFACE, PRICES, self.bars)

        assert self.tracker.toggle() is False
        assert self.tracker.sample is None
        assert self.tracker.track(Point(333.0, 125.0), SURFACE, PRICES, self.bars) is None

        assert self.tracker.toggle() is True

    def test_no_data(self):
        tracker = CrosshairTracker(ViewportController())
        assert tracker.track(Point(10.0, 10.0), SURFACE, PRICES) is None

    def test_clear(self):
        self.tracker.track(Point(333.0, 125.0), SURFACE, PRICES, self.bars)
        self.tracker.clear()
        assert self.tracker.sample is None
