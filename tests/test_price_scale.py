from datetime import date, timedelta
import unittest

from pricechart.interaction.geometry import bar_geometries, cursor_overlay, distance_to_segment, project_line
from pricechart.interaction.price_scale import (
    compute_price_domain,
    compute_visible_stats,
    index_to_x,
    price_to_y,
    round_half_up,
    x_to_index,
    y_to_price,
)
from pricechart.models.chart import (
    CrosshairSample, DataPoint, Domain, DrawingLine, LineKind, Point, PriceDomain, Surface,
)
from pricechart.models.indicators import IndicatorBar, IndicatorSample, IndicatorToggles
from pricechart.models.ohlcv import Bar


class TestPriceScale(unittest.TestCase):
    def setUp(self):
        start = date(2024, 1, 1)
        self.visible = [
            IndicatorBar(
                bar=Bar(index=0, date=start, open=95.0, high=110.0, low=90.0, close=100.0),
                indicators=IndicatorSample(sma20=80.0, bollinger_upper=130.0, bollinger_lower=85.0),
            ),
            IndicatorBar(
                bar=Bar(index=1, date=start + timedelta(days=1), open=100.0, high=105.0, low=95.0,
                        close=98.0),
                indicators=IndicatorSample(sma20=None, bollinger_upper=None, bollinger_lower=None),
            ),
        ]

    # Bars only
    def test_price_domain_from_bars(self):
        domain = compute_price_domain(self.visible)
        self.assertAlmostEqual(domain.price_min, 90.0 - 1.0)
        self.assertAlmostEqual(domain.price_max, 110.0 + 1.0)

    # Enabled SMA widens the range
    def test_price_domain_includes_enabled_sma(self):
        toggles = IndicatorToggles(ma20=True)
        domain = compute_price_domain(self.visible, toggles)
        self.assertAlmostEqual(domain.price_min, 80.0 - 1.5)
        self.assertAlmostEqual(domain.price_max, 110.0 + 1.5)

    def test_price_domain_includes_bollinger_bands(self):
        toggles = IndicatorToggles(bollinger_bands=True)
        domain = compute_price_domain(self.visible, toggles, padding=0.0)
        self.assertEqual(domain.price_min, 85.0)
        self.assertEqual(domain.price_max, 130.0)

    def test_price_domain_empty(self):
        self.assertIsNone(compute_price_domain([]))

    def test_visible_stats(self):
        stats = compute_visible_stats(self.visible)
        self.assertEqual(stats.high, 110.0)
        self.assertEqual(stats.low, 90.0)
        self.assertAlmostEqual(stats.average_close, 99.0)

        empty = compute_visible_stats([])
        self.assertEqual((empty.high, empty.low, empty.average_close), (0.0, 0.0, 0.0))

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(2.49), 2)

    def test_pixel_mappings_invert(self):
        surface = Surface(800.0, 400.0)
        domain = Domain(20.0, 60.0)
        prices = PriceDomain(100.0, 300.0)

        self.assertAlmostEqual(x_to_index(index_to_x(35.0, surface, domain), surface, domain), 35.0)
        self.assertAlmostEqual(y_to_price(price_to_y(250.0, surface, prices), surface, prices), 250.0)
        self.assertAlmostEqual(price_to_y(300.0, surface, prices), 0.0)
        self.assertAlmostEqual(price_to_y(100.0, surface, prices), 400.0)

    def test_flat_price_domain_maps_to_middle(self):
        self.assertEqual(price_to_y(50.0, Surface(800.0, 400.0), PriceDomain(50.0, 50.0)), 200.0)


class TestGeometry(unittest.TestCase):
    def setUp(self):
        start = date(2024, 1, 1)
        self.visible = [
            IndicatorBar(
                bar=Bar(index=10 + i, date=start + timedelta(days=i), open=100.0, high=150.0,
                        low=50.0, close=100.0 + (10.0 if i % 2 else -10.0)),
                indicators=IndicatorSample(),
            )
            for i in range(4)
        ]
        self.surface = Surface(400.0, 200.0)
        self.prices = PriceDomain(0.0, 200.0)

    def test_bar_slots(self):
        shapes = bar_geometries(self.visible, self.surface, Domain(10.0, 14.0), self.prices)

        self.assertEqual(len(shapes), 4)
        self.assertEqual([s.center_x for s in shapes], [0.0, 100.0, 200.0, 300.0])
        self.assertEqual([s.width for s in shapes], [100.0] * 4)
        self.assertEqual(shapes[2].x, 150.0)
        self.assertEqual(shapes[0].index, 10)
        self.assertEqual(shapes[0].high_y, 50.0)
        self.assertEqual(shapes[0].low_y, 150.0)
        self.assertFalse(shapes[0].is_up)
        self.assertTrue(shapes[1].is_up)

    # Fractional window: slots follow the index mapping, not the bar count
    def test_bar_slots_follow_domain(self):
        domain = Domain(10.5, 12.5)
        shapes = bar_geometries(self.visible, self.surface, domain, self.prices)

        self.assertEqual([s.center_x for s in shapes], [-100.0, 100.0, 300.0, 500.0])
        for shape in shapes:
            self.assertAlmostEqual(x_to_index(shape.center_x, self.surface, domain), shape.index)

    def test_bar_slots_need_domains(self):
        domain = Domain(10.0, 14.0)
        self.assertEqual(bar_geometries(self.visible, self.surface, domain, None), [])
        self.assertEqual(bar_geometries(self.visible, self.surface, None, self.prices), [])
        self.assertEqual(bar_geometries([], self.surface, domain, self.prices), [])

    def test_cursor_overlay(self):
        sample = CrosshairSample(bar_index=3, price=120.0, x=40.0, y=60.0)

        overlay = cursor_overlay(sample, True)
        self.assertEqual(overlay.points, (Point(40.0, 60.0),))
        self.assertIs(overlay.sample, sample)

        hidden = cursor_overlay(sample, False)
        self.assertEqual(hidden.points, ())
        self.assertFalse(hidden.show_crosshair)

    def test_project_line_and_distance(self):
        line = DrawingLine("abc", LineKind.TRENDLINE, DataPoint(0.0, 200.0), DataPoint(10.0, 0.0),
                           "#2196F3")

        geometry = project_line(line, self.surface, Domain(0.0, 10.0), self.prices, selected=True)

        self.assertEqual((geometry.x1, geometry.y1, geometry.x2, geometry.y2), (0.0, 0.0, 400.0, 200.0))
        self.assertTrue(geometry.selected)
        self.assertAlmostEqual(distance_to_segment(Point(200.0, 100.0), geometry), 0.0)
        self.assertAlmostEqual(distance_to_segment(Point(500.0, 200.0), geometry), 100.0)


if __name__ == "__main__":
    unittest.main()
