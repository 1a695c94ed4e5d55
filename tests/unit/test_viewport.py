"""
Unit tests for the viewport controller.

Tests cover:
- Wheel zoom around an anchor, saturation at the bounds
- Centered keyboard zoom and fractional pan
- Drag pan in pixels
- Invariants: 0 <= start <= end <= N-1 and minimum width after any operation
"""

import random

import pytest

from pricechart.interaction.viewport import (
    MIN_VISIBLE_BARS,
    ViewportController,
    clamp_domain,
    pan_domain,
    zoom_domain,
    zoom_domain_centered,
)
from pricechart.models.chart import Domain


def assert_domain_valid(domain, bar_count):
    assert domain is not None
    assert 0 <= domain.start <= domain.end <= bar_count - 1
    if bar_count - 1 >= MIN_VISIBLE_BARS:
        assert domain.range >= MIN_VISIBLE_BARS - 1e-9


class TestWheelZoom:
    """Wheel zoom keeps the anchor fixed where bounds allow."""

    def test_zoom_out_around_center(self):
        domain = zoom_domain(Domain(50.0, 150.0), 200, wheel_delta=1.0, anchor_ratio=0.5)

        assert domain.start == pytest.approx(45.0)
        assert domain.end == pytest.approx(155.0)

    def test_zoom_in_around_center(self):
        domain = zoom_domain(Domain(50.0, 150.0), 200, wheel_delta=-1.0, anchor_ratio=0.5)

        assert domain.start == pytest.approx(55.0)
        assert domain.end == pytest.approx(145.0)

    def test_zoom_in_from_unset_domain(self):
        domain = zoom_domain(None, 100, wheel_delta=-3.0, anchor_ratio=0.0)

        assert domain.start == pytest.approx(0.0)
        assert domain.end == pytest.approx(89.1)

    def test_zoom_out_at_right_edge_grows_left(self):
        domain = zoom_domain(Domain(100.0, 199.0), 200, wheel_delta=1.0, anchor_ratio=0.9)

        assert domain.end == pytest.approx(199.0)
        assert domain.range == pytest.approx(99.0 * 1.1)

    def test_zoom_out_saturates_to_full_range(self):
        domain = zoom_domain(Domain(0.0, 99.0), 100, wheel_delta=1.0, anchor_ratio=0.5)

        assert domain.start == pytest.approx(0.0)
        assert domain.end == pytest.approx(99.0)

    def test_zoom_in_stops_at_minimum_width(self):
        controller = ViewportController(bar_count=200)
        for _ in range(100):
            controller.zoom(-1.0, 0.3)

        assert controller.domain.range == pytest.approx(MIN_VISIBLE_BARS)
        assert_domain_valid(controller.domain, 200)

    def test_no_bars(self):
        assert zoom_domain(None, 0, -1.0, 0.5) is None


class TestCenteredZoom:
    """Keyboard zoom rescales around the midpoint."""

    def test_zoom_in_then_out_restores_width(self):
        zoomed = zoom_domain_centered(Domain(50.0, 150.0), 200, 0.8)
        assert zoomed.start == pytest.approx(60.0)
        assert zoomed.end == pytest.approx(140.0)

        restored = zoom_domain_centered(zoomed, 200, 1.25)
        assert restored.start == pytest.approx(50.0)
        assert restored.end == pytest.approx(150.0)

    def test_zoom_out_past_bounds_is_clamped(self):
        domain = zoom_domain_centered(Domain(0.0, 80.0), 100, 1.2)

        assert domain.start == pytest.approx(0.0)
        assert domain.end == pytest.approx(96.0)


class TestPan:
    """Drag and keyboard pan."""

    def test_pan_right(self):
        domain = pan_domain(Domain(10.0, 30.0), 100, pixel_delta=50.0, viewport_pixel_width=100.0)

        assert domain.start == pytest.approx(20.0)
        assert domain.end == pytest.approx(40.0)

    def test_pan_beyond_right_edge_keeps_width(self):
        domain = pan_domain(Domain(80.0, 99.0), 100, pixel_delta=100.0, viewport_pixel_width=100.0)

        assert domain.start == pytest.approx(80.0)
        assert domain.end == pytest.approx(99.0)

    def test_pan_beyond_left_edge_keeps_width(self):
        domain = pan_domain(Domain(5.0, 25.0), 100, pixel_delta=-100.0, viewport_pixel_width=100.0)

        assert domain.start == pytest.approx(0.0)
        assert domain.end == pytest.approx(20.0)

    def test_pan_unset_domain_is_noop(self):
        assert pan_domain(None, 100, 40.0, 800.0) is None

    def test_pan_zero_width_is_noop(self):
        domain = Domain(10.0, 30.0)
        assert pan_domain(domain, 100, 40.0, 0.0) == domain

    def test_pan_by_fraction(self):
        controller = ViewportController(bar_count=200)
        controller.domain = Domain(50.0, 150.0)

        controller.pan_by_fraction(-0.1)

        assert controller.domain.start == pytest.approx(40.0)
        assert controller.domain.end == pytest.approx(140.0)


class TestClampDomain:
    """Bounds and minimum-width enforcement."""

    def test_short_sequence_gets_full_range(self):
        domain = clamp_domain(1.0, 2.0, 4)
        assert domain == Domain(0.0, 3.0)

    def test_narrow_window_widened(self):
        domain = clamp_domain(10.0, 11.0, 100)

        assert domain.start == pytest.approx(10.0)
        assert domain.range == pytest.approx(MIN_VISIBLE_BARS)

    def test_no_bars(self):
        assert clamp_domain(0.0, 10.0, 0) is None


class TestViewportController:
    """Controller state over a sequence of operations."""

    def test_new_data_resets_domain(self):
        controller = ViewportController(bar_count=200)
        controller.zoom(-1.0, 0.5)
        assert controller.domain is not None

        controller.set_bar_count(50)

        assert controller.domain is None
        assert controller.resolved() == Domain(0.0, 49.0)

    def test_visible_slice_covers_fractional_domain(self):
        controller = ViewportController(bar_count=100)
        controller.domain = Domain(10.4, 20.6)

        assert controller.visible_slice() == (10, 21)

    def test_reset(self):
        controller = ViewportController(bar_count=100)
        controller.zoom(-1.0, 0.5)

        controller.reset()

        assert controller.domain is None
        assert controller.visible_slice() == (0, 99)

    def test_empty_controller(self):
        controller = ViewportController()

        assert controller.resolved() is None
        assert controller.visible_slice() is None
        assert controller.zoom(-1.0, 0.5) is None
        assert controller.pan(10.0, 800.0) is None

    @pytest.mark.parametrize("bar_count", [3, 6, 50, 250])
    def test_invariants_hold_after_random_operations(self, bar_count):
        rng = random.Random(bar_count)
        controller = ViewportController(bar_count=bar_count)

        for _ in range(300):
            op = rng.choice(("zoom", "zoom_centered", "pan", "pan_by_fraction"))
            if op == "zoom":
                controller.zoom(rng.choice((-1.0, 1.0)), rng.random())
            elif op == "zoom_centered":
                controller.zoom_centered(rng.choice((0.8, 1.2)))
            elif op == "pan":
                controller.pan(rng.uniform(-400, 400), 800.0)
            else:
                controller.pan_by_fraction(rng.choice((-0.1, 0.1)))
            assert_domain_valid(controller.resolved(), bar_count)
