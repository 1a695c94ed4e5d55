"""Chart session orchestration - composes the engine and interaction controllers."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..indicators.engine import IndicatorEngine
from ..interaction.crosshair import CrosshairTracker
from ..interaction.drawing import DrawingToolController
from ..interaction.geometry import bar_geometries, cursor_overlay, project_line
from ..interaction.price_scale import VisibleStats, compute_price_domain, compute_visible_stats
from ..interaction.viewport import (
    KEYBOARD_PAN_FRACTION, KEYBOARD_ZOOM_IN_FACTOR, KEYBOARD_ZOOM_OUT_FACTOR, ViewportController,
)
from ..models.chart import (
    ChartStyle, CrosshairSample, Domain, DrawingLine, DrawingMode, Point, PriceDomain, Surface,
)
from ..models.config import ChartConfig
from ..models.events import KeyEvent, PointerAction, PointerEvent, WheelEvent
from ..models.geometry import BarGeometry, CursorOverlay, LineGeometry
from ..models.indicators import IndicatorBar, IndicatorToggles
from ..models.ohlcv import BarSeries

logger = logging.getLogger(__name__)

KEYBOARD_SHORTCUTS: Tuple[Tuple[str, str], ...] = (
    ("ArrowLeft / ArrowRight", "Pan 10% of the visible range"),
    ("+ / -", "Zoom in / out 20% around the center"),
    ("Escape", "Reset zoom and cancel drawing"),
    ("c", "Toggle crosshair"),
    ("t", "Trendline drawing mode"),
    ("h", "Horizontal line drawing mode"),
    ("r", "Toggle RSI"),
    ("m", "Toggle MACD"),
    ("b", "Toggle Bollinger Bands"),
    ("1-4", "Chart style: candlestick, OHLC, line, area"),
    ("?", "Show this help"),
)

_STYLE_KEYS = {
    "1": ChartStyle.CANDLESTICK,
    "2": ChartStyle.OHLC,
    "3": ChartStyle.LINE,
    "4": ChartStyle.AREA,
}

_INDICATOR_KEYS = {
    "r": "rsi",
    "m": "macd",
    "b": "bollinger_bands",
}


@dataclass(frozen=True)
class ChartFrame:
    """Everything the rendering layer needs to paint one frame."""
    visible_bars: Tuple[IndicatorBar, ...]
    domain: Optional[Domain]
    price_domain: Optional[PriceDomain]
    stats: VisibleStats
    chart_style: ChartStyle
    indicators: IndicatorToggles
    lines: Tuple[DrawingLine, ...]
    provisional_line: Optional[DrawingLine]
    selected_line_id: Optional[str]
    drawing_mode: DrawingMode
    crosshair: Optional[CrosshairSample]
    show_crosshair: bool
    show_shortcuts: bool
    shortcuts: Tuple[Tuple[str, str], ...] = KEYBOARD_SHORTCUTS


class ChartSession:
    """
    Owns chart state for one loaded bar series.

    Every mutating call finishes its indicator recomputation before returning,
    so a later slice never sees stale indicator values.
    """

    def __init__(self, config: ChartConfig = None, surface: Surface = None):
        self.config = config or ChartConfig()
        self.engine = IndicatorEngine(self.config.indicator_settings)
        self.viewport = ViewportController()
        self.drawing = DrawingToolController(self.viewport)
        self.crosshair = CrosshairTracker(self.viewport, enabled=self.config.show_crosshair)
        self.indicators = self.config.enabled_indicators
        self.chart_style = self.config.chart_style
        self.show_shortcuts = False
        self.surface = surface or Surface(width=800.0, height=400.0)
        self.series: Optional[BarSeries] = None
        self.bars: List[IndicatorBar] = []

        self._key_actions: Dict[str, Callable[[], Any]] = {
            "ArrowLeft": lambda: self.viewport.pan_by_fraction(-KEYBOARD_PAN_FRACTION),
            "ArrowRight": lambda: self.viewport.pan_by_fraction(KEYBOARD_PAN_FRACTION),
            "+": lambda: self.viewport.zoom_centered(KEYBOARD_ZOOM_IN_FACTOR),
            "=": lambda: self.viewport.zoom_centered(KEYBOARD_ZOOM_IN_FACTOR),
            "-": lambda: self.viewport.zoom_centered(KEYBOARD_ZOOM_OUT_FACTOR),
            "_": lambda: self.viewport.zoom_centered(KEYBOARD_ZOOM_OUT_FACTOR),
            "Escape": self.escape,
            "c": self.crosshair.toggle,
            "t": lambda: self.drawing.toggle_mode(DrawingMode.TRENDLINE),
            "h": lambda: self.drawing.toggle_mode(DrawingMode.HORIZONTAL),
            "?": self.toggle_shortcuts,
        }
        for key, name in _INDICATOR_KEYS.items():
            self._key_actions[key] = (lambda n=name: self.toggle_indicator(n))
        for key, style in _STYLE_KEYS.items():
            self._key_actions[key] = (lambda s=style: self.set_chart_style(s))

    # ---- data and parameters ----

    def load(self, series: BarSeries) -> None:
        """Adopt a new bar series: recompute indicators, then reset the view."""
        self.series = series
        self._recompute()
        self.viewport.set_bar_count(len(self.bars))
        self.drawing.cancel()
        self.crosshair.clear()
        logger.info("chart_series_loaded", extra={"code": series.code, "bar_count": series.length})

    def update_indicator_settings(self, **changes) -> None:
        """Apply parameter changes and recompute synchronously."""
        settings = self.engine.settings.with_changes(**changes)
        self.engine = IndicatorEngine(settings)
        # config_hash=None makes ChartConfig fingerprint the new settings
        self.config = replace(self.config, indicator_settings=settings, config_hash=None)
        self._recompute()

    def _recompute(self) -> None:
        self.bars = self.engine.compute(self.series) if self.series is not None else []

    def toggle_indicator(self, name: str) -> IndicatorToggles:
        self.indicators = self.indicators.toggle(name)
        return self.indicators

    def set_chart_style(self, style: ChartStyle) -> ChartStyle:
        self.chart_style = ChartStyle(style)
        return self.chart_style

    def toggle_shortcuts(self) -> bool:
        self.show_shortcuts = not self.show_shortcuts
        return self.show_shortcuts

    def resize(self, width: float, height: float) -> None:
        self.surface = Surface(width=width, height=height)

    # ---- derived views ----

    def visible_bars(self) -> List[IndicatorBar]:
        bounds = self.viewport.visible_slice()
        if bounds is None:
            return []
        start, end = bounds
        return self.bars[start:end + 1]

    def price_domain(self) -> Optional[PriceDomain]:
        return compute_price_domain(self.visible_bars(), self.indicators, self.config.price_padding)

    def bar_geometries(self) -> List[BarGeometry]:
        return bar_geometries(self.visible_bars(), self.surface, self.viewport.resolved(),
                              self.price_domain())

    def cursor_overlay(self) -> CursorOverlay:
        return cursor_overlay(self.crosshair.sample, self.crosshair.enabled)

    def line_geometries(self) -> List[LineGeometry]:
        domain = self.viewport.resolved()
        price_domain = self.price_domain()
        if domain is None or price_domain is None:
            return []
        lines = list(self.drawing.lines)
        provisional = self.drawing.provisional_line()
        if provisional is not None:
            lines.append(provisional)
        return [
            project_line(line, self.surface, domain, price_domain,
                         selected=line.line_id == self.drawing.selected_line_id)
            for line in lines
        ]

    def frame(self) -> ChartFrame:
        visible = self.visible_bars()
        return ChartFrame(
            visible_bars=tuple(visible),
            domain=self.viewport.domain,
            price_domain=compute_price_domain(visible, self.indicators, self.config.price_padding),
            stats=compute_visible_stats(visible),
            chart_style=self.chart_style,
            indicators=self.indicators,
            lines=tuple(self.drawing.lines),
            provisional_line=self.drawing.provisional_line(),
            selected_line_id=self.drawing.selected_line_id,
            drawing_mode=self.drawing.mode,
            crosshair=self.crosshair.sample,
            show_crosshair=self.crosshair.enabled,
            show_shortcuts=self.show_shortcuts,
        )

    # ---- input events ----

    def attach(self, source: Any) -> None:
        """Subscribe to an input source exposing subscribe(callback)."""
        source.subscribe(self.handle_event)

    def handle_event(self, event: Any) -> bool:
        """Dispatch one host event. Returns True when it was consumed."""
        if isinstance(event, PointerEvent):
            self.handle_pointer(event)
            return True
        if isinstance(event, WheelEvent):
            self.handle_wheel(event.delta_y, event.x)
            return True
        if isinstance(event, KeyEvent):
            return self.handle_key(event.key)
        logger.warning("chart_event_ignored", extra={"event_type": type(event).__name__})
        return False

    def handle_pointer(self, event: PointerEvent) -> None:
        position = Point(event.x, event.y)
        price_domain = self.price_domain()

        if event.action == PointerAction.DOWN:
            if self.drawing.mode == DrawingMode.NONE:
                hit = self.drawing.line_at(position, self.surface, price_domain)
                if hit is not None:
                    self.drawing.select_line(hit.line_id)
                    return
            self.drawing.pointer_down(position, self.surface, price_domain)
        elif event.action == PointerAction.MOVE:
            self.drawing.pointer_move(position, self.surface, price_domain)
            # Panning may have moved the window; re-derive the price scale
            self.crosshair.track(position, self.surface, self.price_domain(),
                                 self.series.bars if self.series else ())
        elif event.action == PointerAction.UP:
            self.drawing.pointer_up(position, self.surface, price_domain)
        elif event.action == PointerAction.LEAVE:
            self.drawing.pointer_leave()
            self.crosshair.clear()

    def handle_wheel(self, delta_y: float, x: float) -> Optional[Domain]:
        if not self.bars or self.surface.width <= 0:
            return self.viewport.domain
        domain = self.viewport.zoom(delta_y, x / self.surface.width)
        logger.debug("viewport_zoom", extra={"delta_y": delta_y, "anchor_x": x})
        return domain

    def handle_key(self, key: str) -> bool:
        action = self._key_actions.get(key)
        if action is None:
            return False
        action()
        return True

    def escape(self) -> None:
        """Reset zoom and drop any drawing in progress."""
        self.viewport.reset()
        self.drawing.cancel()
