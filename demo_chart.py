"""
Price chart core demo

Loads a quotes file (or generates sample bars), computes indicators and
replays a few interaction events through a chart session.

Usage:
    python demo_chart.py [path/to/quotes.json|quotes.csv]
"""

import argparse
import json
import logging
from datetime import date, timedelta

from configs import config_loader
from infra.data.quotes_loader import QuotesLoader
from infra.log_format import setup_logging
from pricechart.models.chart import DrawingMode
from pricechart.models.events import KeyEvent, PointerAction, PointerEvent, WheelEvent
from pricechart.models.ohlcv import BarSeries
from pricechart.orchestration.chart_session import ChartSession

logger = logging.getLogger(__name__)


def create_sample_data(count: int = 250) -> BarSeries:
    """Create a gently oscillating daily series for demonstration."""
    rows = []
    price = 1000.0
    start = date(2024, 1, 1)
    for i in range(count):
        open_price = price
        close_price = open_price + ((i % 7) - 3) * 4.0
        rows.append({
            "date": start + timedelta(days=i),
            "open": open_price,
            "high": max(open_price, close_price) + 6.0,
            "low": min(open_price, close_price) - 6.0,
            "close": close_price,
            "volume": 100000 + i * 10,
        })
        price = close_price
    return BarSeries.from_rows("DEMO", rows)


def main():
    """Main demo function."""
    parser = argparse.ArgumentParser(description="Price chart core demo")
    parser.add_argument("path", nargs="?", help="daily_quotes JSON or CSV file")
    args = parser.parse_args()

    log_file = setup_logging(prefix="demo_chart")

    series = QuotesLoader().load(args.path) if args.path else create_sample_data()
    if series is None or series.length == 0:
        logger.error("No bars to chart", extra={"path": args.path})
        return

    config = config_loader.chart_config()
    logger.info("Configuration loaded", extra={"config_hash": config.config_hash.hash_value[:16]})

    session = ChartSession(config)
    session.load(series)

    session.handle_event(KeyEvent("b"))
    session.handle_event(WheelEvent(delta_y=-1.0, x=session.surface.width * 0.75))
    session.handle_event(PointerEvent(PointerAction.DOWN, 400.0, 200.0))
    session.handle_event(PointerEvent(PointerAction.MOVE, 300.0, 200.0))
    session.handle_event(PointerEvent(PointerAction.UP, 300.0, 200.0))

    session.drawing.toggle_mode(DrawingMode.TRENDLINE)
    session.handle_event(PointerEvent(PointerAction.DOWN, 100.0, 300.0))
    session.handle_event(PointerEvent(PointerAction.MOVE, 500.0, 100.0))
    session.handle_event(PointerEvent(PointerAction.UP, 500.0, 100.0))

    frame = session.frame()
    latest = frame.visible_bars[-1] if frame.visible_bars else None
    summary = {
        "code": series.code,
        "bars": series.length,
        "visible": len(frame.visible_bars),
        "domain": [frame.domain.start, frame.domain.end] if frame.domain else None,
        "stats": vars(frame.stats),
        "lines": [line.line_id for line in frame.lines],
        "latest_rsi": latest.indicators.rsi if latest else None,
        "latest_macd": latest.indicators.macd_line if latest else None,
    }
    logger.info("Demo completed", extra={"summary": summary, "log_file": str(log_file)})
    print(json.dumps(summary, indent=2, default=str))


if __name__ == "__main__":
    main()
