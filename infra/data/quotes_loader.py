"""
Quotes Loader - daily_quotes JSON | CSV

Reads daily price history files and produces an ordered BarSeries for the
chart session.
"""

import json
import logging
import os
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

import pandas as pd

from pricechart.models.ohlcv import BarSeries

logger = logging.getLogger(__name__)


class QuoteFormat(Enum):
    """Supported input file formats."""
    JSON = "json"
    CSV = "csv"


def parse_quote_date(value: Any) -> date:
    """Parse YYYY-MM-DD or YYYYMMDD dates (or pass date objects through)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if len(text) == 8 and text.isdigit():
        return datetime.strptime(text, "%Y%m%d").date()
    return date.fromisoformat(text[:10])


class QuotesLoader:
    """
    Loads daily quotes from disk.

    JSON files follow the daily_quotes layout:
        {"daily_quotes": [{"Date": "...", "Code": "...", "Open": ..., "High": ...,
                           "Low": ..., "Close": ..., "Volume": ...,
                           "TurnoverValue": ...}, ...]}
    CSV files need date/open/high/low/close columns (any case) and may carry
    volume, turnover_value and code.
    """

    def __init__(self, config: Dict = None):
        """
        Initialize quotes loader.

        Args:
            config: Loader config
                {
                  "code": "fallback instrument code",
                  "format": "json|csv"  (default: from file extension)
                }
        """
        self.config = config or {}
        self.default_code = self.config.get("code", "")
        fmt = self.config.get("format")
        self.format = QuoteFormat(fmt) if fmt else None

    def _resolve_format(self, path: str) -> QuoteFormat:
        if self.format is not None:
            return self.format
        return QuoteFormat.CSV if path.lower().endswith(".csv") else QuoteFormat.JSON

    def load(self, path: str) -> Optional[BarSeries]:
        """
        Load a quotes file into a BarSeries.

        Args:
            path: File path

        Returns:
            BarSeries sorted ascending by date, or None when the file cannot
            be read
        """
        if not os.path.exists(path):
            logger.error("Quotes file not found", extra={"path": path})
            return None

        fmt = self._resolve_format(path)
        try:
            if fmt == QuoteFormat.CSV:
                rows = self._read_csv(path)
            else:
                rows = self._read_json(path)
        except (OSError, ValueError, KeyError, AttributeError) as e:
            logger.error("Quotes load error", extra={"path": path, "error": str(e)})
            return None

        code = str(next((row["code"] for row in rows if row.get("code")), self.default_code))
        series = BarSeries.from_rows(code, self._valid_rows(rows))

        logger.info("Quotes loaded", extra={
            "path": path,
            "format": fmt.value,
            "code": code,
            "bar_count": series.length,
            "skipped": len(rows) - series.length,
        })
        return series

    def _read_json(self, path: str) -> List[Dict[str, Any]]:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)

        rows = []
        for item in payload.get("daily_quotes", []):
            rows.append({
                "date": item.get("Date"),
                "code": item.get("Code", ""),
                "open": item.get("Open"),
                "high": item.get("High"),
                "low": item.get("Low"),
                "close": item.get("Close"),
                "volume": item.get("Volume"),
                "turnover_value": item.get("TurnoverValue"),
            })
        return rows

    def _read_csv(self, path: str) -> List[Dict[str, Any]]:
        df = pd.read_csv(path)

        # Standardize column names
        df.columns = [c.strip().lower() for c in df.columns]
        df = df.rename(columns={"turnovervalue": "turnover_value"})
        if "date" not in df.columns:
            raise KeyError("No date column found in CSV")

        df = df.astype(object).where(pd.notna(df), None)
        return df.to_dict(orient="records")

    def _valid_rows(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Drop rows with missing prices or inconsistent OHLC values."""
        valid = []
        for row in rows:
            if row.get("date") is None or any(row.get(k) is None for k in ("open", "high", "low", "close")):
                logger.warning("Quote row skipped", extra={"row_date": str(row.get("date")), "reason": "missing_price"})
                continue
            try:
                parsed = dict(row, date=parse_quote_date(row["date"]))
                high, low = float(row["high"]), float(row["low"])
                open_, close = float(row["open"]), float(row["close"])
            except (TypeError, ValueError) as e:
                logger.warning("Quote row skipped", extra={"row_date": str(row.get("date")), "reason": str(e)})
                continue
            if not (low <= min(open_, close) and high >= max(open_, close)):
                logger.warning("Quote row skipped", extra={"row_date": str(row.get("date")), "reason": "invalid_ohlc"})
                continue
            valid.append(parsed)
        return valid
