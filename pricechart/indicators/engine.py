"""Indicator engine - computes every indicator and attaches samples to bars."""

import logging
from typing import Any, Dict, List, Sequence

from ..models.indicators import SMA_PERIODS, IndicatorBar, IndicatorSample, IndicatorSettings
from ..models.ohlcv import Bar, BarSeries
from .base import Series
from .bollinger import compute_bollinger_bands
from .macd import compute_macd
from .moving_average import compute_sma
from .rsi import compute_rsi

logger = logging.getLogger(__name__)


class IndicatorEngine:
    """Computes the full indicator set for a bar sequence."""

    def __init__(self, settings: IndicatorSettings = None):
        self.settings = settings or IndicatorSettings()

    def compute_series(self, bars: Sequence[Bar]) -> Dict[str, Series]:
        """
        Compute every indicator series over the bars.

        Args:
            bars: Bars sorted by date, ascending

        Returns:
            Mapping of IndicatorSample field name to full-length series
        """
        s = self.settings
        series: Dict[str, Series] = {}

        for period in SMA_PERIODS:
            series[f"sma{period}"] = compute_sma(bars, period)

        bands = compute_bollinger_bands(bars, s.bollinger_period, s.bollinger_std_dev)
        series['bollinger_upper'] = bands.upper
        series['bollinger_middle'] = bands.middle
        series['bollinger_lower'] = bands.lower

        series['rsi'] = compute_rsi(bars, s.rsi_period)

        macd = compute_macd(bars, s.macd_fast, s.macd_slow, s.macd_signal)
        series['macd_line'] = macd.macd_line
        series['signal_line'] = macd.signal_line
        series['histogram'] = macd.histogram

        return series

    def compute(self, data: Any) -> List[IndicatorBar]:
        """
        Compute indicators and zip them onto the bars.

        Args:
            data: BarSeries or a sequence of bars

        Returns:
            One IndicatorBar per input bar, in order
        """
        bars = data.bars if isinstance(data, BarSeries) else tuple(data)
        series = self.compute_series(bars)

        augmented = [
            IndicatorBar(
                bar=bar,
                indicators=IndicatorSample(**{name: values[i] for name, values in series.items()})
            )
            for i, bar in enumerate(bars)
        ]

        logger.info("indicators_computed", extra={
            "bars": len(bars),
            "settings": self.settings.to_dict(),
            "rsi_defined": sum(1 for v in series['rsi'] if v is not None),
            "macd_signal_defined": sum(1 for v in series['signal_line'] if v is not None),
        })
        return augmented
