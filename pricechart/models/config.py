"""
Configuration models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from hashlib import sha256
import json

from .chart import ChartStyle
from .indicators import IndicatorSettings, IndicatorToggles


@dataclass
class ConfigHash:
    """Configuration hash for reproducibility."""
    hash_value: str
    timestamp: str

    @staticmethod
    def compute(config_dict: Dict[str, Any]) -> str:
        """Compute SHA256 hash of config."""
        json_str = json.dumps(config_dict, sort_keys=True, default=str)
        return sha256(json_str.encode()).hexdigest()


@dataclass
class ChartConfig:
    """Chart session configuration."""
    indicator_settings: IndicatorSettings = field(default_factory=IndicatorSettings)
    enabled_indicators: IndicatorToggles = field(default_factory=IndicatorToggles)
    chart_style: ChartStyle = ChartStyle.CANDLESTICK
    show_crosshair: bool = True
    price_padding: float = 0.05
    config_hash: Optional[ConfigHash] = None

    def __post_init__(self):
        if self.config_hash is None:
            hash_value = ConfigHash.compute(self.to_dict())
            self.config_hash = ConfigHash(
                hash_value=hash_value,
                timestamp=datetime.now(timezone.utc).isoformat()
            )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ChartConfig":
        """
        Build a ChartConfig from the loaded chart.json structure.

        Missing sections fall back to defaults.

        Args:
            config_dict: {"indicators": {...}, "enabled_indicators": {...},
                          "display": {...}}

        Returns:
            ChartConfig
        """
        config_dict = config_dict or {}
        display = config_dict.get('display', {}) or {}
        return cls(
            indicator_settings=IndicatorSettings(**(config_dict.get('indicators', {}) or {})),
            enabled_indicators=IndicatorToggles(**(config_dict.get('enabled_indicators', {}) or {})),
            chart_style=ChartStyle(display.get('chart_style', ChartStyle.CANDLESTICK.value)),
            show_crosshair=bool(display.get('show_crosshair', True)),
            price_padding=float(display.get('price_padding', 0.05)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'indicators': self.indicator_settings.to_dict(),
            'enabled_indicators': self.enabled_indicators.to_dict(),
            'display': {
                'chart_style': self.chart_style.value,
                'show_crosshair': self.show_crosshair,
                'price_padding': self.price_padding,
            },
        }
