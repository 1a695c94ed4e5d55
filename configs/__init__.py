"""
Price chart configuration management

Loads and validates the chart configuration files.
"""

import json
import logging
from typing import Dict, Any
from pathlib import Path

import jsonschema

from pricechart.models.config import ChartConfig

logger = logging.getLogger(__name__)

CONFIG_FILES = {
    'chart': ('chart.json', 'chart.schema.json'),
}


class ConfigLoader:
    """Loads and manages chart configurations."""

    def __init__(self, config_dir: str = None):
        """
        Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files
                (defaults to this package's directory)
        """
        self.config_dir = Path(config_dir) if config_dir else Path(__file__).resolve().parent
        self.configs: Dict[str, Dict[str, Any]] = {}
        self._load_all_configs()

    def _load_all_configs(self) -> None:
        """Load all configuration files."""
        for config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name)

    def _load(self, config_name: str) -> Dict[str, Any]:
        filename, schema_name = CONFIG_FILES[config_name]
        config_path = self.config_dir / filename
        if not config_path.exists():
            # Silent default; ChartConfig supplies the values
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
            schema_path = self.config_dir / schema_name
            if schema_path.exists():
                with open(schema_path, 'r', encoding='utf-8') as sf:
                    schema = json.load(sf)
                jsonschema.validate(instance=config, schema=schema)
            return config
        except (OSError, json.JSONDecodeError, jsonschema.ValidationError) as e:
            logger.warning("config_load_failed", extra={"path": str(config_path), "error": str(e)})
            return {}

    def get_config(self, config_name: str) -> Dict[str, Any]:
        """
        Get configuration by name.

        Args:
            config_name: Name of configuration

        Returns:
            Configuration dictionary
        """
        return self.configs.get(config_name, {})

    def get_all_configs(self) -> Dict[str, Dict[str, Any]]:
        return self.configs.copy()

    def reload_config(self, config_name: str) -> None:
        """
        Reload specific configuration.

        Args:
            config_name: Name of configuration to reload
        """
        if config_name in CONFIG_FILES:
            self.configs[config_name] = self._load(config_name)

    def chart_config(self) -> ChartConfig:
        """Typed chart configuration built from chart.json."""
        return ChartConfig.from_dict(self.get_config('chart'))


# Global configuration loader instance
config_loader = ConfigLoader()
