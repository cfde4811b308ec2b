"""
Configuration management for the incident map.

This module holds the map view, tile source, heatmap, icon, statistics, and
report source settings, loaded from an optional JSON file and merged over
built-in defaults.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class IncidentMapConfig:
    """Manages incident map configuration settings."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "incident_map_config.json"
        self.default_config = self._get_default_config()
        self.config = self._load_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default incident map configuration."""
        return {
            "map_settings": {
                "default_center": [14.2000, 121.1530],
                "default_zoom": 15,
                "scale_imperial": False,
                "map_height": 600
            },
            "tiles": {
                "url_template": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
                "attribution": "© OpenStreetMap contributors",
                "max_zoom": 18
            },
            "heatmap": {
                "radius": 25,
                "blur": 15,
                "max_zoom": 17,
                "gradient": {
                    "0.4": "blue",
                    "0.6": "cyan",
                    "0.7": "lime",
                    "0.8": "yellow",
                    "1.0": "red"
                }
            },
            "markers": {
                "popup_max_width": 300
            },
            "statistics": {
                "top_n": 5,
                "recent_days": 7
            },
            "source": {
                "url": None,
                "timeout_sec": 10
            }
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    config = json.load(f)

                if not isinstance(config, dict):
                    logger.error(f"Config file {self.config_path} must contain a JSON object, got {type(config).__name__}")
                    logger.info("Using default configuration")
                    return copy.deepcopy(self.default_config)
                logger.info(f"Loaded map configuration from {self.config_path}")

                # Merge with defaults to ensure all keys exist
                return self._merge_configs(self.default_config, config)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
                return copy.deepcopy(self.default_config)
        else:
            logger.info(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(self.default_config)

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        merged = copy.deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            elif key in merged and isinstance(merged[key], dict):
                logger.warning(f"Config section '{key}' must be an object, keeping defaults")
            else:
                merged[key] = value

        return merged

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
            logger.info(f"Saved map configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")

    def get_map_settings(self) -> Dict[str, Any]:
        """Get map display settings."""
        return self.config["map_settings"]

    def get_tile_settings(self) -> Dict[str, Any]:
        """Get tile source settings (URL template, attribution, max zoom)."""
        return self.config["tiles"]

    def get_heatmap_settings(self) -> Dict[str, Any]:
        """
        Get heatmap layer settings.

        Gradient stops are stored with string keys in JSON; they are returned
        here as floats, the form the heatmap plugin expects.
        """
        settings = dict(self.config["heatmap"])
        settings["gradient"] = {
            float(stop): color for stop, color in settings.get("gradient", {}).items()
        }
        return settings

    def get_marker_settings(self) -> Dict[str, Any]:
        return self.config["markers"]

    def get_statistics_settings(self) -> Dict[str, Any]:
        return self.config["statistics"]

    def get_source_settings(self) -> Dict[str, Any]:
        return self.config["source"]

    def update_heatmap_settings(self, updates: Dict[str, Any]) -> None:
        """Update heatmap configuration."""
        self.config["heatmap"].update(updates)
        logger.info("Updated heatmap configuration")

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = copy.deepcopy(self.default_config)
        logger.info("Reset configuration to defaults")


# Global configuration instance
_map_config = None

def get_map_config(config_path: Optional[str] = None) -> IncidentMapConfig:
    """Get global map configuration instance."""
    global _map_config
    if _map_config is None:
        _map_config = IncidentMapConfig(config_path)
    return _map_config
