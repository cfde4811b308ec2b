"""
Tests for incident map configuration.
"""

import json
import os

from sumbong.maps.map_config import IncidentMapConfig


class TestIncidentMapConfig:
    """Test configuration loading, merging, and saving."""

    def test_defaults_when_file_missing(self, temp_directory):
        config = IncidentMapConfig(os.path.join(temp_directory, "missing.json"))

        assert config.get_map_settings()['default_center'] == [14.2, 121.153]
        assert config.get_map_settings()['default_zoom'] == 15
        assert config.get_tile_settings()['max_zoom'] == 18
        assert config.get_tile_settings()['attribution'] == "© OpenStreetMap contributors"
        assert config.get_heatmap_settings()['radius'] == 25
        assert config.get_heatmap_settings()['max_zoom'] == 17
        assert config.get_statistics_settings() == {'top_n': 5, 'recent_days': 7}
        assert config.get_source_settings()['url'] is None

    def test_user_file_merged_over_defaults(self, temp_directory):
        path = os.path.join(temp_directory, "incident_map_config.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({
                "heatmap": {"radius": 30},
                "source": {"url": "https://example.org/api/reports"}
            }, f)

        config = IncidentMapConfig(path)

        assert config.get_heatmap_settings()['radius'] == 30
        assert config.get_heatmap_settings()['blur'] == 15
        assert config.get_source_settings() == {"url": "https://example.org/api/reports", "timeout_sec": 10}

    def test_invalid_file_falls_back_to_defaults(self, temp_directory, caplog):
        path = os.path.join(temp_directory, "broken.json")
        with open(path, 'w', encoding='utf-8') as f:
            f.write("{not json")

        config = IncidentMapConfig(path)

        assert config.config == config.default_config
        assert "Failed to load config" in caplog.text

    def test_non_object_file_falls_back_to_defaults(self, temp_directory, caplog):
        path = os.path.join(temp_directory, "list.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(["not", "an", "object"], f)

        config = IncidentMapConfig(path)

        assert config.config == config.default_config
        assert "must contain a JSON object" in caplog.text

    def test_non_object_section_keeps_defaults(self, temp_directory):
        path = os.path.join(temp_directory, "incident_map_config.json")
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({"heatmap": 5, "statistics": {"top_n": 3}}, f)

        config = IncidentMapConfig(path)

        assert config.get_heatmap_settings()['radius'] == 25
        assert config.get_statistics_settings()['top_n'] == 3

    def test_save_and_reload(self, temp_directory):
        path = os.path.join(temp_directory, "nested", "incident_map_config.json")
        config = IncidentMapConfig(path)
        config.update_heatmap_settings({"blur": 20})

        config.save_config()

        assert IncidentMapConfig(path).get_heatmap_settings()['blur'] == 20

    def test_reset_does_not_share_defaults(self, map_config):
        map_config.update_heatmap_settings({"radius": 40})
        map_config.reset_to_defaults()

        assert map_config.get_heatmap_settings()['radius'] == 25
        map_config.update_heatmap_settings({"radius": 50})
        assert map_config.default_config['heatmap']['radius'] == 25
