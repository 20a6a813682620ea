"""
Unit tests for configuration loading.
"""

import pytest
import tempfile
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from oncall_directory.normalize.config import (
    get_default_config, load_config, merge_configs, save_config, validate_config
)


class TestConfig:
    """Test cases for configuration utilities."""

    def setup_method(self):
        """Setup test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def test_defaults_are_valid(self):
        """Test that the default configuration validates."""
        config = get_default_config()
        assert validate_config(config)
        assert config["matching"]["edit_distance_cap"] == 2
        assert config["matching"]["bonuses"]["exact"] == 1_000_000

    def test_missing_file_uses_defaults(self):
        """Test fallback when the file does not exist."""
        config = load_config(str(Path(self.temp_dir) / "missing.yaml"))
        assert config == get_default_config()

    def test_load_overrides(self):
        """Test that file values are merged over the defaults."""
        config_path = Path(self.temp_dir) / "config.yaml"
        config_path.write_text(
            "matching:\n"
            "  bonuses:\n"
            "    shortness: 0\n"
            "search:\n"
            "  max_results: 5\n"
        )

        config = load_config(str(config_path))

        assert config["matching"]["bonuses"]["shortness"] == 0
        assert config["matching"]["bonuses"]["prefix"] == 500_000
        assert config["search"]["max_results"] == 5
        assert config["search"]["suggestion_limit"] == 8

    def test_malformed_file_uses_defaults(self):
        """Test fallback on unparsable YAML."""
        config_path = Path(self.temp_dir) / "broken.yaml"
        config_path.write_text("matching: [unclosed\n")
        assert load_config(str(config_path)) == get_default_config()

    def test_repository_config_is_valid(self):
        """Test the shipped configuration file."""
        config_path = Path(__file__).parent.parent / "config" / "oncall_directory.yaml"
        config = load_config(str(config_path))
        assert validate_config(config)
        assert config == get_default_config()

    def test_validate_rejects_bad_values(self):
        """Test validation failures."""
        config = get_default_config()
        del config["oncall"]
        assert not validate_config(config)

        config = merge_configs(get_default_config(), {"matching": {"edit_distance_cap": -1}})
        assert not validate_config(config)

        config = merge_configs(get_default_config(), {"matching": {"bonuses": {"typo": 5}}})
        assert not validate_config(config)

        config = merge_configs(get_default_config(), {"search": {"max_results": 0}})
        assert not validate_config(config)

        config = merge_configs(get_default_config(), {"oncall": {"second_phone_preference": "nurse"}})
        assert not validate_config(config)

    def test_merge_does_not_mutate(self):
        """Test that merging leaves the base untouched."""
        base = get_default_config()
        merge_configs(base, {"matching": {"bonuses": {"exact": 1}}})
        assert base["matching"]["bonuses"]["exact"] == 1_000_000

    def test_save_and_reload(self):
        """Test writing a configuration file."""
        config_path = Path(self.temp_dir) / "nested" / "saved.yaml"
        config = merge_configs(get_default_config(), {"search": {"max_results": 3}})

        assert save_config(config, str(config_path))
        assert load_config(str(config_path)) == config
