"""
Configuration utilities for OnCall Directory.

Provides configuration loading and validation for matching, search and
on-call lookup components.
"""

import copy
import logging
import yaml
from typing import Dict, Any
from pathlib import Path

logger = logging.getLogger(__name__)

SECOND_PHONE_PREFERENCES = ("pa", "residency", "auto")

BONUS_KEYS = [
    "exact", "prefix", "word_boundary", "subsequence",
    "edit_distance", "edit_distance_step", "shortness"
]


def get_default_config() -> Dict[str, Any]:
    """
    Get default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "matching": {
            "edit_distance_cap": 2,
            "bonuses": {
                "exact": 1_000_000,
                "prefix": 500_000,
                "word_boundary": 300_000,
                "subsequence": 100_000,
                "edit_distance": 50_000,
                "edit_distance_step": 10_000,
                "shortness": 10_000
            }
        },
        "search": {
            "max_results": 20,
            "empty_query_limit": 50,
            "suggestion_limit": 8
        },
        "oncall": {
            "second_phone_preference": "auto",
            "pa_phone_marker": "PA Phone",
            "residency_marker": "Residency",
            "day_start_hour": 7
        },
        "phone": {
            "default_country": "US"
        }
    }


def merge_configs(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configuration dictionaries.

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)

    for key, value in (override_config or {}).items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def load_config(config_path: str = "config/oncall_directory.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file, layered over the defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    defaults = get_default_config()

    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.warning(f"Configuration file {config_path} not found, using defaults")
            return defaults

        with open(config_file, 'r') as f:
            file_config = yaml.safe_load(f) or {}

        if not isinstance(file_config, dict):
            logger.error(f"Configuration file {config_path} must contain a mapping, using defaults")
            return defaults

        config = merge_configs(defaults, file_config)
        logger.info(f"Loaded configuration from {config_path}")
        return config

    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load configuration from {config_path}: {e}")
        return defaults


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration.

    Args:
        config: Configuration dictionary

    Returns:
        True if configuration is valid, False otherwise
    """
    required_sections = ["matching", "search", "oncall"]

    for section in required_sections:
        if section not in config:
            logger.error(f"Missing required configuration section: {section}")
            return False

    # Matching
    matching_config = config.get("matching", {})
    cap = matching_config.get("edit_distance_cap", 2)
    if not isinstance(cap, int) or isinstance(cap, bool) or cap < 0:
        logger.error("matching.edit_distance_cap must be a non-negative integer")
        return False

    bonuses = matching_config.get("bonuses", {})
    if not isinstance(bonuses, dict):
        logger.error("matching.bonuses must be a mapping")
        return False

    for key, value in bonuses.items():
        if key not in BONUS_KEYS:
            logger.error(f"Unknown matching bonus: {key}")
            return False
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.error(f"matching.bonuses.{key} must be a non-negative integer")
            return False

    # Search
    search_config = config.get("search", {})
    for key in ["max_results", "empty_query_limit", "suggestion_limit"]:
        value = search_config.get(key, 1)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            logger.error(f"search.{key} must be a positive integer")
            return False

    # On-call
    oncall_config = config.get("oncall", {})
    preference = oncall_config.get("second_phone_preference", "auto")
    if preference not in SECOND_PHONE_PREFERENCES:
        logger.error(f"oncall.second_phone_preference must be one of {SECOND_PHONE_PREFERENCES}")
        return False

    day_start_hour = oncall_config.get("day_start_hour", 7)
    if not isinstance(day_start_hour, int) or not 0 <= day_start_hour <= 23:
        logger.error("oncall.day_start_hour must be an hour between 0 and 23")
        return False

    logger.info("Configuration validation passed")
    return True


def save_config(config: Dict[str, Any], config_path: str) -> bool:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Path to save configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False, indent=2)

        logger.info(f"Saved configuration to {config_path}")
        return True

    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to save configuration to {config_path}: {e}")
        return False
