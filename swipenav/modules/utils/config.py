"""
Centralized configuration manager.
Loads the YAML config and provides typed access with defaults.

    - Built-in defaults, deep-merged with the user's file
    - Schema validation for the recognition thresholds
    - Typed section builders for the detectors
    - Reset support for testing
"""

import copy
import logging
import os

import yaml

from swipenav.modules.control.feedback_manager import FeedbackConfig
from swipenav.modules.control.gesture_lock import DEFAULT_BLOCK_DURATION, LEGACY_BLOCK_DURATION
from swipenav.modules.detection.neutral import NeutralConfig
from swipenav.modules.recognition.single_direction import SingleDirectionConfig
from swipenav.modules.recognition.swipe_detector import SwipeConfig

logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
_CONFIG_DIR = os.path.join(_BASE_DIR, "config")

_DEFAULTS = {
    "neutral": {
        "threshold": 0.01,
    },
    "swipe": {
        "horizontal_threshold": 0.06,
        "vertical_threshold": 0.05,
        "horizontal_time_threshold": 0.7,
        "vertical_time_threshold": 0.5,
        "tracked_joint": "middle_tip",
    },
    "gesture_lock": {
        "block_duration": DEFAULT_BLOCK_DURATION,
    },
    "legacy": {
        "block_duration": LEGACY_BLOCK_DURATION,
        "horizontal_threshold": 0.07,
        "vertical_threshold": 0.05,
        "horizontal_time_threshold": 0.7,
        "vertical_time_threshold": 0.5,
        "require_neutral": False,
    },
    "pose_source": {
        "throttle_interval": 0.1,
    },
    "feedback": {
        "duration": 1.0,
        "fade_duration": 0.3,
        "neutral_color": 0x0F2540,
        "off_color": None,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "max_size_mb": 10,
        "backup_count": 3,
    },
}

# Schema: sections and their expected types
_CONFIG_SCHEMA = {
    "neutral": {
        "threshold": float,
    },
    "swipe": {
        "horizontal_threshold": float,
        "vertical_threshold": float,
        "horizontal_time_threshold": float,
        "vertical_time_threshold": float,
        "tracked_joint": str,
    },
    "gesture_lock": {
        "block_duration": float,
    },
    "legacy": {
        "block_duration": float,
        "require_neutral": bool,
    },
    "pose_source": {
        "throttle_interval": float,
    },
    "logging": {
        "level": str,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Singleton configuration manager."""

    _instance = None
    _data = copy.deepcopy(_DEFAULTS)

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def load(self, config_path=None):
        """Load configuration from a YAML file over the built-in defaults."""
        config_path = config_path or os.path.join(_CONFIG_DIR, "config.yaml")

        user_data = {}
        try:
            with open(config_path, "r") as f:
                user_data = yaml.safe_load(f) or {}
            logger.info("Loaded config from %s", config_path)
        except FileNotFoundError:
            logger.warning("Config file not found: %s, using defaults", config_path)

        if not isinstance(user_data, dict):
            logger.warning("Config file %s is not a mapping, using defaults", config_path)
            user_data = {}

        self._data = _deep_merge(copy.deepcopy(_DEFAULTS), user_data)
        self._validate()
        return self

    def _validate(self):
        """Validate config fields against schema."""
        warnings = []
        for section_name, fields in _CONFIG_SCHEMA.items():
            section = self._data.get(section_name)
            if not isinstance(section, dict):
                warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
                continue
            for field_name, expected_type in fields.items():
                if field_name in section:
                    value = section[field_name]
                    # Allow int where float is expected (but not bool)
                    if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
                        continue
                    if not isinstance(value, expected_type):
                        warnings.append(
                            f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                            f"got {type(value).__name__} ({value!r})"
                        )

        if warnings:
            for w in warnings:
                logger.warning("Config validation: %s", w)
        else:
            logger.debug("Config validation passed")
        return warnings

    def get(self, key_path: str, default=None):
        """Get nested config value using dot notation: 'swipe.vertical_threshold'."""
        keys = key_path.split(".")
        value = self._data
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value):
        """Override a nested value (e.g. from command-line flags)."""
        keys = key_path.split(".")
        section = self._data
        for key in keys[:-1]:
            section = section.setdefault(key, {})
        section[keys[-1]] = value

    def get_section(self, section: str) -> dict:
        """Get an entire config section."""
        return self._data.get(section, {})

    @property
    def neutral(self) -> NeutralConfig:
        return NeutralConfig.from_dict(self.get_section("neutral"))

    @property
    def swipe(self) -> SwipeConfig:
        return SwipeConfig.from_dict(self.get_section("swipe"))

    @property
    def legacy(self) -> SingleDirectionConfig:
        return SingleDirectionConfig.from_dict(self.get_section("legacy"))

    @property
    def feedback(self) -> FeedbackConfig:
        return FeedbackConfig.from_dict(self.get_section("feedback"))

    @property
    def block_duration(self) -> float:
        return float(self.get("gesture_lock.block_duration", DEFAULT_BLOCK_DURATION))

    @property
    def legacy_block_duration(self) -> float:
        return float(self.get("legacy.block_duration", LEGACY_BLOCK_DURATION))

    @property
    def throttle_interval(self) -> float:
        return float(self.get("pose_source.throttle_interval", 0.1))

    @property
    def base_dir(self) -> str:
        return _BASE_DIR

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None
        cls._data = copy.deepcopy(_DEFAULTS)
