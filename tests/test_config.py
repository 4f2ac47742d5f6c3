"""
Tests for the configuration manager
"""

import os

import pytest
import yaml

from swipenav.core.types import JointName
from swipenav.modules.utils.config import Config


@pytest.fixture
def write_config(tmp_path):
    def write(data, name="config.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
        return str(path)
    return write


class TestConfig:
    """Test suite for Config."""

    def test_singleton(self):
        assert Config() is Config()

    def test_defaults_without_file(self, tmp_path):
        config = Config().load(str(tmp_path / "missing.yaml"))
        assert config.get("neutral.threshold") == 0.01
        assert config.block_duration == 0.2
        assert config.legacy_block_duration == 1.0
        assert config.throttle_interval == 0.1

    def test_repository_config_matches_defaults(self):
        config = Config().load()
        assert os.path.isfile(os.path.join(config.base_dir, "config", "config.yaml"))
        assert config.swipe.horizontal_threshold == 0.06
        assert config.feedback.neutral_color == 0x0F2540

    def test_user_values_deep_merge(self, write_config):
        path = write_config({"swipe": {"vertical_threshold": 0.04}})
        config = Config().load(path)
        assert config.swipe.vertical_threshold == 0.04
        assert config.swipe.horizontal_threshold == 0.06

    def test_typed_sections(self, write_config):
        path = write_config({
            "neutral": {"threshold": 0.02},
            "swipe": {"tracked_joint": "Index_Tip"},
            "legacy": {"require_neutral": True},
            "feedback": {"duration": 2},
        })
        config = Config().load(path)
        assert config.neutral.threshold == 0.02
        assert config.swipe.tracked_joint is JointName.INDEX_TIP
        assert config.legacy.require_neutral is True
        assert config.feedback.duration == 2.0

    def test_non_mapping_file_falls_back(self, write_config):
        config = Config().load(write_config("- just\n- a list\n"))
        assert config.get("swipe.horizontal_time_threshold") == 0.7

    def test_validation_reports_bad_types(self, write_config):
        config = Config().load(write_config({"gesture_lock": {"block_duration": "long"}}))
        warnings = config._validate()
        assert any("gesture_lock.block_duration" in w for w in warnings)

    def test_int_accepted_for_float(self, write_config):
        config = Config().load(write_config({"gesture_lock": {"block_duration": 1}}))
        assert config._validate() == []
        assert config.block_duration == 1.0

    def test_get_missing_returns_default(self):
        assert Config().get("nope.nothing", 42) == 42

    def test_set_overrides(self):
        config = Config()
        config.set("logging.level", "DEBUG")
        config.set("extra.deep.value", 3)
        assert config.get("logging.level") == "DEBUG"
        assert config.get("extra.deep.value") == 3

    def test_reset_restores_defaults(self):
        Config().set("neutral.threshold", 0.5)
        Config.reset()
        assert Config().get("neutral.threshold") == 0.01
