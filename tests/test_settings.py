"""
Tests for settings loading and merging (acacia_bloom/config.py).
"""

import json
import pytest
from pathlib import Path
import tempfile
import shutil

from acacia_bloom.config import (
    DEFAULT_BASE_DEMAND,
    DEFAULT_SETTINGS,
    default_settings,
    get_numeric_setting,
    get_setting,
    load_settings,
    merge_settings,
)


@pytest.fixture
def temp_dir():
    """Create temporary directory for settings files."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir)


class TestDefaults:
    def test_default_copy_is_independent(self):
        settings = default_settings()
        settings["forecast"]["base_demand"]["value"] = 1

        assert DEFAULT_SETTINGS["forecast"]["base_demand"]["value"] == DEFAULT_BASE_DEMAND

    def test_get_setting_reads_leaf(self):
        assert get_setting(default_settings(), "forecast", "base_demand") == DEFAULT_BASE_DEMAND

    def test_get_setting_bare_value(self):
        assert get_setting({"forecast": {"base_demand": 50}}, "forecast", "base_demand") == 50

    def test_get_setting_default(self):
        assert get_setting({}, "forecast", "base_demand", 7) == 7
        assert get_setting(default_settings(), "forecast", "unknown", "x") == "x"

    def test_get_setting_section_not_a_dict(self):
        assert get_setting({"forecast": 5}, "forecast", "base_demand", 7) == 7

    def test_get_numeric_setting(self):
        settings = {"forecast": {"base_demand": {"value": "120"}, "confidence_band": {"value": None}}}

        assert get_numeric_setting(settings, "forecast", "base_demand", 1.0) == 120.0
        assert get_numeric_setting(settings, "forecast", "trend_window_days", 30) == 30.0
        with pytest.raises(ValueError, match="forecast.confidence_band must be a number"):
            get_numeric_setting(settings, "forecast", "confidence_band", 0.2)

    @pytest.mark.parametrize("value", [True, "lots", [1], float("nan")])
    def test_get_numeric_setting_rejects(self, value):
        with pytest.raises(ValueError, match="forecast.base_demand"):
            get_numeric_setting({"forecast": {"base_demand": value}}, "forecast", "base_demand", 1.0)


class TestMergeSettings:
    def test_none_gives_defaults(self):
        assert merge_settings(None) == default_settings()

    def test_leaf_override(self):
        merged = merge_settings({"forecast": {"base_demand": {"value": 250}}})

        assert get_setting(merged, "forecast", "base_demand") == 250
        assert get_setting(merged, "forecast", "confidence_band") == pytest.approx(0.2)

    def test_bare_value_override_keeps_description(self):
        merged = merge_settings({"events": {"include_public_holidays": True}})
        leaf = merged["events"]["include_public_holidays"]

        assert leaf["value"] is True
        assert "description" in leaf

    def test_unknown_section_kept(self):
        merged = merge_settings({"custom": {"flag": {"value": 1}}})
        assert get_setting(merged, "custom", "flag") == 1

    def test_scalar_over_section_ignored(self, caplog):
        merged = merge_settings({"forecast": 5, "events": {"include_public_holidays": True}})

        assert merged["forecast"] == default_settings()["forecast"]
        assert get_setting(merged, "events", "include_public_holidays") is True
        assert "Settings section 'forecast' must be an object" in caplog.text


class TestLoadSettings:
    def test_no_path(self):
        assert load_settings() == default_settings()

    def test_missing_file(self, temp_dir):
        assert load_settings(temp_dir / "settings.json") == default_settings()

    def test_file_overrides(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text(json.dumps({"confidence": {"missing_input_penalty": {"value": 0}}}), encoding="utf-8")

        settings = load_settings(path)

        assert get_setting(settings, "confidence", "missing_input_penalty") == 0
        assert get_setting(settings, "confidence", "base_sufficient") == 70

    def test_invalid_json_falls_back(self, temp_dir, caplog):
        path = temp_dir / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_settings(path) == default_settings()
        assert "Falling back to defaults" in caplog.text

    def test_non_object_ignored(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert load_settings(str(path)) == default_settings()
