"""
Engine configuration and constants.

Tunables live in DEFAULT_SETTINGS, a nested dict of sections whose leaves
are {"value": ..., "description": ...}.  A settings.json file with the same
shape can override any subset of them (see load_settings).
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union
import copy
import json
import logging
import math

logger = logging.getLogger(__name__)


# Default parameters
DEFAULT_FORECAST_DAYS = 30
DEFAULT_BASE_DEMAND = 100.0
DEFAULT_CONFIDENCE_BAND = 0.2       # ±20% around each point forecast
DEFAULT_TREND_WINDOW_DAYS = 30      # Trend is spread linearly over this many days
MIN_HISTORY_RECORDS = 7             # Below this the history is "insufficient_data"
MOVING_AVERAGE_WINDOW = 7

# Every multiplier is floored here so a single factor never zeroes demand
MIN_MULTIPLIER = 0.01

# Confidence score bounds
MIN_CONFIDENCE = 20
MAX_CONFIDENCE = 95

SETTINGS_FILENAME = "settings.json"


DEFAULT_SETTINGS: Dict[str, Dict[str, Dict[str, Any]]] = {
    "forecast": {
        "base_demand": {
            "value": DEFAULT_BASE_DEMAND,
            "description": "Reference daily demand the multipliers are applied to",
        },
        "baseline_source": {
            "value": "fixed",
            "description": "'fixed' uses base_demand; 'history' uses the average daily demand when history is sufficient",
        },
        "confidence_band": {
            "value": DEFAULT_CONFIDENCE_BAND,
            "description": "Half-width of the confidence interval as a fraction of the point forecast",
        },
        "trend_window_days": {
            "value": DEFAULT_TREND_WINDOW_DAYS,
            "description": "Days over which the baseline trend ratio is fully applied",
        },
    },
    "confidence": {
        "base_sufficient": {"value": 70, "description": "Base score with >= 7 history records"},
        "base_insufficient": {"value": 30, "description": "Base score with < 7 history records"},
        "low_volatility_threshold": {"value": 0.2, "description": "History CV below this adds the bonus"},
        "low_volatility_bonus": {"value": 15, "description": ""},
        "high_volatility_threshold": {"value": 0.5, "description": "History CV above this applies the penalty"},
        "high_volatility_penalty": {"value": 20, "description": ""},
        "stable_prediction_threshold": {"value": 0.3, "description": "Prediction CV below this adds the bonus"},
        "stable_prediction_bonus": {"value": 10, "description": ""},
        "missing_input_penalty": {
            "value": 5,
            "description": "Points removed for each absent weather/economic input",
        },
    },
    "events": {
        "include_public_holidays": {
            "value": False,
            "description": "Add built-in Kenyan public holidays to the caller's events",
        },
    },
    "weather": {
        "apply_shelf_stability_layer": {
            "value": False,
            "description": "Extra rainy/dry adjustment for fresh produce, staples and drinks",
        },
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base; leaves given as bare values are wrapped."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        elif isinstance(current, dict) and "value" in current:
            merged[key] = {**current, "value": value}
        elif isinstance(current, dict):
            logger.warning(f"Settings section '{key}' must be an object, got {value!r}; ignoring it")
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def default_settings() -> Dict[str, Any]:
    """Return a fresh copy of DEFAULT_SETTINGS."""
    return copy.deepcopy(DEFAULT_SETTINGS)


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load engine settings from a JSON file, merged over the defaults.

    Fallback: if the file is missing or invalid, the defaults are returned.

    Args:
        path: Path to settings.json (None = defaults only)

    Returns:
        Settings dict with the DEFAULT_SETTINGS shape
    """
    settings = default_settings()
    if path is None:
        return settings

    settings_path = Path(path)
    if not settings_path.exists():
        logger.debug(f"Settings file {settings_path} not found, using defaults")
        return settings

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}. Falling back to defaults.")
        return settings

    if not isinstance(overrides, dict):
        logger.warning(f"Settings file {settings_path} must contain a JSON object, ignoring it")
        return settings

    return _deep_merge(settings, overrides)


def merge_settings(overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge an in-memory overrides dict over the defaults."""
    if not overrides:
        return default_settings()
    return _deep_merge(DEFAULT_SETTINGS, overrides)


def get_setting(settings: Dict[str, Any], section: str, key: str, default: Any = None) -> Any:
    """
    Read a leaf value from a settings dict.

    Accepts both {"value": x} leaves and bare values.
    """
    section_values = settings.get(section)
    if not isinstance(section_values, dict):
        return default
    entry = section_values.get(key)
    if entry is None:
        return default
    if isinstance(entry, dict):
        return entry.get("value", default)
    return entry


def get_numeric_setting(settings: Dict[str, Any], section: str, key: str, default: float) -> float:
    """
    Read a leaf value that must be a number.

    Raises:
        ValueError: the leaf is null, a bool, or not numeric
    """
    value = get_setting(settings, section, key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Setting {section}.{key} must be a number, got {value!r}")
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"Setting {section}.{key} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Setting {section}.{key} must be finite, got {value!r}")
    return number
