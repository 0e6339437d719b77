"""
Configuration loading: YAML file merged over built-in defaults
"""

import copy
import os
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import yaml

from .utils.models import OPTIONAL_FIELDS
from .utils.time_utils import NATIVE_UNITS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "forecast": {
        "time_unit": "minutes",
        "tracked_fields": ["turbidity", "ph"],
        "seasonal_adjustment": False,
        "seasonal_relative_to_trend": False,
    },
    "ingestion": {
        # Ordered: the first alias holding a value in a row wins
        "column_aliases": {
            "time": ["time", "Time", "TIME"],
            "dissolved_oxygen": ["do_level", "DO", "Dissolved Oxygen", "do"],
            "turbidity": ["turbidity", "Turbidity", "TURBIDITY"],
            "ph": ["ph", "pH", "PH"],
        },
    },
    "paths": {
        "output_folder": "outputs",
        "measurements_data": "outputs/measurements.parquet",
        "dashboard_html": "outputs/dashboard.html",
        "prediction_json": "outputs/prediction.json",
        "log_file": None,
    },
    "visualization": {
        "title": "Dissolved Oxygen Trend",
        "height": 600,
        "colors": {
            "observed": "rgb(75, 192, 192)",
            "trend": "rgb(255, 159, 64)",
            "prediction": "rgb(255, 99, 132)",
        },
    },
}


@dataclass(frozen=True)
class ForecastSettings:
    """Parameters of the core: time unit, tracked fields, seasonal switch"""

    time_unit: str = "minutes"
    tracked_fields: Tuple[str, ...] = OPTIONAL_FIELDS
    seasonal_adjustment: bool = False
    seasonal_relative_to_trend: bool = False


def _deep_merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = "config.yaml") -> dict:
    """
    Load configuration from YAML file

    Missing keys fall back to DEFAULT_CONFIG. A missing file is not an
    error; the defaults are returned as-is.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary
    """
    if config_path is None or not os.path.exists(config_path):
        if config_path is not None:
            logger.warning(f"Config file not found: {config_path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, "r") as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return _deep_merge(DEFAULT_CONFIG, user_config)


def forecast_settings(config: dict) -> ForecastSettings:
    """
    Build validated ForecastSettings from the 'forecast' config section

    Args:
        config: Configuration dictionary (see load_config)

    Returns:
        ForecastSettings
    """
    section = config.get("forecast", {})

    time_unit = section.get("time_unit", "minutes")
    if time_unit not in NATIVE_UNITS:
        raise ValueError(
            f"forecast.time_unit must be one of {list(NATIVE_UNITS)}, got {time_unit!r}"
        )

    tracked = tuple(section.get("tracked_fields") or ())
    unknown = [f for f in tracked if f not in OPTIONAL_FIELDS]
    if unknown:
        raise ValueError(f"Unknown tracked fields: {unknown}")

    return ForecastSettings(
        time_unit=time_unit,
        tracked_fields=tracked,
        seasonal_adjustment=bool(section.get("seasonal_adjustment", False)),
        seasonal_relative_to_trend=bool(
            section.get("seasonal_relative_to_trend", False)
        ),
    )
