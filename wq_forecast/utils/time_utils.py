"""
Time utility functions for unit conversion and time-axis summaries
"""

import math
import logging
from typing import Sequence

import numpy as np

from ..exceptions import InvalidInput

logger = logging.getLogger(__name__)

# Minutes per unit; months and years are approximate, not calendar-aware
MINUTES_PER_UNIT = {
    "minutes": 1,
    "hours": 60,
    "days": 24 * 60,
    "weeks": 7 * 24 * 60,
    "months": 30 * 24 * 60,
    "years": 365 * 24 * 60,
}

NATIVE_UNITS = ("minutes", "hours")


def convert_to_native(value: float, unit: str, native_unit: str = "minutes") -> float:
    """
    Convert a user-supplied (value, unit) pair into the store's time unit

    Args:
        value: Positive amount of time
        unit: One of minutes, hours, days, weeks, months, years
        native_unit: Time unit of the measurement store (minutes or hours)

    Returns:
        Value expressed in native_unit
    """
    if native_unit not in NATIVE_UNITS:
        raise ValueError(f"Unsupported native time unit: {native_unit}")

    unit_key = str(unit).strip().lower()
    if unit_key not in MINUTES_PER_UNIT:
        raise InvalidInput(f"Unknown time unit: {unit}", fields=["unit"])

    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Time value is not a number: {value!r}", fields=["value"])

    if not math.isfinite(value) or value <= 0:
        raise InvalidInput(
            f"Time value must be a positive number, got {value}", fields=["value"]
        )

    minutes = value * MINUTES_PER_UNIT[unit_key]
    return minutes / MINUTES_PER_UNIT[native_unit]


def get_time_range_info(times: Sequence[float]) -> dict:
    """
    Get summary information about a numeric time axis

    Args:
        times: Sorted time values

    Returns:
        Dictionary with time range statistics
    """
    arr = np.asarray(times, dtype=float)
    if arr.size == 0:
        return {"num_points": 0, "start": None, "end": None, "span": 0.0}

    intervals = np.diff(arr)

    return {
        "num_points": int(arr.size),
        "start": float(arr.min()),
        "end": float(arr.max()),
        "span": float(arr.max() - arr.min()),
        "median_interval": float(np.median(intervals)) if intervals.size else None,
    }
