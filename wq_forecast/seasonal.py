"""
[5] SEASONAL MODULE
Hour-of-day table of average dissolved oxygen for seasonal adjustment
"""

import math
from typing import Dict, Optional, Sequence

import numpy as np
import pandas as pd

from .utils.models import Measurement, RegressionResult

HOURS_PER_DAY = 24
MIN_SEASONAL_MEASUREMENTS = 24


def hour_bucket(time: float) -> int:
    """Hour-of-day bucket 0-23 for a time value"""
    return int(math.floor(time % HOURS_PER_DAY))


def build_seasonal_table(
    measurements: Sequence[Measurement],
    trend: Optional[RegressionResult] = None,
) -> Dict[int, float]:
    """
    Average dissolved oxygen per hour-of-day bucket

    With a trend supplied, each bucket instead averages the deviation of the
    observations from that trend line.

    Args:
        measurements: Measurements with time and dissolved oxygen
        trend: Optional fitted line to take deviations from

    Returns:
        Mapping bucket -> average. Empty when fewer than 24 measurements;
        buckets without observations are absent.
    """
    if len(measurements) < MIN_SEASONAL_MEASUREMENTS:
        return {}

    df = pd.DataFrame(
        {
            "time": [m.time for m in measurements],
            "value": [m.dissolved_oxygen for m in measurements],
        },
        dtype=float,
    ).dropna()

    if trend is not None:
        df["value"] = df["value"] - (trend.slope * df["time"] + trend.intercept)

    df["hour"] = np.floor(np.mod(df["time"], HOURS_PER_DAY)).astype(int)

    averages = df.groupby("hour")["value"].mean()
    return {int(hour): float(value) for hour, value in averages.items()}


def seasonal_offset(table: Dict[int, float], time: float) -> float:
    """Offset for the bucket of `time`, 0.0 when the bucket is absent"""
    return table.get(hour_bucket(time), 0.0)
