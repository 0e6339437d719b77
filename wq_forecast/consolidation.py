"""
[3] CONSOLIDATION MODULE
Merge measurements that share a time key into one averaged measurement
"""

from typing import Iterable, List

import pandas as pd

from .utils.data_io import frame_to_measurements, measurements_to_frame
from .utils.models import Measurement, TIME


def consolidate_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Group rows by exact time value and average every field

    Fields missing on some rows of a group are averaged over the rows that
    have them; a field missing on every row of a group stays NaN.

    Args:
        df: DataFrame with a 'time' column

    Returns:
        DataFrame with unique, ascending 'time'
    """
    if df.empty:
        return df.copy().reset_index(drop=True)

    return df.groupby(TIME, sort=True).mean().reset_index()


def consolidate(entries: Iterable[Measurement]) -> List[Measurement]:
    """
    Consolidate measurements sharing a time key

    Args:
        entries: Measurements in any order, possibly with repeated times

    Returns:
        One measurement per distinct time, sorted ascending by time
    """
    df = measurements_to_frame(entries)
    return frame_to_measurements(consolidate_frame(df))
