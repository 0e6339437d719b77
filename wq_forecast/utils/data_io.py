"""
Data I/O utilities: DataFrame conversion and parquet snapshots of the store
"""

import os
import math
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .models import Measurement, MEASUREMENT_FIELDS

logger = logging.getLogger(__name__)


def measurements_to_frame(entries: Iterable[Measurement]) -> pd.DataFrame:
    """
    Convert measurements to a float DataFrame (absent fields become NaN)

    Args:
        entries: Measurements in any order

    Returns:
        DataFrame with one column per measurement field
    """
    records = [m.to_dict() for m in entries]
    df = pd.DataFrame.from_records(records, columns=list(MEASUREMENT_FIELDS))
    return df.astype(float)


def _clean(value) -> Optional[float]:
    value = float(value)
    return None if math.isnan(value) else value


def frame_to_measurements(df: pd.DataFrame) -> List[Measurement]:
    """
    Convert a DataFrame back to Measurement objects (NaN becomes None)

    Args:
        df: DataFrame with a 'time' column and any of the measurement fields

    Returns:
        List of Measurement objects in frame order
    """
    measurements = []
    for row in df.to_dict("records"):
        values = {
            name: _clean(row[name]) if name in row else None
            for name in MEASUREMENT_FIELDS
        }
        measurements.append(Measurement(**values))
    return measurements


def save_parquet(
    df: pd.DataFrame, filepath: str, index: bool = False, compression: str = "snappy"
) -> None:
    """
    Save DataFrame to parquet file with compression

    Args:
        df: DataFrame to save
        filepath: Output file path
        index: Whether to include index
        compression: Compression codec (snappy, gzip, brotli)
    """
    # Ensure output directory exists
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)

    df.to_parquet(filepath, index=index, compression=compression, engine="pyarrow")

    file_size_kb = os.path.getsize(filepath) / 1024
    logger.info(f"✓ Saved {filepath} ({len(df)} rows, {file_size_kb:.1f} KB)")


def load_parquet(filepath: str) -> pd.DataFrame:
    """
    Load DataFrame from parquet file

    Args:
        filepath: Input file path

    Returns:
        Loaded DataFrame
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Parquet file not found: {filepath}")

    df = pd.read_parquet(filepath, engine="pyarrow")
    logger.info(f"✓ Loaded {filepath} ({len(df)} rows)")

    return df


def save_measurements(store, filepath: str) -> None:
    """Write the store contents (time, DO and tracked fields) to parquet"""
    save_parquet(store.to_frame(), filepath)


def load_measurements(filepath: str) -> List[Measurement]:
    """Read a parquet snapshot back into Measurement objects"""
    return frame_to_measurements(load_parquet(filepath))
