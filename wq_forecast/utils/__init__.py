"""
Utility modules for the water-quality forecasting pipeline
"""

from .data_io import load_parquet, save_parquet, load_measurements, save_measurements
from .time_utils import convert_to_native, get_time_range_info
from .plotting import create_time_axis, create_standard_layout
from .models import Measurement, RegressionResult, TrendSegment, Prediction, ImportReport

__all__ = [
    "load_parquet",
    "save_parquet",
    "load_measurements",
    "save_measurements",
    "convert_to_native",
    "get_time_range_info",
    "create_time_axis",
    "create_standard_layout",
    "Measurement",
    "RegressionResult",
    "TrendSegment",
    "Prediction",
    "ImportReport",
]
