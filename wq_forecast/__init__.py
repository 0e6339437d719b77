"""
Water-quality trend and dissolved-oxygen forecasting
"""

from .exceptions import (
    WaterQualityError,
    InvalidInput,
    InsufficientData,
    DegenerateRegression,
    EmptyImport,
)
from .store import MeasurementStore
from .consolidation import consolidate
from .regression import linear_regression, r_squared
from .seasonal import build_seasonal_table, seasonal_offset
from .predictor import predict, trend_line

__version__ = "0.1.0"

__all__ = [
    "WaterQualityError",
    "InvalidInput",
    "InsufficientData",
    "DegenerateRegression",
    "EmptyImport",
    "MeasurementStore",
    "consolidate",
    "linear_regression",
    "r_squared",
    "build_seasonal_table",
    "seasonal_offset",
    "predict",
    "trend_line",
]
