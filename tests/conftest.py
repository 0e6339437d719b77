import os
import sys

import pytest

# ensure workspace root is on sys.path so main.py and the package import
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from wq_forecast.store import MeasurementStore
from wq_forecast.utils.models import Measurement


@pytest.fixture
def store() -> MeasurementStore:
    """Empty store tracking turbidity and pH"""
    return MeasurementStore()


@pytest.fixture
def do_only_store() -> MeasurementStore:
    """Empty store of the prediction-only variant (time + DO)"""
    return MeasurementStore(tracked_fields=())


@pytest.fixture
def linear_measurements():
    """DO falling 0.1 mg/L per time unit from 8.0, one reading per hour for two days"""
    return [
        Measurement(time=float(t), dissolved_oxygen=8.0 - 0.1 * t, turbidity=1.0, ph=7.0)
        for t in range(48)
    ]


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temporary file and return its path"""

    def _write(text: str, name: str = "measurements.csv") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return _write
