import pytest

from wq_forecast.store import MeasurementStore
from wq_forecast.utils.data_io import (
    frame_to_measurements,
    load_measurements,
    measurements_to_frame,
    save_measurements,
)
from wq_forecast.utils.models import Measurement


def test_frame_conversion_keeps_absent_fields_absent():
    entries = [Measurement(time=1.0, dissolved_oxygen=7.0, turbidity=None, ph=6.9)]
    df = measurements_to_frame(entries)

    assert df["turbidity"].isna().all()
    assert frame_to_measurements(df) == entries


def test_snapshot_restores_store(tmp_path, store, linear_measurements):
    store.replace_all(linear_measurements)
    path = str(tmp_path / "snapshots" / "measurements.parquet")

    save_measurements(store, path)
    restored = MeasurementStore()
    restored.replace_all(load_measurements(path))

    assert restored.all() == store.all()


def test_snapshot_of_prediction_only_store(tmp_path, do_only_store):
    do_only_store.add(Measurement(time=2.0, dissolved_oxygen=6.0))
    path = str(tmp_path / "do.parquet")
    save_measurements(do_only_store, path)

    assert load_measurements(path) == [Measurement(time=2.0, dissolved_oxygen=6.0)]


def test_load_missing_snapshot(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_measurements(str(tmp_path / "absent.parquet"))
