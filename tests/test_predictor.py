import pytest

from wq_forecast.exceptions import DegenerateRegression, InsufficientData
from wq_forecast.predictor import predict, trend_line
from wq_forecast.utils.models import Measurement


def _fill(store, points):
    store.replace_all(
        [Measurement(time=t, dissolved_oxygen=v, turbidity=1.0, ph=7.0) for t, v in points]
    )


def test_linear_extrapolation(store):
    _fill(store, [(0.0, 5.0), (10.0, 7.0)])
    prediction = predict(store, 20.0)

    assert prediction.regression.slope == pytest.approx(0.2)
    assert prediction.regression.intercept == pytest.approx(5.0)
    assert prediction.predicted_value == pytest.approx(9.0)
    assert prediction.base_value == prediction.predicted_value
    assert prediction.n_measurements == 2


def test_prediction_segment_starts_at_last_observation(store):
    _fill(store, [(0.0, 5.0), (10.0, 7.0)])
    segment = predict(store, 20.0).segment

    assert segment.start == (10.0, pytest.approx(7.0))
    assert segment.end == (20.0, pytest.approx(9.0))


def test_insufficient_data(store):
    with pytest.raises(InsufficientData):
        predict(store, 5.0)

    _fill(store, [(0.0, 5.0)])
    with pytest.raises(InsufficientData):
        predict(store, 5.0)


def test_duplicate_times_collapse_to_one_measurement(store):
    # two readings at one time collapse to a single measurement
    _fill(store, [(3.0, 5.0), (3.0, 7.0)])
    with pytest.raises(InsufficientData):
        predict(store, 10.0)

    with pytest.raises(DegenerateRegression):
        trend_line(store)


def test_seasonal_without_enough_data_matches_plain(store):
    _fill(store, [(float(t), 8.0 - 0.05 * t) for t in range(10)])
    plain = predict(store, 30.0)
    seasonal = predict(store, 30.0, seasonal=True)

    assert seasonal.predicted_value == plain.predicted_value
    assert seasonal.seasonal_offset == 0.0
    assert seasonal.seasonal_applied


def test_seasonal_offset_added(store):
    # DO is 2.0 at hour 6 and 1.0 otherwise, no overall drift beyond that
    _fill(store, [(float(t), 2.0 if t % 24 == 6 else 1.0) for t in range(48)])
    plain = predict(store, 54.0)
    seasonal = predict(store, 54.0, seasonal=True)

    assert seasonal.seasonal_offset == pytest.approx(2.0)
    assert seasonal.predicted_value == pytest.approx(plain.base_value + 2.0)


def test_seasonal_relative_to_trend(store, linear_measurements):
    store.replace_all(linear_measurements)
    prediction = predict(store, 60.0, seasonal=True, relative_to_trend=True)

    assert prediction.seasonal_offset == pytest.approx(0.0, abs=1e-9)
    assert prediction.predicted_value == pytest.approx(8.0 - 0.1 * 60)


def test_predict_does_not_mutate_store(store, linear_measurements):
    store.replace_all(linear_measurements)
    before = store.all()

    for target in (50.0, 100.0, 1000.0):
        predict(store, target, seasonal=True)

    assert store.all() == before


def test_trend_line_spans_observed_range(store):
    _fill(store, [(2.0, 6.0), (4.0, 7.0), (8.0, 9.0)])
    segment = trend_line(store)

    assert segment.start[0] == 2.0
    assert segment.end[0] == 8.0
    assert segment.start[1] == pytest.approx(6.0)
    assert segment.end[1] == pytest.approx(9.0)


def test_trend_line_empty_store(store):
    with pytest.raises(InsufficientData):
        trend_line(store)
