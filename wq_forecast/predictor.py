"""
[6] PREDICTOR MODULE
Extrapolate dissolved oxygen along the fitted trend, optionally with an
hour-of-day seasonal offset
"""

import math

from .exceptions import InsufficientData, InvalidInput
from .regression import fit_store
from .seasonal import build_seasonal_table, seasonal_offset
from .utils.models import Prediction, TrendSegment

MIN_PREDICTION_MEASUREMENTS = 2


def predict(
    store,
    target_time: float,
    seasonal: bool = False,
    relative_to_trend: bool = False,
) -> Prediction:
    """
    Forecast dissolved oxygen at a future time

    The store is read, never modified.

    Args:
        store: MeasurementStore with at least two measurements
        target_time: Time in the store's native unit
        seasonal: Add the hour-of-day offset for target_time
        relative_to_trend: Seasonal table holds deviations from the trend
            rather than raw levels

    Returns:
        Prediction with the forecast value and the two-point segment from
        the last observation to the forecast
    """
    if len(store) < MIN_PREDICTION_MEASUREMENTS:
        raise InsufficientData(
            f"At least {MIN_PREDICTION_MEASUREMENTS} measurements are required "
            f"for a prediction, have {len(store)}"
        )

    target_time = float(target_time)
    if not math.isfinite(target_time):
        raise InvalidInput(f"Target time must be finite, got {target_time}")

    regression = fit_store(store)
    base_value = regression.evaluate(target_time)

    offset = 0.0
    if seasonal:
        table = build_seasonal_table(
            store.all(), trend=regression if relative_to_trend else None
        )
        offset = seasonal_offset(table, target_time)
    predicted_value = base_value + offset

    last_time = store.times()[-1]
    segment = TrendSegment(
        start=(last_time, regression.evaluate(last_time)),
        end=(target_time, predicted_value),
    )

    return Prediction(
        target_time=target_time,
        predicted_value=predicted_value,
        base_value=base_value,
        regression=regression,
        segment=segment,
        n_measurements=len(store),
        seasonal_applied=seasonal,
        seasonal_offset=offset,
    )


def trend_line(store) -> TrendSegment:
    """
    Fitted trend between the first and last observed times, for display

    Args:
        store: MeasurementStore

    Returns:
        TrendSegment spanning the observed time range
    """
    regression = fit_store(store)
    times = store.times()
    start, end = min(times), max(times)
    return TrendSegment(
        start=(start, regression.evaluate(start)),
        end=(end, regression.evaluate(end)),
    )
