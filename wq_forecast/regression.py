"""
[4] REGRESSION MODULE
Ordinary least-squares trend fitting over (time, value) pairs
"""

from typing import Sequence

import numpy as np

from .exceptions import DegenerateRegression, InsufficientData, InvalidInput
from .utils.models import RegressionResult, DISSOLVED_OXYGEN


def linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """
    Fit y = slope * x + intercept by closed-form least squares

    Sums are accumulated in input order in a single pass, so identical
    inputs always give bit-identical results.

    The raw-sum form cancels badly when the time axis sits far from zero
    relative to its spread: x = [1e9, 1e9 + 60, 1e9 + 120] gives a slope
    about 5% off. Keep times on a small origin (e.g. minutes since the
    first reading) rather than epoch-scale values.

    Args:
        x: Independent values (time)
        y: Dependent values (metric), same length as x

    Returns:
        RegressionResult with slope and intercept

    Raises:
        InvalidInput: empty input or mismatched lengths
        DegenerateRegression: all x values identical (includes a single point)
    """
    n = len(x)
    if n != len(y):
        raise InvalidInput(f"x and y lengths differ ({n} != {len(y)})")
    if n == 0:
        raise InvalidInput("Cannot fit a regression to an empty series")

    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_xx = 0.0
    for xi, yi in zip(x, y):
        xi = float(xi)
        yi = float(yi)
        sum_x += xi
        sum_y += yi
        sum_xy += xi * yi
        sum_xx += xi * xi

    denominator = n * sum_xx - sum_x * sum_x
    # Rounding can leave a tiny non-zero denominator for repeated non-integer x
    if denominator == 0 or all(float(xi) == float(x[0]) for xi in x):
        raise DegenerateRegression(
            f"All {n} time values are identical; slope is undefined"
        )

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    return RegressionResult(slope=slope, intercept=intercept, n=n)


def r_squared(
    x: Sequence[float], y: Sequence[float], result: RegressionResult
) -> float:
    """
    Coefficient of determination of a fitted line

    Args:
        x: Independent values
        y: Dependent values
        result: Fitted line

    Returns:
        R² (0.0 when y has no variance)
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    fit_values = result.slope * x_arr + result.intercept
    ss_tot = np.sum((y_arr - y_arr.mean()) ** 2)
    ss_res = np.sum((y_arr - fit_values) ** 2)

    return float(1 - (ss_res / ss_tot)) if ss_tot != 0 else 0.0


def fit_store(store, field: str = DISSOLVED_OXYGEN) -> RegressionResult:
    """
    Regress a stored field against time over the whole store

    Args:
        store: MeasurementStore
        field: Measurement field to use as y

    Returns:
        RegressionResult
    """
    if len(store) == 0:
        raise InsufficientData("The measurement store is empty")

    pairs = [(t, v) for t, v in zip(store.times(), store.values(field)) if v is not None]
    if not pairs:
        raise InsufficientData(f"No stored values for {field}")

    times, values = zip(*pairs)
    return linear_regression(times, values)
