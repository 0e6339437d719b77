"""
[7] DASHBOARD MODULE
Chart and text output for measurements, trend line and predictions
"""

import logging
from pathlib import Path
from typing import List, Optional

import plotly.graph_objects as go

from .utils.models import Measurement, Prediction, TrendSegment
from .utils.plotting import (
    create_standard_layout,
    create_time_axis,
    create_value_axis,
    get_plot_config,
)

logger = logging.getLogger(__name__)

DEFAULT_COLORS = {
    "observed": "rgb(75, 192, 192)",
    "trend": "rgb(255, 159, 64)",
    "prediction": "rgb(255, 99, 132)",
}


def create_measurement_figure(
    measurements: List[Measurement],
    trend: Optional[TrendSegment] = None,
    prediction: Optional[Prediction] = None,
    viz_config: Optional[dict] = None,
    time_unit: str = "minutes",
) -> go.Figure:
    """
    Plot observed dissolved oxygen with optional trend and prediction lines

    Args:
        measurements: Ordered store contents
        trend: Fitted trend over the observed range
        prediction: Forecast whose segment is drawn from the last observation
        viz_config: 'visualization' config section
        time_unit: Native time unit for the axis title

    Returns:
        Plotly figure
    """
    viz_config = viz_config or {}
    colors = {**DEFAULT_COLORS, **viz_config.get("colors", {})}

    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=[m.time for m in measurements],
            y=[m.dissolved_oxygen for m in measurements],
            mode="lines+markers",
            line=dict(color=colors["observed"], width=2),
            marker=dict(size=6),
            name="Dissolved Oxygen (mg/L)",
        )
    )

    if trend is not None:
        fig.add_trace(
            go.Scatter(
                x=trend.xs(),
                y=trend.ys(),
                mode="lines",
                line=dict(color=colors["trend"], width=2, dash="dash"),
                name="Trend Line",
            )
        )

    time_range = None
    if prediction is not None:
        fig.add_trace(
            go.Scatter(
                x=prediction.segment.xs(),
                y=prediction.segment.ys(),
                mode="lines+markers",
                line=dict(color=colors["prediction"], width=2),
                marker=dict(size=[0, 10]),
                name="Prediction Line",
            )
        )
        span = [m.time for m in measurements] + prediction.segment.xs()
        time_range = (min(span), max(span))

    layout = create_standard_layout(
        viz_config.get("title", "Dissolved Oxygen Trend"),
        height=viz_config.get("height", 600),
    )
    layout.update(
        xaxis=create_time_axis(time_unit, time_range=time_range),
        yaxis=create_value_axis(),
    )
    fig.update_layout(layout)

    return fig


def write_dashboard(fig: go.Figure, filepath: str) -> str:
    """
    Write a figure to a standalone HTML file

    Args:
        fig: Plotly figure
        filepath: Output HTML path

    Returns:
        Path written
    """
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(filepath, config=get_plot_config(), include_plotlyjs="cdn")
    logger.info(f"✓ Saved dashboard: {filepath}")
    return filepath


def format_prediction(
    prediction: Prediction, time_value: float, time_unit: str
) -> str:
    """
    Human-readable summary of a prediction

    Args:
        prediction: Forecast result
        time_value: Horizon as entered by the user
        time_unit: Unit the user entered the horizon in

    Returns:
        Multi-line summary text
    """
    lines = [
        "Prediction Results:",
        f"Predicted DO level in {time_value:g} {time_unit}: "
        f"{prediction.predicted_value:.2f} mg/L",
        f"Based on {prediction.n_measurements} historical measurements",
    ]
    if prediction.seasonal_applied:
        lines.append(f"Seasonal offset applied: {prediction.seasonal_offset:+.2f} mg/L")
    return "\n".join(lines)


def format_measurement_table(
    measurements: List[Measurement], tracked_fields=("turbidity", "ph")
) -> str:
    """Plain-text table of the store, values to two decimals"""
    headers = ["Time", "DO (mg/L)"]
    if "turbidity" in tracked_fields:
        headers.append("Turbidity (NTU)")
    if "ph" in tracked_fields:
        headers.append("pH")

    rows = [headers]
    for m in measurements:
        row = [f"{m.time:g}", f"{m.dissolved_oxygen:.2f}"]
        for name in ("turbidity", "ph"):
            if name in tracked_fields:
                value = m.get(name)
                row.append("" if value is None else f"{value:.2f}")
        rows.append(row)

    widths = [max(len(r[i]) for r in rows) for i in range(len(headers))]
    return "\n".join(
        "  ".join(cell.rjust(width) for cell, width in zip(row, widths)) for row in rows
    )
