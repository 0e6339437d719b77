"""
Plotting utilities for consistent visualization
"""

from typing import Optional, Tuple


def create_time_axis(
    time_unit: str = "minutes", time_range: Optional[Tuple[float, float]] = None
) -> dict:
    """
    Create a numeric time axis configuration

    Args:
        time_unit: Native time unit shown in the axis title
        time_range: Optional (min, max) bounds, e.g. up to a prediction target

    Returns:
        Dictionary of x-axis configuration for Plotly
    """
    axis = dict(
        title=dict(
            text=f"Time ({time_unit})",
            font=dict(size=16, family="Arial, sans-serif"),
            standoff=15,
        ),
        type="linear",
        gridcolor="rgba(200, 200, 200, 0.3)",
        showgrid=True,
        showline=True,
        linecolor="rgba(150, 150, 150, 0.5)",
        linewidth=2,
        mirror=True,
        automargin=True,
    )
    if time_unit == "hours":
        # Hour-based axis shows whole hours only
        axis["tickformat"] = "d"

    if time_range is not None:
        axis["range"] = list(time_range)

    return axis


def create_value_axis(title: str = "Dissolved Oxygen (mg/L)") -> dict:
    """Y-axis configuration anchored at zero"""
    return dict(
        title=dict(text=title, font=dict(size=16, family="Arial, sans-serif")),
        rangemode="tozero",
        gridcolor="rgba(200, 200, 200, 0.3)",
        showgrid=True,
        showline=True,
        linecolor="rgba(150, 150, 150, 0.5)",
        linewidth=2,
        mirror=True,
    )


def get_plot_config(responsive: bool = True) -> dict:
    """
    Get standard Plotly plot configuration

    Args:
        responsive: Whether plot should be responsive

    Returns:
        Configuration dictionary for Plotly
    """
    return {
        "responsive": responsive,
        "displayModeBar": True,
        "displaylogo": False,
        "scrollZoom": True,
        "toImageButtonOptions": {
            "format": "png",
            "height": 700,
            "width": 1200,
            "scale": 2,
        },
    }


def create_standard_layout(
    title: str,
    height: int = 600,
    show_legend: bool = True,
) -> dict:
    """
    Create standard plot layout

    Args:
        title: Plot title
        height: Plot height in pixels
        show_legend: Whether to show legend

    Returns:
        Layout dictionary for Plotly
    """
    return dict(
        title=dict(
            text=f"<b>{title}</b>",
            font=dict(size=22, family="Arial, sans-serif"),
            x=0.5,
        ),
        plot_bgcolor="white",
        paper_bgcolor="white",
        height=height,
        autosize=True,
        margin=dict(l=80, r=80, t=100, b=80),
        font=dict(family="Arial, sans-serif", size=14),
        hovermode="closest",
        showlegend=show_legend,
        legend=dict(
            x=1.02,
            y=1,
            xanchor="left",
            yanchor="top",
            bgcolor="rgba(255, 255, 255, 0.8)",
            bordercolor="rgba(150, 150, 150, 0.5)",
            borderwidth=1,
        )
        if show_legend
        else None,
    )
