from __future__ import annotations

from collections.abc import Sequence

import plotly.graph_objects as go

LAP_1_COLOR = "#60A5FA"
LAP_2_COLOR = "#F97316"
GAIN_COLOR = "#22C55E"
LOSS_COLOR = "#EF4444"

_GRID = "rgba(255,255,255,0.06)"
_ZEROLINE = "rgba(255,255,255,0.08)"

# No title; HTML captions above each chart handle labelling.
_CHART_LAYOUT = {
    "paper_bgcolor": "rgba(0,0,0,0)",
    "plot_bgcolor": "rgba(0,0,0,0)",
    "font": {"color": "#E8EAED", "size": 15},
    "margin": {"l": 20, "r": 20, "t": 30, "b": 40},
    "hoverlabel": {
        "bgcolor": "#1E2130",
        "font_size": 14,
        "font_color": "#F0F2F5",
        "align": "left",
    },
    "hovermode": "x unified",
}

_H_LEGEND = {
    "orientation": "h",
    "yanchor": "bottom",
    "y": 1.0,
    "x": 0,
    "font": {"size": 14, "color": "#F0F2F5"},
}


def _hex_to_rgba(hex_color: str, alpha: float) -> str:
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def _distance_axis(ticks: Sequence[float]) -> dict:
    """X axis pinned to precomputed distance ticks so re-renders stay stable."""
    return {
        "title": "Distance (m)",
        "tickmode": "array",
        "tickvals": list(ticks),
        "gridcolor": _GRID,
        "zerolinecolor": _ZEROLINE,
    }


def _value_axis(title: str, **extra) -> dict:
    return {"title": title, "gridcolor": _GRID, "zerolinecolor": _ZEROLINE, **extra}


def _empty_figure() -> go.Figure:
    figure = go.Figure()
    figure.update_layout(**_CHART_LAYOUT)
    return figure
