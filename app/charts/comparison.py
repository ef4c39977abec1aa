from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from ._shared import (
    _CHART_LAYOUT,
    _H_LEGEND,
    GAIN_COLOR,
    LAP_1_COLOR,
    LAP_2_COLOR,
    LOSS_COLOR,
    _distance_axis,
    _empty_figure,
    _hex_to_rgba,
    _value_axis,
)


def _two_lap_traces(
    figure: go.Figure,
    df: pd.DataFrame,
    columns: tuple[str, str],
    lap_numbers: tuple[int, int],
    hovertemplate: str,
    dash: str | None = None,
    label_prefix: str = "Lap",
) -> None:
    for column, lap, color in zip(columns, lap_numbers, (LAP_1_COLOR, LAP_2_COLOR)):
        line = {"width": 1.8, "color": color}
        if dash:
            line["dash"] = dash
        figure.add_trace(
            go.Scatter(
                x=df["distance"],
                y=df[column],
                mode="lines",
                line=line,
                name=f"{label_prefix} {lap}",
                hovertemplate=hovertemplate,
            )
        )


# ---------------------------------------------------------------------------
# 1) Delta time: lap 2 relative to lap 1 along the lap
# ---------------------------------------------------------------------------
def build_delta_chart(delta_df: pd.DataFrame, ticks: Sequence[float]) -> go.Figure:
    """Cumulative time delta by distance.

    Below zero the first lap is ahead and the area is shaded green; above zero
    it is behind and the area is shaded red.
    """
    if delta_df.empty:
        return _empty_figure()

    figure = go.Figure()
    delta = delta_df["delta"].to_numpy(dtype=float)
    gain = np.where(delta < 0, delta, 0.0)
    loss = np.where(delta > 0, delta, 0.0)

    for values, color in ((gain, GAIN_COLOR), (loss, LOSS_COLOR)):
        figure.add_trace(
            go.Scatter(
                x=delta_df["distance"],
                y=values,
                mode="lines",
                line={"width": 0},
                fill="tozeroy",
                fillcolor=_hex_to_rgba(color, 0.18),
                hoverinfo="skip",
                showlegend=False,
            )
        )
    figure.add_trace(
        go.Scatter(
            x=delta_df["distance"],
            y=delta_df["delta"],
            mode="lines",
            line={"width": 2, "color": "#E5E7EB"},
            name="Delta",
            hovertemplate="%{y:+.3f}s<extra></extra>",
        )
    )
    figure.add_hline(y=0, line_dash="dash", line_color="rgba(255,255,255,0.35)", line_width=1)

    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Delta", ticksuffix="s"),
        showlegend=False,
        height=360,
    )
    return figure


# ---------------------------------------------------------------------------
# 2) Speed trace
# ---------------------------------------------------------------------------
def build_speed_chart(
    speed_df: pd.DataFrame, ticks: Sequence[float], lap_numbers: tuple[int, int]
) -> go.Figure:
    if speed_df.empty:
        return _empty_figure()
    figure = go.Figure()
    _two_lap_traces(
        figure, speed_df, ("lap1", "lap2"), lap_numbers, "%{y:.1f} km/h<extra></extra>"
    )
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Speed (km/h)"),
        legend=_H_LEGEND,
        height=380,
    )
    return figure


# ---------------------------------------------------------------------------
# 3) Driver inputs: throttle solid, brake dashed
# ---------------------------------------------------------------------------
def build_inputs_chart(
    inputs_df: pd.DataFrame, ticks: Sequence[float], lap_numbers: tuple[int, int]
) -> go.Figure:
    if inputs_df.empty:
        return _empty_figure()
    figure = go.Figure()
    _two_lap_traces(
        figure,
        inputs_df,
        ("throttle1", "throttle2"),
        lap_numbers,
        "%{y:.0%}<extra></extra>",
        label_prefix="Throttle · Lap",
    )
    _two_lap_traces(
        figure,
        inputs_df,
        ("brake1", "brake2"),
        lap_numbers,
        "%{y:.0%}<extra></extra>",
        dash="dot",
        label_prefix="Brake · Lap",
    )
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Input", tickformat=".0%", range=[0, 1.05]),
        legend=_H_LEGEND,
        height=380,
    )
    return figure


# ---------------------------------------------------------------------------
# 4) Steering
# ---------------------------------------------------------------------------
def build_steering_chart(
    steering_df: pd.DataFrame, ticks: Sequence[float], lap_numbers: tuple[int, int]
) -> go.Figure:
    if steering_df.empty:
        return _empty_figure()
    figure = go.Figure()
    _two_lap_traces(figure, steering_df, ("lap1", "lap2"), lap_numbers, "%{y:.2f}<extra></extra>")
    figure.add_hline(y=0, line_dash="dash", line_color="rgba(255,255,255,0.25)", line_width=1)
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Steering", range=[-1.05, 1.05]),
        legend=_H_LEGEND,
        height=340,
    )
    return figure
