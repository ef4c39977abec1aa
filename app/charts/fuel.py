from __future__ import annotations

from collections.abc import Sequence

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

_FUEL_COLOR = "#FBBF24"


# ---------------------------------------------------------------------------
# 5) Fuel remaining along a single lap
# ---------------------------------------------------------------------------
def build_fuel_curve_chart(
    fuel_curve_df: pd.DataFrame, ticks: Sequence[float], column: str = "fuel_liters"
) -> go.Figure:
    """Fuel level by distance, either in liters or as a percentage of capacity."""
    if fuel_curve_df.empty:
        return _empty_figure()

    as_percent = column == "fuel_percentage"
    figure = go.Figure(
        go.Scatter(
            x=fuel_curve_df["distance"],
            y=fuel_curve_df[column],
            mode="lines",
            line={"width": 2, "color": _FUEL_COLOR},
            fill="tozeroy",
            fillcolor=_hex_to_rgba(_FUEL_COLOR, 0.15),
            name="Fuel",
            hovertemplate="%{y:.1f}%<extra></extra>" if as_percent else "%{y:.2f} L<extra></extra>",
        )
    )
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis(
            "Fuel (%)" if as_percent else "Fuel (L)",
            ticksuffix="%" if as_percent else "",
        ),
        showlegend=False,
        height=340,
    )
    return figure


# ---------------------------------------------------------------------------
# 6) Consumption scatter: fuel burned per sample against speed or throttle
# ---------------------------------------------------------------------------
def build_consumption_scatter(scatter_df: pd.DataFrame, x: str, color_by: str) -> go.Figure:
    if scatter_df.empty:
        return _empty_figure()

    x_title = "Speed (km/h)" if x == "speed" else "Throttle"
    color_title = "Throttle" if color_by == "throttle" else "Speed"
    hover = [
        f"Speed: {row.speed:.1f} km/h<br>"
        f"Throttle: {row.throttle:.0%}<br>"
        f"Fuel: {row.fuel_consumed:.4f} L<br>"
        f"Gear: {int(row.gear)}"
        for row in scatter_df.itertuples()
    ]
    figure = go.Figure(
        go.Scattergl(
            x=scatter_df[x],
            y=scatter_df["fuel_consumed"],
            mode="markers",
            marker={
                "size": 6,
                "color": scatter_df[color_by],
                "colorscale": "Viridis",
                "showscale": True,
                "colorbar": {"title": color_title},
                "opacity": 0.75,
            },
            text=hover,
            hovertemplate="%{text}<extra></extra>",
        )
    )
    figure.update_layout(
        **{**_CHART_LAYOUT, "hovermode": "closest"},
        xaxis=_value_axis(x_title, tickformat=".0%" if x == "throttle" else ""),
        yaxis=_value_axis("Fuel consumed (L)"),
        showlegend=False,
        height=380,
    )
    return figure


# ---------------------------------------------------------------------------
# 7) Track map coloured by normalised fuel burn
# ---------------------------------------------------------------------------
def build_fuel_track_map(track_df: pd.DataFrame) -> go.Figure:
    if track_df.empty:
        return _empty_figure()
    figure = go.Figure(
        go.Scattergl(
            x=track_df["pos_x"],
            y=track_df["pos_z"],
            mode="markers",
            marker={
                "size": 5,
                "color": track_df["fuel_normalized"],
                "colorscale": "YlOrRd",
                "showscale": True,
                "colorbar": {"title": "Burn"},
            },
            customdata=track_df["fuel_consumed"],
            hovertemplate="Fuel: %{customdata:.4f} L<extra></extra>",
        )
    )
    figure.update_layout(
        **{**_CHART_LAYOUT, "hovermode": "closest"},
        xaxis={"visible": False},
        yaxis={"visible": False, "scaleanchor": "x", "scaleratio": 1},
        showlegend=False,
        height=460,
    )
    return figure


# ---------------------------------------------------------------------------
# 8) Fuel delta between two laps
# ---------------------------------------------------------------------------
def build_fuel_delta_chart(delta_df: pd.DataFrame, ticks: Sequence[float]) -> go.Figure:
    """Cumulative fuel difference by distance, coloured by the sign of the final value."""
    if delta_df.empty:
        return _empty_figure()
    final = float(delta_df["delta"].iloc[-1])
    color = LOSS_COLOR if final > 0 else GAIN_COLOR
    figure = go.Figure(
        go.Scatter(
            x=delta_df["distance"],
            y=delta_df["delta"],
            mode="lines",
            line={"width": 2, "color": color},
            fill="tozeroy",
            fillcolor=_hex_to_rgba(color, 0.15),
            name="Fuel delta",
            hovertemplate="%{y:+.3f} L<extra></extra>",
        )
    )
    figure.add_hline(y=0, line_dash="dash", line_color="rgba(255,255,255,0.35)", line_width=1)
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Fuel delta (L)"),
        showlegend=False,
        height=340,
    )
    return figure


# ---------------------------------------------------------------------------
# 9) Fuel curves for two laps
# ---------------------------------------------------------------------------
def build_fuel_curves_chart(
    curves_df: pd.DataFrame, ticks: Sequence[float], lap_numbers: tuple[int, int]
) -> go.Figure:
    if curves_df.empty:
        return _empty_figure()
    figure = go.Figure()
    for column, lap, color in zip(("lap1", "lap2"), lap_numbers, (LAP_1_COLOR, LAP_2_COLOR)):
        figure.add_trace(
            go.Scatter(
                x=curves_df["distance"],
                y=curves_df[column],
                mode="lines",
                line={"width": 2, "color": color},
                name=f"Lap {lap}",
                hovertemplate="%{y:.2f} L<extra></extra>",
            )
        )
    figure.update_layout(
        **_CHART_LAYOUT,
        xaxis=_distance_axis(ticks),
        yaxis=_value_axis("Fuel (L)"),
        legend=_H_LEGEND,
        height=360,
    )
    return figure
