"""Fuel Analysis tab: fuel curve, consumption scatters and track map for one lap."""

from __future__ import annotations

import streamlit as st
from charts import build_consumption_scatter, build_fuel_curve_chart, build_fuel_track_map
from components import (
    Card,
    lap_inputs,
    race_selector,
    render_cards,
    render_request_state,
    submit_button,
)

from lapview.composition import compose_single_lap_fuel
from lapview.controller import AnalysisController, Success


def render(controller: AnalysisController) -> None:
    race_selector("fuel", controller)
    laps = lap_inputs("fuel", controller, ["Lap Number"])
    submit_button("fuel", controller, laps, "Analyze Fuel")

    state = controller.state
    if not isinstance(state, Success):
        render_request_state(state, "Select a race and lap to analyze fuel consumption")
        return

    (lap,) = state.lap_numbers
    view = compose_single_lap_fuel(state.result)
    c = view.cards

    st.markdown(
        f'<p class="section-header first">Fuel Analysis · Lap {lap}</p>',
        unsafe_allow_html=True,
    )
    render_cards(
        [
            Card("Lap Time", c["lap_time"], icon="ph-bold ph-timer", variant="timing"),
            Card("Fuel Used", c["fuel_used"], icon="ph-bold ph-gas-pump", variant="fuel"),
            Card("Consumption", c["consumption_rate"], icon="ph-bold ph-drop", variant="fuel"),
            Card("Est. Laps Remaining", c["laps_remaining"], icon="ph-bold ph-flag-checkered"),
            Card("Fuel Start", c["fuel_start"], icon="ph-bold ph-battery-full"),
            Card("Fuel End", c["fuel_end"], icon="ph-bold ph-battery-low"),
            Card("Tank Capacity", c["fuel_capacity"], icon="ph-bold ph-cylinder"),
            Card("Lap Distance", c["lap_distance"], icon="ph-bold ph-path"),
        ]
    )

    curve_col, pct_col = st.columns(2)
    with curve_col:
        st.markdown('<p class="section-header">Fuel Level</p>', unsafe_allow_html=True)
        st.plotly_chart(
            build_fuel_curve_chart(view.fuel_curve, view.ticks), use_container_width=True
        )
    with pct_col:
        st.markdown('<p class="section-header">Fuel Percentage</p>', unsafe_allow_html=True)
        st.plotly_chart(
            build_fuel_curve_chart(view.fuel_curve, view.ticks, column="fuel_percentage"),
            use_container_width=True,
        )

    speed_col, throttle_col = st.columns(2)
    with speed_col:
        st.markdown('<p class="section-header">Fuel vs Speed</p>', unsafe_allow_html=True)
        st.plotly_chart(
            build_consumption_scatter(view.speed_scatter, x="speed", color_by="throttle"),
            use_container_width=True,
        )
    with throttle_col:
        st.markdown('<p class="section-header">Fuel vs Throttle</p>', unsafe_allow_html=True)
        st.plotly_chart(
            build_consumption_scatter(view.throttle_scatter, x="throttle", color_by="speed"),
            use_container_width=True,
        )

    st.markdown('<p class="section-header">Fuel Burn Map</p>', unsafe_allow_html=True)
    st.markdown(
        '<p class="chart-caption">Where on track the fuel goes. '
        "Hotter colours mark heavier burn.</p>",
        unsafe_allow_html=True,
    )
    st.plotly_chart(build_fuel_track_map(view.track_map), use_container_width=True)
