"""Fuel Comparison tab: fuel delta and fuel curves for two laps."""

from __future__ import annotations

import streamlit as st
from charts import build_fuel_curves_chart, build_fuel_delta_chart
from components import (
    Card,
    lap_inputs,
    race_selector,
    render_cards,
    render_request_state,
    submit_button,
)

from lapview.composition import compose_fuel_comparison
from lapview.controller import AnalysisController, Success


def render(controller: AnalysisController) -> None:
    race_selector("fuelcmp", controller)
    laps = lap_inputs("fuelcmp", controller, ["Lap 1", "Lap 2"])
    submit_button("fuelcmp", controller, laps, "Compare Fuel")

    state = controller.state
    if not isinstance(state, Success):
        render_request_state(state, "Select a race and two laps to compare fuel usage")
        return

    lap1, lap2 = state.lap_numbers
    view = compose_fuel_comparison(state.result)
    c = view.cards

    st.markdown(
        f'<p class="section-header first">Fuel Comparison · Lap {lap1} vs Lap {lap2}</p>',
        unsafe_allow_html=True,
    )
    render_cards(
        [
            Card(f"Lap {lap1} Time", c["lap_1_time"], icon="ph-bold ph-timer", variant="timing"),
            Card(f"Lap {lap2} Time", c["lap_2_time"], icon="ph-bold ph-timer", variant="timing"),
            Card(
                "More Efficient",
                c["more_efficient"],
                sub=f"saves {c['fuel_saved']}",
                icon="ph-bold ph-leaf",
                variant="gain",
            ),
            Card("Fuel Saved", c["fuel_saved"], icon="ph-bold ph-gas-pump", variant="fuel"),
            Card(f"Lap {lap1} Fuel", c["lap_1_fuel_used"], icon="ph-bold ph-drop"),
            Card(f"Lap {lap2} Fuel", c["lap_2_fuel_used"], icon="ph-bold ph-drop"),
            Card(f"Lap {lap1} L/km", c["lap_1_consumption_rate"], icon="ph-bold ph-path"),
            Card(f"Lap {lap2} L/km", c["lap_2_consumption_rate"], icon="ph-bold ph-path"),
        ]
    )

    st.markdown('<p class="section-header">Fuel Delta</p>', unsafe_allow_html=True)
    st.markdown(
        f'<p class="chart-caption">Cumulative fuel difference between lap {lap1} and lap {lap2} '
        "along the lap.</p>",
        unsafe_allow_html=True,
    )
    st.plotly_chart(build_fuel_delta_chart(view.delta, view.ticks), use_container_width=True)

    st.markdown('<p class="section-header">Fuel Curves</p>', unsafe_allow_html=True)
    st.plotly_chart(
        build_fuel_curves_chart(view.curves, view.ticks, (lap1, lap2)), use_container_width=True
    )
