"""Lap Comparison tab: delta, speed, inputs and steering for two laps."""

from __future__ import annotations

import streamlit as st
from charts import build_delta_chart, build_inputs_chart, build_speed_chart, build_steering_chart
from components import (
    Card,
    lap_inputs,
    race_selector,
    render_cards,
    render_request_state,
    submit_button,
)

from lapview.composition import compose_lap_comparison
from lapview.controller import AnalysisController, Success


def _section(title: str, caption: str, first: bool = False) -> None:
    st.markdown(
        f'<p class="section-header{" first" if first else ""}">{title}</p>',
        unsafe_allow_html=True,
    )
    st.markdown(f'<p class="chart-caption">{caption}</p>', unsafe_allow_html=True)


def render(controller: AnalysisController) -> None:
    race_selector("cmp", controller)
    laps = lap_inputs("cmp", controller, ["Lap 1", "Lap 2"])
    submit_button("cmp", controller, laps, "Compare Laps")

    state = controller.state
    if not isinstance(state, Success):
        render_request_state(state, "Select a race and two laps to compare")
        return

    lap1, lap2 = state.lap_numbers
    view = compose_lap_comparison(state.result)
    c = view.cards

    _section("Lap Comparison Summary", f"Lap {lap1} vs Lap {lap2}", first=True)
    render_cards(
        [
            Card(f"Lap {lap1} Time", c["lap_1_time"], icon="ph-bold ph-timer", variant="timing"),
            Card(f"Lap {lap2} Time", c["lap_2_time"], icon="ph-bold ph-timer", variant="timing"),
            Card(
                "Final Delta",
                c["delta_final"],
                sub=f"Lap {lap1} ahead" if view.lap_1_ahead else f"Lap {lap2} ahead",
                icon="ph-bold ph-arrows-left-right",
                variant="gain" if view.lap_1_ahead else "loss",
            ),
            Card(
                "Delta Range",
                c["delta_min"],
                sub=f"max {c['delta_max']}",
                icon="ph-bold ph-chart-line",
            ),
            Card(f"Max Speed Lap {lap1}", c["max_speed_lap_1"], icon="ph-bold ph-gauge", variant="speed"),
            Card(f"Max Speed Lap {lap2}", c["max_speed_lap_2"], icon="ph-bold ph-gauge", variant="speed"),
        ]
    )

    _section(
        "Time Delta",
        f"Cumulative time difference along the lap. Below zero, lap {lap1} is ahead; "
        f"above zero, lap {lap2} is ahead.",
    )
    st.plotly_chart(build_delta_chart(view.delta, view.ticks), use_container_width=True)

    _section("Speed", "Speed trace for both laps by distance.")
    st.plotly_chart(
        build_speed_chart(view.speed, view.ticks, (lap1, lap2)), use_container_width=True
    )

    _section("Throttle & Brake", "Solid lines are throttle, dotted lines are brake pressure.")
    st.plotly_chart(
        build_inputs_chart(view.inputs, view.ticks, (lap1, lap2)), use_container_width=True
    )

    _section("Steering", "Steering input, left negative and right positive.")
    st.plotly_chart(
        build_steering_chart(view.steering, view.ticks, (lap1, lap2)), use_container_width=True
    )
