"""Race / lap selection widgets and request-state rendering shared by the analysis tabs."""

from __future__ import annotations

from collections.abc import Sequence

import streamlit as st
from data_access import run

from lapview.controller import AnalysisController, Failed, Idle, Loading, RequestState
from lapview.errors import ValidationError
from lapview.readiness import can_analyze

from .metrics import render_status

_NO_SESSION_MAX_LAP = 999


def race_selector(tab_key: str, controller: AnalysisController) -> None:
    """Race dropdown + refresh + status badge. Selecting a race fetches its status."""
    race_col, status_col, refresh_col = st.columns([3, 2, 0.6])

    with refresh_col:
        st.markdown("<div style='height:1.8rem;'></div>", unsafe_allow_html=True)
        if st.button("↻", key=f"{tab_key}_refresh", help="Reload races"):
            run(controller.refresh_catalog())
            run(controller.refresh_status())

    if controller.catalog_error:
        st.error(controller.catalog_error)

    with race_col:
        options = controller.race_ids
        index = options.index(controller.race_id) if controller.race_id in options else None
        race_id = st.selectbox(
            "Race",
            options,
            index=index,
            format_func=lambda value: f"{value[:8]}…",
            placeholder="Select race…",
            key=f"{tab_key}_race",
        )
    if race_id and race_id != controller.race_id:
        run(controller.select_session(race_id))

    with status_col:
        if controller.session is not None or controller.status_error:
            st.markdown("<div style='height:1.8rem;'></div>", unsafe_allow_html=True)
        render_status(controller.session, controller.status_error)


def lap_inputs(tab_key: str, controller: AnalysisController, labels: Sequence[str]) -> list[int]:
    """Lap number inputs clamped to the loaded race's lap range."""
    session = controller.session
    max_lap = session.laps_count if session and session.laps_count > 0 else _NO_SESSION_MAX_LAP
    laps: list[int] = []
    for i, (col, label) in enumerate(zip(st.columns(len(labels)), labels)):
        with col:
            raw = st.number_input(
                label,
                min_value=1,
                max_value=max_lap,
                value=controller.clamp(controller.lap_numbers[i]),
                step=1,
                key=f"{tab_key}_lap{i}_{controller.race_id}",
            )
        laps.append(controller.clamp(int(raw)))
    return laps


def submit_button(
    tab_key: str, controller: AnalysisController, laps: Sequence[int], label: str
) -> None:
    ready = can_analyze(controller.session)
    clicked = st.button(
        label,
        key=f"{tab_key}_submit",
        disabled=not controller.race_id or not ready,
        type="primary",
    )
    if not clicked:
        return
    try:
        with st.spinner(f"Running {controller.kind.label}…"):
            run(controller.submit(controller.session, laps))
    except ValidationError as exc:
        st.warning(str(exc))


def render_request_state(state: RequestState, empty_message: str) -> None:
    """Render every non-success state. Success is rendered by the tab itself."""
    if isinstance(state, Idle):
        st.markdown(f'<div class="empty-state">{empty_message}</div>', unsafe_allow_html=True)
    elif isinstance(state, Loading):
        st.info("Loading…")
    elif isinstance(state, Failed):
        if state.is_integrity_error:
            st.error(state.message)
            st.caption(
                "The backend returned series of mismatched length. "
                "This is a data contract bug, retrying will not help."
            )
        else:
            st.error(state.message)
