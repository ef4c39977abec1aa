"""Race Packages tab: list, upload, download and delete race sessions."""

from __future__ import annotations

import base64

import streamlit as st
from components import Card, render_cards, status_badge_html
from data_access import delete_race, download_race_raw, list_sessions, upload_race

from lapview.composition import summarize_races
from lapview.errors import DashboardError, user_message
from lapview.models import RaceSession
from lapview.utils import format_timestamp, raw_download_filename


def _render_upload() -> None:
    with st.expander("Upload race", expanded=False):
        uploaded = st.file_uploader("Race telemetry file", key="pkg_upload_file")
        if uploaded is not None and st.button("Upload", key="pkg_upload"):
            payload = base64.b64encode(uploaded.getvalue()).decode()
            try:
                with st.spinner("Uploading…"):
                    receipt = upload_race(payload)
            except DashboardError as exc:
                st.error(user_message(exc, "Failed to upload race"))
                return
            st.success(f"Uploaded race {receipt.get('race_id', '')}".strip())
            st.session_state.pop("pkg_sessions", None)


def _render_row(race: RaceSession) -> None:
    info_col, download_col, delete_col = st.columns([6, 1.2, 1.2])
    with info_col:
        st.markdown(
            f"""<div class="race-row">
<span class="race-id">{race.short_id}…</span>{status_badge_html(race.status)}
<div class="race-meta">Laps: {race.laps_count} &middot;
Created: {format_timestamp(race.created_at)} &middot;
Updated: {format_timestamp(race.updated_at)} &middot;
Data: {"Available" if race.raw_data_path else "N/A"}</div>
</div>""",
            unsafe_allow_html=True,
        )

    raw_key = f"pkg_raw_{race.race_id}"
    with download_col:
        if raw_key in st.session_state:
            st.download_button(
                "Save",
                data=st.session_state[raw_key],
                file_name=raw_download_filename(race.race_id),
                mime="application/octet-stream",
                key=f"pkg_save_{race.race_id}",
            )
        elif st.button(
            "Download", key=f"pkg_dl_{race.race_id}", disabled=not race.raw_data_path
        ):
            try:
                st.session_state[raw_key] = download_race_raw(race.race_id)
            except DashboardError as exc:
                st.error(user_message(exc, "Failed to download race"))
            else:
                st.rerun()

    confirm_key = f"pkg_confirm_{race.race_id}"
    with delete_col:
        if st.session_state.get(confirm_key):
            if st.button("Confirm", key=f"pkg_del_ok_{race.race_id}", type="primary"):
                try:
                    delete_race(race.race_id)
                except DashboardError as exc:
                    st.error(user_message(exc, "Failed to delete race"))
                else:
                    st.session_state.pop(confirm_key, None)
                    st.session_state.pop("pkg_sessions", None)
                    st.rerun()
        elif st.button("Delete", key=f"pkg_del_{race.race_id}"):
            st.session_state[confirm_key] = True
            st.rerun()


def render() -> None:
    header_col, refresh_col = st.columns([6, 1])
    with header_col:
        st.markdown('<p class="section-header first">Race Packages</p>', unsafe_allow_html=True)
    with refresh_col:
        if st.button("↻ Refresh", key="pkg_refresh"):
            st.session_state.pop("pkg_sessions", None)

    _render_upload()

    if "pkg_sessions" not in st.session_state:
        try:
            with st.spinner("Loading races…"):
                st.session_state["pkg_sessions"] = list_sessions()
        except DashboardError as exc:
            st.error(user_message(exc, "Failed to load races"))
            return

    races: list[RaceSession] = st.session_state["pkg_sessions"]
    if not races:
        st.markdown(
            '<div class="empty-state">No races found. Upload a race to get started.</div>',
            unsafe_allow_html=True,
        )
        return

    for race in races:
        _render_row(race)

    counts = summarize_races(races)
    st.markdown('<p class="section-header">Summary</p>', unsafe_allow_html=True)
    render_cards(
        [
            Card("Total Races", str(counts.total), icon="ph-bold ph-stack"),
            Card("Ready", str(counts.ready), icon="ph-bold ph-check-circle", variant="gain"),
            Card("Processing", str(counts.processing), icon="ph-bold ph-clock", variant="fuel"),
            Card("Failed", str(counts.failed), icon="ph-bold ph-x-circle", variant="loss"),
        ]
    )
