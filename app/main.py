from __future__ import annotations

import logging

import streamlit as st

st.set_page_config(page_title="Lap Telemetry", page_icon="🏁", layout="wide")

from data_access import get_controller, resolve_settings  # noqa: E402
from tabs import fuel_analysis, fuel_comparison, lap_comparison, race_packages  # noqa: E402
from theme import inject_theme  # noqa: E402

from lapview.controller import AnalysisKind  # noqa: E402

logging.basicConfig(
    level=resolve_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

inject_theme()


# ---------------------------------------------------------------------------
# Header row: branding and backend in use
# ---------------------------------------------------------------------------
st.markdown(
    '<div style="display:flex;justify-content:space-between;'
    'align-items:center;padding:0.2rem 0 0.6rem 0;">'
    '<div><span style="font-size:1.6rem;font-weight:800;color:#E10600;'
    'margin-right:0.4rem;">LAP</span><span style="font-size:1.6rem;'
    'font-weight:600;color:#E5E7EB;">Telemetry</span></div>'
    '<span style="color:#6B7280;font-size:0.8rem;font-family:monospace;">'
    f"{resolve_settings().api_base_url}</span>"
    "</div>",
    unsafe_allow_html=True,
)


# ---------------------------------------------------------------------------
# Tabbed views, one controller per analysis view
# ---------------------------------------------------------------------------
tab_compare, tab_fuel, tab_fuel_compare, tab_packages = st.tabs(
    [
        "⏱️ Lap Comparison",
        "⛽ Fuel Analysis",
        "\U0001f4ca Fuel Comparison",
        "\U0001f4e6 Race Packages",
    ]
)

with tab_compare:
    lap_comparison.render(get_controller("lap_comparison", AnalysisKind.LAP_COMPARISON))

with tab_fuel:
    fuel_analysis.render(get_controller("fuel_analysis", AnalysisKind.SINGLE_LAP_FUEL))

with tab_fuel_compare:
    fuel_comparison.render(get_controller("fuel_comparison", AnalysisKind.FUEL_COMPARISON))

with tab_packages:
    race_packages.render()

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.markdown(
    '<div class="app-footer">Analyses computed by the race backend &middot; '
    "Charts by Plotly &middot; Built with Streamlit</div>",
    unsafe_allow_html=True,
)
