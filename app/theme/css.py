"""Phosphor Icons CDN + custom CSS for the telemetry dashboard's dark theme."""

from __future__ import annotations

import streamlit as st

_PHOSPHOR_CDN = "https://unpkg.com/@phosphor-icons/web@2.0.3/src"

# Accent per card variant / status badge: (foreground, rgb triplet for tints).
_ACCENTS = {
    "timing": ("#93C5FD", "96, 165, 250"),
    "speed": ("#C4B5FD", "167, 139, 250"),
    "fuel": ("#FCD34D", "251, 191, 36"),
    "gain": ("#4ADE80", "34, 197, 94"),
    "loss": ("#F87171", "239, 68, 68"),
}
_STATUS_ACCENTS = {"ready": "gain", "processing": "fuel", "failed": "loss"}


def _accent_rules() -> str:
    rules = []
    for variant, (fg, rgb) in _ACCENTS.items():
        rules.append(
            f".metric-card.{variant} .metric-icon {{ color: {fg}; background: rgba({rgb}, 0.12); }}\n"
            f".metric-card.{variant} .metric-value {{ color: {fg}; }}"
        )
    for status, variant in _STATUS_ACCENTS.items():
        fg, rgb = _ACCENTS[variant]
        rules.append(
            f".status-badge.{status} {{ color: {fg}; background: rgba({rgb}, 0.1); "
            f"border-color: rgba({rgb}, 0.35); }}"
        )
    return "\n".join(rules)


_BASE_CSS = """
:root {
    --lt-surface: #191C25;
    --lt-surface-hi: #232838;
    --lt-edge: rgba(255, 255, 255, 0.07);
    --lt-text: #E5E7EB;
    --lt-muted: #8B93A1;
    --lt-accent: #E10600;
}
.stApp { background: #10121A; color: var(--lt-text); }
.block-container { padding: 1rem 1.5rem 2rem; max-width: 1440px; }
header[data-testid="stHeader"] { background: transparent; }
footer { display: none; }

.status-badge {
    display: inline-flex; align-items: center; gap: 0.3rem;
    padding: 0.3rem 0.65rem; border-radius: 999px; border: 1px solid var(--lt-edge);
    font-size: 0.8rem; font-weight: 600;
}

.race-row, .metric-card {
    background: var(--lt-surface); border: 1px solid var(--lt-edge); border-radius: 8px;
}
.race-row { padding: 0.6rem 0.85rem; margin-bottom: 0.4rem; }
.race-row .race-id { font-family: monospace; font-weight: 700; margin-right: 0.5rem; }
.race-row .race-meta { color: var(--lt-muted); font-size: 0.78rem; margin-top: 0.25rem; }

.metric-card { display: flex; align-items: center; gap: 0.7rem; padding: 0.65rem 0.85rem; min-height: 68px; }
.metric-card .metric-icon {
    display: grid; place-items: center; width: 36px; height: 36px; flex-shrink: 0;
    border-radius: 8px; background: var(--lt-surface-hi); font-size: 1.1rem;
}
.metric-card .metric-body { display: flex; flex-direction: column; min-width: 0; }
.metric-card .metric-label {
    color: var(--lt-muted); font-size: 0.62rem; letter-spacing: 0.05em; text-transform: uppercase;
}
.metric-card .metric-value { font-size: 1.08rem; font-weight: 700; color: #FFFFFF; }
.metric-card .metric-sub { color: var(--lt-muted); font-size: 0.66rem; }

.stTabs [data-baseweb="tab"] { border-radius: 6px 6px 0 0; font-weight: 600; color: var(--lt-muted); }
.stTabs [aria-selected="true"] { background: var(--lt-accent) !important; color: #FFFFFF !important; }

.section-header {
    margin: 1.4rem 0 0.3rem; padding-bottom: 0.25rem; border-bottom: 1px solid var(--lt-edge);
    font-size: 1.02rem; font-weight: 700;
}
.section-header.first { margin-top: 0.4rem; }
.chart-caption { color: var(--lt-muted); font-size: 0.86rem; margin-bottom: 0.35rem; }

.empty-state {
    padding: 2.2rem 0; text-align: center; color: var(--lt-muted);
    border: 1px dashed var(--lt-edge); border-radius: 8px;
}
.app-footer {
    margin-top: 2rem; padding-top: 0.9rem; border-top: 1px solid var(--lt-edge);
    text-align: center; color: #4B5563; font-size: 0.74rem;
}
"""


def inject_theme() -> None:
    """Inject Phosphor icon CDN links and the dashboard CSS into the page."""
    st.markdown(
        f'<link rel="stylesheet" href="{_PHOSPHOR_CDN}/regular/style.css" />'
        f'<link rel="stylesheet" href="{_PHOSPHOR_CDN}/bold/style.css" />'
        f"<style>{_BASE_CSS}{_accent_rules()}</style>",
        unsafe_allow_html=True,
    )
