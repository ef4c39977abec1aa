"""Metric cards, status badges and card-strip rendering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import streamlit as st

from lapview.models import RaceSession, RaceStatus

_STATUS_ICONS = {
    RaceStatus.READY: "ph-bold ph-check-circle",
    RaceStatus.PROCESSING: "ph-bold ph-clock",
    RaceStatus.FAILED: "ph-bold ph-x-circle",
}


@dataclass(frozen=True)
class Card:
    label: str
    value: str
    sub: str = ""
    icon: str = ""
    variant: str = ""


def metric_html(
    label: str,
    value: str,
    sub: str = "",
    icon: str = "",
    variant: str = "",
) -> str:
    """Generate HTML for a metric card with optional Phosphor icon and color variant."""
    sub_html = f'<div class="metric-sub">{sub}</div>' if sub else ""
    icon_html = f'<div class="metric-icon"><i class="{icon}"></i></div>' if icon else ""
    variant_class = f" {variant}" if variant else ""
    return (
        f'<div class="metric-card{variant_class}">'
        f"{icon_html}"
        f'<div class="metric-body">'
        f'<div class="metric-label">{label}</div>'
        f'<div class="metric-value">{value}</div>'
        f"{sub_html}"
        f"</div></div>"
    )


def status_badge_html(status: RaceStatus, laps_count: int | None = None) -> str:
    laps = f" ({laps_count} laps)" if laps_count is not None else ""
    return (
        f'<span class="status-badge {status.value.lower()}">'
        f'<i class="{_STATUS_ICONS[status]}"></i>{status.value}{laps}</span>'
    )


def render_status(session: RaceSession | None, status_error: str | None) -> None:
    if status_error:
        st.error(status_error)
    elif session is not None:
        st.markdown(
            status_badge_html(session.status, session.laps_count),
            unsafe_allow_html=True,
        )


def render_cards(cards: Sequence[Card], per_row: int = 4) -> None:
    """Render metric cards in rows of ``per_row`` columns."""
    for start in range(0, len(cards), per_row):
        chunk = cards[start : start + per_row]
        for col, card in zip(st.columns(per_row), chunk):
            with col:
                st.markdown(
                    metric_html(card.label, card.value, card.sub, card.icon, card.variant),
                    unsafe_allow_html=True,
                )
        st.markdown("<div style='height:0.5rem;'></div>", unsafe_allow_html=True)
