"""Reusable UI components for the lap telemetry dashboard."""

from .metrics import Card, metric_html, render_cards, render_status, status_badge_html
from .selection import lap_inputs, race_selector, render_request_state, submit_button

__all__ = [
    "Card",
    "lap_inputs",
    "metric_html",
    "race_selector",
    "render_cards",
    "render_request_state",
    "render_status",
    "status_badge_html",
    "submit_button",
]
