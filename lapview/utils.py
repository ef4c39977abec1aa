from __future__ import annotations

import math

import pandas as pd


def datetime_to_utc(value: object) -> pd.Timestamp | None:
    if value is None or pd.isna(value):
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    if pd.isna(ts):
        return None
    return ts


def short_race_id(race_id: str) -> str:
    return race_id[:8]


def raw_download_filename(race_id: str) -> str:
    return f"race_{short_race_id(race_id)}.deflate"


def format_lap_time(seconds: float | int | None) -> str:
    """Format a lap time in seconds as ``m:ss.mmm``."""
    if seconds is None or math.isnan(float(seconds)):
        return "—"
    total_ms = int(round(abs(float(seconds)) * 1000))
    minutes, rem_ms = divmod(total_ms, 60_000)
    sign = "-" if float(seconds) < 0 and total_ms else ""
    return f"{sign}{minutes}:{rem_ms / 1000.0:06.3f}"


def format_delta(value: float, decimals: int = 3) -> str:
    if value is None or math.isnan(float(value)):
        return "—"
    return f"{float(value):+.{decimals}f}"


def format_timestamp(value: pd.Timestamp | None) -> str:
    if value is None:
        return "—"
    return value.strftime("%d %b %Y %H:%M UTC")


def to_percentage(fraction: float) -> float:
    return float(fraction) * 100.0
