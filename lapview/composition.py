"""Chart-ready datasets and display strings for each analysis view.

Every ``compose_*`` function is a pure function of a successful result. Rows
come from ``lapview.aligner`` and are wrapped in DataFrames for Plotly; the
underlying bundles are never modified. Results are rebuilt on each render.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import pandas as pd

from lapview.aligner import (
    FUEL_TICK_INTERVAL_M,
    LAP_TICK_INTERVAL_M,
    generate_ticks,
    zip_bundle,
    zip_multiple,
)
from lapview.models import (
    FuelComparisonResult,
    LapComparisonResult,
    RaceSession,
    RaceStatus,
    SingleLapFuelResult,
)
from lapview.utils import format_delta, format_lap_time, to_percentage


def _frame(rows: list[dict[str, float]], columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame.from_records(rows, columns=columns)


# ---------------------------------------------------------------------------
# Lap comparison
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LapComparisonView:
    delta: pd.DataFrame
    speed: pd.DataFrame
    inputs: pd.DataFrame
    steering: pd.DataFrame
    ticks: list[float]
    cards: dict[str, str]
    lap_1_ahead: bool


def compose_lap_comparison(result: LapComparisonResult) -> LapComparisonView:
    s = result.summary
    delta = _frame(
        zip_bundle(result.delta_time, {"delta": "delta"}),
        ["distance", "delta"],
    )
    speed = _frame(
        zip_bundle(result.speed, {"lap_1": "lap1", "lap_2": "lap2"}),
        ["distance", "lap1", "lap2"],
    )
    inputs = _frame(
        zip_multiple(
            [result.throttle, result.brake],
            [
                {"lap_1": "throttle1", "lap_2": "throttle2"},
                {"lap_1": "brake1", "lap_2": "brake2"},
            ],
        ),
        ["distance", "throttle1", "throttle2", "brake1", "brake2"],
    )
    steering = _frame(
        zip_bundle(result.steering, {"lap_1": "lap1", "lap_2": "lap2"}),
        ["distance", "lap1", "lap2"],
    )
    cards = {
        "lap_1_time": format_lap_time(s.lap_1_time),
        "lap_2_time": format_lap_time(s.lap_2_time),
        "delta_final": format_delta(s.delta_final),
        "delta_min": format_delta(s.delta_min),
        "delta_max": format_delta(s.delta_max),
        "max_speed_lap_1": f"{s.max_speed_lap_1:.1f} km/h",
        "max_speed_lap_2": f"{s.max_speed_lap_2:.1f} km/h",
    }
    return LapComparisonView(
        delta=delta,
        speed=speed,
        inputs=inputs,
        steering=steering,
        ticks=generate_ticks(result.delta_time.index, LAP_TICK_INTERVAL_M),
        cards=cards,
        lap_1_ahead=s.delta_final < 0,
    )


# ---------------------------------------------------------------------------
# Single-lap fuel
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SingleLapFuelView:
    fuel_curve: pd.DataFrame
    speed_scatter: pd.DataFrame
    throttle_scatter: pd.DataFrame
    track_map: pd.DataFrame
    ticks: list[float]
    cards: dict[str, str]


def compose_single_lap_fuel(result: SingleLapFuelResult) -> SingleLapFuelView:
    s = result.summary
    curve_rows = zip_bundle(
        result.fuel_curve,
        {"fuel_liters": "fuel_liters", "fuel_percentage": "fuel_percentage"},
    )
    # Percentage is a display unit; the bundle keeps the 0-1 fraction.
    fuel_curve = _frame(
        [{**row, "fuel_percentage": to_percentage(row["fuel_percentage"])} for row in curve_rows],
        ["distance", "fuel_liters", "fuel_percentage"],
    )
    speed_scatter = _frame(
        zip_bundle(
            result.fuel_speed_scatter,
            {"fuel_consumed": "fuel_consumed", "throttle": "throttle", "gear": "gear"},
        ),
        ["speed", "fuel_consumed", "throttle", "gear"],
    )
    throttle_scatter = _frame(
        zip_bundle(
            result.fuel_throttle_scatter,
            {"fuel_consumed": "fuel_consumed", "speed": "speed", "gear": "gear"},
        ),
        ["throttle", "fuel_consumed", "speed", "gear"],
    )
    track_map = _frame(
        zip_bundle(
            result.fuel_track_map,
            {"pos_z": "pos_z", "fuel_consumed": "fuel_consumed", "fuel_normalized": "fuel_normalized"},
        ),
        ["pos_x", "pos_z", "fuel_consumed", "fuel_normalized"],
    )
    cards = {
        "lap_time": format_lap_time(s.lap_time),
        "fuel_used": f"{s.fuel_used:.2f} L",
        "consumption_rate": f"{s.consumption_rate_per_km:.3f} L/km",
        "laps_remaining": f"{s.estimated_laps_remaining:.1f}",
        "fuel_start": f"{s.fuel_start:.2f} L",
        "fuel_end": f"{s.fuel_end:.2f} L",
        "fuel_capacity": f"{s.fuel_capacity:.0f} L",
        "lap_distance": f"{s.lap_distance_km:.2f} km",
    }
    return SingleLapFuelView(
        fuel_curve=fuel_curve,
        speed_scatter=speed_scatter,
        throttle_scatter=throttle_scatter,
        track_map=track_map,
        ticks=generate_ticks(result.fuel_curve.index, FUEL_TICK_INTERVAL_M),
        cards=cards,
    )


# ---------------------------------------------------------------------------
# Fuel comparison
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FuelComparisonView:
    delta: pd.DataFrame
    curves: pd.DataFrame
    ticks: list[float]
    more_efficient_lap: int
    fuel_saved: float
    cards: dict[str, str]


def compose_fuel_comparison(result: FuelComparisonResult) -> FuelComparisonView:
    s = result.summary
    delta = _frame(
        zip_bundle(result.fuel_delta, {"delta": "delta"}),
        ["distance", "delta"],
    )
    curves = _frame(
        zip_bundle(result.fuel_curves, {"lap_1_fuel": "lap1", "lap_2_fuel": "lap2"}),
        ["distance", "lap1", "lap2"],
    )
    fuel_saved = abs(s.fuel_delta)
    cards = {
        "lap_1_time": format_lap_time(s.lap_1_time),
        "lap_2_time": format_lap_time(s.lap_2_time),
        "more_efficient": f"Lap {s.more_efficient_lap}",
        "fuel_saved": f"{fuel_saved:.3f} L",
        "lap_1_fuel_used": f"{s.lap_1_fuel_used:.2f} L",
        "lap_2_fuel_used": f"{s.lap_2_fuel_used:.2f} L",
        "lap_1_consumption_rate": f"{s.lap_1_consumption_rate:.3f}",
        "lap_2_consumption_rate": f"{s.lap_2_consumption_rate:.3f}",
    }
    return FuelComparisonView(
        delta=delta,
        curves=curves,
        ticks=generate_ticks(result.fuel_delta.index, FUEL_TICK_INTERVAL_M),
        more_efficient_lap=s.more_efficient_lap,
        fuel_saved=fuel_saved,
        cards=cards,
    )


# ---------------------------------------------------------------------------
# Race packages
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class RaceCounts:
    total: int
    ready: int
    processing: int
    failed: int


def summarize_races(sessions: Iterable[RaceSession]) -> RaceCounts:
    statuses = [session.status for session in sessions]
    return RaceCounts(
        total=len(statuses),
        ready=statuses.count(RaceStatus.READY),
        processing=statuses.count(RaceStatus.PROCESSING),
        failed=statuses.count(RaceStatus.FAILED),
    )

