from __future__ import annotations

import pytest


def _series(n: int, scale: float = 1.0) -> list[float]:
    return [round(i * scale, 3) for i in range(n)]


def comparison_payload(n: int = 5, delta_final: float = -0.342) -> dict:
    distance = _series(n, 10.0)
    two_laps = {"distance": distance, "lap_1": _series(n, 0.1), "lap_2": _series(n, 0.2)}
    return {
        "summary": {
            "lap_1_time": 92.345,
            "lap_2_time": 92.687,
            "delta_final": delta_final,
            "delta_min": -0.5,
            "delta_max": 0.12,
            "delta_min_position": 1200.0,
            "delta_max_position": 300.0,
            "max_speed_lap_1": 287.44,
            "max_speed_lap_2": 285.1,
        },
        "delta_time": {"distance": distance, "delta": _series(n, -0.001)},
        "speed": dict(two_laps),
        "throttle": dict(two_laps),
        "brake": dict(two_laps),
        "steering": dict(two_laps),
    }


def single_fuel_payload(n: int = 4) -> dict:
    return {
        "summary": {
            "lap_number": 3,
            "lap_time": 95.5,
            "fuel_capacity": 110.0,
            "fuel_start": 80.25,
            "fuel_end": 77.5,
            "fuel_used": 2.75,
            "consumption_rate_per_km": 0.5234,
            "lap_distance_km": 5.254,
            "estimated_laps_remaining": 28.18,
        },
        "fuel_curve": {
            "distance": _series(n, 400.0),
            "fuel_liters": [80.0 - i for i in range(n)],
            "fuel_percentage": [0.8 - i * 0.01 for i in range(n)],
        },
        "fuel_speed_scatter": {
            "speed": _series(n, 50.0),
            "fuel_consumed": _series(n, 0.001),
            "throttle": _series(n, 0.25),
            "gear": [1.0, 2.0, 3.0, 4.0][:n],
        },
        "fuel_throttle_scatter": {
            "throttle": _series(n, 0.25),
            "fuel_consumed": _series(n, 0.001),
            "speed": _series(n, 50.0),
            "gear": [1.0, 2.0, 3.0, 4.0][:n],
        },
        "fuel_track_map": {
            "pos_x": _series(n, 3.0),
            "pos_z": _series(n, -2.0),
            "fuel_consumed": _series(n, 0.001),
            "fuel_normalized": _series(n, 0.3),
        },
    }


def fuel_comparison_payload(n: int = 4) -> dict:
    distance = _series(n, 600.0)
    return {
        "summary": {
            "lap_1_number": 2,
            "lap_2_number": 4,
            "lap_1_time": 95.1,
            "lap_2_time": 96.0,
            "lap_1_fuel_used": 2.8,
            "lap_2_fuel_used": 2.65,
            "fuel_delta": -0.15,
            "lap_1_consumption_rate": 0.533,
            "lap_2_consumption_rate": 0.504,
            "consumption_rate_delta": -0.029,
            "more_efficient_lap": 4,
        },
        "fuel_delta": {"distance": distance, "delta": _series(n, -0.05)},
        "fuel_curves": {
            "distance": distance,
            "lap_1_fuel": [80.0 - i * 0.7 for i in range(n)],
            "lap_2_fuel": [77.2 - i * 0.66 for i in range(n)],
        },
    }


def session_payload(status: str = "Ready", laps_count: int = 20, race_id: str = "r1") -> dict:
    return {
        "race_id": race_id,
        "status": status,
        "created_at": "2025-03-02T14:05:00Z",
        "updated_at": "2025-03-02T14:09:30Z",
        "laps_count": laps_count,
        "raw_data_path": f"raw/{race_id}.deflate",
    }


@pytest.fixture
def make_comparison_payload():
    return comparison_payload


@pytest.fixture
def make_single_fuel_payload():
    return single_fuel_payload


@pytest.fixture
def make_fuel_comparison_payload():
    return fuel_comparison_payload


@pytest.fixture
def make_session_payload():
    return session_payload
