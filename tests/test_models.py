from __future__ import annotations

import pytest

from lapview.errors import (
    NetworkError,
    NotFoundError,
    ServerError,
    ShapeMismatchError,
    ValidationError,
    user_message,
)
from lapview.models import RaceSession, RaceStatus, SeriesBundle


def test_series_bundle_from_payload() -> None:
    bundle = SeriesBundle.from_payload({"distance": [0, 10, 20], "delta": [0.0, -0.1, -0.2]})

    assert bundle.index == (0.0, 10.0, 20.0)
    assert bundle.length == 3
    assert bundle.column("delta")[-1] == pytest.approx(-0.2)
    with pytest.raises(TypeError):
        bundle.columns["delta"] = ()


def test_series_bundle_requires_index() -> None:
    with pytest.raises(KeyError):
        SeriesBundle.from_payload({"speed": [1.0]})


def test_race_session_defaults(make_session_payload) -> None:
    payload = make_session_payload("Processing", 0)
    payload.pop("raw_data_path")
    payload["laps_count"] = None

    session = RaceSession.from_payload(payload)

    assert session.status is RaceStatus.PROCESSING
    assert session.laps_count == 0
    assert session.raw_data_path is None


def test_short_id() -> None:
    session = RaceSession.from_payload(
        {"race_id": "3f2a9c1e-77aa-4b1c", "status": "Ready", "laps_count": 5}
    )
    assert session.short_id == "3f2a9c1e"
    assert session.created_at is None


def test_user_message() -> None:
    fallback = "Failed to compare laps"

    assert user_message(ServerError(400, "Lap out of range"), fallback) == "Lap out of range"
    assert user_message(NotFoundError(404, "Race not found"), fallback) == "Race not found"
    assert user_message(ServerError(503), fallback) == fallback
    assert user_message(NetworkError("refused"), fallback) == fallback
    assert user_message(ValidationError("Select a race first"), fallback) == "Select a race first"
    assert user_message(ShapeMismatchError("speed: 3 vs 4"), fallback) == (
        "Data integrity error: speed: 3 vs 4"
    )
