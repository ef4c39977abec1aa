from __future__ import annotations

import pytest

from lapview.errors import ValidationError
from lapview.models import RaceSession
from lapview.readiness import can_analyze, clamp_lap_number, validate_lap_selection


def _session(make_session_payload, status: str = "Ready", laps_count: int = 10) -> RaceSession:
    return RaceSession.from_payload(make_session_payload(status=status, laps_count=laps_count))


def test_can_analyze_by_status(make_session_payload) -> None:
    assert can_analyze(_session(make_session_payload, "Ready"))
    assert not can_analyze(_session(make_session_payload, "Processing"))
    assert not can_analyze(_session(make_session_payload, "Failed"))
    assert not can_analyze(None)


def test_clamp_lap_number(make_session_payload) -> None:
    session = _session(make_session_payload, laps_count=10)

    assert clamp_lap_number(15, session) == 10
    assert clamp_lap_number(0, session) == 1
    assert clamp_lap_number(-3, session) == 1
    assert clamp_lap_number(7, session) == 7


def test_clamp_without_known_lap_count(make_session_payload) -> None:
    assert clamp_lap_number(15, None) == 15
    assert clamp_lap_number(15, _session(make_session_payload, "Processing", laps_count=0)) == 15


def test_validate_lap_selection_accepts_in_range(make_session_payload) -> None:
    validate_lap_selection(_session(make_session_payload, laps_count=20), [3, 5])
    validate_lap_selection(_session(make_session_payload, laps_count=20), [20])


@pytest.mark.parametrize(
    ("status", "laps", "match"),
    [
        ("Processing", [1, 2], "Processing"),
        ("Failed", [1], "Failed"),
        ("Ready", [0, 2], "out of range"),
        ("Ready", [3, 21], "out of range"),
    ],
)
def test_validate_lap_selection_rejects(make_session_payload, status, laps, match) -> None:
    session = _session(make_session_payload, status, laps_count=20)
    with pytest.raises(ValidationError, match=match):
        validate_lap_selection(session, laps)


def test_validate_lap_selection_needs_a_session() -> None:
    with pytest.raises(ValidationError, match="Select a race"):
        validate_lap_selection(None, [1])
