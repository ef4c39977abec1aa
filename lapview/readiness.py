"""Gate lap-level analysis on race status and lap range."""

from __future__ import annotations

from collections.abc import Sequence

from lapview.errors import ValidationError
from lapview.models import RaceSession, RaceStatus

_ANALYZABLE = {
    RaceStatus.PROCESSING: False,
    RaceStatus.READY: True,
    RaceStatus.FAILED: False,
}


def can_analyze(session: RaceSession | None) -> bool:
    if session is None:
        return False
    return _ANALYZABLE[session.status]


def clamp_lap_number(requested: int, session: RaceSession | None) -> int:
    """Constrain a lap number to ``[1, laps_count]`` once a session is known.

    Without a session, or with a session reporting no laps yet, the raw input
    is returned untouched.
    """
    if session is None or session.laps_count <= 0:
        return requested
    return max(1, min(int(requested), session.laps_count))


def validate_lap_selection(session: RaceSession | None, lap_numbers: Sequence[int]) -> None:
    if session is None:
        raise ValidationError("Select a race first")
    if not can_analyze(session):
        raise ValidationError(
            f"Race {session.short_id} is {session.status.value}; analysis needs a Ready race"
        )
    for lap in lap_numbers:
        if not 1 <= lap <= session.laps_count:
            raise ValidationError(
                f"Lap {lap} is out of range; race {session.short_id} has "
                f"{session.laps_count} laps"
            )
