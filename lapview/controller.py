"""Per-view request state machine.

Each analysis view owns one ``AnalysisController``. The controller tracks the
selected race, the lap selection, and a ``RequestState`` that moves
``Idle -> Loading -> Success | Failed``. A submit bumps a generation counter;
responses carrying an older generation are dropped so a slow earlier request
can never overwrite a later one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from lapview.aligner import validate_bundle, validate_joined
from lapview.errors import DashboardError, ShapeMismatchError, user_message
from lapview.models import AnalysisResult, RaceSession
from lapview.readiness import clamp_lap_number, validate_lap_selection

logger = logging.getLogger(__name__)


class AnalysisKind(Enum):
    LAP_COMPARISON = ("lap comparison", 2, "Failed to compare laps")
    SINGLE_LAP_FUEL = ("fuel analysis", 1, "Failed to analyze fuel")
    FUEL_COMPARISON = ("fuel comparison", 2, "Failed to compare fuel")

    def __init__(self, label: str, lap_count: int, fallback_message: str) -> None:
        self.label = label
        self.lap_count = lap_count
        self.fallback_message = fallback_message


class RaceBackend(Protocol):
    async def list_session_ids(self) -> list[str]: ...

    async def get_session_status(self, race_id: str) -> RaceSession: ...

    async def compare_laps(self, race_id: str, lap1: int, lap2: int): ...

    async def analyze_lap_fuel(self, race_id: str, lap_number: int): ...

    async def compare_lap_fuel(self, race_id: str, lap1: int, lap2: int): ...


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    race_id: str
    lap_numbers: tuple[int, ...]


@dataclass(frozen=True)
class Success:
    result: AnalysisResult
    race_id: str
    lap_numbers: tuple[int, ...]


@dataclass(frozen=True)
class Failed:
    message: str
    error: BaseException | None = None

    @property
    def is_integrity_error(self) -> bool:
        return isinstance(self.error, ShapeMismatchError)


RequestState = Idle | Loading | Success | Failed


class AnalysisController:
    def __init__(self, client: RaceBackend, kind: AnalysisKind) -> None:
        self.client = client
        self.kind = kind
        self.race_ids: list[str] = []
        self.race_id: str | None = None
        self.session: RaceSession | None = None
        self.lap_numbers: tuple[int, ...] = (1,) * kind.lap_count
        self.state: RequestState = Idle()
        self.status_error: str | None = None
        self.catalog_error: str | None = None
        self._generation = 0
        self._status_generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Race selection
    # ------------------------------------------------------------------
    async def refresh_catalog(self) -> None:
        self.catalog_error = None
        try:
            race_ids = await self.client.list_session_ids()
        except DashboardError as exc:
            logger.warning("Race catalog fetch failed: %s", exc)
            self.catalog_error = user_message(exc, "Failed to load races")
            return
        self.race_ids = race_ids
        if race_ids and not self.race_id:
            await self.select_session(race_ids[0])

    async def select_session(self, race_id: str) -> None:
        if race_id != self.race_id:
            self.race_id = race_id
            self.session = None
            self.state = Idle()
            # In-flight submits belong to the previous race.
            self._generation += 1
        await self.refresh_status()

    async def refresh_status(self) -> None:
        if not self.race_id:
            return
        self._status_generation += 1
        token = self._status_generation
        race_id = self.race_id
        self.status_error = None
        try:
            session = await self.client.get_session_status(race_id)
        except DashboardError as exc:
            if token == self._status_generation:
                logger.warning("Status fetch for race %s failed: %s", race_id, exc)
                self.status_error = user_message(exc, "Failed to load race status")
            return
        if token != self._status_generation:
            logger.debug("Dropping stale status for race %s", race_id)
            return
        self.session = session

    def clamp(self, requested: int) -> int:
        return clamp_lap_number(requested, self.session)

    # ------------------------------------------------------------------
    # Analysis requests
    # ------------------------------------------------------------------
    async def _fetch(self, race_id: str, lap_numbers: tuple[int, ...]) -> AnalysisResult:
        if self.kind is AnalysisKind.LAP_COMPARISON:
            return await self.client.compare_laps(race_id, *lap_numbers)
        if self.kind is AnalysisKind.SINGLE_LAP_FUEL:
            return await self.client.analyze_lap_fuel(race_id, *lap_numbers)
        return await self.client.compare_lap_fuel(race_id, *lap_numbers)

    async def submit(
        self, session: RaceSession | None, lap_numbers: Sequence[int]
    ) -> RequestState:
        """Run one analysis request and return the state it settled in.

        Raises ``ValidationError`` without touching state when the race is not
        Ready or a lap is out of range. If a newer submit or race change happens
        while this one is in flight, its response is discarded and the current
        state is returned unchanged.
        """
        laps = tuple(int(lap) for lap in lap_numbers)
        if len(laps) != self.kind.lap_count:
            raise ValueError(f"{self.kind.label} takes {self.kind.lap_count} lap number(s)")
        validate_lap_selection(session, laps)

        self._generation += 1
        token = self._generation
        race_id = session.race_id
        self.lap_numbers = laps
        self.state = Loading(race_id=race_id, lap_numbers=laps)
        logger.debug("Submitting %s for race %s laps %s (gen %s)", self.kind.label, race_id, laps, token)

        try:
            result = await self._fetch(race_id, laps)
            for name, bundle in result.bundles():
                try:
                    validate_bundle(bundle)
                except ShapeMismatchError as exc:
                    raise ShapeMismatchError(f"{name}: {exc}", exc.expected, exc.actual) from exc
            validate_joined(result.bundles())
        except ShapeMismatchError as exc:
            next_state: RequestState = Failed(user_message(exc, self.kind.fallback_message), exc)
            if token == self._generation:
                logger.error("Integrity failure in %s for race %s: %s", self.kind.label, race_id, exc)
        except DashboardError as exc:
            next_state = Failed(user_message(exc, self.kind.fallback_message), exc)
            if token == self._generation:
                logger.warning("%s for race %s failed: %s", self.kind.label, race_id, exc)
        else:
            next_state = Success(result=result, race_id=race_id, lap_numbers=laps)

        if token != self._generation:
            logger.debug("Discarding superseded %s response (gen %s)", self.kind.label, token)
            return self.state
        self.state = next_state
        return self.state
