"""Read-only snapshots of what the race backend returns."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any

import pandas as pd

from lapview.errors import ServerError
from lapview.utils import datetime_to_utc, short_race_id


class RaceStatus(str, Enum):
    PROCESSING = "Processing"
    READY = "Ready"
    FAILED = "Failed"


def _malformed(what: str, exc: Exception) -> ServerError:
    return ServerError(None, f"Malformed {what} response: {exc}")


@dataclass(frozen=True)
class RaceSession:
    race_id: str
    status: RaceStatus
    created_at: pd.Timestamp | None
    updated_at: pd.Timestamp | None
    laps_count: int
    raw_data_path: str | None = None

    @property
    def short_id(self) -> str:
        return short_race_id(self.race_id)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RaceSession:
        try:
            return cls(
                race_id=str(payload["race_id"]),
                status=RaceStatus(payload["status"]),
                created_at=datetime_to_utc(payload.get("created_at")),
                updated_at=datetime_to_utc(payload.get("updated_at")),
                laps_count=int(payload.get("laps_count") or 0),
                raw_data_path=payload.get("raw_data_path") or None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _malformed("race status", exc) from exc


@dataclass(frozen=True)
class SeriesBundle:
    """Equal-length numeric columns sharing one index column.

    Column lengths are not checked on construction; ``lapview.aligner``
    validates them before any rows are built.
    """

    index_key: str
    columns: Mapping[str, tuple[float, ...]]

    @property
    def index(self) -> tuple[float, ...]:
        return self.columns[self.index_key]

    @property
    def length(self) -> int:
        return len(self.index)

    def column(self, name: str) -> tuple[float, ...]:
        return self.columns[name]

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], index_key: str = "distance"
    ) -> SeriesBundle:
        if index_key not in payload:
            raise KeyError(index_key)
        columns = {str(name): tuple(float(v) for v in values) for name, values in payload.items()}
        return cls(index_key=index_key, columns=MappingProxyType(columns))


def _summary_from_payload(cls, payload: Mapping[str, Any]):
    values = {}
    for f in fields(cls):
        raw = payload[f.name]
        values[f.name] = int(raw) if f.type in ("int", int) else float(raw)
    return cls(**values)


@dataclass(frozen=True)
class LapSummary:
    lap_1_time: float
    lap_2_time: float
    delta_final: float
    delta_min: float
    delta_max: float
    delta_min_position: float
    delta_max_position: float
    max_speed_lap_1: float
    max_speed_lap_2: float


@dataclass(frozen=True)
class LapComparisonResult:
    summary: LapSummary
    delta_time: SeriesBundle
    speed: SeriesBundle
    throttle: SeriesBundle
    brake: SeriesBundle
    steering: SeriesBundle

    def bundles(self) -> Iterator[tuple[str, SeriesBundle]]:
        for name in ("delta_time", "speed", "throttle", "brake", "steering"):
            yield name, getattr(self, name)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> LapComparisonResult:
        try:
            return cls(
                summary=_summary_from_payload(LapSummary, payload["summary"]),
                delta_time=SeriesBundle.from_payload(payload["delta_time"]),
                speed=SeriesBundle.from_payload(payload["speed"]),
                throttle=SeriesBundle.from_payload(payload["throttle"]),
                brake=SeriesBundle.from_payload(payload["brake"]),
                steering=SeriesBundle.from_payload(payload["steering"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _malformed("lap comparison", exc) from exc


@dataclass(frozen=True)
class FuelSummary:
    lap_number: int
    lap_time: float
    fuel_capacity: float
    fuel_start: float
    fuel_end: float
    fuel_used: float
    consumption_rate_per_km: float
    lap_distance_km: float
    estimated_laps_remaining: float


@dataclass(frozen=True)
class SingleLapFuelResult:
    summary: FuelSummary
    fuel_curve: SeriesBundle
    fuel_speed_scatter: SeriesBundle
    fuel_throttle_scatter: SeriesBundle
    fuel_track_map: SeriesBundle

    def bundles(self) -> Iterator[tuple[str, SeriesBundle]]:
        for name in ("fuel_curve", "fuel_speed_scatter", "fuel_throttle_scatter", "fuel_track_map"):
            yield name, getattr(self, name)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SingleLapFuelResult:
        try:
            return cls(
                summary=_summary_from_payload(FuelSummary, payload["summary"]),
                fuel_curve=SeriesBundle.from_payload(payload["fuel_curve"]),
                fuel_speed_scatter=SeriesBundle.from_payload(
                    payload["fuel_speed_scatter"], index_key="speed"
                ),
                fuel_throttle_scatter=SeriesBundle.from_payload(
                    payload["fuel_throttle_scatter"], index_key="throttle"
                ),
                fuel_track_map=SeriesBundle.from_payload(
                    payload["fuel_track_map"], index_key="pos_x"
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _malformed("fuel analysis", exc) from exc


@dataclass(frozen=True)
class FuelComparisonSummary:
    lap_1_number: int
    lap_2_number: int
    lap_1_time: float
    lap_2_time: float
    lap_1_fuel_used: float
    lap_2_fuel_used: float
    fuel_delta: float
    lap_1_consumption_rate: float
    lap_2_consumption_rate: float
    consumption_rate_delta: float
    more_efficient_lap: int


@dataclass(frozen=True)
class FuelComparisonResult:
    summary: FuelComparisonSummary
    fuel_delta: SeriesBundle
    fuel_curves: SeriesBundle

    def bundles(self) -> Iterator[tuple[str, SeriesBundle]]:
        yield "fuel_delta", self.fuel_delta
        yield "fuel_curves", self.fuel_curves

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> FuelComparisonResult:
        try:
            return cls(
                summary=_summary_from_payload(FuelComparisonSummary, payload["summary"]),
                fuel_delta=SeriesBundle.from_payload(payload["fuel_delta"]),
                fuel_curves=SeriesBundle.from_payload(payload["fuel_curves"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _malformed("fuel comparison", exc) from exc


AnalysisResult = LapComparisonResult | SingleLapFuelResult | FuelComparisonResult


@dataclass(frozen=True)
class RaceDownload:
    race_id: str
    status: str
    size_bytes: int
    data: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> RaceDownload:
        try:
            return cls(
                race_id=str(payload["race_id"]),
                status=str(payload["status"]),
                size_bytes=int(payload["size_bytes"]),
                data=str(payload["data"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _malformed("race download", exc) from exc
