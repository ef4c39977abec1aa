from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx

from lapview.config import Settings, get_settings
from lapview.errors import NetworkError, NotFoundError, ServerError
from lapview.models import (
    FuelComparisonResult,
    LapComparisonResult,
    RaceDownload,
    RaceSession,
    SingleLapFuelResult,
)

logger = logging.getLogger(__name__)


def encode_upload(path: str | Path) -> str:
    return base64.b64encode(Path(path).read_bytes()).decode()


def _race_path(race_id: str, *parts: object) -> str:
    """Path under ``/race/{id}`` with the id escaped as a single segment."""
    return "/".join(["/race", quote(race_id, safe=""), *(str(p) for p in parts)])


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return None


class RaceApiClient:
    """Async client for the race backend.

    Holds configuration only; each call opens its own ``httpx.AsyncClient`` so
    the same instance can be driven from successive event loops.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            async with httpx.AsyncClient(
                base_url=self.settings.api_base_url,
                timeout=self.settings.request_timeout_s,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"{method} {self.settings.api_base_url}{path} failed: {exc}") from exc

        if response.is_success:
            return response

        detail = _error_detail(response)
        logger.warning("%s %s returned HTTP %s: %s", method, path, response.status_code, detail)
        if response.status_code == 404:
            raise NotFoundError(response.status_code, detail)
        raise ServerError(response.status_code, detail)

    async def _get_json(self, path: str) -> Any:
        response = await self._request("GET", path)
        try:
            return response.json()
        except ValueError as exc:
            raise ServerError(response.status_code, f"Response from {path} is not JSON") from exc

    # ------------------------------------------------------------------
    # Session catalog
    # ------------------------------------------------------------------
    async def list_session_ids(self) -> list[str]:
        payload = await self._get_json("/race/list_ids")
        if not isinstance(payload, list):
            raise ServerError(None, "Malformed race id list response")
        return [str(race_id) for race_id in payload]

    async def get_session_status(self, race_id: str) -> RaceSession:
        return RaceSession.from_payload(await self._get_json(_race_path(race_id, "status")))

    async def list_sessions(self) -> list[RaceSession]:
        payload = await self._get_json("/race/list")
        if not isinstance(payload, list):
            raise ServerError(None, "Malformed race list response")
        return [RaceSession.from_payload(item) for item in payload]

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------
    async def compare_laps(self, race_id: str, lap1: int, lap2: int) -> LapComparisonResult:
        payload = await self._get_json(_race_path(race_id, "compare", lap1, lap2))
        return LapComparisonResult.from_payload(payload)

    async def analyze_lap_fuel(self, race_id: str, lap_number: int) -> SingleLapFuelResult:
        payload = await self._get_json(_race_path(race_id, "fuel", lap_number))
        return SingleLapFuelResult.from_payload(payload)

    async def compare_lap_fuel(self, race_id: str, lap1: int, lap2: int) -> FuelComparisonResult:
        payload = await self._get_json(_race_path(race_id, "fuel", "compare", lap1, lap2))
        return FuelComparisonResult.from_payload(payload)

    # ------------------------------------------------------------------
    # Race management
    # ------------------------------------------------------------------
    async def upload_race(self, payload_b64: str) -> dict[str, Any]:
        response = await self._request("POST", "/race/upload", json={"data": payload_b64})
        try:
            return response.json()
        except ValueError:
            return {}

    async def download_race(self, race_id: str) -> RaceDownload:
        return RaceDownload.from_payload(await self._get_json(_race_path(race_id, "download")))

    async def download_race_raw(self, race_id: str) -> bytes:
        response = await self._request("GET", _race_path(race_id, "download", "raw"))
        return response.content

    async def delete_race(self, race_id: str) -> None:
        await self._request("DELETE", _race_path(race_id))
