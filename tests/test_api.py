from __future__ import annotations

import asyncio
import base64
import json

import httpx
import pytest

from lapview.api import RaceApiClient, encode_upload
from lapview.config import Settings
from lapview.errors import NetworkError, NotFoundError, ServerError
from lapview.models import RaceStatus

from conftest import comparison_payload, fuel_comparison_payload, session_payload, single_fuel_payload

SETTINGS = Settings(api_base_url="http://race.test", request_timeout_s=5.0, log_level="DEBUG")


def _client(handler) -> RaceApiClient:
    return RaceApiClient(settings=SETTINGS, transport=httpx.MockTransport(handler))


def _routes(table: dict[tuple[str, str], httpx.Response], seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        key = (request.method, request.url.path)
        if key not in table:
            return httpx.Response(404, json={"detail": f"no route {key}"})
        return table[key]

    return handler


def test_catalog_endpoints() -> None:
    handler = _routes(
        {
            ("GET", "/race/list_ids"): httpx.Response(200, json=["r1", "r2"]),
            ("GET", "/race/r1/status"): httpx.Response(200, json=session_payload()),
            ("GET", "/race/list"): httpx.Response(
                200, json=[session_payload(), session_payload("Processing", 0, "r2")]
            ),
        }
    )
    client = _client(handler)

    assert asyncio.run(client.list_session_ids()) == ["r1", "r2"]

    session = asyncio.run(client.get_session_status("r1"))
    assert session.status is RaceStatus.READY
    assert session.laps_count == 20
    assert session.created_at.year == 2025

    sessions = asyncio.run(client.list_sessions())
    assert [s.status for s in sessions] == [RaceStatus.READY, RaceStatus.PROCESSING]


def test_analysis_endpoints_use_lap_paths() -> None:
    seen: list[httpx.Request] = []
    handler = _routes(
        {
            ("GET", "/race/r1/compare/3/5"): httpx.Response(200, json=comparison_payload()),
            ("GET", "/race/r1/fuel/3"): httpx.Response(200, json=single_fuel_payload()),
            ("GET", "/race/r1/fuel/compare/2/4"): httpx.Response(200, json=fuel_comparison_payload()),
        },
        seen,
    )
    client = _client(handler)

    comparison = asyncio.run(client.compare_laps("r1", 3, 5))
    fuel = asyncio.run(client.analyze_lap_fuel("r1", 3))
    fuel_cmp = asyncio.run(client.compare_lap_fuel("r1", 2, 4))

    assert comparison.summary.delta_final == -0.342
    assert comparison.delta_time.length == 5
    assert fuel.fuel_speed_scatter.index_key == "speed"
    assert fuel.fuel_track_map.index_key == "pos_x"
    assert fuel_cmp.summary.more_efficient_lap == 4
    assert all(str(r.url).startswith("http://race.test/") for r in seen)


def test_not_found_maps_to_not_found_error() -> None:
    handler = _routes({})
    client = _client(handler)

    with pytest.raises(NotFoundError) as excinfo:
        asyncio.run(client.get_session_status("nope"))

    assert excinfo.value.status_code == 404
    assert "no route" in excinfo.value.detail


def test_server_error_keeps_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": "Race is not ready for analysis"})

    with pytest.raises(ServerError) as excinfo:
        asyncio.run(_client(handler).compare_laps("r1", 1, 2))

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == "Race is not ready for analysis"


def test_server_error_without_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    with pytest.raises(ServerError) as excinfo:
        asyncio.run(_client(handler).list_session_ids())

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail is None


def test_transport_failure_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        asyncio.run(_client(handler).list_session_ids())


def test_malformed_payload_is_server_error() -> None:
    handler = _routes(
        {
            ("GET", "/race/r1/status"): httpx.Response(200, json={"race_id": "r1", "status": "Queued"}),
            ("GET", "/race/list_ids"): httpx.Response(200, json={"ids": []}),
            ("GET", "/race/r1/compare/1/2"): httpx.Response(200, json={"summary": {}}),
        }
    )
    client = _client(handler)

    with pytest.raises(ServerError, match="Malformed race status"):
        asyncio.run(client.get_session_status("r1"))
    with pytest.raises(ServerError, match="Malformed race id list"):
        asyncio.run(client.list_session_ids())
    with pytest.raises(ServerError, match="Malformed lap comparison"):
        asyncio.run(client.compare_laps("r1", 1, 2))


def test_upload_posts_base64_body(tmp_path) -> None:
    raw = b"\x78\x9c packed telemetry"
    path = tmp_path / "race.deflate"
    path.write_bytes(raw)
    seen: list[httpx.Request] = []
    handler = _routes(
        {("POST", "/race/upload"): httpx.Response(200, json={"race_id": "r9", "status": "Processing"})},
        seen,
    )

    result = asyncio.run(_client(handler).upload_race(encode_upload(path)))

    assert result["race_id"] == "r9"
    body = json.loads(seen[0].content)
    assert base64.b64decode(body["data"]) == raw


def test_download_and_delete() -> None:
    seen: list[httpx.Request] = []
    handler = _routes(
        {
            ("GET", "/race/r1/download"): httpx.Response(
                200, json={"race_id": "r1", "status": "Ready", "size_bytes": 3, "data": "YWJj"}
            ),
            ("GET", "/race/r1/download/raw"): httpx.Response(200, content=b"abc"),
            ("DELETE", "/race/r1"): httpx.Response(204),
        },
        seen,
    )
    client = _client(handler)

    download = asyncio.run(client.download_race("r1"))
    assert download.size_bytes == 3
    assert base64.b64decode(download.data) == b"abc"
    assert asyncio.run(client.download_race_raw("r1")) == b"abc"
    asyncio.run(client.delete_race("r1"))
    assert seen[-1].method == "DELETE"


def test_undecodable_body_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

    with pytest.raises(NetworkError):
        asyncio.run(_client(handler).compare_laps("r1", 3, 5))


def test_race_id_is_escaped_as_one_segment() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=session_payload(race_id="a/b?c#d"))

    session = asyncio.run(_client(handler).get_session_status("a/b?c#d"))

    assert session.race_id == "a/b?c#d"
    assert seen[0].url.query == b""
    assert seen[0].url.raw_path == b"/race/a%2Fb%3Fc%23d/status"
