from __future__ import annotations

import math
from types import MappingProxyType

import pytest

from lapview.aligner import (
    generate_ticks,
    validate_bundle,
    validate_joined,
    zip_bundle,
    zip_multiple,
)
from lapview.errors import ShapeMismatchError
from lapview.models import SeriesBundle


def _bundle(index_key: str = "distance", **columns: list[float]) -> SeriesBundle:
    return SeriesBundle(
        index_key=index_key,
        columns=MappingProxyType({k: tuple(v) for k, v in columns.items()}),
    )


def test_zip_bundle_one_row_per_index_position() -> None:
    bundle = _bundle(distance=[0.0, 5.0, 12.5], lap_1=[100.0, 110.0, 120.0], lap_2=[99.0, 98.0, 97.0])

    rows = zip_bundle(bundle, {"lap_1": "lap1", "lap_2": "lap2"})

    assert len(rows) == 3
    for i, row in enumerate(rows):
        assert row["distance"] == bundle.index[i]
        assert row["lap1"] == bundle.column("lap_1")[i]
        assert row["lap2"] == bundle.column("lap_2")[i]


def test_zip_bundle_keeps_backend_order() -> None:
    bundle = _bundle(distance=[0.0, 30.0, 10.0], delta=[1.0, 2.0, 3.0])

    rows = zip_bundle(bundle, {"delta": "delta"})

    assert [row["distance"] for row in rows] == [0.0, 30.0, 10.0]


def test_zip_bundle_custom_index_key() -> None:
    bundle = _bundle(distance=[0.0, 1.0], delta=[0.5, 0.6])

    rows = zip_bundle(bundle, {"delta": "d"}, index_key="x")

    assert rows == [{"x": 0.0, "d": 0.5}, {"x": 1.0, "d": 0.6}]


def test_zip_bundle_length_mismatch() -> None:
    bundle = _bundle(distance=[0.0, 1.0, 2.0, 3.0, 4.0], delta=[0.0, 0.1, 0.2, 0.3])

    with pytest.raises(ShapeMismatchError) as excinfo:
        zip_bundle(bundle, {"delta": "delta"})

    assert excinfo.value.expected == 5
    assert excinfo.value.actual == 4


def test_zip_bundle_missing_field() -> None:
    bundle = _bundle(distance=[0.0, 1.0], delta=[0.0, 0.1])

    with pytest.raises(ShapeMismatchError):
        zip_bundle(bundle, {"speed": "speed"})


def test_zip_bundle_does_not_touch_bundle() -> None:
    bundle = _bundle(distance=[0.0, 1.0], delta=[0.0, 0.1])

    rows = zip_bundle(bundle, {"delta": "delta"})
    rows[0]["delta"] = 99.0

    assert bundle.column("delta") == (0.0, 0.1)


def test_zip_multiple_merges_by_position() -> None:
    throttle = _bundle(distance=[0.0, 10.0], lap_1=[1.0, 0.5], lap_2=[0.9, 0.4])
    brake = _bundle(distance=[0.0, 10.0], lap_1=[0.0, 0.3], lap_2=[0.0, 0.2])

    rows = zip_multiple(
        [throttle, brake],
        [{"lap_1": "throttle1", "lap_2": "throttle2"}, {"lap_1": "brake1", "lap_2": "brake2"}],
    )

    assert rows == [
        {"distance": 0.0, "throttle1": 1.0, "throttle2": 0.9, "brake1": 0.0, "brake2": 0.0},
        {"distance": 10.0, "throttle1": 0.5, "throttle2": 0.4, "brake1": 0.3, "brake2": 0.2},
    ]


def test_zip_multiple_rejects_unequal_bundles() -> None:
    throttle = _bundle(distance=[0.0, 10.0, 20.0], lap_1=[1.0, 0.5, 0.2])
    brake = _bundle(distance=[0.0, 10.0], lap_1=[0.0, 0.3])

    with pytest.raises(ShapeMismatchError):
        zip_multiple([throttle, brake], [{"lap_1": "throttle1"}, {"lap_1": "brake1"}])


def test_zip_multiple_needs_a_map_per_bundle() -> None:
    bundle = _bundle(distance=[0.0], lap_1=[1.0])

    with pytest.raises(ValueError):
        zip_multiple([bundle, bundle], [{"lap_1": "a"}])


def test_validate_bundle() -> None:
    validate_bundle(_bundle(distance=[0.0, 1.0], lap_1=[1.0, 2.0]))
    with pytest.raises(ShapeMismatchError):
        validate_bundle(_bundle(distance=[0.0, 1.0], lap_1=[1.0]))


def test_generate_ticks() -> None:
    assert generate_ticks([0, 150, 900], 500) == [0, 500]
    assert generate_ticks([], 500) == [0]
    assert generate_ticks([0, 500], 500) == [0, 500]
    assert generate_ticks([0.0, 1999.9], 200) == [0, 200, 400, 600, 800, 1000, 1200, 1400, 1600, 1800]


def test_generate_ticks_is_stable() -> None:
    distance = [i * 3.7 for i in range(1500)]
    assert generate_ticks(distance, 200) == generate_ticks(list(distance), 200)


def test_generate_ticks_edge_cases() -> None:
    assert generate_ticks([math.nan, 450.0], 200) == [0, 200, 400]
    assert generate_ticks([math.nan], 200) == [0]
    assert generate_ticks([-5.0, -1.0], 200) == []
    with pytest.raises(ValueError):
        generate_ticks([0, 100], 0)


def test_validate_joined_equal_lengths() -> None:
    validate_joined(
        [
            ("speed", _bundle(distance=[0.0, 1.0], lap_1=[1.0, 2.0])),
            ("brake", _bundle(distance=[0.0, 1.0], lap_1=[0.0, 0.5])),
            ("scatter", _bundle("speed", speed=[100.0], fuel_consumed=[0.01])),
        ]
    )


def test_validate_joined_rejects_shorter_bundle() -> None:
    with pytest.raises(ShapeMismatchError, match="brake has 1 rows but speed has 2") as excinfo:
        validate_joined(
            [
                ("speed", _bundle(distance=[0.0, 1.0], lap_1=[1.0, 2.0])),
                ("brake", _bundle(distance=[0.0], lap_1=[0.0])),
            ]
        )

    assert (excinfo.value.expected, excinfo.value.actual) == (2, 1)
