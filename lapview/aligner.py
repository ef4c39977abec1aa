"""Reshape column-oriented series bundles into chart rows and axis ticks.

Bundles arrive as parallel arrays keyed by field name. Charts want one record
per index position, so every function here zips columns position by position.
Nothing is sorted or resampled: the backend already emits the index in
ascending order, and only lengths are checked.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

from lapview.errors import ShapeMismatchError
from lapview.models import SeriesBundle

LAP_TICK_INTERVAL_M = 200
FUEL_TICK_INTERVAL_M = 500


def _checked_column(bundle: SeriesBundle, name: str) -> tuple[float, ...]:
    try:
        values = bundle.column(name)
    except KeyError:
        raise ShapeMismatchError(
            f"Field '{name}' missing from bundle indexed by '{bundle.index_key}'"
        ) from None
    if len(values) != bundle.length:
        raise ShapeMismatchError(
            f"Field '{name}' has {len(values)} values but index "
            f"'{bundle.index_key}' has {bundle.length}",
            expected=bundle.length,
            actual=len(values),
        )
    return values


def validate_bundle(bundle: SeriesBundle) -> None:
    for name in bundle.columns:
        _checked_column(bundle, name)


def validate_joined(bundles: Iterable[tuple[str, SeriesBundle]]) -> None:
    """Bundles of one result that share an index key must have equal length.

    Their index is the join key between charts, so a length difference would
    misalign rows across datasets even when each bundle is consistent.
    """
    seen: dict[str, tuple[str, int]] = {}
    for name, bundle in bundles:
        if bundle.index_key not in seen:
            seen[bundle.index_key] = (name, bundle.length)
            continue
        first_name, expected = seen[bundle.index_key]
        if bundle.length != expected:
            raise ShapeMismatchError(
                f"{name} has {bundle.length} rows but {first_name} has {expected} "
                f"on index '{bundle.index_key}'",
                expected=expected,
                actual=bundle.length,
            )


def zip_bundle(
    bundle: SeriesBundle,
    field_map: Mapping[str, str],
    index_key: str | None = None,
) -> list[dict[str, float]]:
    """One row per index position: ``{index_key: index[i], out_key: seq[i], ...}``.

    ``field_map`` maps bundle field names to the keys used in the output rows.
    Raises ``ShapeMismatchError`` when a mapped field is missing or its length
    differs from the index.
    """
    out_index = index_key or bundle.index_key
    columns = [(out_key, _checked_column(bundle, name)) for name, out_key in field_map.items()]
    rows: list[dict[str, float]] = []
    for i, index_value in enumerate(bundle.index):
        row = {out_index: index_value}
        for out_key, values in columns:
            row[out_key] = values[i]
        rows.append(row)
    return rows


def zip_multiple(
    bundles: Sequence[SeriesBundle],
    field_maps: Sequence[Mapping[str, str]],
    index_key: str | None = None,
) -> list[dict[str, float]]:
    """Merge several bundles sharing one index into a single row sequence.

    The first bundle supplies the index. Every bundle must have the same
    length; the index values themselves are taken on trust.
    """
    if len(bundles) != len(field_maps):
        raise ValueError("zip_multiple needs exactly one field map per bundle")
    if not bundles:
        return []

    expected = bundles[0].length
    for bundle in bundles[1:]:
        if bundle.length != expected:
            raise ShapeMismatchError(
                f"Bundle indexed by '{bundle.index_key}' has {bundle.length} rows, "
                f"expected {expected}",
                expected=expected,
                actual=bundle.length,
            )

    rows = zip_bundle(bundles[0], field_maps[0], index_key=index_key)
    for bundle, field_map in zip(bundles[1:], field_maps[1:]):
        for row, extra in zip(rows, zip_bundle(bundle, field_map)):
            for name in field_map.values():
                row[name] = extra[name]
    return rows


def generate_ticks(index_values: Iterable[float], interval: float) -> list[float]:
    """Ticks at ``0, interval, 2 * interval, ...`` up to and including the max index.

    Empty input yields ``[0]``. NaN entries are ignored.
    """
    if interval <= 0:
        raise ValueError(f"Tick interval must be positive, got {interval}")

    finite = [float(v) for v in index_values if not math.isnan(float(v))]
    if not finite:
        return [0]

    max_value = max(finite)
    if max_value < 0:
        return []
    # Integer step count keeps the sequence identical across renders.
    steps = int(max_value // interval)
    return [k * interval for k in range(steps + 1)]
