"""Join several series on the timestamps of a reference series.

The join is an exact-match left join: every reference timestamp appears
once in the output, and a secondary series contributes values only where
it has a sample at precisely the same instant. Anything else is a gap
(``None``); no interpolation or nearest-neighbour matching is done.
"""

from __future__ import annotations

from datetime import datetime

from heliodash.series._types import MergedSeries, Series, TimeSeriesPoint


def timestamp_key(timestamp: datetime) -> str:
    """Return the join key for *timestamp* (its ISO-8601 string)."""
    return timestamp.isoformat()


def _index_by_timestamp(series: Series) -> dict[str, TimeSeriesPoint]:
    """Index *series* by timestamp key. Later duplicates win."""
    return {timestamp_key(p.timestamp): p for p in series.points}


def merge_series(
    reference: Series,
    *secondaries: Series,
    name: str | None = None,
) -> MergedSeries:
    """Merge *secondaries* onto the timestamps of *reference*.

    Args:
        reference: Series whose timestamps define the output rows. If it
            holds duplicate timestamps only the first is kept.
        *secondaries: Series whose fields are attached by exact timestamp
            match.
        name: Output series name. Defaults to the reference name.

    Returns:
        A MergedSeries with the reference fields followed by each
        secondary's fields, ``None`` wherever a secondary has no sample.

    Raises:
        ValueError: If two inputs share a field name.
    """
    fields: list[str] = list(reference.fields)
    seen = set(fields)
    for secondary in secondaries:
        overlap = seen.intersection(secondary.fields)
        if overlap:
            raise ValueError(
                f"Series {secondary.name!r} repeats field(s) {sorted(overlap)}; "
                "rename them with Series.rename_fields before merging"
            )
        fields.extend(secondary.fields)
        seen.update(secondary.fields)

    indexes = [_index_by_timestamp(s) for s in secondaries]

    merged: list[TimeSeriesPoint] = []
    emitted: set[str] = set()
    for point in reference.points:
        key = timestamp_key(point.timestamp)
        if key in emitted:
            continue
        emitted.add(key)

        values: dict[str, float | None] = {k: point.get(k) for k in reference.fields}
        for secondary, index in zip(secondaries, indexes):
            match = index.get(key)
            for k in secondary.fields:
                values[k] = match.get(k) if match is not None else None
        merged.append(TimeSeriesPoint(point.timestamp, values))

    return MergedSeries(
        name=name or reference.name,
        points=tuple(merged),
        fields=tuple(fields),
        sources=(reference.name, *(s.name for s in secondaries)),
    )
