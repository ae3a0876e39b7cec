"""Type definitions for normalized time-series data.

Provides the core containers every parser produces:

- :class:`TimeSeriesPoint`: one timestamped record of named float fields.
- :class:`Series`: a named, time-ordered sequence of points sharing a
  schema.
- :class:`MergedSeries`: a series produced by joining several sources on
  the timestamps of a reference series.
- :class:`ImageFrame` / :class:`ImageFrameSet`: ordered image references
  belonging to one model run.

Field values are either finite floats or ``None``. ``None`` marks a gap
(missing or flagged sample) and is kept distinct from a measured zero.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType

import polars as pl


@dataclass(frozen=True)
class TimeSeriesPoint:
    """A single timestamped record.

    Attributes:
        timestamp: Timezone-aware UTC instant.
        fields: Read-only mapping of field name to a finite float or
            ``None``.

    Raises:
        ValueError: If a field value is NaN or infinite.
    """

    timestamp: datetime
    fields: Mapping[str, float | None]

    def __post_init__(self) -> None:
        checked: dict[str, float | None] = {}
        for key, value in self.fields.items():
            if value is not None:
                value = float(value)
                if not math.isfinite(value):
                    raise ValueError(f"Field {key!r} must be finite or None, got {value}")
            checked[key] = value
        object.__setattr__(self, "fields", MappingProxyType(checked))

    def __getitem__(self, key: str) -> float | None:
        return self.fields[key]

    def get(self, key: str, default: float | None = None) -> float | None:
        """Return the value of *key*, or *default* if the field is absent."""
        return self.fields.get(key, default)


@dataclass(frozen=True)
class Series:
    """A named sequence of points sorted by timestamp.

    Use :meth:`from_points` to build a series from unsorted points; the
    constructor itself trusts that *points* are already ordered.

    Attributes:
        name: Human-readable series name (e.g. ``"plasma"``).
        points: Points in non-decreasing timestamp order.
        fields: Field keys shared by every point.
    """

    name: str
    points: tuple[TimeSeriesPoint, ...] = ()
    fields: tuple[str, ...] = ()

    @classmethod
    def from_points(
        cls,
        name: str,
        points: Iterable[TimeSeriesPoint],
        fields: Sequence[str] | None = None,
    ) -> Series:
        """Create a series, stably sorting *points* by timestamp.

        Args:
            name: Series name.
            points: Points in any order.
            fields: Field keys. Defaults to the keys of the first point.

        Returns:
            A new, sorted Series.
        """
        ordered = tuple(sorted(points, key=lambda p: p.timestamp))
        if fields is None:
            fields = tuple(ordered[0].fields) if ordered else ()
        return cls(name=name, points=ordered, fields=tuple(fields))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TimeSeriesPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> TimeSeriesPoint:
        return self.points[index]

    def __bool__(self) -> bool:
        return bool(self.points)

    def timestamps(self) -> list[datetime]:
        """Return the timestamps of every point in order."""
        return [p.timestamp for p in self.points]

    def values(self, key: str) -> list[float | None]:
        """Return the values of field *key* in timestamp order."""
        return [p.get(key) for p in self.points]

    def latest(self, key: str, *, skip_zero: bool = True) -> float:
        """Return the most recent usable value of field *key*.

        Walks backwards from the newest point and returns the first value
        that is not ``None`` (and not zero when *skip_zero* is set, since
        row-table feeds use 0 for missing cells).

        Args:
            key: Field name.
            skip_zero: Skip zero values as well as gaps.

        Returns:
            The latest value, or ``0.0`` if none qualifies.
        """
        for point in reversed(self.points):
            value = point.get(key)
            if value is None or (skip_zero and value == 0):
                continue
            return value
        return 0.0

    def with_points(self, points: Iterable[TimeSeriesPoint]) -> Series:
        """Return a copy of this series holding *points* (assumed ordered)."""
        return type(self)(**{**self._copy_kwargs(), "points": tuple(points)})

    def rename_fields(self, prefix: str) -> Series:
        """Return a copy whose field keys are prefixed with *prefix*.

        Useful before merging two series that share field names.
        """
        renamed = tuple(
            TimeSeriesPoint(p.timestamp, {f"{prefix}{k}": v for k, v in p.fields.items()})
            for p in self.points
        )
        kwargs = self._copy_kwargs()
        kwargs.update(points=renamed, fields=tuple(f"{prefix}{k}" for k in self.fields))
        return type(self)(**kwargs)

    def to_polars(self) -> pl.DataFrame:
        """Export the series as a Polars DataFrame.

        Returns:
            DataFrame with a ``timestamp`` column followed by one
            ``Float64`` column per field. Gaps become nulls.
        """
        schema: dict[str, pl.DataType] = {"timestamp": pl.Datetime("us", "UTC")}
        schema.update({key: pl.Float64() for key in self.fields})
        data: dict[str, list] = {"timestamp": self.timestamps()}
        for key in self.fields:
            data[key] = self.values(key)
        return pl.DataFrame(data, schema=schema)

    def _copy_kwargs(self) -> dict:
        return {"name": self.name, "points": self.points, "fields": self.fields}


@dataclass(frozen=True)
class MergedSeries(Series):
    """A series joined from several sources on a reference's timestamps.

    Attributes:
        sources: Names of the contributing series, reference first.
    """

    sources: tuple[str, ...] = ()

    def _copy_kwargs(self) -> dict:
        kwargs = super()._copy_kwargs()
        kwargs["sources"] = self.sources
        return kwargs


@dataclass(frozen=True)
class ImageFrame:
    """A reference to one image in an animation sequence.

    Attributes:
        url: Absolute URL of the image.
        timestamp: Frame time, when it can be derived.
        run: Identifier of the model run the frame belongs to.
    """

    url: str
    timestamp: datetime | None = None
    run: str | None = None


@dataclass(frozen=True)
class ImageFrameSet:
    """Frames of a single run, sorted ascending by timestamp.

    Attributes:
        run: Run identifier shared by every frame.
        frames: Ordered frames.
    """

    run: str | None = None
    frames: tuple[ImageFrame, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[ImageFrame]:
        return iter(self.frames)

    def urls(self) -> list[str]:
        """Return the frame URLs in order."""
        return [frame.url for frame in self.frames]
