"""Parsers for the OVATION aurora products.

- :func:`parse_hemispheric_power`: ``aurora-nowcast-hemi-power.txt``, with
  lines of ``Observation Forecast North South``::

      2024-02-09_14:30 2024-02-09_15:05   18   11

- :func:`parse_ovation`: ``ovation_aurora_latest.json``, a grid of
  ``[longitude, latitude, intensity]`` triples.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

import numpy as np

from heliodash.classify import AURORA_INTENSITY_FLOOR
from heliodash.parsers._common import load_json, parse_finite, parse_timestamp, split_lines
from heliodash.parsers._types import AuroraGrid, AuroraPoint
from heliodash.series import Series, TimeSeriesPoint

logger = logging.getLogger(__name__)

HEMI_POWER_FIELDS: tuple[str, ...] = ("north", "south")

_OBS_TIME = re.compile(r"^\d{4}-\d{2}-\d{2}_\d{2}:\d{2}$")


def parse_hemispheric_power(text: Any) -> Series:
    """Parse the hemispheric power nowcast into a ``north/south`` series [GW].

    A line is used only when its first token matches
    ``YYYY-MM-DD_HH:MM``; the last two tokens are north and south power.
    Lines with non-finite power values are skipped.

    Args:
        text: Nowcast text.

    Returns:
        Series keyed by observation time.
    """
    points = []
    for line in split_lines(text):
        parts = line.split()
        if len(parts) < 3 or not _OBS_TIME.match(parts[0]):
            continue
        north = parse_finite(parts[-2])
        south = parse_finite(parts[-1])
        if north is None or south is None:
            continue
        try:
            observed = datetime.strptime(parts[0], "%Y-%m-%d_%H:%M")
        except ValueError:
            continue
        points.append(
            TimeSeriesPoint(observed.replace(tzinfo=timezone.utc), {"north": north, "south": south})
        )
    return Series.from_points("hemispheric_power", points, HEMI_POWER_FIELDS)


def _grid_array(coordinates: Any) -> np.ndarray:
    """Coerce the OVATION coordinate list to an ``(N, 3)`` float array."""
    rows = [
        row[:3]
        for row in coordinates
        if isinstance(row, (list, tuple)) and len(row) >= 3
    ]
    if not rows:
        return np.empty((0, 3))
    try:
        return np.asarray(rows, dtype=float)
    except (TypeError, ValueError):
        # element-wise when a row holds junk; junk becomes NaN and is masked later
        cells = [[parse_finite(v) for v in row] for row in rows]
        return np.array(
            [[np.nan if v is None else v for v in row] for row in cells],
            dtype=float,
        )


def parse_ovation(
    payload: Any,
    *,
    floor: float = AURORA_INTENSITY_FLOOR,
) -> AuroraGrid:
    """Parse an OVATION aurora grid, keeping only visible cells.

    Args:
        payload: JSON text or the decoded object with ``Observation Time``,
            ``Forecast Time`` and ``coordinates``.
        floor: Minimum intensity to keep.

    Returns:
        AuroraGrid whose points have finite coordinates, intensity at or
        above *floor*, and longitudes in ``[-180, 180]``.
    """
    data = load_json(payload)
    if not isinstance(data, dict):
        return AuroraGrid()

    grid = _grid_array(data.get("coordinates") or [])
    if grid.size:
        lng, lat, intensity = grid[:, 0], grid[:, 1], grid[:, 2]
        keep = np.isfinite(grid).all(axis=1) & (intensity >= floor)
        lng = np.where(lng > 180.0, lng - 360.0, lng)
        points = tuple(
            AuroraPoint(float(a), float(o), float(i))
            for a, o, i in zip(lat[keep], lng[keep], intensity[keep])
        )
    else:
        points = ()

    logger.debug("OVATION grid: %d of %d cells visible", len(points), len(grid))
    return AuroraGrid(
        observation_time=parse_timestamp(data.get("Observation Time")),
        forecast_time=parse_timestamp(data.get("Forecast Time")),
        points=points,
    )
