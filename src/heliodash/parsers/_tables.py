"""Parsers for row-table JSON feeds.

The SWPC solar-wind and Kp products are JSON arrays of arrays whose first
row is a header, e.g.::

    [["time_tag", "density", "speed", "temperature"],
     ["2024-02-09 14:30:00.000", "4.12", "412.3", "81234"], ...]

Numeric cells are parsed with :func:`parse_float_or_zero`; rows whose
timestamp cannot be parsed are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from heliodash.parsers._common import load_json, parse_float_or_zero, parse_timestamp
from heliodash.series import Series, TimeSeriesPoint

logger = logging.getLogger(__name__)

MAGNETIC_FIELDS: tuple[str, ...] = ("bx", "by", "bz", "bt")
PLASMA_FIELDS: tuple[str, ...] = ("density", "speed", "temperature")
KP_FIELDS: tuple[str, ...] = ("kp",)
PROTON_FIELDS: tuple[str, ...] = ("flux",)

PROTON_ENERGY_BAND: str = ">=10 MeV"
"""Integral proton channel used for the S-scale."""


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def parse_row_table(
    payload: Any,
    name: str,
    columns: dict[str, int],
) -> list[TimeSeriesPoint]:
    """Parse a header-first array of arrays into points.

    Args:
        payload: JSON text or the decoded array.
        name: Series name, used only in log messages.
        columns: Mapping of output field to column index. Column 0 is
            always the timestamp.

    Returns:
        Points in payload order. Rows that are not lists or whose
        timestamp is invalid are skipped.
    """
    rows = load_json(payload)
    if not isinstance(rows, list):
        return []

    points: list[TimeSeriesPoint] = []
    skipped = 0
    for row in rows[1:]:
        if not isinstance(row, (list, tuple)) or not row:
            skipped += 1
            continue
        timestamp = parse_timestamp(row[0])
        if timestamp is None:
            skipped += 1
            continue
        fields = {key: parse_float_or_zero(_cell(row, idx)) for key, idx in columns.items()}
        points.append(TimeSeriesPoint(timestamp, fields))
    if skipped:
        logger.debug("Skipped %d malformed %s rows", skipped, name)
    return points


def parse_magnetic_field(payload: Any) -> Series:
    """Parse ``mag-3-day.json`` into a ``bx/by/bz/bt`` series.

    Columns are ``time_tag, bx_gsm, by_gsm, bz_gsm, lon_gsm, lat_gsm, bt``.
    """
    points = parse_row_table(payload, "magnetic", {"bx": 1, "by": 2, "bz": 3, "bt": 6})
    return Series.from_points("magnetic", points, MAGNETIC_FIELDS)


def parse_plasma(payload: Any) -> Series:
    """Parse ``plasma-3-day.json`` into a ``density/speed/temperature`` series.

    Rows where density and speed are both exactly 0 carry no data and are
    dropped.
    """
    points = parse_row_table(
        payload, "plasma", {"density": 1, "speed": 2, "temperature": 3}
    )
    points = [p for p in points if not (p["density"] == 0 and p["speed"] == 0)]
    return Series.from_points("plasma", points, PLASMA_FIELDS)


def parse_kp_index(payload: Any) -> Series:
    """Parse ``noaa-planetary-k-index.json`` into a ``kp`` series.

    Accepts both the header-first array of arrays and the newer list of
    objects with ``time_tag`` and ``Kp`` keys.
    """
    rows = load_json(payload)
    if not isinstance(rows, list):
        return Series("kp", fields=KP_FIELDS)

    if any(isinstance(row, dict) for row in rows):
        points = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            timestamp = parse_timestamp(row.get("time_tag"))
            if timestamp is None:
                continue
            points.append(TimeSeriesPoint(timestamp, {"kp": parse_float_or_zero(row.get("Kp"))}))
    else:
        points = parse_row_table(rows, "kp", {"kp": 1})
    return Series.from_points("kp", points, KP_FIELDS)


def parse_proton_flux(payload: Any, energy: str = PROTON_ENERGY_BAND) -> Series:
    """Parse GOES ``integral-protons-*.json`` into a ``flux`` series [pfu].

    Args:
        payload: JSON text or decoded list of channel records.
        energy: Energy band to keep.

    Returns:
        Series sorted by timestamp.
    """
    records = load_json(payload)
    if not isinstance(records, list):
        return Series("protons", fields=PROTON_FIELDS)

    points = []
    for record in records:
        if not isinstance(record, dict) or record.get("energy") != energy:
            continue
        timestamp = parse_timestamp(record.get("time_tag"))
        if timestamp is None:
            continue
        points.append(TimeSeriesPoint(timestamp, {"flux": parse_float_or_zero(record.get("flux"))}))
    return Series.from_points("protons", points, PROTON_FIELDS)
