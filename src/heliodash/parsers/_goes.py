"""Parsers for two-satellite GOES JSON feeds.

SWPC publishes X-ray and magnetometer data for a primary and a secondary
GOES spacecraft as separate arrays of records::

    {"time_tag": "2024-02-09T14:30:00Z", "satellite": 18,
     "energy": "0.1-0.8nm", "flux": 2.1e-06}
    {"time_tag": "2024-02-09T14:30:00Z", "satellite": 18,
     "Hp": 98.4, "arcjet_flag": false}

Both payloads are folded into one record per exact ``time_tag`` string.
Invalid or flagged samples become ``None`` so charts show a gap rather
than a false zero.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from heliodash.parsers._common import load_json, parse_finite, parse_timestamp
from heliodash.parsers._types import GoesSeries
from heliodash.series import Series, TimeSeriesPoint

XRAY_FIELDS: tuple[str, ...] = ("short_primary", "long_primary", "short_secondary", "long_secondary")
MAGNETOMETER_FIELDS: tuple[str, ...] = ("hp_primary", "hp_secondary")

XRAY_BANDS: dict[str, str] = {
    "0.05-0.4nm": "short",
    "0.1-0.8nm": "long",
}
"""GOES XRS energy band → channel name."""

# (record) -> [(channel, value)]
_Extractor = Callable[[dict], list[tuple[str, float | None]]]


def _satellite_label(records: list[Any], default: str) -> str:
    for record in records:
        if isinstance(record, dict) and record.get("satellite") is not None:
            return f"GOES-{record['satellite']}"
    return default


def _xray_channels(record: dict) -> list[tuple[str, float | None]]:
    channel = XRAY_BANDS.get(str(record.get("energy", "")).strip())
    if channel is None:
        return []
    flux = parse_finite(record.get("flux"))
    if flux is not None and flux <= 0:
        flux = None
    return [(channel, flux)]


def _magnetometer_channels(record: dict) -> list[tuple[str, float | None]]:
    if "Hp" not in record:
        return []
    if record.get("arcjet_flag"):
        return [("hp", None)]
    return [("hp", parse_finite(record.get("Hp")))]


def _fold(
    name: str,
    primary: Any,
    secondary: Any,
    fields: tuple[str, ...],
    extract: _Extractor,
) -> GoesSeries:
    primary_records = load_json(primary)
    secondary_records = load_json(secondary)
    if not isinstance(primary_records, list):
        primary_records = []
    if not isinstance(secondary_records, list):
        secondary_records = []

    rows: dict[str, dict[str, float | None]] = {}
    stamps: dict[str, datetime] = {}
    for suffix, records in (("primary", primary_records), ("secondary", secondary_records)):
        for record in records:
            if not isinstance(record, dict):
                continue
            tag = record.get("time_tag")
            timestamp = parse_timestamp(tag)
            if timestamp is None:
                continue
            channels = extract(record)
            if not channels:
                continue
            row = rows.setdefault(tag, dict.fromkeys(fields))
            stamps[tag] = timestamp
            for channel, value in channels:
                row[f"{channel}_{suffix}"] = value

    points = [TimeSeriesPoint(stamps[tag], row) for tag, row in rows.items()]
    return GoesSeries(
        series=Series.from_points(name, points, fields),
        primary_label=_satellite_label(primary_records, "GOES-P"),
        secondary_label=_satellite_label(secondary_records, "GOES-S"),
    )


def parse_goes_xrays(primary: Any, secondary: Any) -> GoesSeries:
    """Merge primary and secondary GOES XRS payloads.

    Args:
        primary: ``json/goes/primary/xrays-*.json`` payload.
        secondary: ``json/goes/secondary/xrays-*.json`` payload.

    Returns:
        GoesSeries with ``short_primary``, ``long_primary``,
        ``short_secondary`` and ``long_secondary`` fields [W/m²]. Fluxes
        at or below zero are gaps.
    """
    return _fold("xrays", primary, secondary, XRAY_FIELDS, _xray_channels)


def parse_goes_magnetometer(primary: Any, secondary: Any) -> GoesSeries:
    """Merge primary and secondary GOES magnetometer payloads.

    Args:
        primary: ``json/goes/primary/magnetometers-*.json`` payload.
        secondary: ``json/goes/secondary/magnetometers-*.json`` payload.

    Returns:
        GoesSeries with ``hp_primary`` and ``hp_secondary`` fields [nT].
        Samples taken during arcjet firings are gaps.
    """
    return _fold("magnetometer", primary, secondary, MAGNETOMETER_FIELDS, _magnetometer_channels)
