"""Parser for Heliophysics Events Knowledgebase active-region searches."""

from __future__ import annotations

from typing import Any

from heliodash.parsers._common import load_json, parse_finite
from heliodash.parsers._types import ActiveRegion

DISK_LIMIT_ARCSEC: float = 1000.0
"""Half-width of the accepted helioprojective box [arcsec]."""


def _noaa_number(value: Any) -> int | None:
    number = parse_finite(value)
    if number is None or number <= 0:
        return None
    return int(number)


def parse_active_regions(payload: Any) -> list[ActiveRegion]:
    """Return on-disk active regions from a HEK search response.

    Args:
        payload: ``{"result": [{"ar_noaanum", "hpc_x", "hpc_y"}, ...]}``
            (text or decoded), or the bare result list.

    Returns:
        Regions whose coordinates are finite and within
        :data:`DISK_LIMIT_ARCSEC` of disk centre on both axes.
    """
    data = load_json(payload)
    records = data.get("result") if isinstance(data, dict) else data
    if not isinstance(records, list):
        return []

    regions = []
    for record in records:
        if not isinstance(record, dict):
            continue
        x = parse_finite(record.get("hpc_x"))
        y = parse_finite(record.get("hpc_y"))
        if x is None or y is None:
            continue
        if abs(x) > DISK_LIMIT_ARCSEC or abs(y) > DISK_LIMIT_ARCSEC:
            continue
        regions.append(ActiveRegion(_noaa_number(record.get("ar_noaanum")), x, y))
    return regions
