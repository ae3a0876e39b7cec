"""Field-level helpers shared by every feed parser.

All helpers are total: they return a default instead of raising so that a
single malformed cell can never abort a whole payload.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_float_or_zero(value: Any) -> float:
    """Parse *value* as a float, returning 0.0 on failure.

    Blank, non-numeric and non-finite values all map to 0.0.

    Args:
        value: Raw cell (string, number or None).

    Returns:
        Parsed finite float, or 0.0.
    """
    result = parse_finite(value)
    return 0.0 if result is None else result


def parse_finite(value: Any) -> float | None:
    """Parse *value* as a finite float, returning None on failure.

    Args:
        value: Raw cell (string, number or None).

    Returns:
        Parsed finite float, or None if blank, invalid, NaN or infinite.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def parse_leading_int(value: Any) -> int:
    """Parse the integer prefix of *value* (``"15%"`` -> 15), default 0.

    Args:
        value: Raw token.

    Returns:
        Parsed integer, or 0 if *value* does not start with digits.
    """
    if value is None:
        return 0
    match = _LEADING_INT.match(str(value))
    if match is None:
        return 0
    return int(match.group(1))


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into a timezone-aware UTC datetime.

    Accepts ``T`` or space separators, optional fractional seconds and an
    optional ``Z`` or numeric offset. Naive values are taken as UTC.

    Args:
        value: Raw timestamp string.

    Returns:
        UTC datetime, or None if *value* is not a valid timestamp.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def load_json(payload: Any) -> Any:
    """Decode *payload* if it is text, passing decoded JSON through.

    Args:
        payload: JSON text, bytes, or an already-decoded object.

    Returns:
        The decoded object, or None if the text is not valid JSON.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            logger.debug("Discarding payload that is not valid JSON")
            return None
    return payload


def split_lines(text: Any) -> list[str]:
    """Split a text payload into lines, tolerating None and bytes."""
    if text is None:
        return []
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8", errors="replace")
    return str(text).splitlines()
