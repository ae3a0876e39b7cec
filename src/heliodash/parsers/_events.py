"""Parser for SWPC daily solar event bulletins (``YYYYMMDDevents.txt``).

Data lines are whitespace separated::

    #Event    Begin    Max       End  Obs  Q  Type  Loc/Frq   Particulars       Reg#
    3910 +     0233   0250      0302  G16  5   XRA  1-8A      M1.2    5.4E-03   3576

A ``+`` after the event number marks a grouped event and is not a column.
Times may carry a one-letter qualifier (``B0233``, ``U0250``).
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Any

from heliodash.parsers._common import split_lines
from heliodash.parsers._types import FlareEvent

FLARE_EVENT_TYPE: str = "XRA"
"""Event type code of GOES X-ray flares."""

_FILENAME_DATE = re.compile(r"(\d{4})(\d{2})(\d{2})events")
_REGION = re.compile(r"^\d{4,5}$")
_CLASS = re.compile(r"^([A-Z])(\d+(?:\.\d+)?)$")

# column positions after the grouping marker is removed
_BEGIN, _MAX, _END, _OBS, _TYPE, _CLASS_COL = 1, 2, 3, 4, 6, 8


def date_from_filename(filename: str) -> date | None:
    """Extract the bulletin date from a name such as ``20240209events.txt``."""
    match = _FILENAME_DATE.search(filename or "")
    if match is None:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def _hhmm(token: str, day: date) -> datetime | None:
    digits = "".join(ch for ch in token if ch.isdigit())
    if len(digits) != 4:
        return None
    try:
        clock = time(int(digits[:2]), int(digits[2:]))
    except ValueError:
        return None
    return datetime.combine(day, clock, tzinfo=timezone.utc)


def is_reportable_flare(flare_class: str) -> bool:
    """Return True for X-class flares and M-class flares of M1.0 or more."""
    match = _CLASS.match(flare_class.strip().upper())
    if match is None:
        return False
    letter, mantissa = match.group(1), float(match.group(2))
    if letter == "X":
        return True
    return letter == "M" and mantissa >= 1.0


def parse_flare_events(
    text: Any,
    source: str | date,
    *,
    event_type: str = FLARE_EVENT_TYPE,
) -> list[FlareEvent]:
    """Parse the M- and X-class flares out of a daily events bulletin.

    Args:
        text: Bulletin text.
        source: Bulletin filename (the date is taken from it) or the date
            itself.
        event_type: Event type code to keep.

    Returns:
        Flares in bulletin order. Empty if the date cannot be determined.
    """
    day = source if isinstance(source, date) else date_from_filename(source)
    if day is None:
        return []

    events: list[FlareEvent] = []
    for line in split_lines(text):
        if not line.strip() or line.lstrip().startswith(("#", ":")):
            continue
        parts = line.split()
        if len(parts) > 1 and parts[1] == "+":
            del parts[1]
        if len(parts) <= _CLASS_COL or parts[_TYPE] != event_type:
            continue

        flare_class = parts[_CLASS_COL].upper()
        if not is_reportable_flare(flare_class):
            continue

        begin = _hhmm(parts[_BEGIN], day)
        peak = _hhmm(parts[_MAX], day) or begin
        if peak is None:
            continue

        region = None
        if len(parts) > _CLASS_COL + 1 and _REGION.match(parts[-1]):
            region = int(parts[-1])

        events.append(
            FlareEvent(
                timestamp=peak,
                flare_class=flare_class,
                begin=begin,
                end=_hhmm(parts[_END], day),
                observatory=parts[_OBS],
                region=region,
            )
        )
    return events
