"""Trailing-window and frame-budget filters.

Both filters are single-pass and non-destructive: they return new
sequences and never reorder their input.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from typing import TypeVar, overload

from heliodash.series._types import Series, TimeSeriesPoint

T = TypeVar("T")


@overload
def window_filter(series: Series, window: timedelta, now: datetime | None = None) -> Series: ...


@overload
def window_filter(
    series: Sequence[TimeSeriesPoint], window: timedelta, now: datetime | None = None
) -> list[TimeSeriesPoint]: ...


def window_filter(series, window, now=None):
    """Keep the points no older than *window* before *now*.

    A point is kept when ``timestamp >= now - window``; the boundary is
    inclusive.

    Args:
        series: A Series, or any sequence of objects with a ``timestamp``.
        window: Width of the trailing window.
        now: Reference instant. Defaults to the current UTC time.

    Returns:
        A new Series when given one, otherwise a list.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    cutoff = now - window
    kept = [p for p in series if p.timestamp >= cutoff]
    if isinstance(series, Series):
        return series.with_points(kept)
    return kept


def window_hours(series: Series, hours: float, now: datetime | None = None) -> Series:
    """Shorthand for :func:`window_filter` with a window in hours."""
    return window_filter(series, timedelta(hours=hours), now)


def downsample(frames: Sequence[T], target_count: int) -> list[T]:
    """Thin *frames* to roughly *target_count* items with a fixed stride.

    Uses ``stride = max(1, ceil(len(frames) / target_count))`` and keeps
    indices ``0, stride, 2 * stride, ...``, so the first frame is always
    kept and order is preserved.

    Args:
        frames: Ordered items.
        target_count: Frame budget.

    Returns:
        At most *target_count* items.

    Raises:
        ValueError: If *target_count* is less than 1.
    """
    if target_count < 1:
        raise ValueError(f"target_count must be at least 1, got {target_count}")
    stride = max(1, math.ceil(len(frames) / target_count))
    return list(frames[::stride])
