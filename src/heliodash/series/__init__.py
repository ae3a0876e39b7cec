"""Normalized time-series model, merger and window filters.

Typical usage::

    from heliodash.series import merge_series, window_filter
    merged = merge_series(magnetic, plasma)
    recent = window_filter(merged, timedelta(hours=3))
"""

from heliodash.series._merge import merge_series, timestamp_key
from heliodash.series._types import (
    ImageFrame,
    ImageFrameSet,
    MergedSeries,
    Series,
    TimeSeriesPoint,
)
from heliodash.series._window import downsample, window_filter, window_hours

__all__ = [
    "ImageFrame",
    "ImageFrameSet",
    "MergedSeries",
    "Series",
    "TimeSeriesPoint",
    "downsample",
    "merge_series",
    "timestamp_key",
    "window_filter",
    "window_hours",
]
