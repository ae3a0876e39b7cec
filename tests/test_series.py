"""Tests for the time-series model, merger and window filters."""

import math
from datetime import datetime, timedelta, timezone

import polars as pl
import pytest

from heliodash.series import (
    ImageFrame,
    ImageFrameSet,
    MergedSeries,
    Series,
    TimeSeriesPoint,
    downsample,
    merge_series,
    window_filter,
    window_hours,
)

T0 = datetime(2024, 2, 9, 10, 0, tzinfo=timezone.utc)


def _pt(minutes, **fields):
    return TimeSeriesPoint(T0 + timedelta(minutes=minutes), fields)


# ---------------------------------------------------------------------------
# TimeSeriesPoint / Series
# ---------------------------------------------------------------------------


class TestTimeSeriesPoint:
    def test_fields_read_only(self):
        p = _pt(0, bz=-3.2)
        with pytest.raises(TypeError):
            p.fields["bz"] = 1.0

    def test_none_is_gap(self):
        p = _pt(0, hp=None)
        assert p["hp"] is None
        assert p.get("missing", 7.0) == 7.0

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, bad):
        with pytest.raises(ValueError, match="finite"):
            _pt(0, bz=bad)

    def test_ints_become_floats(self):
        assert isinstance(_pt(0, kp=3)["kp"], float)


class TestSeries:
    def test_from_points_sorts_stably(self):
        a = _pt(10, v=1.0)
        b = _pt(0, v=2.0)
        c = _pt(10, v=3.0)
        s = Series.from_points("s", [a, b, c])
        assert [p["v"] for p in s] == [2.0, 1.0, 3.0]
        assert s.fields == ("v",)

    def test_empty(self):
        s = Series.from_points("empty", [])
        assert len(s) == 0
        assert not s
        assert s.fields == ()

    def test_latest_skips_zero_and_gaps(self):
        s = Series.from_points(
            "s", [_pt(0, bz=-4.0), _pt(1, bz=0.0), _pt(2, bz=None)], ["bz"]
        )
        assert s.latest("bz") == -4.0
        assert s.latest("bz", skip_zero=False) == 0.0

    def test_latest_default_zero(self):
        s = Series.from_points("s", [_pt(0, bz=0.0)])
        assert s.latest("bz") == 0.0

    def test_values_and_timestamps(self):
        s = Series.from_points("s", [_pt(0, v=1.0), _pt(5, v=None)])
        assert s.values("v") == [1.0, None]
        assert s.timestamps() == [T0, T0 + timedelta(minutes=5)]

    def test_rename_fields(self):
        s = Series.from_points("s", [_pt(0, bt=5.0)])
        renamed = s.rename_fields("imf_")
        assert renamed.fields == ("imf_bt",)
        assert renamed[0]["imf_bt"] == 5.0
        assert renamed.name == "s"

    def test_to_polars(self):
        s = Series.from_points("s", [_pt(0, a=1.0, b=None), _pt(1, a=2.0, b=3.0)])
        df = s.to_polars()
        assert df.columns == ["timestamp", "a", "b"]
        assert df.schema["a"] == pl.Float64
        assert df["b"].to_list() == [None, 3.0]
        assert df.height == 2

    def test_to_polars_empty(self):
        df = Series("kp", fields=("kp",)).to_polars()
        assert df.columns == ["timestamp", "kp"]
        assert df.height == 0


class TestImageFrameSet:
    def test_urls(self):
        frames = ImageFrameSet("run", (ImageFrame("a.jpg"), ImageFrame("b.jpg")))
        assert len(frames) == 2
        assert frames.urls() == ["a.jpg", "b.jpg"]

    def test_default_empty(self):
        assert len(ImageFrameSet()) == 0


# ---------------------------------------------------------------------------
# merge_series
# ---------------------------------------------------------------------------


class TestMergeSeries:
    def test_exact_match_join(self):
        mag = Series.from_points("magnetic", [_pt(0, bz=-2.0), _pt(1, bz=-3.0)])
        plasma = Series.from_points("plasma", [_pt(1, speed=420.0)])
        merged = merge_series(mag, plasma)

        assert isinstance(merged, MergedSeries)
        assert merged.fields == ("bz", "speed")
        assert merged.sources == ("magnetic", "plasma")
        assert merged[0]["speed"] is None
        assert merged[1]["speed"] == 420.0

    def test_reference_timestamps_only(self):
        ref = Series.from_points("ref", [_pt(0, a=1.0)])
        other = Series.from_points("other", [_pt(0, b=2.0), _pt(30, b=3.0)])
        merged = merge_series(ref, other)
        assert len(merged) == 1

    def test_no_interpolation(self):
        ref = Series.from_points("ref", [_pt(1, a=1.0)])
        other = Series.from_points("other", [_pt(0, b=2.0), _pt(2, b=3.0)])
        assert merge_series(ref, other)[0]["b"] is None

    def test_reference_duplicates_emitted_once(self):
        ref = Series.from_points("ref", [_pt(0, a=1.0), _pt(0, a=9.0)])
        merged = merge_series(ref)
        assert len(merged) == 1
        assert merged[0]["a"] == 1.0

    def test_secondary_last_duplicate_wins(self):
        ref = Series.from_points("ref", [_pt(0, a=1.0)])
        other = Series.from_points("other", [_pt(0, b=2.0), _pt(0, b=5.0)])
        assert merge_series(ref, other)[0]["b"] == 5.0

    def test_overlapping_fields_raise(self):
        a = Series.from_points("a", [_pt(0, v=1.0)])
        b = Series.from_points("b", [_pt(0, v=2.0)])
        with pytest.raises(ValueError, match="rename_fields"):
            merge_series(a, b)

    def test_overlap_resolved_by_rename(self):
        a = Series.from_points("a", [_pt(0, v=1.0)])
        b = Series.from_points("b", [_pt(0, v=2.0)]).rename_fields("b_")
        merged = merge_series(a, b, name="ab")
        assert merged.name == "ab"
        assert merged[0]["b_v"] == 2.0

    def test_equal_instants_in_other_offsets_do_not_match(self):
        # keys are ISO strings; inputs are normalized to UTC by the parsers
        ref = Series.from_points("ref", [_pt(0, a=1.0)])
        shifted = T0.astimezone(timezone(timedelta(hours=1)))
        other = Series.from_points("other", [TimeSeriesPoint(shifted, {"b": 2.0})])
        assert merge_series(ref, other)[0]["b"] is None


# ---------------------------------------------------------------------------
# window_filter / downsample
# ---------------------------------------------------------------------------


class TestWindowFilter:
    def test_one_hour_window_inclusive(self):
        s = Series.from_points("s", [_pt(0, v=1.0), _pt(60, v=2.0), _pt(120, v=3.0)])
        now = T0 + timedelta(hours=2)
        kept = window_filter(s, timedelta(hours=1), now)
        assert isinstance(kept, Series)
        assert [p["v"] for p in kept] == [2.0, 3.0]

    def test_plain_sequence_returns_list(self):
        points = [_pt(0, v=1.0), _pt(60, v=2.0)]
        kept = window_filter(points, timedelta(minutes=30), T0 + timedelta(minutes=60))
        assert kept == [points[1]]

    def test_window_hours(self):
        s = Series.from_points("s", [_pt(0, v=1.0), _pt(180, v=2.0)])
        assert len(window_hours(s, 3, T0 + timedelta(hours=3))) == 2
        assert len(window_hours(s, 1, T0 + timedelta(hours=3))) == 1

    def test_does_not_mutate_input(self):
        s = Series.from_points("s", [_pt(0, v=1.0)])
        window_filter(s, timedelta(minutes=1), T0 + timedelta(hours=1))
        assert len(s) == 1


class TestDownsample:
    def test_150_frames_to_38(self):
        frames = list(range(150))
        kept = downsample(frames, 48)
        assert len(kept) == 38
        assert kept[0] == 0
        assert kept[1] == 4

    def test_under_budget_unchanged(self):
        assert downsample([1, 2, 3], 48) == [1, 2, 3]

    def test_empty(self):
        assert downsample([], 10) == []

    def test_zero_target_raises(self):
        with pytest.raises(ValueError):
            downsample([1, 2], 0)
