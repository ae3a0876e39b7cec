"""Tests for the dashboard view models."""

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from heliodash.client import Feed, HelioClient
from heliodash.dashboard import (
    DEFAULT_TIMEFRAME,
    TIMEFRAMES,
    SolarActivityView,
    SpaceWeatherView,
    get_timeframe,
)

BASE = "http://proxy.test/api"
NOW = datetime(2024, 2, 9, 12, 0, tzinfo=timezone.utc)


def _stamp(hours_ago):
    return (NOW - timedelta(hours=hours_ago)).strftime("%Y-%m-%d %H:%M:%S.000")


def _iso(hours_ago):
    return (NOW - timedelta(hours=hours_ago)).strftime("%Y-%m-%dT%H:%M:%SZ")


def _p(feed, **kw):
    return "/api" + feed.path(**kw)


SPACE_WEATHER_ROUTES = {
    _p(Feed.MAGNETIC_FIELD): [
        ["time_tag", "bx_gsm", "by_gsm", "bz_gsm", "lon_gsm", "lat_gsm", "bt"],
        [_stamp(30), "1", "1", "-2.0", "0", "0", "3"],
        [_stamp(2), "1", "1", "-6.5", "0", "0", "8"],
        [_stamp(0), "1", "1", "0", "0", "0", "8"],
    ],
    _p(Feed.PLASMA): [
        ["time_tag", "density", "speed", "temperature"],
        [_stamp(20), "4.0", "400", "50000"],
        [_stamp(1), "6.2", "550", "90000"],
    ],
    _p(Feed.KP_INDEX): [
        ["time_tag", "Kp", "a_running", "station_count"],
        [_stamp(60), "8.0", "0", "8"],
        [_stamp(6), "4.33", "0", "8"],
        [_stamp(3), "6.0", "0", "8"],
    ],
    _p(Feed.MAGNETOMETER_PRIMARY): [
        {"time_tag": _iso(2), "satellite": 18, "Hp": 98.0, "arcjet_flag": False}
    ],
    _p(Feed.MAGNETOMETER_SECONDARY): [
        {"time_tag": _iso(2), "satellite": 16, "Hp": 99.0, "arcjet_flag": False}
    ],
    _p(Feed.OVATION): {"Observation Time": _iso(0), "coordinates": [[10, 66, 20], [10, 40, 1]]},
    _p(Feed.HEMISPHERIC_POWER): "2024-02-09_11:55 2024-02-09_12:30   18   11\n",
}

EVENTS_TODAY = "3910       0233   0250      0302  G16  5   XRA  1-8A      M1.2    5.4E-03   3576\n"
EVENTS_YESTERDAY = "3800       2201   2215      2230  G16  5   XRA  1-8A      X1.0    5.4E-03   3575\n"

SOLAR_ROUTES = {
    _p(Feed.FLARE_PROBABILITIES): "# Class C Class M Class X\n3576 60 15 05 01\n",
    _p(Feed.XRAY_PRIMARY): [
        {"time_tag": _iso(1), "satellite": 18, "energy": "0.1-0.8nm", "flux": 5.5e-5},
    ],
    _p(Feed.XRAY_SECONDARY): [],
    "/api/flare-events/20240209.txt": EVENTS_TODAY,
    "/api/flare-events/20240208.txt": EVENTS_YESTERDAY,
    _p(Feed.PROTON_FLUX): [
        {"time_tag": _iso(1), "energy": ">=10 MeV", "flux": 150.0},
    ],
    _p(Feed.ACTIVE_REGIONS): {"result": [{"ar_noaanum": 3576, "hpc_x": 100, "hpc_y": 50}]},
    _p(Feed.ENLIL): '<a href="enlil_20240209T000000.jpg">x</a>',
}


def _transport(routes, fail=()):
    def handler(request):
        path = request.url.path
        if path in fail or path not in routes:
            return httpx.Response(500, text="upstream error")
        body = routes[path]
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


def _space_weather(fail=()):
    client = HelioClient(BASE, transport=_transport(SPACE_WEATHER_ROUTES, fail))
    return SpaceWeatherView(client, clock=lambda: NOW)


def _solar(fail=()):
    client = HelioClient(BASE, transport=_transport(SOLAR_ROUTES, fail))
    return SolarActivityView(client, clock=lambda: NOW)


class TestTimeframes:
    def test_labels(self):
        assert [(t.label, t.hours) for t in TIMEFRAMES] == [
            ("Full (2 day)", 48),
            ("12 hours", 12),
            ("3 hours", 3),
            ("1 hour", 1),
        ]
        assert DEFAULT_TIMEFRAME.label == "12 hours"

    def test_lookup(self):
        assert get_timeframe("3 hours").window == timedelta(hours=3)
        with pytest.raises(ValueError, match="Unknown timeframe"):
            get_timeframe("1 week")


class TestSpaceWeatherView:
    def test_refresh_populates_state(self):
        view = _space_weather()
        assert view.loading

        assert asyncio.run(view.refresh()) is True
        assert not view.loading
        assert view.error is None
        assert view.current_bz == -6.5
        assert view.current_speed == 550.0
        assert view.current_density == 6.2
        assert view.current_kp == 6.0
        assert view.kp_status.label == "Moderate"
        assert view.magnetometer.primary_label == "GOES-18"
        assert len(view.ovation) == 1
        assert view.hemispheric_power.latest("north") == 18.0

    def test_windows(self):
        view = _space_weather()
        asyncio.run(view.refresh())

        assert len(view.magnetic_window()) == 2
        view.set_timeframe("1 hour")
        assert len(view.magnetic_window()) == 1
        assert len(view.plasma_window()) == 1
        view.set_timeframe(TIMEFRAMES[0])
        assert len(view.magnetic_window()) == 3
        # Kp ignores the selected timeframe
        view.set_timeframe("1 hour")
        assert len(view.kp_window()) == 2

    def test_primary_failure_keeps_previous_data(self):
        view = _space_weather()
        asyncio.run(view.refresh())
        before = view.magnetic

        view._client = HelioClient(
            BASE, transport=_transport(SPACE_WEATHER_ROUTES, fail={_p(Feed.PLASMA)})
        )
        asyncio.run(view.refresh())
        assert view.error is not None
        assert "500" in view.error
        assert view.magnetic is before

    def test_aurora_failure_is_isolated(self):
        view = _space_weather(fail={_p(Feed.OVATION)})
        asyncio.run(view.refresh())
        assert view.error is None
        assert view.ovation is None
        assert view.current_kp == 6.0
        assert view.hemispheric_power.latest("south") == 11.0

    def test_stop_discards_in_flight_cycle(self):
        view = _space_weather()

        async def scenario():
            cycle = asyncio.ensure_future(view.refresh())
            await asyncio.sleep(0)
            view.stop()
            return await cycle

        assert asyncio.run(scenario()) is False
        assert view.loading
        assert len(view.magnetic) == 0

    def test_start_and_stop(self):
        view = _space_weather()

        async def scenario():
            view.start()
            assert view.running
            for _ in range(50):
                await asyncio.sleep(0.01)
                if not view.loading:
                    break
            view.stop()
            return view.running

        assert asyncio.run(scenario()) is False
        assert view.current_kp == 6.0
        assert view.interval == 60.0


class TestSolarActivityView:
    def test_refresh_populates_state(self):
        view = _solar()
        asyncio.run(view.refresh())

        assert view.errors == {}
        assert (view.flare_probabilities.c, view.flare_probabilities.m) == (60, 15)
        assert [e.flare_class for e in view.flare_events] == ["M1.2", "X1.0"]
        assert view.active_regions[0].noaa_number == 3576
        assert len(view.enlil) == 1
        assert view.interval == 900.0

    def test_derived_bands(self):
        view = _solar()
        asyncio.run(view.refresh())

        assert view.current_xray_flux == 5.5e-5
        assert view.radio_blackout.level == "R2"
        assert view.solar_radiation.level == "S2"
        assert str(view.current_flare_class) == "M5.5"

    def test_defaults_before_load(self):
        view = _solar()
        assert view.radio_blackout.level == "R0"
        assert view.solar_radiation.level == "S0"
        assert view.current_flare_class is None

    def test_feed_failures_are_independent(self):
        view = _solar(fail={_p(Feed.XRAY_SECONDARY), "/api/flare-events/20240208.txt"})
        asyncio.run(view.refresh())

        assert set(view.errors) == {"xrays", "flare_events_yesterday"}
        assert view.current_xray_flux == 0.0
        assert [e.flare_class for e in view.flare_events] == ["M1.2"]
        assert view.solar_radiation.level == "S2"
