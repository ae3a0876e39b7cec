"""Dashboard view models.

Each view owns the state of one dashboard panel and refreshes it on an
interval through :class:`~heliodash.refresh.PeriodicRefresh`.
"""

from heliodash.dashboard._base import (
    DEFAULT_TIMEFRAME,
    KP_WINDOW,
    TIMEFRAMES,
    RefreshingView,
    Timeframe,
    get_timeframe,
)
from heliodash.dashboard._solar_activity import SolarActivityUpdate, SolarActivityView
from heliodash.dashboard._space_weather import SpaceWeatherUpdate, SpaceWeatherView

__all__ = [
    "DEFAULT_TIMEFRAME",
    "KP_WINDOW",
    "RefreshingView",
    "SolarActivityUpdate",
    "SolarActivityView",
    "SpaceWeatherUpdate",
    "SpaceWeatherView",
    "TIMEFRAMES",
    "Timeframe",
    "get_timeframe",
]
