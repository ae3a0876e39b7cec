"""Solar-wind, geomagnetic and aurora view model."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from heliodash.classify import SeverityBand, kp_status
from heliodash.client import HelioClient
from heliodash.config import FAST_REFRESH_INTERVAL
from heliodash.dashboard._base import (
    DEFAULT_TIMEFRAME,
    KP_WINDOW,
    RefreshingView,
    Timeframe,
    get_timeframe,
    utcnow,
)
from heliodash.parsers import AuroraGrid, GoesSeries
from heliodash.refresh import FetchResult, gather_all, gather_best_effort
from heliodash.series import Series, window_filter

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Unable to load space weather data."


@dataclass(frozen=True)
class SpaceWeatherUpdate:
    """Result of one load cycle.

    Attributes:
        magnetic: Magnetic-field series, or None if the primary group failed.
        plasma: Plasma series (primary group).
        kp: Kp series (primary group).
        magnetometer: GOES magnetometer series (primary group).
        error: Message of the primary group failure, if any.
        aurora: Best-effort results keyed ``ovation`` and
            ``hemispheric_power``.
    """

    magnetic: Series | None = None
    plasma: Series | None = None
    kp: Series | None = None
    magnetometer: GoesSeries | None = None
    error: str | None = None
    aurora: dict[str, FetchResult] = field(default_factory=dict)


class SpaceWeatherView(RefreshingView[SpaceWeatherUpdate]):
    """State behind the space-weather panel.

    The charts (magnetic field, plasma, Kp, magnetometer) load as one
    all-or-fail group: a failure leaves the previous data in place and sets
    :attr:`error`. The aurora globe and hemispheric power load afterwards as
    independent best-effort fetches.

    Args:
        client: Feed client.
        interval: Refresh interval in seconds.
        timeframe: Initial chart window.
        clock: Returns the current UTC time for window filtering.
    """

    def __init__(
        self,
        client: HelioClient,
        interval: float = FAST_REFRESH_INTERVAL,
        *,
        timeframe: Timeframe = DEFAULT_TIMEFRAME,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(interval)
        self._client = client
        self._clock = clock
        self.timeframe = timeframe
        self.magnetic = Series("magnetic")
        self.plasma = Series("plasma")
        self.kp = Series("kp")
        self.magnetometer = GoesSeries(Series("magnetometer"))
        self.ovation: AuroraGrid | None = None
        self.hemispheric_power = Series("hemispheric_power")
        self.error: str | None = None

    def set_timeframe(self, timeframe: Timeframe | str) -> None:
        """Select the chart window by Timeframe or label."""
        if isinstance(timeframe, str):
            timeframe = get_timeframe(timeframe)
        self.timeframe = timeframe

    # ========================================
    # Loading
    # ========================================

    async def load(self) -> SpaceWeatherUpdate:
        client = self._client
        primary: dict = {}
        error = None
        try:
            magnetic, plasma, kp, magnetometer = await gather_all(
                client.fetch_magnetic_field(),
                client.fetch_plasma(),
                client.fetch_kp_index(),
                client.fetch_goes_magnetometer(),
            )
            primary = {
                "magnetic": magnetic,
                "plasma": plasma,
                "kp": kp,
                "magnetometer": magnetometer,
            }
        except Exception as exc:
            logger.warning("Space weather data unavailable: %s", exc, exc_info=True)
            error = str(exc) or DEFAULT_ERROR_MESSAGE

        aurora = await gather_best_effort(
            ovation=client.fetch_ovation(),
            hemispheric_power=client.fetch_hemispheric_power(),
        )
        return SpaceWeatherUpdate(error=error, aurora=aurora, **primary)

    def apply(self, update: SpaceWeatherUpdate) -> None:
        self.error = update.error
        if update.error is None:
            self.magnetic = update.magnetic
            self.plasma = update.plasma
            self.kp = update.kp
            self.magnetometer = update.magnetometer

        ovation = update.aurora.get("ovation")
        if ovation is not None and ovation.ok:
            self.ovation = ovation.value
        power = update.aurora.get("hemispheric_power")
        if power is not None and power.ok:
            self.hemispheric_power = power.value

    # ========================================
    # Derived state
    # ========================================

    def magnetic_window(self, now: datetime | None = None) -> Series:
        return window_filter(self.magnetic, self.timeframe.window, now or self._clock())

    def plasma_window(self, now: datetime | None = None) -> Series:
        return window_filter(self.plasma, self.timeframe.window, now or self._clock())

    def magnetometer_window(self, now: datetime | None = None) -> Series:
        return window_filter(self.magnetometer.series, self.timeframe.window, now or self._clock())

    def kp_window(self, now: datetime | None = None) -> Series:
        """Kp for the last 48 hours, regardless of the selected timeframe."""
        return window_filter(self.kp, KP_WINDOW.window, now or self._clock())

    @property
    def current_bz(self) -> float:
        return self.magnetic.latest("bz")

    @property
    def current_speed(self) -> float:
        return self.plasma.latest("speed")

    @property
    def current_density(self) -> float:
        return self.plasma.latest("density")

    @property
    def current_kp(self) -> float:
        return self.kp.latest("kp")

    @property
    def kp_status(self) -> SeverityBand:
        """Descriptive band (label and colour) of :attr:`current_kp`."""
        return kp_status(self.current_kp)
