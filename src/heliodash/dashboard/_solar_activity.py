"""Solar activity view model: flares, radiation and the heliosphere."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from heliodash.classify import FlareClass, Scale, SeverityBand, classify
from heliodash.client import HelioClient
from heliodash.config import SLOW_REFRESH_INTERVAL
from heliodash.dashboard._base import RefreshingView, utcnow
from heliodash.parsers import (
    ActiveRegion,
    FlareEvent,
    FlareProbabilities,
    GoesSeries,
)
from heliodash.refresh import FetchResult, gather_best_effort
from heliodash.series import ImageFrameSet, Series


@dataclass(frozen=True)
class SolarActivityUpdate:
    """Best-effort results of one load cycle, keyed by feed name."""

    results: dict[str, FetchResult] = field(default_factory=dict)

    def failed(self) -> list[str]:
        """Names of the feeds that failed this cycle."""
        return [name for name, result in self.results.items() if not result.ok]


class SolarActivityView(RefreshingView[SolarActivityUpdate]):
    """State behind the solar-activity panel.

    Every feed is fetched independently; a failed feed keeps its previous
    value and is listed in :attr:`errors`.

    Args:
        client: Feed client.
        interval: Refresh interval in seconds.
        clock: Returns the current UTC time; the flare bulletins of its date
            and the day before are loaded.
    """

    def __init__(
        self,
        client: HelioClient,
        interval: float = SLOW_REFRESH_INTERVAL,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        super().__init__(interval)
        self._client = client
        self._clock = clock
        self.flare_probabilities = FlareProbabilities()
        self.xrays = GoesSeries(Series("xrays"))
        self.flare_events: list[FlareEvent] = []
        self.protons = Series("protons")
        self.active_regions: list[ActiveRegion] = []
        self.enlil = ImageFrameSet()
        self.errors: dict[str, str] = {}

    async def load(self) -> SolarActivityUpdate:
        client = self._client
        now = self._clock()
        today = now.date()
        results = await gather_best_effort(
            flare_probabilities=client.fetch_flare_probabilities(),
            xrays=client.fetch_xray_flux(),
            flare_events_today=client.fetch_flare_events(today),
            flare_events_yesterday=client.fetch_flare_events(today - timedelta(days=1)),
            protons=client.fetch_proton_flux(),
            active_regions=client.fetch_active_regions(now),
            enlil=client.fetch_enlil_frames(),
        )
        return SolarActivityUpdate(results)

    def apply(self, update: SolarActivityUpdate) -> None:
        results = update.results
        self.errors = {name: str(results[name].error) for name in update.failed()}

        for name in ("flare_probabilities", "xrays", "protons", "active_regions", "enlil"):
            result = results.get(name)
            if result is not None and result.ok:
                setattr(self, name, result.value)

        events = [
            results[name]
            for name in ("flare_events_yesterday", "flare_events_today")
            if name in results and results[name].ok
        ]
        if events:
            merged = [event for result in events for event in result.value]
            self.flare_events = sorted(merged, key=lambda e: e.timestamp, reverse=True)

    # ========================================
    # Derived state
    # ========================================

    @property
    def current_xray_flux(self) -> float:
        """Latest primary long-channel (0.1-0.8 nm) flux [W/m²]."""
        return self.xrays.series.latest("long_primary")

    @property
    def current_proton_flux(self) -> float:
        """Latest >=10 MeV integral proton flux [pfu]."""
        return self.protons.latest("flux")

    @property
    def radio_blackout(self) -> SeverityBand:
        return classify(Scale.RADIO_BLACKOUT, self.current_xray_flux)

    @property
    def solar_radiation(self) -> SeverityBand:
        return classify(Scale.SOLAR_RADIATION, self.current_proton_flux)

    @property
    def current_flare_class(self) -> FlareClass | None:
        return self.xrays.latest_class()
