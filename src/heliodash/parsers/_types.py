"""Structured records produced by parsers whose output is not a Series."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from heliodash.classify import FlareClass, flare_class, flare_class_flux
from heliodash.series import Series


@dataclass(frozen=True)
class FlareProbabilities:
    """Worst-case flare probabilities [%] across the 3-day outlook."""

    c: int = 0
    m: int = 0
    x: int = 0


@dataclass(frozen=True)
class FlareEvent:
    """A GOES X-ray flare from the daily events bulletin.

    Attributes:
        timestamp: Peak time (UTC).
        flare_class: Class text as published (e.g. ``"M1.2"``).
        begin: Begin time, if the bulletin gives one.
        end: End time, if the bulletin gives one.
        observatory: Reporting observatory code (e.g. ``"G16"``).
        region: NOAA active region number, if assigned.
    """

    timestamp: datetime
    flare_class: str
    begin: datetime | None = None
    end: datetime | None = None
    observatory: str | None = None
    region: int | None = None

    @property
    def flux(self) -> float:
        """Peak flux in W/m² implied by :attr:`flare_class`."""
        return flare_class_flux(self.flare_class)


@dataclass(frozen=True)
class ActiveRegion:
    """An on-disk active region position in helioprojective arcseconds."""

    noaa_number: int | None
    hpc_x: float
    hpc_y: float


@dataclass(frozen=True)
class AuroraPoint:
    """One OVATION grid cell."""

    lat: float
    lng: float
    intensity: float


@dataclass(frozen=True)
class AuroraGrid:
    """An OVATION aurora forecast restricted to visible cells.

    Attributes:
        observation_time: Time of the solar-wind observation driving the
            model.
        forecast_time: Time the forecast is valid for.
        points: Cells at or above the display floor.
    """

    observation_time: datetime | None = None
    forecast_time: datetime | None = None
    points: tuple[AuroraPoint, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class GoesSeries:
    """A two-satellite GOES series with display labels.

    Attributes:
        series: Records keyed by timestamp with per-satellite fields.
        primary_label: Label of the primary satellite (e.g. ``"GOES-19"``).
        secondary_label: Label of the secondary satellite.
    """

    series: Series
    primary_label: str = "GOES-P"
    secondary_label: str = "GOES-S"

    def latest_class(self, key: str = "long_primary") -> FlareClass | None:
        """Return the flare class of the most recent non-gap value of *key*."""
        for point in reversed(self.series.points):
            value = point.get(key)
            if value is not None:
                return flare_class(value)
        return None


@dataclass(frozen=True)
class NewsArticle:
    """An item from the space-weather news feed."""

    title: str
    link: str
    published: datetime | None = None
    source: str = ""
    source_url: str = ""
    image_url: str = ""
