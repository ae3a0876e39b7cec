"""Static severity tables.

Each scale is an ordered tuple of bands evaluated from the highest
threshold down, plus a floor band returned when no threshold is met.
Thresholds are closed below: a value equal to ``min_value`` belongs to the
band.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class SeverityBand:
    """One band of a severity scale.

    Attributes:
        level: Ordinal code (e.g. ``"G3"``).
        label: Human-readable label (e.g. ``"Strong"``).
        min_value: Inclusive lower bound of the band.
        color: Display colour, when the scale defines one.
    """

    level: str
    label: str
    min_value: float = float("-inf")
    color: str | None = None


@dataclass(frozen=True)
class SeverityScale:
    """An ordered threshold table.

    Attributes:
        name: Scale name.
        bands: Bands sorted by ``min_value`` from highest to lowest.
        floor: Band applied when no threshold is met.
    """

    name: str
    bands: tuple[SeverityBand, ...]
    floor: SeverityBand

    def __post_init__(self) -> None:
        thresholds = [band.min_value for band in self.bands]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError(f"Bands of scale {self.name!r} must be ordered high to low")

    def levels(self) -> list[str]:
        """Return every level code from lowest (floor) to highest."""
        return [self.floor.level, *(band.level for band in reversed(self.bands))]


def _noaa_scale(name: str, prefix: str, thresholds: tuple[float, ...]) -> SeverityScale:
    """Build a NOAA 1-5 scale from its five ascending thresholds."""
    labels = ("Minor", "Moderate", "Strong", "Severe", "Extreme")
    bands = tuple(
        SeverityBand(f"{prefix}{i + 1}", labels[i], threshold)
        for i, threshold in reversed(list(enumerate(thresholds)))
    )
    return SeverityScale(name, bands, SeverityBand(f"{prefix}0", "None"))


GEOMAGNETIC_SCALE = _noaa_scale("geomagnetic", "G", (5.0, 6.0, 7.0, 8.0, 9.0))
"""Kp index → G0-G5."""

SOLAR_RADIATION_SCALE = _noaa_scale("solar_radiation", "S", (1e1, 1e2, 1e3, 1e4, 1e5))
"""GOES >=10 MeV integral proton flux [pfu] → S0-S5."""

RADIO_BLACKOUT_SCALE = _noaa_scale("radio_blackout", "R", (1e-5, 5e-5, 1e-4, 1e-3, 2e-3))
"""GOES 0.1-0.8 nm X-ray flux [W/m²] → R0-R5."""

KP_STATUS_SCALE = SeverityScale(
    "kp_status",
    (
        SeverityBand("severe", "Severe", 9.0, "#ff3b30"),
        SeverityBand("strong", "Strong", 7.0, "#ff9500"),
        SeverityBand("moderate", "Moderate", 6.0, "#ffd60a"),
        SeverityBand("minor", "Minor", 5.0, "#ffb400"),
        SeverityBand("unsettled", "Unsettled", 3.0, "#5ac8fa"),
    ),
    SeverityBand("quiet", "Quiet", color="#34c759"),
)
"""Kp index → descriptive label and bar colour."""

AURORA_INTENSITY_FLOOR: float = 5.0
"""OVATION intensities below this are not displayed at all."""

AURORA_SCALE = SeverityScale(
    "aurora",
    (
        SeverityBand("extreme", "Extreme", 41.0, "rgba(255, 59, 48, 0.72)"),
        SeverityBand("severe", "Severe", 26.0, "rgba(255, 149, 0, 0.62)"),
        SeverityBand("strong", "Strong", 16.0, "rgba(52, 199, 89, 0.50)"),
        SeverityBand("moderate", "Moderate", 9.0, "rgba(0, 210, 190, 0.36)"),
        SeverityBand("low", "Low", AURORA_INTENSITY_FLOOR, "rgba(90, 200, 250, 0.22)"),
    ),
    SeverityBand("none", "None", color="rgba(0, 0, 0, 0)"),
)
"""OVATION aurora intensity → RGBA colour band."""


class Scale(Enum):
    """Named severity scales."""

    GEOMAGNETIC = "geomagnetic"
    SOLAR_RADIATION = "solar_radiation"
    RADIO_BLACKOUT = "radio_blackout"
    KP_STATUS = "kp_status"
    AURORA = "aurora"

    def table(self) -> SeverityScale:
        """Return the threshold table for this scale."""
        _tables = {
            Scale.GEOMAGNETIC: GEOMAGNETIC_SCALE,
            Scale.SOLAR_RADIATION: SOLAR_RADIATION_SCALE,
            Scale.RADIO_BLACKOUT: RADIO_BLACKOUT_SCALE,
            Scale.KP_STATUS: KP_STATUS_SCALE,
            Scale.AURORA: AURORA_SCALE,
        }
        return _tables[self]

    def __str__(self) -> str:
        return self.value
