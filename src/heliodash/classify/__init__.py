"""Severity classification for space-weather metrics.

Provides NOAA G/S/R scales, descriptive Kp labels, aurora colour bands and
GOES flare-class conversion, all driven by static threshold tables.
"""

from heliodash.classify._classify import (
    FlareClass,
    aurora_color,
    classify,
    flare_class,
    flare_class_flux,
    kp_status,
    visible_aurora_points,
)
from heliodash.classify._tables import (
    AURORA_INTENSITY_FLOOR,
    AURORA_SCALE,
    GEOMAGNETIC_SCALE,
    KP_STATUS_SCALE,
    RADIO_BLACKOUT_SCALE,
    SOLAR_RADIATION_SCALE,
    Scale,
    SeverityBand,
    SeverityScale,
)

__all__ = [
    "AURORA_INTENSITY_FLOOR",
    "AURORA_SCALE",
    "FlareClass",
    "GEOMAGNETIC_SCALE",
    "KP_STATUS_SCALE",
    "RADIO_BLACKOUT_SCALE",
    "SOLAR_RADIATION_SCALE",
    "Scale",
    "SeverityBand",
    "SeverityScale",
    "aurora_color",
    "classify",
    "flare_class",
    "flare_class_flux",
    "kp_status",
    "visible_aurora_points",
]
