"""Map scalar metrics onto severity bands and flare classes."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from heliodash.classify._tables import (
    AURORA_INTENSITY_FLOOR,
    Scale,
    SeverityBand,
    SeverityScale,
)

P = TypeVar("P")

# (letter, lower bound in W/m²), highest first
_FLARE_DECADES: tuple[tuple[str, float], ...] = (
    ("X", 1e-4),
    ("M", 1e-5),
    ("C", 1e-6),
    ("B", 1e-7),
    ("A", 1e-8),
)
_FLARE_BASE: dict[str, float] = dict(_FLARE_DECADES)


def _resolve(scale: Scale | SeverityScale | str) -> SeverityScale:
    if isinstance(scale, SeverityScale):
        return scale
    if isinstance(scale, str):
        try:
            scale = Scale(scale)
        except ValueError:
            raise ValueError(f"Unknown severity scale: {scale!r}") from None
    return scale.table()


def classify(scale: Scale | SeverityScale | str, value: float) -> SeverityBand:
    """Return the band of *scale* that *value* falls in.

    Bands are checked from the highest threshold down; the first whose
    ``min_value`` is less than or equal to *value* wins. Values below every
    threshold get the scale's floor band.

    Args:
        scale: A :class:`Scale` member, its string value, or a custom
            :class:`SeverityScale`.
        value: The metric to classify.

    Returns:
        The matching SeverityBand.

    Raises:
        ValueError: If *value* is not finite or the scale name is unknown.

    Examples:
        ```python
        from heliodash.classify import Scale, classify
        classify(Scale.GEOMAGNETIC, 5.0).level  # "G1"
        classify(Scale.GEOMAGNETIC, 4.999).level  # "G0"
        ```
    """
    table = _resolve(scale)
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot classify non-finite value {value}")
    for band in table.bands:
        if value >= band.min_value:
            return band
    return table.floor


def kp_status(kp: float) -> SeverityBand:
    """Return the descriptive Kp band (Quiet ... Severe)."""
    return classify(Scale.KP_STATUS, kp)


def aurora_color(intensity: float) -> str:
    """Return the RGBA colour for an OVATION *intensity*."""
    band = classify(Scale.AURORA, intensity)
    return band.color or "rgba(0, 0, 0, 0)"


def visible_aurora_points(points: Iterable[P], *, key: str = "intensity") -> list[P]:
    """Drop points whose intensity is below the aurora display floor.

    Args:
        points: Objects carrying an intensity attribute.
        key: Attribute name holding the intensity.

    Returns:
        Points at or above :data:`AURORA_INTENSITY_FLOOR`, order preserved.
    """
    return [p for p in points if getattr(p, key) >= AURORA_INTENSITY_FLOOR]


@dataclass(frozen=True)
class FlareClass:
    """A GOES flare class such as ``M1.2``.

    Attributes:
        letter: One of ``A``, ``B``, ``C``, ``M``, ``X``.
        mantissa: Multiplier of the decade base flux.
    """

    letter: str
    mantissa: float

    @property
    def flux(self) -> float:
        """Peak 0.1-0.8 nm flux in W/m² implied by the class."""
        return _FLARE_BASE[self.letter] * self.mantissa

    def __str__(self) -> str:
        return f"{self.letter}{self.mantissa:.1f}"


def flare_class(flux: float) -> FlareClass | None:
    """Convert a long-wavelength X-ray flux to a flare class.

    Decade boundaries are 1e-8 (A), 1e-7 (B), 1e-6 (C), 1e-5 (M) and 1e-4
    (X) W/m². Fluxes below 1e-8 are still reported as A-class with a
    mantissa below 1.

    Args:
        flux: X-ray flux in W/m².

    Returns:
        The FlareClass, or ``None`` for non-positive or non-finite flux.
    """
    if flux is None or not math.isfinite(flux) or flux <= 0:
        return None
    for letter, base in _FLARE_DECADES:
        if flux >= base:
            return FlareClass(letter, flux / base)
    return FlareClass("A", flux / _FLARE_BASE["A"])


def flare_class_flux(class_str: str) -> float:
    """Convert a flare class string such as ``"M1.2"`` back to W/m².

    A bare letter counts as mantissa 1.0.

    Args:
        class_str: Flare class text.

    Returns:
        Peak flux in W/m², or ``0.0`` if the text is not a flare class.
    """
    class_str = (class_str or "").strip().upper()
    if not class_str or class_str[0] not in _FLARE_BASE:
        return 0.0
    try:
        mantissa = float(class_str[1:]) if len(class_str) > 1 else 1.0
    except ValueError:
        return 0.0
    return _FLARE_BASE[class_str[0]] * mantissa
