"""Tests for severity scales and flare classes."""

import math
from types import SimpleNamespace

import pytest

from heliodash.classify import (
    AURORA_SCALE,
    GEOMAGNETIC_SCALE,
    Scale,
    SeverityBand,
    SeverityScale,
    aurora_color,
    classify,
    flare_class,
    flare_class_flux,
    kp_status,
    visible_aurora_points,
)


class TestClassify:
    def test_kp_boundary_closed_below(self):
        assert classify(Scale.GEOMAGNETIC, 5.0).level == "G1"
        assert classify(Scale.GEOMAGNETIC, 4.999).level == "G0"

    @pytest.mark.parametrize(
        "kp, level, label",
        [
            (0.0, "G0", "None"),
            (6.0, "G2", "Moderate"),
            (7.33, "G3", "Strong"),
            (8.0, "G4", "Severe"),
            (9.0, "G5", "Extreme"),
        ],
    )
    def test_geomagnetic(self, kp, level, label):
        band = classify(Scale.GEOMAGNETIC, kp)
        assert (band.level, band.label) == (level, label)

    @pytest.mark.parametrize(
        "pfu, level",
        [(1.0, "S0"), (10.0, "S1"), (150.0, "S2"), (1e3, "S3"), (1e4, "S4"), (2e5, "S5")],
    )
    def test_solar_radiation(self, pfu, level):
        assert classify(Scale.SOLAR_RADIATION, pfu).level == level

    @pytest.mark.parametrize(
        "flux, level",
        [(9.9e-6, "R0"), (1e-5, "R1"), (5e-5, "R2"), (1e-4, "R3"), (1e-3, "R4"), (2e-3, "R5")],
    )
    def test_radio_blackout(self, flux, level):
        assert classify(Scale.RADIO_BLACKOUT, flux).level == level

    def test_scale_by_name(self):
        assert classify("geomagnetic", 7).level == "G3"

    def test_custom_scale(self):
        scale = SeverityScale("custom", (SeverityBand("hi", "High", 10.0),), SeverityBand("lo", "Low"))
        assert classify(scale, 10.0).level == "hi"
        assert classify(scale, 9.0).level == "lo"

    def test_unknown_scale(self):
        with pytest.raises(ValueError, match="Unknown"):
            classify("tsunami", 1.0)

    @pytest.mark.parametrize("bad", [math.nan, math.inf])
    def test_non_finite_raises(self, bad):
        with pytest.raises(ValueError, match="non-finite"):
            classify(Scale.GEOMAGNETIC, bad)

    def test_scale_rejects_misordered_bands(self):
        with pytest.raises(ValueError, match="ordered"):
            SeverityScale(
                "bad",
                (SeverityBand("a", "A", 1.0), SeverityBand("b", "B", 2.0)),
                SeverityBand("f", "F"),
            )

    def test_levels(self):
        assert GEOMAGNETIC_SCALE.levels() == ["G0", "G1", "G2", "G3", "G4", "G5"]

    def test_scale_table(self):
        assert Scale.AURORA.table() is AURORA_SCALE
        assert str(Scale.KP_STATUS) == "kp_status"


class TestKpStatus:
    @pytest.mark.parametrize(
        "kp, label, color",
        [
            (2.67, "Quiet", "#34c759"),
            (3.0, "Unsettled", "#5ac8fa"),
            (5.0, "Minor", "#ffb400"),
            (6.0, "Moderate", "#ffd60a"),
            (7.0, "Strong", "#ff9500"),
            (8.67, "Strong", "#ff9500"),
            (9.0, "Severe", "#ff3b30"),
        ],
    )
    def test_bands(self, kp, label, color):
        band = kp_status(kp)
        assert band.label == label
        assert band.color == color


class TestAurora:
    @pytest.mark.parametrize(
        "intensity, color",
        [
            (4.9, "rgba(0, 0, 0, 0)"),
            (5.0, "rgba(90, 200, 250, 0.22)"),
            (9.0, "rgba(0, 210, 190, 0.36)"),
            (16.0, "rgba(52, 199, 89, 0.50)"),
            (26.0, "rgba(255, 149, 0, 0.62)"),
            (41.0, "rgba(255, 59, 48, 0.72)"),
        ],
    )
    def test_colors(self, intensity, color):
        assert aurora_color(intensity) == color

    def test_visible_points_excludes_below_floor(self):
        pts = [SimpleNamespace(intensity=v) for v in (1.0, 4.99, 5.0, 30.0)]
        assert [p.intensity for p in visible_aurora_points(pts)] == [5.0, 30.0]

    def test_visible_points_custom_key(self):
        pts = [SimpleNamespace(value=2.0), SimpleNamespace(value=8.0)]
        assert len(visible_aurora_points(pts, key="value")) == 1


class TestFlareClass:
    @pytest.mark.parametrize(
        "flux, text",
        [
            (1.2e-5, "M1.2"),
            (2.5e-4, "X2.5"),
            (3.4e-6, "C3.4"),
            (1e-7, "B1.0"),
            (5e-8, "A5.0"),
            (1e-5, "M1.0"),
        ],
    )
    def test_classes(self, flux, text):
        assert str(flare_class(flux)) == text

    def test_below_a_decade(self):
        cls = flare_class(5e-9)
        assert cls.letter == "A"
        assert cls.mantissa == pytest.approx(0.5)

    @pytest.mark.parametrize("bad", [0.0, -1e-6, math.nan, math.inf])
    def test_invalid_flux(self, bad):
        assert flare_class(bad) is None

    def test_flux_roundtrip(self):
        assert flare_class(3.3e-5).flux == pytest.approx(3.3e-5)

    @pytest.mark.parametrize(
        "text, flux",
        [("M1.2", 1.2e-5), ("x2", 2e-4), ("C", 1e-6), ("Z1.0", 0.0), ("", 0.0), ("Mx", 0.0)],
    )
    def test_flare_class_flux(self, text, flux):
        assert flare_class_flux(text) == pytest.approx(flux)
