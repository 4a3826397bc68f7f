"""Tests for Okhsv <-> Oklab."""

import numpy as np
import pytest

from oklch_picker.colorspace import (
    linear_rgb_to_oklab,
    okhsv_to_oklab,
    oklab_to_linear_rgb,
    oklab_to_okhsv,
    toe,
    toe_inv,
)


def hue_diff(h1, h2):
    """Signed smallest difference between two hue angles in degrees."""
    return (np.asarray(h1) - np.asarray(h2) + 180.0) % 360.0 - 180.0


class TestOkhsvToOklab:

    def test_value_zero_is_black(self):
        """V=0 maps to exactly Oklab(0, 0, 0) for any hue and saturation."""
        h = np.array([0.0, 90.0, 200.0, 300.0])
        s = np.array([0.0, 0.5, 1.0, 0.3])
        L, a, b = okhsv_to_oklab(h, s, np.zeros(4))

        np.testing.assert_array_equal(L, 0.0)
        np.testing.assert_array_equal(a, 0.0)
        np.testing.assert_array_equal(b, 0.0)

    def test_full_saturation_and_value_on_gamut_surface(self):
        """S=1, V=1 is the cusp: brightest channel exactly 1."""
        h = np.arange(0.0, 360.0, 3.0)
        L, a, b = okhsv_to_oklab(h, np.ones_like(h), np.ones_like(h))

        rgb = np.stack(oklab_to_linear_rgb(L, a, b))

        np.testing.assert_allclose(rgb.max(axis=0), 1.0, atol=1e-3)

    def test_value_one_stays_in_gamut(self):
        """The V=1 edge runs along the upper gamut boundary."""
        h = np.repeat(np.arange(0.0, 360.0, 15.0), 5)
        s = np.tile(np.linspace(0.0, 1.0, 5), 24)
        L, a, b = okhsv_to_oklab(h, s, np.ones_like(h))

        rgb = np.stack(oklab_to_linear_rgb(L, a, b))

        np.testing.assert_allclose(rgb.max(axis=0), 1.0, atol=1e-3)
        assert (rgb.min(axis=0) >= -1e-3).all()

    def test_zero_saturation_is_gray(self):
        v = np.linspace(0.1, 1.0, 10)
        L, a, b = okhsv_to_oklab(np.full(10, 123.0), np.zeros(10), v)

        np.testing.assert_allclose(a, 0.0, atol=1e-12)
        np.testing.assert_allclose(b, 0.0, atol=1e-12)
        np.testing.assert_allclose(L, toe_inv(v), atol=1e-6)

    def test_white(self):
        L, a, b = okhsv_to_oklab(0.0, 0.0, 1.0)
        assert float(L) == pytest.approx(1.0, abs=1e-6)

    def test_hue_is_oklch_hue(self):
        """Okhsv shares its hue angle with Oklch."""
        L, a, b = okhsv_to_oklab(np.array([40.0]), np.array([0.8]), np.array([0.7]))
        np.testing.assert_allclose(np.degrees(np.arctan2(b, a)), [40.0], atol=1e-9)


class TestOklabToOkhsv:

    def test_achromatic_convention(self):
        """Gray has S=0 and hue 0 by convention; V is its toe lightness."""
        h, s, v = oklab_to_okhsv(np.array([0.5]), np.array([0.0]), np.array([0.0]))

        np.testing.assert_array_equal(h, [0.0])
        np.testing.assert_array_equal(s, [0.0])
        np.testing.assert_allclose(v, toe(np.array([0.5])), atol=1e-6)

    def test_black(self):
        h, s, v = oklab_to_okhsv(np.array([0.0]), np.array([0.0]), np.array([0.0]))
        np.testing.assert_array_equal(h, [0.0])
        np.testing.assert_array_equal(s, [0.0])
        np.testing.assert_array_equal(v, [0.0])

    def test_chromatic_black_is_finite(self):
        """L=0 with nonzero chroma (out of gamut) collapses to S=V=0."""
        h, s, v = oklab_to_okhsv(np.array([0.0]), np.array([0.1]), np.array([0.0]))
        np.testing.assert_array_equal(s, [0.0])
        np.testing.assert_array_equal(v, [0.0])
        assert np.isfinite(h).all()

    def test_primaries_are_corners(self):
        """sRGB primaries sit at S=1, V=1."""
        rgb = np.eye(3)
        h, s, v = oklab_to_okhsv(*linear_rgb_to_oklab(*rgb), halley_steps=3)

        np.testing.assert_allclose(s, 1.0, atol=1e-3)
        np.testing.assert_allclose(v, 1.0, atol=1e-3)
        np.testing.assert_allclose(h, [29.23, 142.50, 264.05], atol=0.05)

    def test_in_gamut_colors_in_unit_square(self, rng):
        rgb = rng.random((3, 1000))
        _, s, v = oklab_to_okhsv(*linear_rgb_to_oklab(*rgb))

        assert ((s >= 0) & (s <= 1 + 1e-2)).all()
        assert ((v >= 0) & (v <= 1 + 1e-2)).all()


class TestRoundTrip:

    def test_random_okhsv_roundtrip(self, rng):
        """Okhsv -> Oklab -> Okhsv on 10,000 random colors."""
        n = 10_000
        h = rng.uniform(0.0, 360.0, n)
        s = rng.uniform(0.0, 1.0, n)
        v = rng.uniform(0.0, 1.0, n)

        h2, s2, v2 = oklab_to_okhsv(*okhsv_to_oklab(h, s, v))

        np.testing.assert_allclose(hue_diff(h2, h), 0.0, atol=1e-3)
        np.testing.assert_allclose(s2, s, atol=1e-3)
        np.testing.assert_allclose(v2, v, atol=1e-3)

    def test_scalar_roundtrip(self):
        h, s, v = oklab_to_okhsv(*okhsv_to_oklab(250.0, 0.6, 0.4))
        assert float(h) == pytest.approx(250.0, abs=1e-6)
        assert float(s) == pytest.approx(0.6, abs=1e-6)
        assert float(v) == pytest.approx(0.4, abs=1e-6)

    def test_cache_roundtrip(self, cold_cache):
        """Forward and inverse agree when both use the same cusp table."""
        h = np.array([10.0, 100.0, 190.0, 280.0])
        s = np.array([0.2, 0.5, 0.8, 1.0])
        v = np.array([0.9, 0.5, 0.3, 0.7])

        lab = okhsv_to_oklab(h, s, v, cache=cold_cache)
        h2, s2, v2 = oklab_to_okhsv(*lab, cache=cold_cache)

        np.testing.assert_allclose(s2, s, atol=1e-6)
        np.testing.assert_allclose(v2, v, atol=1e-6)
