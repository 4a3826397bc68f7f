"""Tests for oklch_picker.picker."""

import logging

import pytest

from oklch_picker import defaults
from oklch_picker.colorspace import Okhsv, Oklch, Oklrch
from oklch_picker.picker import PickerColors, PickerMode, to_mode


# ---------------------------------------------------------------------------
# TestPickerMode
# ---------------------------------------------------------------------------

class TestPickerMode:

    @pytest.mark.parametrize("name, mode", [
        ("oklrch", PickerMode.OKLRCH),
        ("OKHSV", PickerMode.OKHSV),
        ("  OkLrCh ", PickerMode.OKLRCH),
    ])
    def test_parse(self, name, mode):
        assert PickerMode.parse(name) is mode

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown picker mode"):
            PickerMode.parse("hsl")

    def test_from_stored_none(self):
        assert PickerMode.from_stored(None) is PickerMode(defaults.DEFAULT_PICKER_MODE)

    def test_from_stored_valid(self):
        assert PickerMode.from_stored("okhsv") is PickerMode.OKHSV

    def test_from_stored_invalid_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="oklch_picker.picker"):
            mode = PickerMode.from_stored("cmyk")
        assert mode is PickerMode.OKLRCH
        assert "cmyk" in caplog.text

    def test_metadata(self):
        assert PickerMode.OKLRCH.names == ("Lr", "C", "H", "A")
        assert PickerMode.OKHSV.names == ("H", "S", "V", "A")
        assert PickerMode.OKLRCH.max_values[1] == defaults.CHROMA_MAX
        assert PickerMode.OKHSV.max_values == (360.0, 1.0, 1.0, 1.0)
        assert PickerMode.OKLRCH.color_type is Oklrch
        assert PickerMode.OKHSV.color_type is Okhsv
        for mode in PickerMode:
            assert len(mode.precision) == 4
            assert all(p > 0 for p in mode.precision)

    def test_gamut_policy(self):
        assert PickerMode.OKLRCH.gamut_policy == "preserve_chroma"
        assert PickerMode.OKHSV.gamut_policy == "clamp"


# ---------------------------------------------------------------------------
# TestToMode
# ---------------------------------------------------------------------------

class TestToMode:

    def test_converts_type(self, red):
        assert isinstance(to_mode(PickerMode.OKLRCH, red), Oklrch)
        assert isinstance(to_mode(PickerMode.OKHSV, red), Okhsv)

    def test_gray_is_achromatic(self, gray):
        color = to_mode(PickerMode.OKLRCH, gray)
        assert color.C < defaults.ACHROMATIC_CHROMA

    @pytest.mark.parametrize("previous", [
        Oklrch(0.5, 0.2, 123.0),
        Okhsv(123.0, 0.5, 0.5),
    ])
    def test_gray_keeps_previous_hue(self, previous, gray):
        mode = PickerMode.OKLRCH if isinstance(previous, Oklrch) else PickerMode.OKHSV

        color = to_mode(mode, gray, previous=previous)

        assert color.H == 123.0

    def test_chromatic_ignores_previous_hue(self, red):
        color = to_mode(PickerMode.OKLRCH, red, previous=Oklrch(0.5, 0.1, 250.0))
        assert color.H == pytest.approx(red.to(Oklch).H)


# ---------------------------------------------------------------------------
# TestPickerColors
# ---------------------------------------------------------------------------

class TestPickerColors:

    def test_new(self, red):
        colors = PickerColors.new(PickerMode.OKLRCH, red)
        assert colors.color == colors.prev_color
        assert colors.values()[3] == 0.9
        rgba = colors.color_rgba()
        assert rgba.rgb == pytest.approx(red.rgb, abs=1e-6)

    def test_convert_round_trip(self, red):
        colors = PickerColors.new(PickerMode.OKLRCH, red)
        original = colors.values()

        colors.convert(PickerMode.OKHSV)
        assert colors.mode is PickerMode.OKHSV
        assert isinstance(colors.color, Okhsv)
        assert isinstance(colors.prev_color, Okhsv)

        colors.convert(PickerMode.OKLRCH)
        assert colors.values() == pytest.approx(original, abs=1e-6)

    def test_convert_same_mode_is_noop(self, red):
        colors = PickerColors.new(PickerMode.OKHSV, red)
        before = colors.color
        colors.convert(PickerMode.OKHSV)
        assert colors.color is before

    def test_convert_keeps_hue_of_gray(self):
        colors = PickerColors(
            mode=PickerMode.OKLRCH,
            color=Oklrch(0.6, 0.0, 200.0),
            prev_color=Oklrch(0.6, 0.0, 80.0),
        )
        colors.convert(PickerMode.OKHSV)
        assert colors.color.H == 200.0
        assert colors.prev_color.H == 80.0

    @pytest.mark.parametrize("mode", list(PickerMode))
    def test_assign_gray_keeps_hue(self, mode, red, gray):
        colors = PickerColors.new(mode, red)
        hue = colors.color.H

        colors.assign(gray)

        assert colors.color.H == hue
        assert colors.color_rgba().rgb == pytest.approx(gray.rgb, abs=1e-6)

    def test_assign_prev(self, red, gray):
        colors = PickerColors.new(PickerMode.OKLRCH, gray)
        current = colors.color

        colors.assign(red, prev=True)

        assert colors.color is current
        assert colors.prev_color_rgba().rgb == pytest.approx(red.rgb, abs=1e-6)

    def test_set_values(self, red):
        colors = PickerColors.new(PickerMode.OKLRCH, red)
        colors.set_values((0.7, 0.1, 45.0, 0.5))
        assert colors.color == Oklrch(0.7, 0.1, 45.0, 0.5)
        assert colors.values() == (0.7, 0.1, 45.0, 0.5)

        colors.set_values((10.0, 0.2, 0.3, 1.0), prev=True)
        assert colors.prev_values() == (10.0, 0.2, 0.3, 1.0)


# ---------------------------------------------------------------------------
# TestFallbacks
# ---------------------------------------------------------------------------

class TestFallbacks:

    def test_in_gamut(self, red):
        fallbacks = PickerColors.new(PickerMode.OKLRCH, red).fallbacks()
        assert not fallbacks.is_cur_fallback
        assert not fallbacks.is_prev_fallback
        assert fallbacks.cur.rgb == pytest.approx(red.rgb, abs=1e-6)

    def test_out_of_gamut_oklrch(self, red):
        colors = PickerColors.new(PickerMode.OKLRCH, red)
        colors.set_values((0.5, 0.37, 30.0, 1.0))

        fallbacks = colors.fallbacks()

        assert fallbacks.is_cur_fallback
        assert not fallbacks.is_prev_fallback
        assert fallbacks.cur.in_gamut
        assert fallbacks.cur.alpha == 1.0

    def test_okhsv_never_falls_back(self, red):
        colors = PickerColors.new(PickerMode.OKHSV, red)
        colors.set_values((30.0, 1.0, 1.0, 0.5))

        fallbacks = colors.fallbacks()

        assert not fallbacks.is_cur_fallback
        assert fallbacks.cur.in_gamut
        assert fallbacks.cur.alpha == 0.5

    def test_threshold(self):
        colors = PickerColors(
            mode=PickerMode.OKLRCH,
            color=Oklrch.from_oklch(Oklch(0.5, 0.4, 11.5)),
            prev_color=Oklrch(0.5, 0.0, 0.0),
        )
        assert colors.fallbacks(threshold=0.0).is_cur_fallback
        assert not colors.fallbacks(threshold=10.0).is_cur_fallback
