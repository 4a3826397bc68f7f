"""Interactive color state: picker mode, current and previous color.

The picker edits a color in one of two modes (Oklrch or Okhsv) and keeps
the color it started from for comparison. Converting between modes and
assigning new colors go through Oklab.

Hue is meaningless at zero chroma, but a picker that snaps the hue to 0
whenever lightness is dragged through gray feels broken. So whenever an
incoming color is achromatic, the slot keeps the hue it already had. This
lives here rather than in the conversion functions because it depends on
the previous state.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from oklch_picker import defaults
from oklch_picker.colorspace import LinearRGBA, Okhsv, Oklrch
from oklch_picker.colorspace.colors import OkColor

logger = logging.getLogger(__name__)

PickerColor = Union[Oklrch, Okhsv]


class PickerMode(enum.Enum):
    """Color space the picker's sliders edit."""

    OKLRCH = "oklrch"
    OKHSV = "okhsv"

    @classmethod
    def parse(cls, name: str) -> PickerMode:
        """Look up a mode by name, case-insensitively.

        Raises:
            ValueError: If name is not a known mode.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown picker mode: {name!r} (expected one of {known})") from None

    @classmethod
    def from_stored(cls, name: Optional[str]) -> PickerMode:
        """Mode from a saved setting, falling back to the default if unusable."""
        default = cls(defaults.DEFAULT_PICKER_MODE)
        if name is None:
            return default
        try:
            return cls.parse(name)
        except ValueError:
            logger.warning("Ignoring stored picker mode %r, using %s", name, default.value)
            return default

    @property
    def color_type(self) -> type[PickerColor]:
        return Oklrch if self is PickerMode.OKLRCH else Okhsv

    @property
    def names(self) -> tuple[str, str, str, str]:
        if self is PickerMode.OKLRCH:
            return ("Lr", "C", "H", "A")
        return ("H", "S", "V", "A")

    @property
    def max_values(self) -> tuple[float, float, float, float]:
        if self is PickerMode.OKLRCH:
            return (1.0, defaults.CHROMA_MAX, 360.0, 1.0)
        return (360.0, 1.0, 1.0, 1.0)

    @property
    def precision(self) -> tuple[float, float, float, float]:
        """Slider step per channel."""
        if self is PickerMode.OKLRCH:
            return (0.01, 0.005, 3.0, 0.01)
        return (3.0, 0.01, 0.01, 0.01)

    @property
    def gamut_policy(self) -> str:
        """Oklrch keeps hue when clipping; Okhsv colors are clamped."""
        return "preserve_chroma" if self is PickerMode.OKLRCH else "clamp"


def _hue_undefined(color: PickerColor) -> bool:
    if isinstance(color, Oklrch):
        return color.C < defaults.ACHROMATIC_CHROMA
    return color.S < defaults.ACHROMATIC_CHROMA


def to_mode(mode: PickerMode, color: OkColor, previous: Optional[PickerColor] = None) -> PickerColor:
    """Convert any color into the mode's type, keeping the previous hue if achromatic."""
    converted = color.to(mode.color_type)
    if previous is not None and _hue_undefined(converted):
        converted = replace(converted, H=previous.H)
    return converted


@dataclass
class Fallbacks:
    """Displayable versions of the current and previous colors."""
    cur: LinearRGBA
    is_cur_fallback: bool
    prev: LinearRGBA
    is_prev_fallback: bool


@dataclass
class PickerColors:
    """The color being edited and the color the edit started from."""
    mode: PickerMode
    color: PickerColor
    prev_color: PickerColor

    @classmethod
    def new(cls, mode: PickerMode, rgba: LinearRGBA) -> PickerColors:
        color = to_mode(mode, rgba)
        return cls(mode=mode, color=color, prev_color=color)

    def convert(self, mode: PickerMode) -> None:
        """Switch the picker to another mode, converting both colors."""
        if mode is self.mode:
            return
        logger.debug("Converting picker colors %s -> %s", self.mode.value, mode.value)
        self.color = to_mode(mode, self.color, previous=self.color)
        self.prev_color = to_mode(mode, self.prev_color, previous=self.prev_color)
        self.mode = mode

    def assign(self, rgba: LinearRGBA, prev: bool = False) -> None:
        """Replace the current (or previous) color."""
        if prev:
            self.prev_color = to_mode(self.mode, rgba, previous=self.prev_color)
        else:
            self.color = to_mode(self.mode, rgba, previous=self.color)

    def values(self) -> tuple[float, float, float, float]:
        """Slider values in mode channel order (see PickerMode.names)."""
        return _channels(self.color)

    def prev_values(self) -> tuple[float, float, float, float]:
        return _channels(self.prev_color)

    def set_values(self, values: Sequence[float], prev: bool = False) -> None:
        color = self.mode.color_type(*values)
        if prev:
            self.prev_color = color
        else:
            self.color = color

    def color_rgba(self) -> LinearRGBA:
        return self.color.to_linear_rgb()

    def prev_color_rgba(self) -> LinearRGBA:
        return self.prev_color.to_linear_rgb()

    def fallbacks(
        self,
        threshold: float = defaults.FALLBACK_THRESHOLD,
        cache=None,
    ) -> Fallbacks:
        """Gamut-map both colors with the mode's policy."""
        policy = self.mode.gamut_policy
        cur, is_cur = self.color_rgba().gamut_clip(policy, threshold, cache)
        prev, is_prev = self.prev_color_rgba().gamut_clip(policy, threshold, cache)
        return Fallbacks(cur=cur, is_cur_fallback=is_cur, prev=prev, is_prev_fallback=is_prev)


def _channels(color: PickerColor) -> tuple[float, float, float, float]:
    if isinstance(color, Oklrch):
        return (color.Lr, color.C, color.H, color.alpha)
    return (color.H, color.S, color.V, color.alpha)
