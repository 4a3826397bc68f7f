"""Single-color value types for the Oklab family.

Thin immutable wrappers over the array functions, for code that handles one
color at a time (the picker state, tests). Every type converts through
Oklab and carries alpha untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

from oklch_picker import defaults
from .clip import clamp_rgba, gamut_map, in_gamut
from .okhsv import okhsv_to_oklab, oklab_to_okhsv
from .oklch import (
    linear_rgb_to_oklab,
    linear_to_srgb_u8,
    oklab_to_linear_rgb,
    oklab_to_oklch,
    oklch_to_oklab,
    srgb_u8_to_linear,
)
from .toe import toe, toe_inv

ColorT = TypeVar("ColorT", bound="OkColor")


class OkColor:
    """Conversions shared by every color type."""

    alpha: float

    def to_oklab(self) -> Oklab:
        raise NotImplementedError

    @classmethod
    def from_oklab(cls: type[ColorT], lab: Oklab) -> ColorT:
        raise NotImplementedError

    def to(self, cls: type[ColorT]) -> ColorT:
        """Convert to another color type."""
        return cls.from_oklab(self.to_oklab())

    def to_linear_rgb(self) -> LinearRGBA:
        return self.to(LinearRGBA)

    @classmethod
    def from_linear_rgb(cls: type[ColorT], rgba: LinearRGBA) -> ColorT:
        return cls.from_oklab(rgba.to_oklab())


@dataclass(frozen=True)
class LinearRGBA(OkColor):
    """Linear-light sRGB. Channels may leave [0, 1] until gamut-mapped."""
    r: float
    g: float
    b: float
    alpha: float = 1.0

    def to_oklab(self) -> Oklab:
        L, a, b = linear_rgb_to_oklab(self.r, self.g, self.b)
        return Oklab(float(L), float(a), float(b), self.alpha)

    @classmethod
    def from_oklab(cls, lab: Oklab) -> LinearRGBA:
        r, g, b = oklab_to_linear_rgb(lab.L, lab.a, lab.b)
        return cls(float(r), float(g), float(b), lab.alpha)

    @classmethod
    def from_srgb_u8(cls, rgba: Sequence[int]) -> LinearRGBA:
        r, g, b, alpha = srgb_u8_to_linear(rgba)
        return cls(float(r), float(g), float(b), float(alpha))

    def to_srgb_u8(self) -> tuple[int, int, int, int]:
        """Clamp and quantize to 8-bit sRGBA."""
        return tuple(int(x) for x in linear_to_srgb_u8(self.r, self.g, self.b, self.alpha))

    @property
    def rgb(self) -> tuple[float, float, float]:
        return self.r, self.g, self.b

    @property
    def in_gamut(self) -> bool:
        return bool(in_gamut(self.r, self.g, self.b))

    def clamp(self) -> LinearRGBA:
        r, g, b = clamp_rgba(self.r, self.g, self.b)
        return replace(self, r=float(r), g=float(g), b=float(b))

    def gamut_clip(
        self,
        policy: str = defaults.DEFAULT_GAMUT_POLICY,
        threshold: float = defaults.FALLBACK_THRESHOLD,
        cache=None,
    ) -> tuple[LinearRGBA, bool]:
        """(clipped color, is_fallback) under the given policy."""
        (r, g, b), fallback = gamut_map(*self.rgb, policy=policy, threshold=threshold, cache=cache)
        return replace(self, r=float(r), g=float(g), b=float(b)), bool(fallback)


@dataclass(frozen=True)
class Oklab(OkColor):
    L: float
    a: float
    b: float
    alpha: float = 1.0

    def to_oklab(self) -> Oklab:
        return self

    @classmethod
    def from_oklab(cls, lab: Oklab) -> Oklab:
        return lab


@dataclass(frozen=True)
class Oklch(OkColor):
    """Polar Oklab. H in degrees; 0 for achromatic colors."""
    L: float
    C: float
    H: float
    alpha: float = 1.0

    def to_oklab(self) -> Oklab:
        L, a, b = oklch_to_oklab(self.L, self.C, self.H)
        return Oklab(float(L), float(a), float(b), self.alpha)

    @classmethod
    def from_oklab(cls, lab: Oklab) -> Oklch:
        L, C, H = oklab_to_oklch(lab.L, lab.a, lab.b)
        return cls(float(L), float(C), float(H), lab.alpha)


@dataclass(frozen=True)
class Oklrch(OkColor):
    """Oklch with toe-corrected lightness Lr."""
    Lr: float
    C: float
    H: float
    alpha: float = 1.0

    def to_oklch(self) -> Oklch:
        return Oklch(float(toe_inv(self.Lr)), self.C, self.H, self.alpha)

    @classmethod
    def from_oklch(cls, lch: Oklch) -> Oklrch:
        return cls(float(toe(lch.L)), lch.C, lch.H, lch.alpha)

    def to_oklab(self) -> Oklab:
        return self.to_oklch().to_oklab()

    @classmethod
    def from_oklab(cls, lab: Oklab) -> Oklrch:
        return cls.from_oklch(Oklch.from_oklab(lab))


@dataclass(frozen=True)
class Okhsv(OkColor):
    """Hue (degrees), saturation and value against the sRGB gamut."""
    H: float
    S: float
    V: float
    alpha: float = 1.0

    def to_oklab(self) -> Oklab:
        L, a, b = okhsv_to_oklab(self.H, self.S, self.V)
        return Oklab(float(L), float(a), float(b), self.alpha)

    @classmethod
    def from_oklab(cls, lab: Oklab) -> Okhsv:
        h, s, v = oklab_to_okhsv(lab.L, lab.a, lab.b)
        return cls(float(h), float(s), float(v), lab.alpha)
