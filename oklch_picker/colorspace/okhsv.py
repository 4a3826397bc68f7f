"""Okhsv <-> Oklab.

Okhsv reshapes each hue slice of the sRGB gamut into the unit square: V=1
is the upper gamut boundary and S=1 the lower one, so (S=1, V=1) is the
cusp. The slice is first treated as the triangle black-white-cusp, with
saturation softened by S_0; the toe and a final rescale then bend the
triangle onto the true curved boundary.

Reference: https://bottosson.github.io/posts/colorpicker/

Hue is in degrees, matching Oklch. An achromatic color has hue 0 and S=0;
black has S=0 and V=0.
"""

from math import pi

from oklch_picker import defaults
from . import _backend as B
from ._backend import Array
from .gamut import find_cusp, to_st
from .oklch import hue_from_ab, oklab_to_linear_rgb
from .toe import toe, toe_inv


def _rgb_scale(L_vt: Array, C_vt: Array, a_: Array, b_: Array) -> Array:
    """Factor that moves the V=1 edge color onto the gamut surface."""
    r, g, b = oklab_to_linear_rgb(L_vt, a_ * C_vt, b_ * C_vt)
    rgb_max = B.clip(B.maximum(B.maximum(r, g), b), defaults.DIVISION_EPSILON, None)
    return B.cbrt(1.0 / rgb_max)


def okhsv_to_oklab(
    h: Array,
    s: Array,
    v: Array,
    cache=None,
    halley_steps: int = defaults.HALLEY_STEPS,
    s0: float = defaults.OKHSV_S0,
) -> tuple[Array, Array, Array]:
    """Okhsv (hue degrees, s and v in [0, 1]) -> Oklab."""
    eps = defaults.DIVISION_EPSILON
    h, s, v = B.asarray(h), B.asarray(s), B.asarray(v)

    h_rad = h * (pi / 180)
    a_ = B.cos(h_rad)
    b_ = B.sin(h_rad)

    S_max, T_max = to_st(*find_cusp(a_, b_, cache, halley_steps))
    k = 1.0 - s0 / B.nonzero(S_max, eps)

    # Position on the idealized triangle
    denom = B.nonzero(s0 + T_max - T_max * k * s, eps)
    L_v = 1.0 - s * s0 / denom
    C_v = s * T_max * s0 / denom

    L = v * L_v
    C = v * C_v

    # Compensate for the toe and the curved upper boundary
    L_vt = toe_inv(L_v)
    C_vt = C_v * L_vt / B.nonzero(L_v, eps)

    L_new = toe_inv(L)
    C = C * L_new / B.nonzero(L, eps)
    L = L_new

    scale_L = _rgb_scale(L_vt, C_vt, a_, b_)
    L = L * scale_L
    C = C * scale_L

    black = v <= 0
    zero = B.full_like(L, 0.0)
    L = B.where(black, zero, L)
    C = B.where(black, zero, C)
    return L, C * a_, C * b_


def oklab_to_okhsv(
    L: Array,
    a: Array,
    b: Array,
    cache=None,
    halley_steps: int = defaults.HALLEY_STEPS,
    s0: float = defaults.OKHSV_S0,
) -> tuple[Array, Array, Array]:
    """Oklab -> Okhsv (hue degrees, s and v in [0, 1] for in-gamut colors)."""
    eps = defaults.DIVISION_EPSILON
    L, a, b = B.asarray(L), B.asarray(a), B.asarray(b)

    C = B.sqrt(a * a + b * b)
    achromatic = C <= 0
    # Any direction works at zero chroma; (1, 0) keeps the math finite
    C_safe = B.where(achromatic, B.full_like(C, 1.0), C)
    a_ = B.where(achromatic, B.full_like(C, 1.0), a / C_safe)
    b_ = B.where(achromatic, B.full_like(C, 0.0), b / C_safe)

    h = hue_from_ab(a, b)

    S_max, T_max = to_st(*find_cusp(a_, b_, cache, halley_steps))
    k = 1.0 - s0 / B.nonzero(S_max, eps)

    # Undo the rescale and toe, in reverse order
    t = T_max / B.nonzero(C + L * T_max, eps)
    L_v = t * L
    C_v = t * C

    L_vt = toe_inv(L_v)
    C_vt = C_v * L_vt / B.nonzero(L_v, eps)

    scale_L = _rgb_scale(L_vt, C_vt, a_, b_)
    L = L / scale_L
    C = C / scale_L

    L_r = toe(L)
    C = C * L_r / B.nonzero(L, eps)
    L = L_r

    # Then the saturation mix
    v = L / B.nonzero(L_v, eps)
    s = (s0 + T_max) * C_v / B.nonzero(T_max * s0 + T_max * k * C_v, eps)

    black = L <= 0
    zero = B.full_like(v, 0.0)
    s = B.where(black | achromatic, zero, s)
    v = B.where(black, zero, v)
    return h, s, v
