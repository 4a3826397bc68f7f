"""Gamut geometry of sRGB in Oklab.

For a fixed hue, the sRGB gamut seen in the (L, C) half-plane is close to a
triangle with corners at black (0, 0), white (1, 0) and a cusp of maximum
chroma. The functions here find that cusp and intersect rays with the true
(slightly curved) boundary, following Björn Ottosson's gamut clipping
derivation: https://bottosson.github.io/posts/gamutclipping/

Hue directions (a, b) are always unit vectors in the Oklab chroma plane.
Each root solve starts from a closed-form or polynomial estimate and is
refined with ``halley_steps`` steps of Halley's method. One step is plenty
for interactive use; two or three get close to float precision.
"""

import logging
from math import inf, pi

import numpy as np

from oklch_picker import defaults
from . import _backend as B
from ._backend import Array
from .oklch import LMS_TO_RGB, OKLAB_TO_LMS, oklab_to_linear_rgb

logger = logging.getLogger(__name__)

# Polynomial fit of max saturation (k0..k4), per limiting channel.
# The LMS -> RGB row of the same channel supplies the Halley weights.
_SATURATION_FITS = (
    (1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245),     # red
    (0.73956515, -0.45954404, 0.08285427, 0.12541070, 0.14503204),    # green
    (1.35733652, -0.00915799, -1.15130210, -0.50559606, 0.00692167),  # blue
)


def _check_steps(halley_steps: int) -> None:
    if halley_steps < 0:
        raise ValueError(f"halley_steps must be >= 0, got {halley_steps}")


def _lms_coefficients(a: Array, b: Array) -> tuple[Array, Array, Array]:
    """How far each cube-root LMS channel moves per unit chroma along (a, b)."""
    k_l = OKLAB_TO_LMS[0][1] * a + OKLAB_TO_LMS[0][2] * b
    k_m = OKLAB_TO_LMS[1][1] * a + OKLAB_TO_LMS[1][2] * b
    k_s = OKLAB_TO_LMS[2][1] * a + OKLAB_TO_LMS[2][2] * b
    return k_l, k_m, k_s


def _dot(w: tuple[float, float, float], l: Array, m: Array, s: Array) -> Array:
    return w[0] * l + w[1] * m + w[2] * s


def _halley_step(f: Array, f1: Array, f2: Array) -> Array:
    """Halley correction f*f1 / (f1^2 - f*f2/2); zero where the denominator vanishes."""
    denom = f1 * f1 - 0.5 * f * f2
    step = f * f1 / B.nonzero(denom, defaults.DIVISION_EPSILON)
    return B.where(B.abs(denom) < defaults.DIVISION_EPSILON, B.full_like(step, 0.0), step)


def compute_max_saturation(a: Array, b: Array, halley_steps: int = defaults.HALLEY_STEPS) -> Array:
    """Maximum saturation S = C/L along hue (a, b) before R, G or B goes below zero.

    Args:
        a, b: Unit hue direction in the Oklab chroma plane.
        halley_steps: Refinement steps after the polynomial estimate.

    Returns:
        S_max, same shape as a.
    """
    _check_steps(halley_steps)
    a, b = B.asarray(a), B.asarray(b)

    # Pick the channel that clips first for this hue
    red = -1.88170328 * a - 0.80936493 * b > 1
    green = ~red & (1.81444104 * a - 1.19445276 * b > 1)
    blue = ~(red | green)

    k0, k1, k2, k3, k4 = (
        red * r_k + green * g_k + blue * b_k
        for r_k, g_k, b_k in zip(*_SATURATION_FITS)
    )
    wl, wm, ws = (
        red * r_w + green * g_w + blue * b_w
        for r_w, g_w, b_w in zip(LMS_TO_RGB[0], LMS_TO_RGB[1], LMS_TO_RGB[2])
    )

    S = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    k_l, k_m, k_s = _lms_coefficients(a, b)
    for _ in range(halley_steps):
        l_ = 1.0 + S * k_l
        m_ = 1.0 + S * k_m
        s_ = 1.0 + S * k_s

        f = wl * l_**3 + wm * m_**3 + ws * s_**3
        f1 = 3.0 * (wl * k_l * l_**2 + wm * k_m * m_**2 + ws * k_s * s_**2)
        f2 = 6.0 * (wl * k_l**2 * l_ + wm * k_m**2 * m_ + ws * k_s**2 * s_)

        S = S - _halley_step(f, f1, f2)

    return S


def find_cusp(
    a: Array,
    b: Array,
    cache: "CuspCache | None" = None,
    halley_steps: int = defaults.HALLEY_STEPS,
) -> tuple[Array, Array]:
    """(L_cusp, C_cusp): the most chromatic in-gamut point along hue (a, b).

    If a cache is given the cusp comes from its hue table instead.
    """
    if cache is not None:
        return cache.lookup(a, b)

    S_cusp = compute_max_saturation(a, b, halley_steps)

    # Scale the L=1 color at max saturation down until its brightest channel is 1
    r, g, b_ = oklab_to_linear_rgb(1.0, S_cusp * a, S_cusp * b)
    rgb_max = B.maximum(B.maximum(r, g), b_)
    L_cusp = B.cbrt(1.0 / B.clip(rgb_max, defaults.DIVISION_EPSILON, None))
    return L_cusp, L_cusp * S_cusp


def to_st(L_cusp: Array, C_cusp: Array) -> tuple[Array, Array]:
    """Slopes of the gamut triangle's lower (S) and upper (T) edges."""
    S = C_cusp / B.nonzero(L_cusp, defaults.DIVISION_EPSILON)
    T = C_cusp / B.nonzero(1.0 - L_cusp, defaults.DIVISION_EPSILON)
    return S, T


def find_gamut_intersection(
    a: Array,
    b: Array,
    L1: Array,
    C1: Array,
    L0: Array,
    cusp: tuple[Array, Array] | None = None,
    cache: "CuspCache | None" = None,
    halley_steps: int = defaults.HALLEY_STEPS,
) -> Array:
    """Where the segment (L0, 0) -> (L1, C1) leaves the gamut, as t in [0, 1].

    The segment lies in the plane of hue (a, b). (L0, 0) must be in gamut.

    Args:
        a, b: Unit hue direction.
        L1, C1: Target point, possibly out of gamut.
        L0: Lightness of the achromatic anchor.
        cusp: Precomputed (L_cusp, C_cusp) for this hue, if the caller has it.
        cache: CuspCache to take the cusp from when ``cusp`` is not given.
        halley_steps: Refinement steps against the curved upper boundary.
    """
    _check_steps(halley_steps)
    if cusp is None:
        cusp = find_cusp(a, b, cache, halley_steps)
    L_c, C_c = cusp
    eps = defaults.DIVISION_EPSILON

    # Which side of the line through the anchor and the cusp the target is on
    lower = ((L1 - L0) * C_c - (L_c - L0) * C1) <= 0

    # Lower half: the boundary is exactly the straight black-cusp edge
    t_lower = C_c * L0 / B.nonzero(C1 * L_c + C_c * (L0 - L1), eps)

    # Upper half: intersect the cusp-white edge, then correct for its curvature
    t = C_c * (L0 - 1.0) / B.nonzero(C1 * (L_c - 1.0) + C_c * (L0 - L1), eps)
    t = B.where(lower, B.full_like(t, 0.0), t)

    dL = L1 - L0
    dC = C1
    k_l, k_m, k_s = _lms_coefficients(a, b)
    l_dt = dL + dC * k_l
    m_dt = dL + dC * k_m
    s_dt = dL + dC * k_s

    for _ in range(halley_steps):
        L = L0 * (1.0 - t) + t * L1
        C = t * C1

        l_ = L + C * k_l
        m_ = L + C * k_m
        s_ = L + C * k_s

        l, m, s = l_**3, m_**3, s_**3
        ldt = 3.0 * l_dt * l_**2
        mdt = 3.0 * m_dt * m_**2
        sdt = 3.0 * s_dt * s_**2
        ldt2 = 6.0 * l_dt**2 * l_
        mdt2 = 6.0 * m_dt**2 * m_
        sdt2 = 6.0 * s_dt**2 * s_

        # Step to each of the R=1, G=1, B=1 planes; keep the first one hit
        correction = None
        for w in LMS_TO_RGB:
            f = _dot(w, l, m, s) - 1.0
            f1 = _dot(w, ldt, mdt, sdt)
            f2 = _dot(w, ldt2, mdt2, sdt2)

            u = f1 / B.nonzero(f1 * f1 - 0.5 * f * f2, eps)
            t_w = B.where(u >= 0, -f * u, B.full_like(u, inf))
            correction = t_w if correction is None else B.minimum(correction, t_w)

        correction = B.where(correction == inf, B.full_like(correction, 0.0), correction)
        t = t + correction

    return B.where(lower, t_lower, t)


class CuspCache:
    """Cusp lookup table keyed by quantized hue.

    Replaces the per-call Halley solve in find_cusp with a table of
    ``resolution`` hue buckets, built on first lookup. Lookups snap to the
    nearest bucket, so results differ from the exact cusp by up to half a
    bucket of hue. The table is never modified after it is built; sharing
    one cache between threads is safe.
    """

    def __init__(
        self,
        resolution: int = defaults.CUSP_CACHE_RESOLUTION,
        halley_steps: int = defaults.HALLEY_STEPS,
    ):
        if resolution < 1:
            raise ValueError(f"CuspCache resolution must be >= 1, got {resolution}")
        _check_steps(halley_steps)
        self.resolution = resolution
        self.halley_steps = halley_steps
        self._table: np.ndarray | None = None

    @property
    def is_built(self) -> bool:
        return self._table is not None

    def bucket_hues(self) -> np.ndarray:
        """Hue angle (radians) at the center of each bucket."""
        return np.arange(self.resolution, dtype=np.float64) * (2 * pi / self.resolution)

    def build(self) -> np.ndarray:
        """Compute the (2, resolution) table of cusp L and C."""
        angles = self.bucket_hues()
        L, C = find_cusp(np.cos(angles), np.sin(angles), halley_steps=self.halley_steps)
        table = np.stack([L, C])
        logger.debug("Built cusp cache with %d hue buckets", self.resolution)
        self._table = table
        return table

    def clear(self) -> None:
        self._table = None

    def bucket(self, a: Array, b: Array) -> np.ndarray:
        """Index of the hue bucket nearest to direction (a, b)."""
        angle = np.arctan2(B.to_numpy(b), B.to_numpy(a))
        return np.rint(angle * (self.resolution / (2 * pi))).astype(np.int64) % self.resolution

    def lookup(self, a: Array, b: Array) -> tuple[Array, Array]:
        table = self._table if self._table is not None else self.build()
        idx = self.bucket(a, b)
        L = np.asarray(table[0][idx])
        C = np.asarray(table[1][idx])
        return B.from_numpy(L, a), B.from_numpy(C, a)
