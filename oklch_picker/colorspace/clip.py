"""Bringing out-of-gamut linear RGB back into [0, 1].

Strategies:
- preserve_chroma: move toward the achromatic axis along a line of constant
  hue, anchored at the clamped lightness. Preserves hue exactly and
  lightness where possible.
- clamp: hard-clip each channel. Fast but shifts hue and lightness.

Everything here works on linear RGB; apply the sRGB transfer afterwards.
Alpha is never an input, so it cannot be changed.
"""

from typing import Literal

from oklch_picker import defaults
from . import _backend as B
from ._backend import Array
from .gamut import find_gamut_intersection
from .oklch import linear_rgb_to_oklab, oklab_to_linear_rgb

GamutPolicy = Literal['preserve_chroma', 'clamp']
GAMUT_POLICIES: tuple[str, ...] = ('preserve_chroma', 'clamp')


def in_gamut(r: Array, g: Array, b: Array) -> Array:
    """True where every channel lies in [0, 1]."""
    return (
        (r >= 0) & (r <= 1)
        & (g >= 0) & (g <= 1)
        & (b >= 0) & (b <= 1)
    )


def clamp_rgba(r: Array, g: Array, b: Array) -> tuple[Array, Array, Array]:
    """Per-channel clamp to [0, 1], no hue or chroma preservation."""
    return B.clip(r, 0.0, 1.0), B.clip(g, 0.0, 1.0), B.clip(b, 0.0, 1.0)


def is_fallback(
    original: tuple[Array, Array, Array],
    clipped: tuple[Array, Array, Array],
    threshold: float = defaults.FALLBACK_THRESHOLD,
) -> Array:
    """True where clipping moved any channel by more than ``threshold``."""
    moved = [B.abs(o - c) > threshold for o, c in zip(original, clipped)]
    return moved[0] | moved[1] | moved[2]


def gamut_clip_preserve_chroma(
    r: Array,
    g: Array,
    b: Array,
    threshold: float = defaults.FALLBACK_THRESHOLD,
    eps: float = defaults.CHROMA_EPSILON,
    cache=None,
    halley_steps: int = defaults.HALLEY_STEPS,
) -> tuple[Array, Array, Array]:
    """Clip linear RGB into gamut, keeping hue and reducing chroma.

    In-gamut values are returned unchanged. So are clips that would move
    every channel by less than ``threshold``: a color that is barely out of
    gamut is not worth reporting as a fallback.

    Args:
        r, g, b: Linear RGB channels, possibly outside [0, 1].
        threshold: Per-channel distance below which the original is kept.
        eps: Chroma floor used before normalizing to a hue direction.
        cache: Optional CuspCache for the cusp lookups.
        halley_steps: Refinement steps for the boundary intersection.

    Returns:
        (r, g, b) with every channel in [0, 1], except where the
        threshold short-circuit returned the original.
    """
    r, g, b = B.asarray(r), B.asarray(g), B.asarray(b)
    inside = in_gamut(r, g, b)

    L, lab_a, lab_b = linear_rgb_to_oklab(r, g, b)
    C = B.clip(B.sqrt(lab_a * lab_a + lab_b * lab_b), eps, None)
    a_ = lab_a / C
    b_ = lab_b / C

    # Anchor on the achromatic axis, which is always in gamut
    L0 = B.clip(L, 0.0, 1.0)

    t = find_gamut_intersection(a_, b_, L, C, L0, cache=cache, halley_steps=halley_steps)
    L_clipped = L0 * (1.0 - t) + t * L
    C_clipped = t * C

    clipped = clamp_rgba(*oklab_to_linear_rgb(L_clipped, C_clipped * a_, C_clipped * b_))

    keep = inside | ~is_fallback((r, g, b), clipped, threshold)
    return tuple(B.where(keep, o, c) for o, c in zip((r, g, b), clipped))


def gamut_map(
    r: Array,
    g: Array,
    b: Array,
    policy: GamutPolicy = defaults.DEFAULT_GAMUT_POLICY,
    threshold: float = defaults.FALLBACK_THRESHOLD,
    cache=None,
) -> tuple[tuple[Array, Array, Array], Array]:
    """Map linear RGB into gamut with the named policy.

    Returns:
        ((r, g, b), fallback) where fallback marks colors that had to move
        visibly. The clamp policy never reports a fallback.

    Raises:
        ValueError: If policy is not one of GAMUT_POLICIES.
    """
    if policy == 'preserve_chroma':
        clipped = gamut_clip_preserve_chroma(r, g, b, threshold=threshold, cache=cache)
        return clipped, is_fallback((r, g, b), clipped, threshold)

    elif policy == 'clamp':
        clipped = clamp_rgba(r, g, b)
        return clipped, B.full_like(clipped[0], 0.0) > 1.0

    raise ValueError(f"Unknown gamut policy: {policy}")
