"""Oklab-family color space conversions and sRGB gamut mapping.

This package provides:
- Linear RGB <-> Oklab <-> Oklch <-> Oklrch conversions
- Okhsv <-> Oklab, built on the gamut geometry
- Gamut geometry: max saturation, cusp and boundary intersection per hue
- Gamut clipping that preserves hue, or plain clamping
- Value types for handling one color at a time
- Backend-agnostic: works with floats, numpy arrays or torch tensors

Example:
    import numpy as np
    from oklch_picker.colorspace import oklch_to_linear_rgb, gamut_clip_preserve_chroma

    r, g, b = oklch_to_linear_rgb(np.array([0.5]), np.array([0.4]), np.array([30.0]))
    r, g, b = gamut_clip_preserve_chroma(r, g, b)
"""

from .oklch import (
    oklch_to_oklab,
    oklab_to_oklch,
    oklab_to_linear_rgb,
    linear_rgb_to_oklab,
    linear_rgb_to_oklch,
    hue_from_ab,
    linear_to_srgb,
    srgb_to_linear,
    linear_to_srgb_u8,
    srgb_u8_to_linear,
    oklch_to_srgb,
    srgb_to_oklch,
    oklch_to_linear_rgb,
)

from .toe import (
    toe,
    toe_inv,
    oklch_to_oklrch,
    oklrch_to_oklch,
    oklab_to_oklrch,
    oklrch_to_oklab,
)

from .gamut import (
    compute_max_saturation,
    find_cusp,
    find_gamut_intersection,
    to_st,
    CuspCache,
)

from .okhsv import okhsv_to_oklab, oklab_to_okhsv

from .clip import (
    GAMUT_POLICIES,
    in_gamut,
    is_fallback,
    clamp_rgba,
    gamut_clip_preserve_chroma,
    gamut_map,
)

from .colors import LinearRGBA, Oklab, Oklch, Oklrch, Okhsv

__all__ = [
    # Value types
    'LinearRGBA',
    'Oklab',
    'Oklch',
    'Oklrch',
    'Okhsv',
    # Oklab / Oklch conversions
    'oklch_to_oklab',
    'oklab_to_oklch',
    'oklab_to_linear_rgb',
    'linear_rgb_to_oklab',
    'linear_rgb_to_oklch',
    'hue_from_ab',
    'oklch_to_srgb',
    'srgb_to_oklch',
    'oklch_to_linear_rgb',
    # sRGB transfer
    'linear_to_srgb',
    'srgb_to_linear',
    'linear_to_srgb_u8',
    'srgb_u8_to_linear',
    # Toe / Oklrch
    'toe',
    'toe_inv',
    'oklch_to_oklrch',
    'oklrch_to_oklch',
    'oklab_to_oklrch',
    'oklrch_to_oklab',
    # Okhsv
    'okhsv_to_oklab',
    'oklab_to_okhsv',
    # Gamut geometry
    'compute_max_saturation',
    'find_cusp',
    'find_gamut_intersection',
    'to_st',
    'CuspCache',
    # Gamut mapping
    'GAMUT_POLICIES',
    'in_gamut',
    'is_fallback',
    'clamp_rgba',
    'gamut_clip_preserve_chroma',
    'gamut_map',
]
