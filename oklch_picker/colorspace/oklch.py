"""Oklab / Oklch conversions and the sRGB transfer function.

Reference: https://bottosson.github.io/posts/oklab/

All functions accept plain floats, numpy arrays or torch tensors and work
element-wise. Gamut handling lives in :mod:`.clip`; nothing here clamps.
"""

from math import pi

import numpy as np

from . import _backend as B
from ._backend import Array

# === Oklab <-> Linear RGB matrices ===
# From Björn Ottosson's reference implementation

# Linear RGB -> LMS
_RGB_TO_LMS = (
    (0.4122214708, 0.5363325363, 0.0514459929),
    (0.2119034982, 0.6806995451, 0.1073969566),
    (0.0883024619, 0.2817188376, 0.6299787005),
)

# LMS cube root -> Oklab
_LMS_TO_OKLAB = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)

# Oklab -> LMS cube root
OKLAB_TO_LMS = (
    (1.0, 0.3963377774, 0.2158037573),
    (1.0, -0.1055613458, -0.0638541728),
    (1.0, -0.0894841775, -1.2914855480),
)

# LMS -> Linear RGB
LMS_TO_RGB = (
    (+4.0767416621, -3.3077115913, +0.2309699292),
    (-1.2684380046, +2.6097574011, -0.3413193965),
    (-0.0041960863, -0.7034186147, +1.7076147010),
)


# === Core Conversions ===

def oklab_to_linear_rgb(L: Array, a: Array, b: Array) -> tuple[Array, Array, Array]:
    """Oklab -> Linear RGB via LMS intermediate."""
    l_ = L + OKLAB_TO_LMS[0][1] * a + OKLAB_TO_LMS[0][2] * b
    m_ = L + OKLAB_TO_LMS[1][1] * a + OKLAB_TO_LMS[1][2] * b
    s_ = L + OKLAB_TO_LMS[2][1] * a + OKLAB_TO_LMS[2][2] * b

    l, m, s = l_**3, m_**3, s_**3

    r = LMS_TO_RGB[0][0]*l + LMS_TO_RGB[0][1]*m + LMS_TO_RGB[0][2]*s
    g = LMS_TO_RGB[1][0]*l + LMS_TO_RGB[1][1]*m + LMS_TO_RGB[1][2]*s
    b = LMS_TO_RGB[2][0]*l + LMS_TO_RGB[2][1]*m + LMS_TO_RGB[2][2]*s

    return r, g, b


def linear_rgb_to_oklab(r: Array, g: Array, b: Array) -> tuple[Array, Array, Array]:
    """Linear RGB -> Oklab via LMS intermediate."""
    l = _RGB_TO_LMS[0][0]*r + _RGB_TO_LMS[0][1]*g + _RGB_TO_LMS[0][2]*b
    m = _RGB_TO_LMS[1][0]*r + _RGB_TO_LMS[1][1]*g + _RGB_TO_LMS[1][2]*b
    s = _RGB_TO_LMS[2][0]*r + _RGB_TO_LMS[2][1]*g + _RGB_TO_LMS[2][2]*b

    # Sign-preserving so out-of-gamut inputs stay invertible
    l_, m_, s_ = B.cbrt(l), B.cbrt(m), B.cbrt(s)

    L = _LMS_TO_OKLAB[0][0]*l_ + _LMS_TO_OKLAB[0][1]*m_ + _LMS_TO_OKLAB[0][2]*s_
    a = _LMS_TO_OKLAB[1][0]*l_ + _LMS_TO_OKLAB[1][1]*m_ + _LMS_TO_OKLAB[1][2]*s_
    b = _LMS_TO_OKLAB[2][0]*l_ + _LMS_TO_OKLAB[2][1]*m_ + _LMS_TO_OKLAB[2][2]*s_

    return L, a, b


def hue_from_ab(a: Array, b: Array) -> Array:
    """Hue angle of (a, b) in degrees, wrapped to [0, 360).

    Achromatic colors (a == b == 0, either sign of zero) get hue 0.
    """
    H = (B.atan2(b, a) * (180 / pi)) % 360
    # Tiny negative angles wrap to exactly 360.0 in floating point
    H = B.where(H >= 360, H - 360, H)
    return B.where((a == 0) & (b == 0), 0.0 * H, H)


def oklch_to_oklab(L: Array, C: Array, H: Array) -> tuple[Array, Array, Array]:
    """Oklch -> Oklab. H in degrees."""
    H_rad = H * (pi / 180)
    a = C * B.cos(H_rad)
    b = C * B.sin(H_rad)
    return L, a, b


def oklab_to_oklch(L: Array, a: Array, b: Array) -> tuple[Array, Array, Array]:
    """Oklab -> Oklch. Returns H in degrees [0, 360), 0 where C == 0."""
    C = B.sqrt(a**2 + b**2)
    return L, C, hue_from_ab(a, b)


# === sRGB transfer function ===

def linear_to_srgb(x: Array) -> Array:
    """Linear RGB -> sRGB gamma encoding (per channel)."""
    threshold = 0.0031308
    low = x * 12.92
    high = 1.055 * B.clip(x, 1e-10, None) ** (1/2.4) - 0.055
    return B.where(x <= threshold, low, high)


def srgb_to_linear(x: Array) -> Array:
    """sRGB -> Linear RGB gamma decoding (per channel)."""
    threshold = 0.04045
    low = x / 12.92
    high = ((B.clip(x, threshold, None) + 0.055) / 1.055) ** 2.4
    return B.where(x <= threshold, low, high)


def srgb_u8_to_linear(rgba: Array) -> tuple[Array, Array, Array, Array]:
    """Unpack 8-bit sRGB(A) into linear channels.

    Args:
        rgba: Integer array with shape (..., 4) or (..., 3), values 0-255.
              A missing alpha channel is treated as opaque.

    Returns:
        (r, g, b, alpha) float64 arrays; alpha is linear, not gamma decoded.
    """
    arr = np.asarray(rgba, dtype=np.float64) / 255.0
    r, g, b = (srgb_to_linear(arr[..., i]) for i in range(3))
    alpha = arr[..., 3] if arr.shape[-1] > 3 else np.ones_like(arr[..., 0])
    return r, g, b, alpha


def linear_to_srgb_u8(r: Array, g: Array, b: Array, alpha: Array = 1.0) -> np.ndarray:
    """Pack linear channels into 8-bit sRGBA with shape (..., 4).

    Channels are clamped to [0, 1] before quantizing. Callers that care
    about hue should gamut-clip first; this only clamps.
    """
    channels = [B.to_numpy(c).astype(np.float64) for c in (r, g, b)]
    encoded = [linear_to_srgb(np.clip(c, 0.0, 1.0)) for c in channels]
    alpha_np = np.broadcast_to(B.to_numpy(alpha).astype(np.float64), encoded[0].shape)
    out = np.stack(encoded + [np.clip(alpha_np, 0.0, 1.0)], axis=-1)
    return np.rint(out * 255.0).astype(np.uint8)


# === Convenience Composites ===

def oklch_to_linear_rgb(L: Array, C: Array, H: Array) -> tuple[Array, Array, Array]:
    """Oklch -> Linear RGB (no gamma encoding)."""
    return oklab_to_linear_rgb(*oklch_to_oklab(L, C, H))


def linear_rgb_to_oklch(r: Array, g: Array, b: Array) -> tuple[Array, Array, Array]:
    """Linear RGB -> Oklch."""
    return oklab_to_oklch(*linear_rgb_to_oklab(r, g, b))


def oklch_to_srgb(L: Array, C: Array, H: Array) -> Array:
    """Oklch -> sRGB in one call.

    Args:
        L: Lightness (0-1)
        C: Chroma (0-~0.4)
        H: Hue in degrees (0-360)

    Returns:
        RGB array with shape (..., 3), values may be outside [0,1] if out of gamut
    """
    r, g, b = oklch_to_linear_rgb(L, C, H)
    return B.stack([linear_to_srgb(r), linear_to_srgb(g), linear_to_srgb(b)], axis=-1)


def srgb_to_oklch(rgb: Array) -> tuple[Array, Array, Array]:
    """sRGB -> Oklch.

    Args:
        rgb: RGB array with shape (..., 3), values in [0,1]

    Returns:
        (L, C, H) tuple
    """
    r, g, b = (srgb_to_linear(rgb[..., i]) for i in range(3))
    return linear_rgb_to_oklch(r, g, b)
