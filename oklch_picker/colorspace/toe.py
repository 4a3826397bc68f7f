"""Toe function pair and the Oklrch lightness scale.

Oklab's L is too dark in the shadows compared to CIELab's L*. The toe
function warps it into Lr, which spaces dark steps more evenly:

    toe(L)      = 0.5 * (k3*L - k1 + sqrt((k3*L - k1)^2 + 4*k2*k3*L))
    toe_inv(Lr) = Lr * (Lr + k1) / (k3 * (Lr + k2))

Both map 0 -> 0 and 1 -> 1 and are strictly increasing. toe_inv has a pole
at Lr = -k2 that toe never reaches, so toe_inv(toe(L)) == L for every L,
while toe(toe_inv(Lr)) == Lr holds for Lr > -k2.
"""

from . import _backend as B
from ._backend import Array
from .oklch import oklch_to_oklab, oklab_to_oklch

K1 = 0.206
K2 = 0.03
K3 = (1.0 + K1) / (1.0 + K2)

_POLE_EPSILON = 1e-12


def toe(L: Array) -> Array:
    """Oklab lightness L -> perceptual lightness Lr."""
    x = K3 * L - K1
    # The discriminant is positive for every real L; the clamp only absorbs rounding
    disc = B.clip(x * x + 4.0 * K2 * K3 * L, 0.0, None)
    return 0.5 * (x + B.sqrt(disc))


def toe_inv(Lr: Array) -> Array:
    """Perceptual lightness Lr -> Oklab lightness L."""
    denom = B.nonzero(K3 * (Lr + K2), _POLE_EPSILON)
    return Lr * (Lr + K1) / denom


def oklch_to_oklrch(L: Array, C: Array, H: Array) -> tuple[Array, Array, Array]:
    """Oklch -> Oklrch. C and H pass through."""
    return toe(L), C, H


def oklrch_to_oklch(Lr: Array, C: Array, H: Array) -> tuple[Array, Array, Array]:
    """Oklrch -> Oklch. C and H pass through."""
    return toe_inv(Lr), C, H


def oklrch_to_oklab(Lr: Array, C: Array, H: Array) -> tuple[Array, Array, Array]:
    return oklch_to_oklab(toe_inv(Lr), C, H)


def oklab_to_oklrch(L: Array, a: Array, b: Array) -> tuple[Array, Array, Array]:
    return oklch_to_oklrch(*oklab_to_oklch(L, a, b))
