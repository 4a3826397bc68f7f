"""Perceptual color picking in the Oklab family of color spaces.

The numeric core lives in :mod:`oklch_picker.colorspace`; :mod:`oklch_picker.picker`
holds the interactive color state built on top of it.
"""

__version__ = "1.6.3"
