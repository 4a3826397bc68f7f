"""Test configuration for oklch_picker."""

import pytest

from oklch_picker.colorspace import LinearRGBA


@pytest.fixture
def red():
    """A saturated in-gamut red with partial alpha."""
    return LinearRGBA(0.8, 0.1, 0.05, 0.9)


@pytest.fixture
def gray():
    return LinearRGBA(0.5, 0.5, 0.5, 1.0)
