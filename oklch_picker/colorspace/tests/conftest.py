"""Shared fixtures for colorspace tests."""

import numpy as np
import pytest

from oklch_picker.colorspace import CuspCache


@pytest.fixture
def rng():
    """Seeded generator so property tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def cold_cache():
    """A fresh cusp cache that has not been built yet."""
    return CuspCache()
