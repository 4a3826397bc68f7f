"""Central place for oklch-picker default settings."""

# Gamut geometry
HALLEY_STEPS: int = 1  # Halley corrections per root solve; 2-3 for offline precision
CHROMA_EPSILON: float = 1e-5  # Floor for chroma before normalizing (a, b) to a hue direction
DIVISION_EPSILON: float = 1e-12  # Floor for every other guarded denominator

# Gamut clipping
FALLBACK_THRESHOLD: float = 0.003  # Clips closer than this (per linear channel) are ignored
DEFAULT_GAMUT_POLICY: str = "preserve_chroma"

# Okhsv
OKHSV_S0: float = 0.5  # Saturation softening of the gamut triangle

# Cusp cache
CUSP_CACHE_RESOLUTION: int = 4096  # Hue buckets around the full circle

# Picker state
DEFAULT_PICKER_MODE: str = "oklrch"
CHROMA_MAX: float = 0.37  # Upper end of the chroma slider
ACHROMATIC_CHROMA: float = 1e-6  # Below this, hue is kept from the previous color
