"""
config.py — Planet Configuration and Boundary Validation
==========================================================

Every option is range-checked here, before any buffer is allocated.
The builders and the synthesizer assume valid input once invoked.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .errors import ConfigurationError
from .gradient import DEFAULT_PLANET_STOPS, validate_stops
from .noise import NoiseType, as_noise_type


# ============================================================
# Ranges
# ============================================================

RESOLUTION_RANGE = (2, 512)
TEXTURE_RESOLUTION_RANGE = (1, 4096)
OCTAVES_RANGE = (1, 8)
LACUNARITY_RANGE = (1.0, 4.0)
PERSISTENCE_RANGE = (0.0, 1.0)
SEED_RANGE = (-2**31, 2**31 - 1)


@dataclass(frozen=True)
class PlanetConfig:
    """
    Parameters for one planet instance.

    lacunarity/persistence of None select the tuning of the active noise
    family (see noise.NOISE_TUNING).  seed of None draws a random seed
    when the controller starts.
    """
    resolution: int = 64
    texture_resolution: int = 256
    seed: Optional[int] = None
    noise_type: NoiseType = NoiseType.VALUE
    octaves: int = 5
    lacunarity: Optional[float] = None
    persistence: Optional[float] = None
    radius: float = 5.0
    gradient: List[tuple] = field(default_factory=lambda: list(DEFAULT_PLANET_STOPS))


# ============================================================
# Validators
# ============================================================

def _check_int(name, value, bounds):
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an int, got {value!r}")
    if not lo <= value <= hi:
        raise ConfigurationError(f"{name} must be in [{lo}, {hi}], got {value}")


def _check_float(name, value, bounds):
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    if not lo <= value <= hi:
        raise ConfigurationError(f"{name} must be in [{lo}, {hi}], got {value}")


def check_resolution(resolution):
    _check_int("resolution", resolution, RESOLUTION_RANGE)


def check_texture_resolution(texture_resolution):
    _check_int("texture_resolution", texture_resolution, TEXTURE_RESOLUTION_RANGE)


def check_radius(radius):
    if isinstance(radius, bool) or not isinstance(radius, (int, float, np.floating)):
        raise ConfigurationError(f"radius must be a number, got {radius!r}")
    if not radius > 0:
        raise ConfigurationError(f"radius must be positive, got {radius}")


def check_seed(seed):
    _check_int("seed", seed, SEED_RANGE)


def validate_config(config):
    """Raise ConfigurationError on the first out-of-range option."""
    check_resolution(config.resolution)
    check_texture_resolution(config.texture_resolution)
    if config.seed is not None:
        check_seed(config.seed)
    as_noise_type(config.noise_type)
    _check_int("octaves", config.octaves, OCTAVES_RANGE)
    if config.lacunarity is not None:
        _check_float("lacunarity", config.lacunarity, LACUNARITY_RANGE)
    if config.persistence is not None:
        _check_float("persistence", config.persistence, PERSISTENCE_RANGE)
    check_radius(config.radius)
    validate_stops(config.gradient)
    return config


# ============================================================
# Seeds
# ============================================================

def parse_seed(text):
    """Parse a user-entered seed; malformed or out-of-range text is rejected."""
    try:
        seed = int(str(text).strip())
    except ValueError as exc:
        raise ConfigurationError(f"malformed seed: {text!r}") from exc
    check_seed(seed)
    return seed


def random_seed(rng=None):
    """Draw a seed uniformly from the signed 32-bit range."""
    if rng is None:
        rng = np.random.default_rng()
    lo, hi = SEED_RANGE
    return int(rng.integers(lo, hi, endpoint=True))
