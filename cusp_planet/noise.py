"""
noise.py — Lattice Noise and Fractal Summation
================================================

Hash-lattice noise in 3D, vectorised over points shaped (..., 3):

    value_3d   — smooth value noise, output in [0, 1]
    perlin_3d  — Perlin gradient noise, output in [-1, 1]
    fractal_sum — octave sum with lacunarity/persistence, normalised by
                  the total amplitude so the output keeps the range of
                  the underlying method

Lattice coordinates are wrapped through Ken Perlin's 256-entry
permutation table, duplicated so that nested lookups never need a
second wrap.

make_noise_fn bundles a family, its tuning constants and the [0, 1]
remap into a single jit-compiled sampling function.  The texture
synthesizer only ever sees that function.
"""

from enum import Enum

import jax
import jax.numpy as jnp

from .errors import ConfigurationError


# ============================================================
# Hash table and gradients
# ============================================================

_PERMUTATION = [
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
]

HASH_MASK = 255
HASH = jnp.array(_PERMUTATION + _PERMUTATION, dtype=jnp.int32)   # (512,)

# 12 cube-edge directions, 4 repeated to fill a power of two
GRADIENTS_3D = jnp.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    [1, 1, 0], [-1, 1, 0], [0, -1, 1], [0, -1, -1],
], dtype=jnp.float32)
GRADIENTS_MASK_3D = 15


# ============================================================
# Helpers
# ============================================================

def _smooth(t):
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a, b, t):
    return a + (b - a) * t


def _lattice(point, frequency):
    """Wrapped lower/upper lattice indices and the fractional position."""
    p = jnp.asarray(point) * frequency
    cell = jnp.floor(p)
    t = p - cell
    i0 = jnp.bitwise_and(cell.astype(jnp.int32), HASH_MASK)
    return i0, i0 + 1, t


def _corner_hashes(i0, i1):
    """Hash values at the 8 cell corners, keyed 'xyz' with 0/1 per axis."""
    h0 = HASH[i0[..., 0]]
    h1 = HASH[i1[..., 0]]
    h00 = HASH[h0 + i0[..., 1]]
    h10 = HASH[h1 + i0[..., 1]]
    h01 = HASH[h0 + i1[..., 1]]
    h11 = HASH[h1 + i1[..., 1]]
    return {
        '000': HASH[h00 + i0[..., 2]], '100': HASH[h10 + i0[..., 2]],
        '010': HASH[h01 + i0[..., 2]], '110': HASH[h11 + i0[..., 2]],
        '001': HASH[h00 + i1[..., 2]], '101': HASH[h10 + i1[..., 2]],
        '011': HASH[h01 + i1[..., 2]], '111': HASH[h11 + i1[..., 2]],
    }


def _trilinear(c, tx, ty, tz):
    return _lerp(
        _lerp(_lerp(c['000'], c['100'], tx), _lerp(c['010'], c['110'], tx), ty),
        _lerp(_lerp(c['001'], c['101'], tx), _lerp(c['011'], c['111'], tx), ty),
        tz)


# ============================================================
# Noise primitives
# ============================================================

def value_3d(point, frequency):
    """
    Smoothly interpolated lattice values.

    Args:
        point:     (..., 3) sample positions
        frequency: lattice cells per unit length

    Returns:
        (...,) noise in [0, 1]
    """
    i0, i1, t = _lattice(point, frequency)
    h = _corner_hashes(i0, i1)
    c = {k: val.astype(t.dtype) for k, val in h.items()}
    tx, ty, tz = _smooth(t[..., 0]), _smooth(t[..., 1]), _smooth(t[..., 2])
    return _trilinear(c, tx, ty, tz) * (1.0 / HASH_MASK)


def perlin_3d(point, frequency):
    """
    Perlin gradient noise; zero on every lattice point.

    Args:
        point:     (..., 3) sample positions
        frequency: lattice cells per unit length

    Returns:
        (...,) noise in [-1, 1]
    """
    i0, i1, t = _lattice(point, frequency)
    h = _corner_hashes(i0, i1)
    offsets = {'0': 0.0, '1': 1.0}

    c = {}
    for key, hv in h.items():
        g = GRADIENTS_3D[jnp.bitwise_and(hv, GRADIENTS_MASK_3D)].astype(t.dtype)
        d = t - jnp.array([offsets[key[0]], offsets[key[1]], offsets[key[2]]],
                          dtype=t.dtype)
        c[key] = jnp.sum(g * d, axis=-1)

    tx, ty, tz = _smooth(t[..., 0]), _smooth(t[..., 1]), _smooth(t[..., 2])
    return _trilinear(c, tx, ty, tz)


def fractal_sum(method, point, frequency, octaves, lacunarity, persistence):
    """
    Layer `octaves` samples of `method`.

    Each octave multiplies frequency by lacunarity and amplitude by
    persistence.  The sum is divided by the total amplitude.
    """
    total = method(point, frequency)
    amplitude = 1.0
    amplitude_range = 1.0
    for _ in range(1, octaves):
        frequency *= lacunarity
        amplitude *= persistence
        amplitude_range += amplitude
        total = total + method(point, frequency) * amplitude
    return total / amplitude_range


# ============================================================
# Noise families
# ============================================================

class NoiseType(Enum):
    VALUE = 'value'
    PERLIN = 'perlin'


NOISE_METHODS = {
    NoiseType.VALUE: value_3d,
    NoiseType.PERLIN: perlin_3d,
}

# (frequency, lacunarity, persistence); the two families differ in native
# smoothness and need different scales for comparable terrain
NOISE_TUNING = {
    NoiseType.VALUE: (1.75, 2.0, 0.5),
    NoiseType.PERLIN: (1.6, 4.0, 0.25),
}


def as_noise_type(noise_type):
    """Accept a NoiseType or its name/value ('value', 'Perlin', ...)."""
    if isinstance(noise_type, NoiseType):
        return noise_type
    if isinstance(noise_type, str):
        key = noise_type.strip().lower()
        for nt in NoiseType:
            if key == nt.value:
                return nt
    raise ConfigurationError(f"Unknown noise type: {noise_type!r}")


def to_unit_scalar(sample, noise_type):
    """Map a raw sample into [0, 1]; Perlin output is shifted from [-1, 1]."""
    if as_noise_type(noise_type) == NoiseType.PERLIN:
        return sample * 0.5 + 0.5
    return sample


def make_noise_fn(noise_type, octaves, lacunarity=None, persistence=None):
    """
    Build the noise capability used by the texture synthesizer.

    Args:
        noise_type:  NoiseType (or its name)
        octaves:     Number of octaves, 1-8
        lacunarity:  Override for the family lacunarity (None = family)
        persistence: Override for the family persistence (None = family)

    Returns:
        sample: jit-compiled function (..., 3) points → (...,) scalar in [0, 1]
    """
    noise_type = as_noise_type(noise_type)
    method = NOISE_METHODS[noise_type]
    frequency, family_lacunarity, family_persistence = NOISE_TUNING[noise_type]
    if lacunarity is None:
        lacunarity = family_lacunarity
    if persistence is None:
        persistence = family_persistence

    @jax.jit
    def sample(points):
        raw = fractal_sum(method, points, frequency, octaves,
                          lacunarity, persistence)
        return to_unit_scalar(raw, noise_type)

    return sample
