"""
texture.py — Procedural Face Texture Synthesis
================================================

For each face and each texel (x, y) in [0, T)²:

    1. texel centre in face coordinates:
           u = (x + 0.5) * N / T,   v = (y + 0.5) * N / T
    2. place (u, v) on the cube with the same face table as the mesh
    3. project to the unit sphere (Nowell warp)
    4. translate by the noise offset (noise space only; the mesh never moves)
    5. scalar = noise_fn(point) in [0, 1]
    6. colour = gradient_fn(scalar)

Images are indexed [y, x, channel].  All six faces share one offset and
one noise function, so the scalar field is continuous across seams.
"""

import logging

import jax.numpy as jnp
import numpy as np

from .projection import NUM_FACES, face_to_sphere

logger = logging.getLogger(__name__)

OFFSET_RANGE = (0, 1000)


# ============================================================
# Noise offset
# ============================================================

def noise_offset_from_seed(seed):
    """
    Deterministic virtual position of the planet inside the noise field.

    Three integers drawn uniformly from [0, 1000) by a PCG64 generator
    seeded with the 32-bit pattern of the seed, returned as float32.
    The draw happens on the host, so it does not depend on jax_enable_x64
    or on the jax PRNG implementation.
    """
    rng = np.random.default_rng(int(seed) & 0xFFFFFFFF)
    lo, hi = OFFSET_RANGE
    offsets = rng.integers(lo, hi, size=3)
    return jnp.asarray(offsets, dtype=jnp.float32)


# ============================================================
# Scalar field
# ============================================================

def texel_coordinates(resolution, texture_resolution):
    """
    Face coordinates of every texel centre.

    Returns:
        u, v: (T, T) arrays indexed [y, x]
    """
    centers = (jnp.arange(texture_resolution) + 0.5) * resolution / texture_resolution
    v, u = jnp.meshgrid(centers, centers, indexing='ij')
    return u, v


def face_scalar_field(face_id, u, v, resolution, noise_offset, noise_fn):
    """Noise scalar at face coordinates (u, v), before colouring."""
    points = face_to_sphere(face_id, u, v, resolution)
    points = points + jnp.asarray(noise_offset, dtype=points.dtype)
    return noise_fn(points)


# ============================================================
# Synthesis
# ============================================================

def synthesize_face(resolution, texture_resolution, face_id, noise_offset,
                    noise_fn, gradient_fn):
    """
    Colour one face.

    Args:
        resolution:         Mesh resolution N (sets the texel → cube scale)
        texture_resolution: Texture width/height T
        face_id:            Integer 0-5
        noise_offset:       (3,) translation in noise space
        noise_fn:           (..., 3) → (...,) scalar in [0, 1]
        gradient_fn:        (...,) scalar → (..., 3) colour

    Returns:
        (T, T, 3) RGB image
    """
    u, v = texel_coordinates(resolution, texture_resolution)
    scalar = face_scalar_field(face_id, u, v, resolution, noise_offset, noise_fn)
    return gradient_fn(scalar)


def synthesize_all_faces(resolution, texture_resolution, noise_offset,
                         noise_fn, gradient_fn):
    """
    Colour all six faces as one set.

    Returns:
        (6, T, T, 3) RGB images, complete before returning
    """
    faces = [
        synthesize_face(resolution, texture_resolution, face_id,
                        noise_offset, noise_fn, gradient_fn)
        for face_id in range(NUM_FACES)
    ]
    textures = jnp.stack(faces).block_until_ready()
    logger.debug("synthesized %d faces at %dx%d", NUM_FACES,
                 texture_resolution, texture_resolution)
    return textures


def to_rgb24(textures):
    """Quantise float RGB in [0, 1] to uint8."""
    return jnp.clip(jnp.round(jnp.asarray(textures) * 255.0), 0, 255).astype(jnp.uint8)
