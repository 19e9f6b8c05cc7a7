"""
projection.py — Cube-to-Sphere Warp and Face Layout
=====================================================

Maps points on the surface of the cube [0, N]³ onto the unit sphere with
Nowell's mapping:

    v   = p * 2/N - 1                       (cube grid → [-1, 1]³)
    s.x = v.x * sqrt(1 - v.y²/2 - v.z²/2 + v.y²·v.z²/3)   (cyclic in y, z)

Unlike plain normalisation v/|v|, this keeps grid cells close to equal
area near the cube corners.

Face convention: (u_axis, v_axis, fixed_axis, at_max)
    u, v are the face-local grid coordinates in [0, N].  The fixed axis is
    held at 0 (at_max=False) or N (at_max=True).

Reference: http://mathproofs.blogspot.com/2005/07/mapping-cube-to-sphere.html
"""

import jax.numpy as jnp

from .errors import ConfigurationError


# ============================================================
# Face descriptor table
# ============================================================

X_AXIS, Y_AXIS, Z_AXIS = 0, 1, 2

FACES = [
    (X_AXIS, Y_AXIS, Z_AXIS, False),   # 0: z = 0
    (Y_AXIS, Z_AXIS, X_AXIS, False),   # 1: x = 0
    (Z_AXIS, X_AXIS, Y_AXIS, False),   # 2: y = 0
    (Y_AXIS, X_AXIS, Z_AXIS, True),    # 3: z = N
    (Z_AXIS, Y_AXIS, X_AXIS, True),    # 4: x = N
    (X_AXIS, Z_AXIS, Y_AXIS, True),    # 5: y = N
]

NUM_FACES = len(FACES)


def face_descriptor(face_id):
    """(u_axis, v_axis, fixed_axis, at_max) for the given face."""
    if not 0 <= face_id < NUM_FACES:
        raise ConfigurationError(f"face_id must be 0-5, got {face_id}")
    return FACES[face_id]


# ============================================================
# Face-local → cube coordinates
# ============================================================

def face_cube_points(face_id, u, v, resolution):
    """
    Place face-local grid coordinates (u, v) on the cube surface.

    Args:
        face_id:    Integer 0-5
        u, v:       Arrays (same shape) of face coordinates in [0, N]
        resolution: N, the number of cells per face edge

    Returns:
        x, y, z: cube-grid coordinates, each shaped like u
    """
    u_axis, v_axis, fixed_axis, at_max = face_descriptor(face_id)
    u = jnp.asarray(u)
    v = jnp.asarray(v)

    coords = [None, None, None]
    coords[u_axis] = u
    coords[v_axis] = v
    coords[fixed_axis] = jnp.full_like(u, resolution if at_max else 0)
    return coords[0], coords[1], coords[2]


# ============================================================
# Cube → sphere
# ============================================================

def cube_to_sphere(x, y, z, resolution):
    """
    Project cube-grid coordinates onto the unit sphere.

    Args:
        x, y, z:    Cube-grid coordinates in [0, N], on a cube face
        resolution: N

    Returns:
        X, Y, Z: Cartesian coordinates on the unit sphere
    """
    vx = jnp.asarray(x) * 2.0 / resolution - 1.0
    vy = jnp.asarray(y) * 2.0 / resolution - 1.0
    vz = jnp.asarray(z) * 2.0 / resolution - 1.0

    x2 = vx * vx
    y2 = vy * vy
    z2 = vz * vz

    X = vx * jnp.sqrt(1.0 - y2 / 2.0 - z2 / 2.0 + y2 * z2 / 3.0)
    Y = vy * jnp.sqrt(1.0 - x2 / 2.0 - z2 / 2.0 + x2 * z2 / 3.0)
    Z = vz * jnp.sqrt(1.0 - x2 / 2.0 - y2 / 2.0 + x2 * y2 / 3.0)

    return X, Y, Z


def face_to_sphere(face_id, u, v, resolution):
    """Face-local coordinates straight to the unit sphere, stacked (..., 3)."""
    x, y, z = face_cube_points(face_id, u, v, resolution)
    X, Y, Z = cube_to_sphere(x, y, z, resolution)
    return jnp.stack([X, Y, Z], axis=-1)
