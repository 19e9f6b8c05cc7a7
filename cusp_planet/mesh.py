"""
mesh.py — Cube-Sphere Mesh Construction
=========================================

Builds vertex, normal and UV buffers for all six faces plus one triangle
list per face (one sub-mesh per material/texture).

Face layout (per face, N = resolution):
    vertices: (N+1) × (N+1) grid, row-major, rows along the face v axis
    owned range: [face*(N+1)², (face+1)*(N+1)²) of the flat buffers
    quads:    N × N cells, two triangles each

Vertices on shared cube edges are duplicated, not shared, because each
face carries its own UV space.

Quad corners:
    v01 ── v11
     │  ╲   │      triangles (v00, v01, v10) and (v10, v01, v11)
    v00 ── v10
"""

import logging

import jax.numpy as jnp

from .config import check_radius, check_resolution
from .errors import ConsistencyError
from .projection import NUM_FACES, face_to_sphere

logger = logging.getLogger(__name__)


# ============================================================
# Per-face buffers
# ============================================================

def face_grid(resolution):
    """(N+1, N+1) integer u, v coordinates, indexed [v, u]."""
    a = jnp.arange(resolution + 1)
    v, u = jnp.meshgrid(a, a, indexing='ij')
    return u, v


def face_vertices(face_id, resolution, radius):
    """
    Positions, normals and UVs for one face.

    Returns:
        positions: ((N+1)², 3)
        normals:   ((N+1)², 3)  unit sphere points
        uvs:       ((N+1)², 2)  in [0, 1]
    """
    u, v = face_grid(resolution)
    normals = face_to_sphere(face_id, u, v, resolution).reshape(-1, 3)
    positions = normals * radius
    uvs = jnp.stack([u / resolution, v / resolution], axis=-1).reshape(-1, 2)
    return positions, normals, uvs


def face_triangles(face_id, resolution):
    """
    Triangle index list for one face, in global vertex indices.

    Returns:
        (2N², 3) int32, the two triangles of each quad adjacent
    """
    stride = resolution + 1
    base = face_id * stride * stride
    cells = jnp.arange(resolution, dtype=jnp.int32)
    vi, ui = jnp.meshgrid(cells, cells, indexing='ij')

    v00 = base + vi * stride + ui
    v10 = v00 + 1
    v01 = v00 + stride
    v11 = v01 + 1

    lower = jnp.stack([v00, v01, v10], axis=-1)
    upper = jnp.stack([v10, v01, v11], axis=-1)
    return jnp.stack([lower, upper], axis=2).reshape(-1, 3).astype(jnp.int32)


# ============================================================
# Full planet mesh
# ============================================================

def build_planet_mesh(resolution, radius=5.0):
    """
    Build the cube-sphere mesh.

    Args:
        resolution: Quads per face edge, 2-512
        radius:     Sphere radius

    Returns:
        dict with keys:
            vertices:  (6(N+1)², 3) positions
            normals:   (6(N+1)², 3) unit normals
            uvs:       (6(N+1)², 2) texture coordinates
            face_ids:  (6(N+1)²,)   owning face of each vertex
            triangles: list of 6 (2N², 3) int32 index arrays
            resolution, radius, vertex_count, triangle_count
    """
    check_resolution(resolution)
    check_radius(radius)

    positions, normals, uvs, triangles = [], [], [], []
    for face_id in range(NUM_FACES):
        p, n, uv = face_vertices(face_id, resolution, radius)
        positions.append(p)
        normals.append(n)
        uvs.append(uv)
        triangles.append(face_triangles(face_id, resolution))

    per_face = (resolution + 1) ** 2
    mesh = {
        'vertices': jnp.concatenate(positions).block_until_ready(),
        'normals': jnp.concatenate(normals).block_until_ready(),
        'uvs': jnp.concatenate(uvs).block_until_ready(),
        'face_ids': jnp.repeat(jnp.arange(NUM_FACES, dtype=jnp.int32), per_face),
        'triangles': triangles,
        'resolution': resolution,
        'radius': float(radius),
        'vertex_count': NUM_FACES * per_face,
        'triangle_count': sum(int(t.shape[0]) for t in triangles),
    }
    check_mesh_consistency(mesh)

    logger.info("built cube-sphere mesh: resolution=%d, %d vertices, %d triangles",
                resolution, mesh['vertex_count'], mesh['triangle_count'])
    return mesh


def check_mesh_consistency(mesh):
    """
    Verify buffer sizes and per-face index ownership.

    Raises:
        ConsistencyError on any mismatch
    """
    N = mesh['resolution']
    per_face = (N + 1) ** 2
    n_vertices = NUM_FACES * per_face

    for key, width in (('vertices', 3), ('normals', 3), ('uvs', 2)):
        shape = tuple(mesh[key].shape)
        if shape != (n_vertices, width):
            raise ConsistencyError(
                f"{key} has shape {shape}, expected {(n_vertices, width)}")
    if tuple(mesh['face_ids'].shape) != (n_vertices,):
        raise ConsistencyError(
            f"face_ids has shape {tuple(mesh['face_ids'].shape)}, expected {(n_vertices,)}")

    if len(mesh['triangles']) != NUM_FACES:
        raise ConsistencyError(
            f"expected {NUM_FACES} triangle lists, got {len(mesh['triangles'])}")

    for face_id, tris in enumerate(mesh['triangles']):
        if tuple(tris.shape) != (2 * N * N, 3):
            raise ConsistencyError(
                f"face {face_id} triangles have shape {tuple(tris.shape)}, "
                f"expected {(2 * N * N, 3)}")
        lo = face_id * per_face
        hi = lo + per_face
        if int(jnp.min(tris)) < lo or int(jnp.max(tris)) >= hi:
            raise ConsistencyError(
                f"face {face_id} references vertices outside [{lo}, {hi})")
