"""
test_projection.py — Cube-to-Sphere Warp and Face Table Tests
===============================================================

Verifies:
  - cube_to_sphere maps every face point onto the unit sphere
  - Face centres and cube corners land on the expected directions
  - Face table: each face fixes a distinct (axis, side) pair
  - face_cube_points places coordinates on the right plane
"""

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cusp_planet.errors import ConfigurationError
from cusp_planet.projection import (
    FACES, NUM_FACES, cube_to_sphere, face_cube_points, face_to_sphere,
)


class TestCubeToSphere:
    """Nowell cube-to-sphere mapping."""

    @pytest.mark.parametrize("N", [2, 4, 16, 64])
    def test_on_unit_sphere(self, N):
        """Every face point maps to norm 1."""
        t = jnp.linspace(0.0, N, 33)
        u, v = jnp.meshgrid(t, t, indexing='ij')
        max_err = 0.0
        for face_id in range(NUM_FACES):
            p = face_to_sphere(face_id, u, v, N)
            r = jnp.sqrt(jnp.sum(p**2, axis=-1))
            max_err = max(max_err, float(jnp.max(jnp.abs(r - 1.0))))
        assert max_err < 1e-12, f"Off unit sphere by {max_err:.2e}"

    def test_face_centres(self):
        """Centres of the cube faces map to the axis directions."""
        N = 8
        h = N / 2
        cases = [
            ((h, h, 0), (0, 0, -1)),
            ((0, h, h), (-1, 0, 0)),
            ((h, 0, h), (0, -1, 0)),
            ((h, h, N), (0, 0, 1)),
            ((N, h, h), (1, 0, 0)),
            ((h, N, h), (0, 1, 0)),
        ]
        for (x, y, z), expected in cases:
            X, Y, Z = cube_to_sphere(x, y, z, N)
            err = np.max(np.abs(np.array([float(X), float(Y), float(Z)]) - expected))
            assert err < 1e-14, f"Centre {(x, y, z)} → {(X, Y, Z)}"

    def test_corners(self):
        """Cube corners map to (±1, ±1, ±1)/√3."""
        N = 6
        s = 1.0 / np.sqrt(3.0)
        for x in (0, N):
            for y in (0, N):
                for z in (0, N):
                    X, Y, Z = cube_to_sphere(x, y, z, N)
                    expected = np.array([x, y, z]) * 2.0 / N - 1.0
                    got = np.array([float(X), float(Y), float(Z)])
                    assert np.allclose(got, expected * s, atol=1e-14)

    def test_known_point(self):
        """Hand-evaluated point: v = (-1, 0.5, 0)."""
        X, Y, Z = cube_to_sphere(0.0, 3.0, 2.0, 4)
        assert float(X) == pytest.approx(-np.sqrt(1.0 - 0.25 / 2.0))
        assert float(Y) == pytest.approx(0.5 * np.sqrt(1.0 - 1.0 / 2.0))
        assert float(Z) == 0.0

    def test_resolution_independent(self):
        """Same relative position on different grids gives the same point."""
        a = jnp.stack(cube_to_sphere(1.0, 2.0, 0.0, 4))
        b = jnp.stack(cube_to_sphere(16.0, 32.0, 0.0, 64))
        assert float(jnp.max(jnp.abs(a - b))) < 1e-14

    def test_equal_area_tendency(self):
        """Corner cells are not much smaller than centre cells."""
        N = 16
        u, v = jnp.meshgrid(jnp.arange(N + 1), jnp.arange(N + 1), indexing='ij')
        p = face_to_sphere(0, u, v, N)
        e1 = p[1:, :-1] - p[:-1, :-1]
        e2 = p[:-1, 1:] - p[:-1, :-1]
        area = jnp.linalg.norm(jnp.cross(e1, e2), axis=-1)
        ratio = float(jnp.min(area) / jnp.max(area))
        assert ratio > 0.5, f"Cell area ratio {ratio:.3f}"


class TestFaceTable:
    """Face descriptor table."""

    def test_six_faces(self):
        assert len(FACES) == 6

    def test_distinct_fixed_planes(self):
        """Each (fixed_axis, at_max) pair appears exactly once."""
        planes = {(fixed, at_max) for _, _, fixed, at_max in FACES}
        assert len(planes) == 6

    def test_axes_are_permutations(self):
        for u_axis, v_axis, fixed, _ in FACES:
            assert sorted((u_axis, v_axis, fixed)) == [0, 1, 2]

    def test_face_cube_points_plane(self):
        """Fixed axis is 0 or N; free axes carry u and v."""
        N = 5
        u = jnp.array([0.5, 1.5, 4.0])
        v = jnp.array([2.0, 0.0, 3.5])
        for face_id, (u_axis, v_axis, fixed, at_max) in enumerate(FACES):
            pts = face_cube_points(face_id, u, v, N)
            assert np.allclose(pts[u_axis], u)
            assert np.allclose(pts[v_axis], v)
            assert np.allclose(pts[fixed], N if at_max else 0)

    def test_bad_face_id(self):
        with pytest.raises(ConfigurationError):
            face_cube_points(6, 0.0, 0.0, 4)
        with pytest.raises(ConfigurationError):
            face_cube_points(-1, 0.0, 0.0, 4)
