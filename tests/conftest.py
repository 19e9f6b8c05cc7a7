"""
conftest.py — Shared pytest fixtures for the cusp_planet test suite
"""

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cusp_planet.config import PlanetConfig
from cusp_planet.gradient import build_gradient_fn
from cusp_planet.mesh import build_planet_mesh
from cusp_planet.noise import NoiseType, make_noise_fn


@pytest.fixture(params=[2, 4, 7])
def resolution(request):
    """Mesh resolution."""
    return request.param


@pytest.fixture
def small_mesh():
    """resolution=4 mesh: 150 vertices, 192 triangles."""
    return build_planet_mesh(4, radius=5.0)


@pytest.fixture
def gradient_fn():
    """Default planet palette."""
    return build_gradient_fn()


@pytest.fixture
def value_noise_fn():
    return make_noise_fn(NoiseType.VALUE, octaves=5)


@pytest.fixture
def perlin_noise_fn():
    return make_noise_fn(NoiseType.PERLIN, octaves=5)


@pytest.fixture
def scenario_config():
    """resolution=4, texture_resolution=8, seed=42, value noise."""
    return PlanetConfig(resolution=4, texture_resolution=8, seed=42,
                        noise_type=NoiseType.VALUE)
