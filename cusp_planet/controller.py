"""
controller.py — Surface Regeneration State Machine
====================================================

    ACTIVE ──regenerate(seed)──▶ RESTARTING ──advance(dt, shrink_complete=True)──▶ ACTIVE

The shrink/grow animation is driven outside this module; it reads
`state` and `elapsed` and signals completion of the shrink through
advance().  On that signal the controller derives the noise offset from
the pending seed, synthesizes all six faces and replaces the texture set
in one assignment.  If synthesis raises, the previous set stays in
effect.
"""

import dataclasses
import logging
from enum import Enum

from .config import check_resolution, check_seed, random_seed, validate_config
from .gradient import build_gradient_fn
from .mesh import build_planet_mesh
from .noise import as_noise_type, make_noise_fn
from .texture import noise_offset_from_seed, synthesize_all_faces

logger = logging.getLogger(__name__)


class PlanetState(Enum):
    ACTIVE = 'active'
    RESTARTING = 'restarting'


class SurfaceController:
    """
    Owns the mesh, the current texture set and the regeneration cycle.

    Args:
        config: PlanetConfig; validated here before anything is built
    """

    def __init__(self, config):
        config = dataclasses.replace(config, noise_type=as_noise_type(config.noise_type))
        self.config = validate_config(config)
        self.gradient_fn = build_gradient_fn(self.config.gradient)
        self.noise_fn = self._build_noise_fn(self.config)

        self.mesh = build_planet_mesh(self.config.resolution, self.config.radius)

        self.seed = self.config.seed if self.config.seed is not None else random_seed()
        self.clock = 0.0
        self.transition_time = 0.0
        self.noise_offset = None
        self.textures = None
        self.state = PlanetState.RESTARTING
        self._set_planet()

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    @property
    def elapsed(self):
        """Clock time since the last state change."""
        return self.clock - self.transition_time

    # ------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------

    def regenerate(self, seed):
        """Record a new seed and enter RESTARTING."""
        check_seed(seed)
        self.seed = seed
        self.transition_time = self.clock
        self.state = PlanetState.RESTARTING
        logger.debug("regenerate requested: seed=%d", seed)

    def advance(self, delta_time, shrink_complete=False):
        """
        Advance the controller clock by one frame.

        Args:
            delta_time:      Frame time
            shrink_complete: True once the external shrink animation ended

        Returns:
            the state after this tick
        """
        self.clock += delta_time
        if self.state == PlanetState.RESTARTING and shrink_complete:
            self._set_planet()
        return self.state

    def set_noise_type(self, noise_type):
        """Switch noise family; applies at the next regeneration."""
        noise_type = as_noise_type(noise_type)
        if noise_type == self.config.noise_type:
            return
        config = dataclasses.replace(self.config, noise_type=noise_type)
        noise_fn = self._build_noise_fn(config)
        self.config = config
        self.noise_fn = noise_fn

    def rebuild_mesh(self, resolution):
        """Replace the mesh with one at a new resolution."""
        check_resolution(resolution)
        mesh = build_planet_mesh(resolution, self.config.radius)
        self.config = dataclasses.replace(self.config, resolution=resolution)
        self.mesh = mesh

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    @staticmethod
    def _build_noise_fn(cfg):
        # one jit-compiled sampler per noise setting, reused across cycles
        return make_noise_fn(cfg.noise_type, cfg.octaves,
                             cfg.lacunarity, cfg.persistence)

    def _set_planet(self):
        cfg = self.config
        offset = noise_offset_from_seed(self.seed)
        textures = synthesize_all_faces(cfg.resolution, cfg.texture_resolution,
                                        offset, self.noise_fn, self.gradient_fn)

        self.noise_offset = offset
        self.textures = textures
        self.transition_time = self.clock
        self.state = PlanetState.ACTIVE
        logger.info("planet surface generated: seed=%d, noise=%s, offset=%s",
                    self.seed, cfg.noise_type.value, [float(o) for o in offset])
