"""
gradient.py — Scalar → Colour Gradient
========================================

A gradient is an ordered list of (position, (r, g, b)) stops with
positions strictly increasing inside [0, 1].  Evaluation interpolates
each channel linearly between neighbouring stops and clamps outside the
first/last stop, so evaluate(0) and evaluate(1) return the end colours
exactly.
"""

import jax.numpy as jnp

from .errors import ConfigurationError


# Deep ocean → shallows → beach → lowland → forest → rock → snow
DEFAULT_PLANET_STOPS = [
    (0.00, (0.02, 0.05, 0.20)),
    (0.44, (0.05, 0.20, 0.50)),
    (0.50, (0.20, 0.48, 0.72)),
    (0.52, (0.84, 0.78, 0.55)),
    (0.56, (0.26, 0.55, 0.22)),
    (0.68, (0.12, 0.36, 0.14)),
    (0.80, (0.45, 0.40, 0.35)),
    (1.00, (0.96, 0.96, 0.98)),
]


def validate_stops(stops):
    """Raise ConfigurationError unless stops form a usable gradient."""
    if len(stops) < 2:
        raise ConfigurationError("gradient needs at least two stops")
    prev = None
    for stop in stops:
        try:
            pos, color = stop
            pos = float(pos)
            color = tuple(float(c) for c in color)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"malformed gradient stop {stop!r}") from exc
        if len(color) != 3:
            raise ConfigurationError(f"stop colour must be RGB, got {color!r}")
        if not 0.0 <= pos <= 1.0:
            raise ConfigurationError(f"stop position {pos} outside [0, 1]")
        if any(not 0.0 <= c <= 1.0 for c in color):
            raise ConfigurationError(f"stop colour {color} outside [0, 1]")
        if prev is not None and pos <= prev:
            raise ConfigurationError(
                f"stop positions must be strictly increasing ({prev} then {pos})")
        prev = pos


def build_gradient_fn(stops=None):
    """
    Build a gradient evaluation function.

    Args:
        stops: list of (position, (r, g, b)); defaults to DEFAULT_PLANET_STOPS

    Returns:
        evaluate: function scalar array (...) → colour array (..., 3)
    """
    if stops is None:
        stops = DEFAULT_PLANET_STOPS
    validate_stops(stops)

    positions = jnp.array([float(p) for p, _ in stops])
    colors = jnp.array([[float(c) for c in color] for _, color in stops])   # (K, 3)
    first = colors[0]
    last = colors[-1]

    def evaluate(scalar):
        s = jnp.asarray(scalar, dtype=positions.dtype)
        channels = [jnp.interp(s, positions, colors[:, k]) for k in range(3)]
        rgb = jnp.stack(channels, axis=-1)
        # interp can be off by an ulp at the upper stop
        rgb = jnp.where((s <= positions[0])[..., None], first, rgb)
        rgb = jnp.where((s >= positions[-1])[..., None], last, rgb)
        return rgb

    return evaluate
