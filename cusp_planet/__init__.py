"""
cusp_planet — Cube-Sphere Planet Mesh and Procedural Textures
==============================================================

Projects the six faces of a subdivided cube onto a sphere and colours
each face with fractal 3D noise sampled on the sphere, giving seamless
planet-like terrain.

Modules:
    errors      — ConfigurationError, ConsistencyError
    config      — PlanetConfig, range validation, seed parsing
    projection  — Nowell cube-to-sphere warp, face descriptor table
    mesh        — Vertex/normal/UV buffers and per-face triangle lists
    noise       — Value and Perlin lattice noise, fractal summation
    gradient    — Scalar → colour gradient
    texture     — Per-face texel synthesis, seeded noise offset
    controller  — ACTIVE/RESTARTING regeneration state machine
"""
