"""
errors.py — Exception Types
============================

ConfigurationError is raised at the boundary, before any buffer is
allocated.  ConsistencyError marks a broken builder invariant and is
never corrected.
"""


class ConfigurationError(ValueError):
    """Parameter outside its supported range, or malformed input."""


class ConsistencyError(AssertionError):
    """Mesh buffers disagree with each other or with the face layout."""
