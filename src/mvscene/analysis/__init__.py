"""Derived per-image statistics. Pure functions of a loaded SceneModel."""

from .depth_range import NO_DEPTH_RANGE, compute_depth_ranges
from .overlap import compute_shared_points
from .triangulation import compute_triangulation_angles

__all__ = [
    "NO_DEPTH_RANGE",
    "compute_depth_ranges",
    "compute_shared_points",
    "compute_triangulation_angles",
]
