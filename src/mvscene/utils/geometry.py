"""Camera geometry helpers."""

from __future__ import annotations

import numpy as np


def triangulation_angle(center1: np.ndarray, center2: np.ndarray, point: np.ndarray) -> float:
    """Angle (radians) at `point` between the rays to two projection centers.

    Returns 0 when either ray has zero length.
    """
    baseline_sq = float(np.sum((center1 - center2) ** 2))
    ray1 = float(np.linalg.norm(point - center1))
    ray2 = float(np.linalg.norm(point - center2))
    denominator = 2.0 * ray1 * ray2
    if denominator == 0.0:
        return 0.0
    cos_angle = (ray1 * ray1 + ray2 * ray2 - baseline_sq) / denominator
    return abs(float(np.arccos(np.clip(cos_angle, -1.0, 1.0))))
