"""Pairwise triangulation angles between images."""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import TYPE_CHECKING

import numpy as np

from mvscene.utils.geometry import triangulation_angle

if TYPE_CHECKING:
    from mvscene.core.model import SceneModel

logger = logging.getLogger(__name__)


def percentile(values: list[float], p: float) -> float:
    """Nearest-rank percentile, index round(p / 100 * (n - 1)) halves rounded up."""
    if not values:
        raise ValueError("percentile of an empty sequence")
    if not 0.0 <= p <= 100.0:
        raise ValueError(f"percentile must be in [0, 100], got {p}")
    idx = math.floor(p / 100.0 * (len(values) - 1) + 0.5)
    idx = max(0, min(len(values) - 1, idx))
    return sorted(values)[idx]


def compute_triangulation_angles(model: SceneModel, percentile_value: float = 50.0) -> list[dict[int, float]]:
    """Per image, map neighbor id -> percentile of triangulation angles (radians)
    over all points the two images observe together.
    """
    centers = [image.projection_center().astype(np.float64) for image in model.images]
    angles: list[defaultdict[int, list[float]]] = [defaultdict(list) for _ in model.images]
    for point in model.points:
        X = np.array([point.x, point.y, point.z], dtype=np.float64)
        track = point.track
        for i, image_id1 in enumerate(track):
            for image_id2 in track[:i]:
                if image_id1 != image_id2:
                    angle = triangulation_angle(centers[image_id1], centers[image_id2], X)
                    angles[image_id1][image_id2].append(angle)
                    angles[image_id2][image_id1].append(angle)

    result = [
        {neighbor: percentile(values, percentile_value) for neighbor, values in sorted(per_image.items())}
        for per_image in angles
    ]
    logger.debug(f"Computed triangulation angles for {len(result)} images")
    return result
