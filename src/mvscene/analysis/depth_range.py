"""Per-image depth search ranges from sparse point depths."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from mvscene.core.contracts import DepthRangeConfig

if TYPE_CHECKING:
    from mvscene.core.model import SceneModel

logger = logging.getLogger(__name__)

NO_DEPTH_RANGE = (-1.0, -1.0)


def collect_image_depths(model: SceneModel) -> list[np.ndarray]:
    """Positive camera-space depths of every observation, grouped by image."""
    obs_points = []
    obs_images = []
    for point_idx, point in enumerate(model.points):
        obs_points.extend([point_idx] * len(point.track))
        obs_images.extend(point.track)

    if not obs_images:
        return [np.zeros(0, dtype=np.float32) for _ in model.images]

    obs_points = np.asarray(obs_points, dtype=np.int64)
    obs_images = np.asarray(obs_images, dtype=np.int64)
    xyz = np.array([(p.x, p.y, p.z) for p in model.points], dtype=np.float32)
    r3 = np.stack([image.R[2] for image in model.images])
    tz = np.array([image.T[2] for image in model.images], dtype=np.float32)

    depths = np.einsum("ij,ij->i", r3[obs_images], xyz[obs_points]) + tz[obs_images]
    valid = depths > 0
    depths, obs_images = depths[valid], obs_images[valid]

    order = np.argsort(obs_images, kind="stable")
    counts = np.bincount(obs_images, minlength=model.num_images)
    return np.split(depths[order], np.cumsum(counts)[:-1])


def depth_range_from_depths(
    depths: np.ndarray, config: DepthRangeConfig | None = None
) -> tuple[float, float]:
    """Nearest-rank percentile bounds stretched outward.

    Bounds are the sorted depths at floor(n * min_percentile) and
    floor(n * max_percentile), scaled by (1 - stretch) and (1 + stretch).
    """
    config = config or DepthRangeConfig()
    if len(depths) == 0:
        return NO_DEPTH_RANGE
    ordered = np.sort(depths)
    n = len(ordered)
    low = float(ordered[int(n * config.min_percentile)])
    high = float(ordered[int(n * config.max_percentile)])
    return low * (1.0 - config.stretch_ratio), high * (1.0 + config.stretch_ratio)


def compute_depth_ranges(
    model: SceneModel, config: DepthRangeConfig | None = None
) -> list[tuple[float, float]]:
    """One (min_depth, max_depth) pair per image, in image id order.

    Images without any point in front of the camera get (-1, -1).
    """
    config = config or DepthRangeConfig()
    depth_ranges = []
    for image_id, depths in enumerate(collect_image_depths(model)):
        if len(depths) == 0:
            logger.debug(f"Image {image_id} has no points in front of the camera")
        depth_ranges.append(depth_range_from_depths(depths, config))
    logger.debug(f"Computed depth ranges for {len(depth_ranges)} images")
    return depth_ranges
