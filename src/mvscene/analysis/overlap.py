"""Pairwise co-visibility counts between images."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mvscene.core.model import SceneModel

logger = logging.getLogger(__name__)


def compute_shared_points(model: SceneModel) -> list[dict[int, int]]:
    """Per image, map neighbor id -> number of sparse points both observe.

    Every pair of track positions with distinct ids counts once, so the result
    is symmetric. Neighbor keys are in ascending order.
    """
    counts: list[defaultdict[int, int]] = [defaultdict(int) for _ in model.images]
    for point in model.points:
        track = point.track
        for i, image_id1 in enumerate(track):
            for image_id2 in track[:i]:
                if image_id1 != image_id2:
                    counts[image_id1][image_id2] += 1
                    counts[image_id2][image_id1] += 1

    shared_points = [dict(sorted(c.items())) for c in counts]
    logger.debug(f"Overlap graph: {sum(len(s) for s in shared_points) // 2} image pairs")
    return shared_points
