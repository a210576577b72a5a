"""Canonical in-memory scene: images, sparse points, and the name/id directory.

A SceneModel is built exactly once by a reader (see mvscene.readers) and is
read-only afterwards. Derived statistics live in mvscene.analysis and are
recomputed on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from .errors import ImageLookupError, MalformedInputError

if TYPE_CHECKING:
    from mvscene.core.contracts import DepthRangeConfig, SceneFormat
    from mvscene.readers.probe import ImageProbe

logger = logging.getLogger(__name__)


@dataclass
class Image:
    """Pinhole camera plus the raster it observes.

    K, R and T are float32; R and T map world to camera coordinates.
    """

    name: str
    path: Path
    K: np.ndarray
    R: np.ndarray
    T: np.ndarray
    width: int
    height: int

    def __post_init__(self) -> None:
        self.K = np.asarray(self.K, dtype=np.float32).reshape(3, 3)
        self.R = np.asarray(self.R, dtype=np.float32).reshape(3, 3)
        self.T = np.asarray(self.T, dtype=np.float32).reshape(3)

    def projection_matrix(self) -> np.ndarray:
        """3x4 matrix K [R | T]."""
        return self.K @ np.hstack([self.R, self.T[:, None]])

    def projection_center(self) -> np.ndarray:
        """Camera center in world coordinates: -R^T T."""
        return -self.R.T @ self.T

    def viewing_direction(self) -> np.ndarray:
        return self.R[2].copy()

    def rescaled(self, factor_x: float, factor_y: float | None = None) -> Image:
        """Copy of this image with its raster and intrinsics scaled."""
        if factor_y is None:
            factor_y = factor_x
        width = int(round(self.width * factor_x))
        height = int(round(self.height * factor_y))
        # Effective factors after rounding keep K consistent with the new raster.
        scale_x = width / self.width
        scale_y = height / self.height
        K = self.K.copy()
        K[0, :] *= scale_x
        K[1, :] *= scale_y
        return Image(self.name, self.path, K, self.R.copy(), self.T.copy(), width, height)


@dataclass
class Point:
    """Sparse 3D point and the compact ids of the images observing it."""

    x: float
    y: float
    z: float
    track: list[int] = field(default_factory=list)

    @property
    def xyz(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float32)


class ImageDirectory:
    """Bidirectional image name <-> compact id lookup."""

    def __init__(self) -> None:
        self._names: list[str] = []
        self._ids: dict[str, int] = {}

    def add(self, name: str) -> int:
        """Append a name and return its compact id."""
        if name in self._ids:
            raise MalformedInputError(f"Duplicate image name `{name}`")
        image_id = len(self._names)
        self._names.append(name)
        self._ids[name] = image_id
        return image_id

    def get_image_id(self, name: str) -> int:
        try:
            return self._ids[name]
        except KeyError:
            raise ImageLookupError(f"Image with name `{name}` does not exist") from None

    def get_image_name(self, image_id: int) -> str:
        if not 0 <= image_id < len(self._names):
            raise ImageLookupError(
                f"Image id {image_id} out of range [0, {len(self._names)})"
            )
        return self._names[image_id]

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids


class SceneModel:
    """Images, sparse points and placeholders for dense stereo outputs.

    The placeholders (depth_maps, normal_maps, consistency_graph) are sized to
    the image count and left empty; the dense stereo stage fills them.
    """

    def __init__(self, images: list[Image], points: list[Point], directory: ImageDirectory):
        if len(directory) != len(images):
            raise MalformedInputError(
                f"Directory holds {len(directory)} names for {len(images)} images"
            )
        for image_id, image in enumerate(images):
            if directory.get_image_name(image_id) != image.name:
                raise MalformedInputError(f"Directory name mismatch for image id {image_id}")
        num_images = len(images)
        for point in points:
            for image_id in point.track:
                if not 0 <= image_id < num_images:
                    raise MalformedInputError(
                        f"Point track references image id {image_id}, expected [0, {num_images})"
                    )

        self.images = images
        self.points = points
        self.directory = directory
        self.depth_maps: list[Any] = [None] * num_images
        self.normal_maps: list[Any] = [None] * num_images
        self.consistency_graph: list[Any] = [None] * num_images

    @classmethod
    def read(
        cls,
        path: str | Path,
        input_format: SceneFormat | str,
        probe: ImageProbe | None = None,
    ) -> SceneModel:
        """Load a scene from disk. See mvscene.readers.read_model."""
        from mvscene.readers import read_model

        return read_model(path, input_format, probe=probe)

    @property
    def num_images(self) -> int:
        return len(self.images)

    @property
    def num_points(self) -> int:
        return len(self.points)

    def get_image_id(self, name: str) -> int:
        return self.directory.get_image_id(name)

    def get_image_name(self, image_id: int) -> str:
        return self.directory.get_image_name(image_id)

    def compute_depth_ranges(self, config: DepthRangeConfig | None = None) -> list[tuple[float, float]]:
        from mvscene.analysis.depth_range import compute_depth_ranges

        return compute_depth_ranges(self, config)

    def compute_shared_points(self) -> list[dict[int, int]]:
        from mvscene.analysis.overlap import compute_shared_points

        return compute_shared_points(self)

    def compute_triangulation_angles(self, percentile: float = 50.0) -> list[dict[int, float]]:
        from mvscene.analysis.triangulation import compute_triangulation_angles

        return compute_triangulation_angles(self, percentile)

    def __repr__(self) -> str:
        return f"SceneModel(num_images={self.num_images}, num_points={self.num_points})"
