"""Reader for COLMAP sparse reconstructions (<path>/sparse, <path>/images)."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pycolmap

from mvscene.core.errors import MalformedInputError, UnsupportedInputError
from mvscene.core.model import Image, ImageDirectory, Point, SceneModel
from mvscene.utils.io import read_colmap_reconstruction

logger = logging.getLogger(__name__)


def _calibration_matrix(camera_id: int, camera: pycolmap.Camera) -> np.ndarray:
    model_name = camera.model.name
    if model_name != "PINHOLE":
        raise UnsupportedInputError(
            f"Camera {camera_id} uses the {model_name} model; only PINHOLE is supported"
        )
    return np.asarray(camera.calibration_matrix(), dtype=np.float32)


def _read_images(path: Path, recon: pycolmap.Reconstruction) -> tuple[list[Image], ImageDirectory, dict[int, int]]:
    images: list[Image] = []
    directory = ImageDirectory()
    compact_ids: dict[int, int] = {}
    for image_id in recon.reg_image_ids():
        colmap_image = recon.images[image_id]
        camera = recon.cameras[colmap_image.camera_id]
        cam_from_world = colmap_image.cam_from_world()
        image = Image(
            name=colmap_image.name,
            path=path / "images" / colmap_image.name,
            K=_calibration_matrix(colmap_image.camera_id, camera),
            R=np.asarray(cam_from_world.rotation.matrix(), dtype=np.float32),
            T=np.asarray(cam_from_world.translation, dtype=np.float32),
            width=int(camera.width),
            height=int(camera.height),
        )
        compact_ids[image_id] = directory.add(image.name)
        images.append(image)
    return images, directory, compact_ids


def _read_points(recon: pycolmap.Reconstruction, compact_ids: dict[int, int]) -> list[Point]:
    points: list[Point] = []
    for point3d_id in sorted(recon.points3D):
        point3d = recon.points3D[point3d_id]
        track = []
        for element in point3d.track.elements:
            if element.image_id not in compact_ids:
                raise MalformedInputError(
                    f"Point {point3d_id} observed by unregistered image {element.image_id}"
                )
            track.append(compact_ids[element.image_id])
        x, y, z = np.asarray(point3d.xyz, dtype=np.float32)
        points.append(Point(float(x), float(y), float(z), track))
    return points


def read_colmap(path: Path) -> SceneModel:
    """Build a SceneModel from a COLMAP workspace.

    Registered images keep their registration order and receive compact ids
    0..N-1. Points are ordered by COLMAP point id and their tracks are
    rewritten from COLMAP image ids to compact ids.
    """
    path = Path(path)
    recon = read_colmap_reconstruction(path / "sparse")
    try:
        images, directory, compact_ids = _read_images(path, recon)
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Image name in {path / 'sparse'} is not valid UTF-8") from e
    points = _read_points(recon, compact_ids)

    logger.info(f"COLMAP: {len(images)} images, {len(points)} points from {path}")
    return SceneModel(images, points, directory)
