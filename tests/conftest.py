"""Shared pytest fixtures: synthetic COLMAP and PMVS workspaces."""

import logging
import math
from pathlib import Path

import numpy as np
import pycolmap
import pytest

# camera_id, model, width, height, params
CAMERAS = [
    (1, "PINHOLE", 640, 480, [500.0, 510.0, 320.0, 240.0]),
    (7, "PINHOLE", 800, 600, [700.0, 700.0, 400.0, 300.0]),
]

_HALF = math.sqrt(0.5)

# image_id, qvec (w, x, y, z), tvec, camera_id, name. Ids are sparse.
IMAGES = [
    (3, [1.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0], 1, "a.jpg"),
    (10, [_HALF, 0.0, 0.0, _HALF], [0.5, -0.25, 1.0], 7, "b.jpg"),
    (25, [1.0, 0.0, 0.0, 0.0], [1.0, 0.0, 2.0], 1, "c.jpg"),
]

# point3d_id, xyz, image_ids
POINTS = [
    (5, [0.0, 0.0, 5.0], [3, 10, 25]),
    (9, [1.0, 1.0, 4.0], [3, 25]),
    (12, [0.0, 0.0, -3.0], [10]),
]


def write_colmap_text(sparse_dir: Path, cameras, images, points) -> None:
    """Write cameras/images/points3D.txt with keypoints matching the tracks."""
    # every image starts with one keypoint that has no 3D point
    keypoints = {image_id: [(10.5, 20.5, -1)] for image_id, *_ in images}
    tracks = {}
    for point_id, _, image_ids in points:
        track = []
        for image_id in image_ids:
            track.append((image_id, len(keypoints[image_id])))
            keypoints[image_id].append((30.0, 40.0, point_id))
        tracks[point_id] = track

    lines = ["# Camera list with one line of data per camera:"]
    for camera_id, model, width, height, params in cameras:
        lines.append(" ".join(str(v) for v in [camera_id, model, width, height, *params]))
    (sparse_dir / "cameras.txt").write_text("\n".join(lines) + "\n")

    lines = ["# Image list with two lines of data per image:", "#   POINTS2D[] as (X, Y, POINT3D_ID)"]
    for image_id, qvec, tvec, camera_id, name in images:
        lines.append(" ".join(str(v) for v in [image_id, *qvec, *tvec, camera_id, name]))
        lines.append(" ".join(f"{x} {y} {point_id}" for x, y, point_id in keypoints[image_id]))
    (sparse_dir / "images.txt").write_text("\n".join(lines) + "\n", encoding="utf-8")

    lines = ["# 3D point list with one line of data per point:"]
    for point_id, xyz, _ in points:
        track = " ".join(f"{image_id} {idx}" for image_id, idx in tracks[point_id])
        lines.append(f"{point_id} {xyz[0]} {xyz[1]} {xyz[2]} 255 128 0 0.5 {track}")
    (sparse_dir / "points3D.txt").write_text("\n".join(lines) + "\n")


@pytest.fixture
def make_colmap_workspace(tmp_path: Path):
    """Factory writing <root>/sparse in binary or text form.

    The binary variant is the text model re-encoded by pycolmap.
    """

    def _make(cameras=CAMERAS, images=IMAGES, points=POINTS, binary=True, name="colmap") -> Path:
        root = tmp_path / name
        sparse_dir = root / "sparse"
        sparse_dir.mkdir(parents=True)
        (root / "images").mkdir()
        if binary:
            text_dir = tmp_path / f"{name}_text"
            text_dir.mkdir()
            write_colmap_text(text_dir, cameras, images, points)
            pycolmap.Reconstruction(str(text_dir)).write(str(sparse_dir))
        else:
            write_colmap_text(sparse_dir, cameras, images, points)
        return root

    return _make


@pytest.fixture
def colmap_workspace(make_colmap_workspace) -> Path:
    return make_colmap_workspace()


# focal, (k1, k2), R (row-major, 9), T
PMVS_CAMERAS = [
    (800.0, (0.0, 0.0), [1, 0, 0, 0, 1, 0, 0, 0, 1], [0.0, 0.0, 0.0]),
    (820.0, (0.0, 0.0), [0, -1, 0, 1, 0, 0, 0, 0, 1], [0.1, 0.2, 0.3]),
    (840.0, (0.0, 0.0), [1, 0, 0, 0, 0, -1, 0, 1, 0], [-1.0, 2.0, -3.0]),
]

# xyz, [(image_id, feature_index, x, y), ...]
PMVS_POINTS = [
    ([0.0, 0.0, -5.0], [(0, 3, 1.5, -2.5), (1, 7, 0.0, 0.0), (2, 1, 4.0, 4.0)]),
    ([1.0, 2.0, -4.0], [(0, 4, 1.0, 1.0), (1, 8, 2.0, 2.0)]),
    ([0.5, 0.5, 3.0], [(2, 9, -1.0, 1.0)]),
]


def write_bundle(path: Path, cameras, points) -> None:
    lines = ["# Bundle file v0.3", f"{len(cameras)} {len(points)}"]
    for focal, (k1, k2), R, T in cameras:
        lines.append(f"{focal} {k1} {k2}")
        for row in range(3):
            lines.append(" ".join(str(v) for v in R[3 * row:3 * row + 3]))
        lines.append(" ".join(str(v) for v in T))
    for xyz, track in points:
        lines.append(" ".join(str(v) for v in xyz))
        lines.append("255 255 255")
        lines.append(f"{len(track)} " + " ".join(" ".join(str(v) for v in obs) for obs in track))
    path.write_text("\n".join(lines) + "\n")


@pytest.fixture
def make_pmvs_workspace(tmp_path: Path):
    """Factory writing bundle.rd.out and visualize/%08d.jpg rasters."""

    def _make(cameras=PMVS_CAMERAS, points=PMVS_POINTS, image_size=(64, 48),
              write_images=True, name="pmvs") -> Path:
        root = tmp_path / name
        (root / "visualize").mkdir(parents=True)
        write_bundle(root / "bundle.rd.out", cameras, points)
        if write_images:
            cv2 = pytest.importorskip("cv2")
            width, height = image_size
            for i in range(len(cameras)):
                img = np.full((height, width, 3), 128, dtype=np.uint8)
                cv2.imwrite(str(root / "visualize" / f"{i:08d}.jpg"), img)
        return root

    return _make


@pytest.fixture
def pmvs_workspace(make_pmvs_workspace) -> Path:
    return make_pmvs_workspace()


@pytest.fixture
def fixed_probe():
    """Image probe that reports 640x480 for every path without touching disk."""
    calls = []

    def _probe(path: Path) -> tuple[int, int]:
        calls.append(Path(path))
        return 640, 480

    _probe.calls = calls
    return _probe


@pytest.fixture
def package_logger():
    """The ``mvscene`` logger, with handlers and level restored afterwards."""
    logger = logging.getLogger("mvscene")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)
