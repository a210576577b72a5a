"""Reader for PMVS workspaces (<path>/bundle.rd.out, <path>/visualize/%08d.jpg).

Bundler cameras look down -Z with +Y up. Flipping the last two rows of R and
the Y/Z components of T converts them to the +Z forward, +Y down convention
used everywhere else in the scene model.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import numpy as np

from mvscene.core.errors import MalformedInputError, UnsupportedInputError
from mvscene.core.model import Image, ImageDirectory, Point, SceneModel
from .probe import ImageProbe, read_image_size

logger = logging.getLogger(__name__)

BUNDLE_FILE = "bundle.rd.out"
IMAGE_DIR = "visualize"


class _TokenStream:
    """Whitespace separated fields of a bundle file, read in order."""

    def __init__(self, text: str, path: Path):
        self._tokens: Iterator[str] = iter(text.split())
        self._path = path

    def _next(self, what: str) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise MalformedInputError(f"{self._path}: unexpected end of file reading {what}") from None

    def read_int(self, what: str) -> int:
        token = self._next(what)
        try:
            return int(token)
        except ValueError:
            raise MalformedInputError(f"{self._path}: expected integer {what}, got {token!r}") from None

    def read_float(self, what: str) -> float:
        token = self._next(what)
        try:
            return float(token)
        except ValueError:
            raise MalformedInputError(f"{self._path}: expected number {what}, got {token!r}") from None

    def read_floats(self, count: int, what: str) -> list[float]:
        return [self.read_float(what) for _ in range(count)]


def read_pmvs(path: Path, probe: ImageProbe | None = None) -> SceneModel:
    """Build a SceneModel from a Bundler/PMVS workspace.

    `probe` returns an image's (width, height); the principal point is placed at
    the raster center. Defaults to decoding the image with OpenCV.
    """
    path = Path(path)
    probe = probe or read_image_size
    bundle_path = path / BUNDLE_FILE
    try:
        header, _, body = bundle_path.read_bytes().partition(b"\n")
    except OSError as e:
        raise MalformedInputError(f"Cannot read bundle file {bundle_path}") from e
    # The header is free text and never parsed.
    logger.debug(f"Bundle header: {header.decode('utf-8', errors='replace').strip()}")
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{bundle_path}: bundle body is not valid UTF-8") from e

    tokens = _TokenStream(text, bundle_path)
    num_images = tokens.read_int("image count")
    num_points = tokens.read_int("point count")
    if num_images < 0 or num_points < 0:
        raise MalformedInputError(f"{bundle_path}: negative image or point count")

    images: list[Image] = []
    directory = ImageDirectory()
    for image_id in range(num_images):
        name = f"{image_id:08d}.jpg"
        focal = tokens.read_float("focal length")
        k1, k2 = tokens.read_floats(2, "distortion")
        if k1 != 0.0 or k2 != 0.0:
            raise UnsupportedInputError(
                f"Image {name} has radial distortion ({k1}, {k2}); only undistorted input is supported"
            )
        R = np.array(tokens.read_floats(9, "rotation"), dtype=np.float32).reshape(3, 3)
        T = np.array(tokens.read_floats(3, "translation"), dtype=np.float32)
        R[1:] = -R[1:]
        T[1:] = -T[1:]

        image_path = path / IMAGE_DIR / name
        width, height = probe(image_path)
        K = np.array(
            [[focal, 0.0, width / 2.0], [0.0, focal, height / 2.0], [0.0, 0.0, 1.0]],
            dtype=np.float32,
        )
        directory.add(name)
        images.append(Image(name, image_path, K, R, T, int(width), int(height)))

    points: list[Point] = []
    for _ in range(num_points):
        xyz = np.array(tokens.read_floats(3, "point position"), dtype=np.float32)
        tokens.read_floats(3, "point color")
        track_length = tokens.read_int("track length")
        if track_length < 0:
            raise MalformedInputError(f"{bundle_path}: negative track length {track_length}")
        track = []
        for _ in range(track_length):
            image_id = tokens.read_int("track image id")
            tokens.read_int("feature index")
            tokens.read_floats(2, "projected position")
            if not 0 <= image_id < num_images:
                raise MalformedInputError(
                    f"{bundle_path}: track references image {image_id}, expected [0, {num_images})"
                )
            track.append(image_id)
        points.append(Point(*xyz.tolist(), track=track))

    logger.info(f"PMVS: {len(images)} images, {len(points)} points from {path}")
    return SceneModel(images, points, directory)
