"""Image metadata probing: raster dimensions for intrinsics reconstruction."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import cv2

from mvscene.core.errors import MalformedInputError

# Returns (width, height) in pixels.
ImageProbe = Callable[[Path], tuple[int, int]]


def read_image_size(path: Path) -> tuple[int, int]:
    """Decode an image with OpenCV and return its (width, height)."""
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise MalformedInputError(f"Failed to read image: {path}")
    height, width = image.shape[:2]
    return width, height
