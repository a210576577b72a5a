"""COLMAP sparse reconstruction loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pycolmap

from mvscene.core.errors import MalformedInputError

logger = logging.getLogger(__name__)


def read_colmap_reconstruction(sparse_dir: Path) -> pycolmap.Reconstruction:
    """Read a sparse reconstruction (binary or text) with pycolmap."""
    sparse_dir = Path(sparse_dir)
    if (sparse_dir / "cameras.bin").exists():
        ext = ".bin"
    elif (sparse_dir / "cameras.txt").exists():
        ext = ".txt"
    else:
        raise MalformedInputError(f"No cameras.bin or cameras.txt found in {sparse_dir}")
    for stem in ("images", "points3D"):
        if not (sparse_dir / f"{stem}{ext}").exists():
            raise MalformedInputError(f"{stem}{ext} not found in {sparse_dir}")

    try:
        recon = pycolmap.Reconstruction(str(sparse_dir))
    except (RuntimeError, ValueError) as e:
        raise MalformedInputError(f"Failed to read reconstruction in {sparse_dir}: {e}") from e

    logger.debug(
        f"Read {len(recon.cameras)} cameras, {len(recon.images)} images, "
        f"{len(recon.points3D)} 3D points from {sparse_dir}"
    )
    return recon
