"""Format readers producing a fully built SceneModel."""

from __future__ import annotations

import logging
from pathlib import Path

from mvscene.core.contracts import SceneFormat
from mvscene.core.errors import InvalidFormatError
from mvscene.core.model import SceneModel
from .colmap import read_colmap
from .pmvs import read_pmvs
from .probe import ImageProbe, read_image_size

logger = logging.getLogger(__name__)

__all__ = [
    "SceneFormat",
    "ImageProbe",
    "read_image_size",
    "read_colmap",
    "read_pmvs",
    "read_model",
]


def read_model(
    path: str | Path,
    input_format: SceneFormat | str,
    probe: ImageProbe | None = None,
) -> SceneModel:
    """Load a scene with the reader selected by `input_format`.

    Args:
        path: Workspace directory.
        input_format: "COLMAP" or "PMVS" (case sensitive) or a SceneFormat.
        probe: Image size probe used by the PMVS reader. Ignored for COLMAP.

    Raises:
        InvalidFormatError: `input_format` is not a recognized value.
        SceneLoadError: The input is unsupported or malformed.
    """
    try:
        fmt = SceneFormat(input_format)
    except ValueError:
        raise InvalidFormatError(
            f"Invalid input format {input_format!r}, expected one of "
            f"{[f.value for f in SceneFormat]}"
        ) from None

    logger.info(f"Reading {fmt.value} scene from {path}")
    if fmt is SceneFormat.COLMAP:
        return read_colmap(Path(path))
    return read_pmvs(Path(path), probe=probe)
