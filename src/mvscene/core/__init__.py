"""mvscene core: scene model, contracts, errors, logging."""

from .contracts import DepthRangeConfig, SceneConfig, SceneFormat
from .errors import (
    ImageLookupError,
    InvalidFormatError,
    MalformedInputError,
    SceneError,
    SceneLoadError,
    UnsupportedInputError,
)
from .logging import setup_logging
from .model import Image, ImageDirectory, Point, SceneModel

__all__ = [
    "DepthRangeConfig",
    "SceneConfig",
    "SceneFormat",
    "SceneError",
    "SceneLoadError",
    "UnsupportedInputError",
    "MalformedInputError",
    "ImageLookupError",
    "InvalidFormatError",
    "setup_logging",
    "Image",
    "ImageDirectory",
    "Point",
    "SceneModel",
]
