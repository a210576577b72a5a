"""mvscene: sparse reconstruction ingestion for multi-view stereo."""

__version__ = "0.1.0"

from .analysis import compute_depth_ranges, compute_shared_points, compute_triangulation_angles
from .core import (
    DepthRangeConfig,
    Image,
    ImageDirectory,
    ImageLookupError,
    InvalidFormatError,
    MalformedInputError,
    Point,
    SceneConfig,
    SceneError,
    SceneFormat,
    SceneLoadError,
    SceneModel,
    UnsupportedInputError,
)
from .readers import read_model

__all__ = [
    "SceneModel",
    "Image",
    "Point",
    "ImageDirectory",
    "SceneFormat",
    "SceneConfig",
    "DepthRangeConfig",
    "read_model",
    "compute_depth_ranges",
    "compute_shared_points",
    "compute_triangulation_angles",
    "SceneError",
    "SceneLoadError",
    "UnsupportedInputError",
    "MalformedInputError",
    "ImageLookupError",
    "InvalidFormatError",
]
