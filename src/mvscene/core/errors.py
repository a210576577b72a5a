"""Error taxonomy for scene loading and lookups."""

from __future__ import annotations


class SceneError(Exception):
    """Base class for all mvscene errors."""


class SceneLoadError(SceneError):
    """A load was aborted. No partially built model is returned."""


class UnsupportedInputError(SceneLoadError):
    """Input is well formed but uses a camera model or distortion we refuse to approximate."""


class MalformedInputError(SceneLoadError):
    """Input is missing required fields, is truncated, or references unknown images."""


class ImageLookupError(SceneError, LookupError):
    """Image name or id is not present in a loaded model."""


class InvalidFormatError(SceneError, ValueError):
    """Format selector is not one of the recognized values."""
