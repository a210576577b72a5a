"""Pydantic models for scene loading and derivation settings."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from .logging import resolve_level


class SceneFormat(str, Enum):
    """On-disk layouts a scene can be read from."""

    COLMAP = "COLMAP"
    PMVS = "PMVS"


class DepthRangeConfig(BaseModel):
    """Percentile selection and safety margin for per-image depth ranges."""

    min_percentile: float = Field(0.01, ge=0.0, le=1.0, description="Nearest-rank percentile for the near bound")
    max_percentile: float = Field(0.99, ge=0.0, lt=1.0, description="Nearest-rank percentile for the far bound")
    stretch_ratio: float = Field(0.25, ge=0.0, le=1.0, description="Relative outward stretch of both bounds")

    @model_validator(mode="after")
    def _check_order(self) -> DepthRangeConfig:
        if self.min_percentile > self.max_percentile:
            raise ValueError(
                f"min_percentile ({self.min_percentile}) exceeds max_percentile ({self.max_percentile})"
            )
        return self


class SceneConfig(BaseModel):
    """Top-level configuration loaded from scene.yaml."""

    input_format: SceneFormat = SceneFormat.COLMAP
    depth_range: DepthRangeConfig = Field(default_factory=DepthRangeConfig)
    triangulation_percentile: float = Field(50.0, ge=0.0, le=100.0, description="Percentile of pairwise angles")
    log_level: str = Field("INFO", description="Level name for the mvscene logger")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        resolve_level(value)
        return value.strip().upper()
