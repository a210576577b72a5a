"""YAML config loading."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .contracts import SceneConfig

logger = logging.getLogger(__name__)


def load_config(config_path: Path | None = None) -> SceneConfig:
    """Load and validate scene.yaml. Missing path means defaults."""
    if config_path is None:
        return SceneConfig()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    logger.debug(f"Loaded config from {config_path}")
    return SceneConfig(**raw)
