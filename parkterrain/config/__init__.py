"""
Configuration layer for the park heightfield.

Frozen pydantic models describe the terrain; ConfigValidator checks that
the values are usable before a HeightField is built.
"""

from .validator import ConfigError, ConfigValidator
from .schema import (
    NoiseOctave, Hill, WaterBasin, HeightFieldConfig,
    REFERENCE_WORLD_EXTENT, REFERENCE_OCTAVES, SCENE_COMPAT_OCTAVES,
    REFERENCE_HILLS, REFERENCE_BASINS,
    reference_config, load_config, save_config
)

__all__ = [
    "ConfigError", "ConfigValidator",
    "NoiseOctave", "Hill", "WaterBasin", "HeightFieldConfig",
    "REFERENCE_WORLD_EXTENT", "REFERENCE_OCTAVES", "SCENE_COMPAT_OCTAVES",
    "REFERENCE_HILLS", "REFERENCE_BASINS",
    "reference_config", "load_config", "save_config"
]
