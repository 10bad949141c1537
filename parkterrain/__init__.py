"""
Park terrain: a deterministic heightfield for placing objects on an
undulating park, with the tools that query, cache, analyze and serve it.
"""

from .config import (
    ConfigError, NoiseOctave, Hill, WaterBasin, HeightFieldConfig, reference_config, load_config
)
from .engine import HeightField, GroundQuery, TileCache, HeightmapAnalyzer, grid_coordinates

__version__ = "0.1.0"

__all__ = [
    "ConfigError", "NoiseOctave", "Hill", "WaterBasin", "HeightFieldConfig",
    "reference_config", "load_config",
    "HeightField", "GroundQuery", "TileCache", "HeightmapAnalyzer", "grid_coordinates"
]
