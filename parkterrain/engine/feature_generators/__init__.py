"""
Terrain shaping features.

Each feature implements one shaping rule of the park terrain; HeightField
composes them in a fixed order.
"""

from .base import FeatureGenerator, NoiseField
from .masks import EdgeFalloff, PathMask
from .hills import HillSet
from .basins import WaterBasinSet

__all__ = [
    "FeatureGenerator", "NoiseField", "EdgeFalloff",
    "PathMask", "HillSet", "WaterBasinSet"
]
