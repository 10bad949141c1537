"""
Park terrain engine.

A pure, deterministic heightfield composed from analytic noise, edge and
path masks, hills and water basins, plus the query, caching and analysis
tools built on top of it.
"""

from .height_field import HeightField, grid_coordinates, BASE_AMPLITUDE
from .ground_query import GroundQuery
from .grid_manager import TileCache
from .heightmap_analyzer import HeightmapAnalyzer

__all__ = [
    "HeightField", "grid_coordinates", "BASE_AMPLITUDE",
    "GroundQuery", "TileCache", "HeightmapAnalyzer"
]
