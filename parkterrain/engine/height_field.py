"""
Heightfield composition.

Combines the noise field, masks, hills and water basins into one pure
height function that every placement routine queries.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from ..config import ConfigValidator, HeightFieldConfig
from .feature_generators import (
    NoiseField, EdgeFalloff, PathMask, HillSet, WaterBasinSet
)

logger = logging.getLogger(__name__)

# Scale applied to the raw noise before masking
BASE_AMPLITUDE = 3.0


def grid_coordinates(
    origin_x: float, origin_z: float,
    width: float, depth: float,
    res_x: int, res_z: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample coordinates of a grid with `res_x` by `res_z` segments.

    Column j lies at origin_x + width * j / res_x and row i at
    origin_z + depth * i / res_z, both ends included.

    Returns:
        Tuple of (xs, zs) float64 arrays of length res_x + 1 and res_z + 1
    """

    if int(res_x) < 1 or int(res_z) < 1:
        raise ValueError(f"Grid resolution must be at least 1, got ({res_x}, {res_z})")

    res_x, res_z = int(res_x), int(res_z)
    xs = np.array([origin_x + width * j / res_x for j in range(res_x + 1)], dtype=np.float64)
    zs = np.array([origin_z + depth * i / res_z for i in range(res_z + 1)], dtype=np.float64)

    return xs, zs


class HeightField:
    """
    Pure terrain height function for the park world.

    The configuration is validated once at construction; afterwards the
    instance holds no mutable state and can be queried from any number
    of threads.
    """

    def __init__(self, config: HeightFieldConfig):
        """
        Build a heightfield from a configuration.

        Args:
            config: Terrain description

        Raises:
            ConfigError: If any hill, basin or world parameter is invalid
        """

        ConfigValidator().ensure_valid(config)
        self.config = config

        # Features in pipeline order
        self.feature_generators = {
            "noise": NoiseField(config.octaves),
            "edge": EdgeFalloff(config.world_extent, config.edge_falloff_exponent),
            "paths": PathMask(config.path_falloff_divisor),
            "hills": HillSet(config.hills),
            "basins": WaterBasinSet(config.basins),
        }

        logger.debug(
            "HeightField built: extent=%s octaves=%d hills=%d basins=%d",
            config.world_extent, len(config.octaves), len(config.hills), len(config.basins)
        )

    @property
    def noise(self) -> NoiseField:
        return self.feature_generators["noise"]

    @property
    def edge(self) -> EdgeFalloff:
        return self.feature_generators["edge"]

    @property
    def paths(self) -> PathMask:
        return self.feature_generators["paths"]

    @property
    def hills(self) -> HillSet:
        return self.feature_generators["hills"]

    @property
    def basins(self) -> WaterBasinSet:
        return self.feature_generators["basins"]

    @property
    def world_extent(self) -> float:
        return self.config.world_extent

    def evaluate(self, x: float, z: float) -> float:
        """
        Terrain elevation at (x, z).

        Non-finite coordinates yield NaN; callers should validate their
        inputs before querying.
        """

        x, z = float(x), float(z)
        if not (math.isfinite(x) and math.isfinite(z)):
            return math.nan

        base = self.noise.sample(x, z) * BASE_AMPLITUDE
        base *= self.edge.factor(x, z) * self.paths.factor(x, z)
        base = self.hills.apply(base, x, z)

        return self.basins.apply(base, x, z)

    def evaluate_many(self, points: Iterable[Sequence[float]]) -> np.ndarray:
        """
        Elevations for a batch of (x, z) points.

        Args:
            points: Iterable of (x, z) pairs

        Returns:
            1-D float64 array, one height per point in input order
        """

        return np.array([self.evaluate(float(x), float(z)) for x, z in points], dtype=np.float64)

    def evaluate_row(self, xs: Sequence[float], z: float) -> np.ndarray:
        """Elevations along one row of constant z."""

        return np.array([self.evaluate(float(x), float(z)) for x in xs], dtype=np.float64)

    def evaluate_grid(
        self,
        origin_x: float, origin_z: float,
        width: float, depth: float,
        res_x: int, res_z: int,
        workers: Optional[int] = None
    ) -> np.ndarray:
        """
        Sample the terrain on a regular grid.

        Every sample is an independent call to `evaluate`, so grid values
        are identical to point queries at the same coordinates.

        Args:
            origin_x: X coordinate of the first column
            origin_z: Z coordinate of the first row
            width: Extent of the grid along X
            depth: Extent of the grid along Z
            res_x: Number of segments along X
            res_z: Number of segments along Z
            workers: Evaluate rows on this many threads (None or 1 = serial)

        Returns:
            Array of shape (res_z + 1, res_x + 1); grid[i, j] is the height at
            (xs[j], zs[i]) as given by `grid_coordinates`
        """

        xs, zs = grid_coordinates(origin_x, origin_z, width, depth, res_x, res_z)

        if workers is not None and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                rows = list(executor.map(lambda z: self.evaluate_row(xs, z), zs))
        else:
            rows = [self.evaluate_row(xs, z) for z in zs]

        return np.vstack(rows)

    def evaluate_world(self, segments: int = 128, workers: Optional[int] = None) -> np.ndarray:
        """Sample the whole world square, as a plane mesh with `segments` per side would."""

        half = self.world_extent / 2.0
        return self.evaluate_grid(
            -half, -half,
            self.world_extent, self.world_extent,
            segments, segments,
            workers=workers
        )
