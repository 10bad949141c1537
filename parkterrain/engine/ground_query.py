"""
Ground query service used by placement routines.
"""

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .height_field import HeightField


class GroundQuery:
    """
    Answers "where is the ground?" for objects placed in the park.

    Thin read-only view over a HeightField; placement code holds one of
    these instead of probing rendered geometry.
    """

    def __init__(self, height_field: HeightField):
        self.height_field = height_field

    def height_at(self, x: float, z: float) -> float:
        return self.height_field.evaluate(x, z)

    def heights_at(self, points: Iterable[Sequence[float]]) -> np.ndarray:
        return self.height_field.evaluate_many(points)

    def place(self, x: float, z: float, offset: float = 0.0) -> Tuple[float, float, float]:
        """Position (x, y, z) that rests an object `offset` units above the ground."""

        return (x, self.height_at(x, z) + offset, z)

    def grid(
        self,
        origin_x: float, origin_z: float,
        width: float, depth: float,
        res_x: int, res_z: int,
        workers: Optional[int] = None
    ) -> np.ndarray:
        return self.height_field.evaluate_grid(
            origin_x, origin_z, width, depth, res_x, res_z, workers=workers
        )

    def is_submerged(self, x: float, z: float, water_level: float = 0.0) -> bool:
        """True if the ground at (x, z) lies below `water_level`."""

        return self.height_at(x, z) < water_level
