"""
Water basin generator.

Pulls the terrain toward a fixed depth around each pond or lake so the
water surfaces sit in a depression.
"""

import math
from typing import List, Optional

from .base import FeatureGenerator


class WaterBasinSet(FeatureGenerator):
    """
    Localized depressions that override the terrain height.

    Basins are applied in list order to the running height. Inside
    overlapping basins the result is therefore blended toward the last
    basin in the list, not toward the deepest one.
    """

    def __init__(self, basins: List):
        self.basins = tuple(
            (float(basin.center_x), float(basin.center_z), float(basin.radius), float(basin.target_depth))
            for basin in basins
        )

    def apply(self, height: float, x: float, z: float) -> float:
        """Blend the height at (x, z) toward every basin covering the point."""

        for center_x, center_z, radius, target_depth in self.basins:
            distance = math.sqrt((x - center_x) ** 2 + (z - center_z) ** 2)
            influence = max(0.0, 1.0 - distance / radius)

            if influence <= 0.0:
                continue

            depression = influence ** 2
            height = height * (1.0 - depression) + target_depth * depression

        return height

    def nearest(self, x: float, z: float, margin: float = 0.0) -> Optional[int]:
        """
        Index of the closest basin whose radius plus `margin` covers (x, z).

        Returns:
            Basin index, or None if the point is clear of all basins
        """

        best_index = None
        best_distance = math.inf

        for i, (center_x, center_z, radius, _) in enumerate(self.basins):
            distance = math.sqrt((x - center_x) ** 2 + (z - center_z) ** 2)
            if distance < radius + margin and distance < best_distance:
                best_index = i
                best_distance = distance

        return best_index

    def __len__(self) -> int:
        return len(self.basins)
