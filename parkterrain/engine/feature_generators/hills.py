"""
Hill generator.

Adds gentle radial bumps at fixed locations on top of the base undulation.
"""

import math
from typing import List

from .base import FeatureGenerator


class HillSet(FeatureGenerator):
    """
    Additive radial hills.

    Each hill rises with a quadratic profile from zero at its radius to
    `peak_height` at its centre. Overlapping hills stack, producing a
    higher combined peak.
    """

    def __init__(self, hills: List):
        # Flattened to tuples: this runs for every queried point
        self.hills = tuple(
            (float(hill.center_x), float(hill.center_z), float(hill.peak_height), float(hill.radius))
            for hill in hills
        )

    def contribution(self, x: float, z: float) -> float:
        """Total height added by all hills at (x, z); never negative for positive peaks."""

        total = 0.0
        for center_x, center_z, peak_height, radius in self.hills:
            distance = math.sqrt((x - center_x) ** 2 + (z - center_z) ** 2)
            influence = max(0.0, 1.0 - distance / radius)
            total += peak_height * influence ** 2

        return total

    def apply(self, height: float, x: float, z: float) -> float:
        """Raise the terrain by the hills at (x, z)."""

        return height + self.contribution(x, z)

    def __len__(self) -> int:
        return len(self.hills)
