"""
Attenuation masks.

Both masks return a factor in [0, 1] that scales the base undulation:
EdgeFalloff flattens the terrain toward the world boundary and PathMask
keeps the walking corridors level.
"""

import math

# Fraction of the world extent at which the terrain is fully flattened
EDGE_RADIUS_FRACTION = 0.45

# cos(45°), distance scale for the diagonal corridors
DIAGONAL_SCALE = 0.70710678


class EdgeFalloff:
    """Radial falloff that reaches zero at 0.45 * world_extent from the origin."""

    def __init__(self, world_extent: float, exponent: float = 4.0):
        self.world_extent = world_extent
        self.exponent = exponent
        self.radius = world_extent * EDGE_RADIUS_FRACTION

    def factor(self, x: float, z: float) -> float:
        distance = math.sqrt(x * x + z * z)
        return max(0.0, 1.0 - (distance / self.radius) ** self.exponent)


class PathMask:
    """
    Flattens terrain along four fixed corridors through the origin.

    The corridors are the X axis, the Z axis and both diagonals. The
    factor is 0 on a corridor and ramps linearly to 1 over `divisor`
    world units.
    """

    def __init__(self, divisor: float = 8.0):
        self.divisor = divisor

    def corridor_distance(self, x: float, z: float) -> float:
        """Distance from (x, z) to the nearest corridor."""

        return min(
            abs(x),                        # corridor along z
            abs(z),                        # corridor along x
            abs(x - z) * DIAGONAL_SCALE,   # 45° diagonal
            abs(x + z) * DIAGONAL_SCALE,   # 135° diagonal
        )

    def factor(self, x: float, z: float) -> float:
        return min(1.0, self.corridor_distance(x, z) / self.divisor)
