"""
Ground detail scattering.

Drops grass, flower and dirt patches at random points of the park while
keeping them out of the water and off the paths.
"""

import logging
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..engine.ground_query import GroundQuery
from .layout import (
    PlacedObject, place_benches, place_bins, place_lamps, place_obstacles,
    place_path_segments, place_rocks, place_trees
)

logger = logging.getLogger(__name__)


class PatchType(NamedTuple):
    name: str
    count: int
    height_offset: float
    scale_range: Tuple[float, float]


DEFAULT_PATCH_TYPES = [
    PatchType("grass", 20, 0.02, (1.0, 2.0)),
    PatchType("flowers", 15, 0.04, (0.8, 1.5)),
    PatchType("dirt", 12, 0.01, (0.7, 1.8)),
]


def is_clear(
    query: GroundQuery,
    x: float, z: float,
    water_margin: float = 2.0,
    path_clearance: float = 5.0
) -> bool:
    """True if (x, z) is outside every basin (plus margin) and away from the paths."""

    height_field = query.height_field
    if height_field.basins.nearest(x, z, margin=water_margin) is not None:
        return False

    return height_field.paths.corridor_distance(x, z) >= path_clearance


def scatter_ground_details(
    query: GroundQuery,
    rng: np.random.Generator,
    patch_types: Optional[Sequence[PatchType]] = None,
    water_margin: float = 2.0,
    path_clearance: float = 5.0,
    spread: float = 80.0,
    max_attempts: int = 20
) -> List[PlacedObject]:
    """
    Scatter ground patches by rejection sampling.

    Each patch gets up to `max_attempts` candidate points drawn uniformly
    from the square of side `spread` around the origin; a patch whose
    candidates all land in water or on a path is skipped.

    Args:
        query: Ground query used to rest patches on the terrain
        rng: Source of all randomness
        patch_types: Patch kinds to scatter (defaults to grass, flowers, dirt)
        water_margin: Extra clearance around every water basin
        path_clearance: Minimum distance to a path corridor
        spread: Side of the sampling square
        max_attempts: Candidate points tried per patch

    Returns:
        Placed patches in generation order
    """

    if patch_types is None:
        patch_types = DEFAULT_PATCH_TYPES

    placed = []
    skipped = 0

    for patch_type in patch_types:
        for _ in range(patch_type.count):
            position = None

            for _ in range(max_attempts):
                x = (rng.random() - 0.5) * spread
                z = (rng.random() - 0.5) * spread
                if is_clear(query, x, z, water_margin, path_clearance):
                    position = (x, z)
                    break

            if position is None:
                skipped += 1
                continue

            low, high = patch_type.scale_range
            scale = low + rng.random() * (high - low)

            x, y, z = query.place(position[0], position[1], offset=patch_type.height_offset)
            placed.append(PlacedObject("patch", patch_type.name, x, y, z, 0.0, scale))

    if skipped:
        logger.debug("Skipped %d ground patches without a clear spot", skipped)

    return placed


def place_park(query: GroundQuery, seed: int = 0) -> Dict[str, List[PlacedObject]]:
    """
    Place every park object on the terrain.

    Args:
        query: Ground query for the park terrain
        seed: Seed for the layout generator

    Returns:
        Dictionary with "trees", "benches", "rocks", "lamps", "bins",
        "paths", "obstacles" and "patches" lists
    """

    rng = np.random.default_rng(seed)

    placement = {
        "trees": place_trees(query, rng),
        "benches": place_benches(query),
        "rocks": place_rocks(query),
        "lamps": place_lamps(query, rng),
        "bins": place_bins(query),
        "paths": place_path_segments(query),
        "obstacles": place_obstacles(query, rng),
        "patches": scatter_ground_details(query, rng),
    }

    logger.info(
        "Placed park (seed=%d): %s",
        seed, ", ".join(f"{len(objects)} {kind}" for kind, objects in placement.items())
    )
    return placement
