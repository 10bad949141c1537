"""
Object placement on the park terrain.

Every routine rests its objects on the ground through GroundQuery and
draws randomness from an explicit, seeded numpy Generator.
"""

from .layout import (
    PlacedObject, LayoutEntry, PathSegment, CoursePiece, TREE_TYPES,
    tree_layout, bench_layout, path_length,
    place_trees, place_benches, place_rocks, place_lamps, place_bins,
    place_path_segments, place_obstacles
)
from .scatter import (
    PatchType, DEFAULT_PATCH_TYPES, is_clear, scatter_ground_details, place_park
)

__all__ = [
    "PlacedObject", "LayoutEntry", "PathSegment", "CoursePiece", "TREE_TYPES",
    "tree_layout", "bench_layout", "path_length",
    "place_trees", "place_benches", "place_rocks", "place_lamps", "place_bins",
    "place_path_segments", "place_obstacles",
    "PatchType", "DEFAULT_PATCH_TYPES", "is_clear", "scatter_ground_details", "place_park"
]
