"""
Park object layout.

Fixed and procedurally arranged positions for trees, benches, rocks, lamps,
bins, the path network and the parkour course, grounded on the terrain
through GroundQuery. All randomness comes from an explicit numpy Generator
so a layout is reproducible from its seed.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, NamedTuple, Tuple

import numpy as np

from ..engine.ground_query import GroundQuery

TREE_TYPES = ["pine", "oak", "birch", "palm"]

# Height of a rock's centre above the ground
ROCK_LIFT = 0.35


@dataclass(frozen=True)
class PlacedObject:
    kind: str
    variant: str
    x: float
    y: float
    z: float
    rotation: float = 0.0
    scale: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LayoutEntry(NamedTuple):
    variant: str
    x: float
    z: float
    rotation: float = 0.0
    scale: float = 1.0


FIXED_TREES = [
    LayoutEntry("pine", -15, -15), LayoutEntry("oak", -25, 8),
    LayoutEntry("birch", 18, -12), LayoutEntry("oak", -8, 20),
    LayoutEntry("pine", -5, -5), LayoutEntry("birch", 12, 15),
    LayoutEntry("oak", -18, 5), LayoutEntry("pine", 6, -3),
    LayoutEntry("birch", -12, -18), LayoutEntry("oak", 10, 8),
    LayoutEntry("pine", -30, -30), LayoutEntry("oak", 30, 30),
    LayoutEntry("birch", -30, 30), LayoutEntry("pine", 30, -30),
    LayoutEntry("palm", 0, 30), LayoutEntry("palm", 0, -30),
    LayoutEntry("palm", 30, 0), LayoutEntry("palm", -30, 0),
]

# (center_x, center_z, radius, count, main type)
TREE_CLUSTERS = [
    (-20, 15, 5, 8, "oak"),
    (22, -20, 7, 10, "pine"),
    (-15, -25, 6, 7, "birch"),
    (25, 18, 8, 9, "oak"),
    (5, 22, 4, 6, "pine"),
]

SCATTERED_TREE_COUNT = 20
SCATTERED_TREE_TYPES = ["pine", "oak", "birch", "pine", "oak", "random"]

BENCHES = [
    LayoutEntry("wooden", 8, 3, math.pi * 0.25),
    LayoutEntry("stone", -8, 3, -math.pi * 0.25),
    LayoutEntry("wooden", 3, 8, math.pi * 0.75),
    LayoutEntry("stone", 3, -8, -math.pi * 0.75),
    LayoutEntry("wooden", 15, 0, math.pi * 0.5),
    LayoutEntry("stone", -15, 0, -math.pi * 0.5),
    LayoutEntry("wooden", 0, 15, 0.0),
    LayoutEntry("stone", 0, -15, math.pi),
    LayoutEntry("stone", -22, -18, math.pi * 0.25),
    LayoutEntry("wooden", 22, 22, -math.pi * 0.75),
    LayoutEntry("wooden", 18, 18, math.pi * 0.25),
    LayoutEntry("stone", -18, -18, -math.pi * 0.75),
    LayoutEntry("wooden", -18, 18, math.pi * 0.75),
    LayoutEntry("stone", 18, -18, -math.pi * 0.25),
]

ROCKS = [
    LayoutEntry("rock", 12, 8, 1.2, 0.6),
    LayoutEntry("rock", -15, 3, 0.4, 0.5),
    LayoutEntry("rock", 8, -12, 2.1, 0.8),
    LayoutEntry("rock", -22, 14, 0.8, 0.7),
    LayoutEntry("rock", 18, -8, 1.5, 0.6),
    LayoutEntry("rock", -10, -18, 0.3, 0.9),
]

# Lamp posts: "tall" posts are 3.0 units high, "short" ones 2.5
LAMP_HEIGHTS = {"tall": 3.0, "short": 2.5}

LAMPS = [
    LayoutEntry("tall", -20, -20), LayoutEntry("tall", 20, 20),
    LayoutEntry("tall", -20, 20), LayoutEntry("tall", 20, -20),
    LayoutEntry("short", 15, 15), LayoutEntry("short", -15, 15),
    LayoutEntry("short", 15, -15), LayoutEntry("short", -15, -15),
    LayoutEntry("short", 25, 10), LayoutEntry("short", -25, 10),
    LayoutEntry("short", 25, -10), LayoutEntry("short", -25, -10),
    LayoutEntry("tall", 30, 0), LayoutEntry("tall", -30, 0),
    LayoutEntry("tall", 0, 30), LayoutEntry("tall", 0, -30),
]

# Height of a bin's centre above the ground
BIN_LIFT = 0.4

BINS = [
    LayoutEntry("bin", 5, 5), LayoutEntry("bin", -5, 5),
    LayoutEntry("bin", 5, -5), LayoutEntry("bin", -5, -5),
    LayoutEntry("bin", 15, 0), LayoutEntry("bin", -15, 0),
    LayoutEntry("bin", 0, 15), LayoutEntry("bin", 0, -15),
]


class PathSegment(NamedTuple):
    tier: str
    start: Tuple[float, float]
    control_a: Tuple[float, float]
    control_b: Tuple[float, float]
    end: Tuple[float, float]
    width: float


PATH_SEGMENTS = [
    PathSegment("main", (-40, 0), (-15, -3), (15, 3), (40, 0), 2.5),
    PathSegment("main", (0, -40), (3, -15), (-3, 15), (0, 40), 2.5),
    PathSegment("secondary", (-20, -20), (-5, -5), (5, 5), (20, 20), 1.8),
    PathSegment("secondary", (-20, 20), (-5, 5), (5, -5), (20, -20), 1.8),
    PathSegment("branch", (0, 0), (5, 2), (10, 10), (15, 15), 1.5),
    PathSegment("branch", (0, 0), (-5, 2), (-10, 10), (-15, 15), 1.5),
    PathSegment("branch", (0, 0), (5, -2), (10, -10), (15, -15), 1.5),
    PathSegment("branch", (0, 0), (-5, -2), (-10, -10), (-15, -15), 1.5),
    PathSegment("tertiary", (15, 15), (18, 15), (22, 12), (25, 10), 1.2),
    PathSegment("tertiary", (-15, 15), (-18, 15), (-22, 12), (-25, 10), 1.2),
    PathSegment("tertiary", (15, -15), (18, -15), (22, -12), (25, -10), 1.2),
    PathSegment("tertiary", (-15, -15), (-18, -15), (-22, -12), (-25, -10), 1.2),
    PathSegment("lake_access", (-15, -15), (-18, -16), (-23, -18), (-25, -20), 1.0),
    PathSegment("lake_access", (15, 15), (18, 18), (22, 23), (25, 25), 1.0),
]

# Path surface and edge strips sit just above the ground
PATH_LIFT = 0.02
PATH_EDGE_LIFT = 0.015
PATH_EDGE_WIDTH = 0.2
PATH_TILE_LENGTH = 2.0


class CoursePiece(NamedTuple):
    variant: str
    x: float
    z: float
    lift: float
    scale: float = 1.0


# The parkour course is level: every piece is lifted from the ground height
# at the start platform rather than from the ground under itself
PARKOUR_ANCHOR = (15.0, 15.0)

PARKOUR_COURSE = [
    CoursePiece("start_platform", 15, 15, 0.0, 3.0),
    CoursePiece("stepping_stone", 17, 15, 0.15),
    CoursePiece("stepping_stone", 19, 16, 0.15),
    CoursePiece("stepping_stone", 20.5, 14, 0.15),
    CoursePiece("stepping_stone", 22, 12, 0.15),
    CoursePiece("stepping_stone", 20, 10, 0.15),
    CoursePiece("balance_beam", 17, 8, 0.15, 6.0),
    CoursePiece("mid_platform", 14, 8, 0.25, 2.0),
    CoursePiece("climbing_wall", 14, 5, 2.0),
    CoursePiece("end_platform", 14, 3, 4.25, 3.0),
]


def _tree_cluster(
    rng: np.random.Generator,
    center_x: float, center_z: float,
    radius: float, count: int,
    main_type: str
) -> List[LayoutEntry]:
    """Trees spread around a centre, mostly of the cluster's main type."""

    cluster = []
    for i in range(count):
        angle = (i / count) * math.pi * 2 + math.cos(center_x + center_z)
        distance = (0.3 + rng.random() * 0.7) * radius

        x = center_x + math.cos(angle) * distance
        z = center_z + math.sin(angle) * distance

        if rng.random() < 0.8:
            tree_type = main_type
        else:
            tree_type = TREE_TYPES[int(rng.integers(3))]

        cluster.append(LayoutEntry(tree_type, x, z))

    return cluster


def _scattered_trees() -> List[LayoutEntry]:
    trees = []
    for i in range(SCATTERED_TREE_COUNT):
        angle = (i / SCATTERED_TREE_COUNT) * math.pi * 2
        distance = 15 + (i % 10) * 4
        offset = math.sin(i * 7.5) * 5

        x = math.cos(angle) * distance + offset
        z = math.sin(angle) * distance + offset

        trees.append(LayoutEntry(SCATTERED_TREE_TYPES[i % len(SCATTERED_TREE_TYPES)], x, z))

    return trees


def tree_layout(rng: np.random.Generator) -> List[LayoutEntry]:
    """
    Horizontal positions of every park tree.

    Fixed landmark trees come first, then the clusters, then a ring of
    scattered trees. Scattered trees may carry the variant "random",
    resolved when the tree is placed.
    """

    trees = list(FIXED_TREES)
    for center_x, center_z, radius, count, main_type in TREE_CLUSTERS:
        trees.extend(_tree_cluster(rng, center_x, center_z, radius, count, main_type))
    trees.extend(_scattered_trees())

    return trees


def bench_layout() -> List[LayoutEntry]:
    return list(BENCHES)


def place_trees(query: GroundQuery, rng: np.random.Generator) -> List[PlacedObject]:
    """Ground every tree with a random heading and a 0.8–1.2 scale variation."""

    placed = []
    for entry in tree_layout(rng):
        variant = entry.variant
        if variant == "random":
            variant = TREE_TYPES[int(rng.integers(len(TREE_TYPES)))]

        rotation = rng.random() * math.pi * 2
        scale = 0.8 + rng.random() * 0.4

        x, y, z = query.place(entry.x, entry.z)
        placed.append(PlacedObject("tree", variant, x, y, z, rotation, scale))

    return placed


def place_benches(query: GroundQuery) -> List[PlacedObject]:
    placed = []
    for entry in bench_layout():
        x, y, z = query.place(entry.x, entry.z)
        placed.append(PlacedObject("bench", entry.variant, x, y, z, entry.rotation))

    return placed


def place_rocks(query: GroundQuery) -> List[PlacedObject]:
    placed = []
    for entry in ROCKS:
        x, y, z = query.place(entry.x, entry.z, offset=ROCK_LIFT)
        placed.append(PlacedObject("rock", entry.variant, x, y, z, entry.rotation, entry.scale))

    return placed


def place_lamps(query: GroundQuery, rng: np.random.Generator) -> List[PlacedObject]:
    """Lamp posts on the ground, each turned to a random heading."""

    placed = []
    for entry in LAMPS:
        x, y, z = query.place(entry.x, entry.z)
        placed.append(PlacedObject("lamp", entry.variant, x, y, z, rng.random() * math.pi * 2))

    return placed


def place_bins(query: GroundQuery) -> List[PlacedObject]:
    placed = []
    for entry in BINS:
        x, y, z = query.place(entry.x, entry.z, offset=BIN_LIFT)
        placed.append(PlacedObject("bin", entry.variant, x, y, z))

    return placed


def _bezier_point(segment: PathSegment, t: float) -> Tuple[float, float]:
    u = 1.0 - t
    weights = (u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t)
    points = (segment.start, segment.control_a, segment.control_b, segment.end)

    x = sum(w * p[0] for w, p in zip(weights, points))
    z = sum(w * p[1] for w, p in zip(weights, points))
    return x, z


def _bezier_tangent(segment: PathSegment, t: float) -> Tuple[float, float]:
    u = 1.0 - t
    p0, p1, p2, p3 = segment.start, segment.control_a, segment.control_b, segment.end

    dx = 3 * u * u * (p1[0] - p0[0]) + 6 * u * t * (p2[0] - p1[0]) + 3 * t * t * (p3[0] - p2[0])
    dz = 3 * u * u * (p1[1] - p0[1]) + 6 * u * t * (p2[1] - p1[1]) + 3 * t * t * (p3[1] - p2[1])
    return dx, dz


def path_length(segment: PathSegment, divisions: int = 50) -> float:
    """Arc length of a path centre line, measured along a fine polyline."""

    points = [_bezier_point(segment, i / divisions) for i in range(divisions + 1)]
    return sum(math.dist(a, b) for a, b in zip(points, points[1:]))


def place_path_segments(query: GroundQuery) -> List[PlacedObject]:
    """
    Ground the path network.

    Every path is cut into tiles of about PATH_TILE_LENGTH along its curve.
    Each tile yields one "path" object at the centre line, turned along the
    curve and scaled to the path width, and two "path_edge" strips just
    outside its left and right borders.

    Returns:
        Tiles and edge strips in path order
    """

    placed = []
    for segment in PATH_SEGMENTS:
        tiles = max(1, math.ceil(path_length(segment) / PATH_TILE_LENGTH))
        edge_offset = segment.width / 2 + PATH_EDGE_WIDTH / 2

        for k in range(tiles):
            t = (k + 0.5) / tiles
            cx, cz = _bezier_point(segment, t)
            dx, dz = _bezier_tangent(segment, t)
            heading = math.atan2(dz, dx)

            norm = math.hypot(dx, dz)
            side_x, side_z = -dz / norm, dx / norm

            x, y, z = query.place(cx, cz, offset=PATH_LIFT)
            placed.append(PlacedObject("path", segment.tier, x, y, z, heading, segment.width))

            for side in (-1, 1):
                x, y, z = query.place(
                    cx + side_x * edge_offset * side,
                    cz + side_z * edge_offset * side,
                    offset=PATH_EDGE_LIFT
                )
                placed.append(PlacedObject("path_edge", segment.tier, x, y, z, heading, PATH_EDGE_WIDTH))

    return placed


def place_obstacles(query: GroundQuery, rng: np.random.Generator) -> List[PlacedObject]:
    """
    The parkour course, anchored on the ground at PARKOUR_ANCHOR.

    Stepping stones get a random size between 1.1 and 1.4 and a random
    heading; the other pieces keep their fixed scale and orientation.
    """

    _, anchor_y, _ = query.place(*PARKOUR_ANCHOR)

    placed = []
    for piece in PARKOUR_COURSE:
        rotation, scale = 0.0, piece.scale
        if piece.variant == "stepping_stone":
            scale = 1.1 + rng.random() * 0.3
            rotation = rng.random() * math.pi * 2

        placed.append(PlacedObject(
            "obstacle", piece.variant, piece.x, anchor_y + piece.lift, piece.z, rotation, scale
        ))

    return placed
