"""
Tile cache for streamed terrain.

Splits the plane into square tiles and materializes each tile once, so a
terrain service can hand out the same height samples to many clients.
"""

import logging
import math
from collections import OrderedDict
from concurrent.futures import Future
from threading import Lock
from typing import Dict, Tuple

import numpy as np

from .height_field import HeightField

logger = logging.getLogger(__name__)


class TileCache:
    """
    Read-through cache of heightfield tiles.

    Tile (tile_x, tile_z) covers the square with origin
    (tile_x * tile_size, tile_z * tile_size) and is sampled with
    `resolution` segments per side. The first request for a tile computes
    it; concurrent requests for the same tile wait for that single
    computation instead of duplicating it.

    At most `max_tiles` finished tiles are kept; the least recently used
    ones are dropped first. Tiles still being computed are never dropped.
    """

    def __init__(
        self,
        height_field: HeightField,
        tile_size: float = 25.0,
        resolution: int = 32,
        max_tiles: int = 256
    ):
        if not math.isfinite(tile_size) or tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")
        if max_tiles < 1:
            raise ValueError(f"max_tiles must be at least 1, got {max_tiles}")

        self.height_field = height_field
        self.tile_size = float(tile_size)
        self.resolution = int(resolution)
        self.max_tiles = int(max_tiles)

        self._tiles: "OrderedDict[Tuple[int, int], Future]" = OrderedDict()
        self._lock = Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get_tile(self, tile_x: int, tile_z: int) -> np.ndarray:
        """
        Heights of one tile.

        Args:
            tile_x: Tile column index
            tile_z: Tile row index

        Returns:
            Read-only array of shape (resolution + 1, resolution + 1)
        """

        key = (int(tile_x), int(tile_z))

        with self._lock:
            future = self._tiles.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._tiles[key] = future
                self._misses += 1
                self._evict_least_recent()
            else:
                self._tiles.move_to_end(key)
                self._hits += 1

        if owner:
            try:
                tile = self._compute_tile(*key)
            except BaseException as e:
                # Drop the failed entry so a later request can retry
                with self._lock:
                    if self._tiles.get(key) is future:
                        del self._tiles[key]
                logger.warning("Tile (%d, %d) failed and was evicted: %s", key[0], key[1], e)
                future.set_exception(e)
                raise
            future.set_result(tile)

        return future.result()

    def tile_origin(self, tile_x: int, tile_z: int) -> Tuple[float, float]:
        return (tile_x * self.tile_size, tile_z * self.tile_size)

    def tile_index(self, x: float, z: float) -> Tuple[int, int]:
        """Index of the tile containing world point (x, z)."""

        return (math.floor(x / self.tile_size), math.floor(z / self.tile_size))

    def tile_for_point(self, x: float, z: float) -> np.ndarray:
        return self.get_tile(*self.tile_index(x, z))

    def region(self, tile_x0: int, tile_z0: int, tile_x1: int, tile_z1: int) -> Dict[Tuple[int, int], np.ndarray]:
        """All tiles in the inclusive index rectangle, keyed by (tile_x, tile_z)."""

        tiles = {}
        for tile_z in range(tile_z0, tile_z1 + 1):
            for tile_x in range(tile_x0, tile_x1 + 1):
                tiles[(tile_x, tile_z)] = self.get_tile(tile_x, tile_z)

        return tiles

    def clear(self) -> None:
        with self._lock:
            self._tiles.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "tiles": len(self._tiles),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._tiles)

    def __contains__(self, key) -> bool:
        with self._lock:
            return tuple(key) in self._tiles

    def _evict_least_recent(self) -> None:
        # Caller holds self._lock
        excess = len(self._tiles) - self.max_tiles
        if excess <= 0:
            return

        finished = [key for key, future in self._tiles.items() if future.done()]
        for key in finished[:excess]:
            del self._tiles[key]
            self._evictions += 1

    def _compute_tile(self, tile_x: int, tile_z: int) -> np.ndarray:
        origin_x, origin_z = self.tile_origin(tile_x, tile_z)

        tile = self.height_field.evaluate_grid(
            origin_x, origin_z,
            self.tile_size, self.tile_size,
            self.resolution, self.resolution
        )
        tile.setflags(write=False)

        logger.debug("Computed tile (%d, %d) at origin (%.2f, %.2f)", tile_x, tile_z, origin_x, origin_z)
        return tile
