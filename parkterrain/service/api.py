"""
FastAPI server for park ground queries.

Exposes the heightfield over HTTP so placement tools and the mesh
sampler can query elevations without embedding the engine.
"""

import argparse
import math
import time
from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config import ConfigError, HeightFieldConfig, load_config, reference_config
from ..engine import GroundQuery, HeightField, TileCache, grid_coordinates
from ..engine.export import heightmap_to_base64
from ..setup_logging import setup_logging

MAX_BATCH_POINTS = 10000
MAX_GRID_SEGMENTS = 512


# Pydantic models for API
class Point(BaseModel):
    x: float = Field(..., allow_inf_nan=False, description="World X coordinate")
    z: float = Field(..., allow_inf_nan=False, description="World Z coordinate")


class HeightResponse(BaseModel):
    x: float
    z: float
    y: float


class HeightsRequest(BaseModel):
    points: List[Point] = Field(..., max_length=MAX_BATCH_POINTS, description="Points to query")


class HeightsResponse(BaseModel):
    heights: List[float]
    count: int


class GridRequest(BaseModel):
    origin_x: float = Field(..., allow_inf_nan=False, description="X of the first column")
    origin_z: float = Field(..., allow_inf_nan=False, description="Z of the first row")
    width: float = Field(..., allow_inf_nan=False, description="Grid extent along X")
    depth: float = Field(..., allow_inf_nan=False, description="Grid extent along Z")
    res_x: int = Field(..., ge=1, le=MAX_GRID_SEGMENTS, description="Segments along X")
    res_z: int = Field(..., ge=1, le=MAX_GRID_SEGMENTS, description="Segments along Z")
    return_image: bool = Field(False, description="Return base64-encoded PNG image")


class GridResponse(BaseModel):
    shape: List[int]
    xs: List[float]
    zs: List[float]
    heights: List[List[float]]
    generation_time: float
    heightmap_image: Optional[str] = None  # Base64-encoded PNG


class TileResponse(BaseModel):
    tile_x: int
    tile_z: int
    origin: List[float]
    tile_size: float
    heights: List[List[float]]


class HealthResponse(BaseModel):
    status: str
    world_extent: float
    hills: int
    basins: int
    cached_tiles: int


def create_app(
    config: Optional[HeightFieldConfig] = None,
    tile_size: float = 25.0,
    resolution: int = 32,
    max_tiles: int = 256,
    cors_origins: List[str] = None
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Terrain configuration (defaults to the reference park)
        tile_size: World size of cached tiles
        resolution: Segments per cached tile
        max_tiles: Most finished tiles kept in memory
        cors_origins: Allowed CORS origins

    Raises:
        ConfigError: If the configuration is invalid
    """

    if config is None:
        config = reference_config()

    height_field = HeightField(config)
    query = GroundQuery(height_field)
    tiles = TileCache(height_field, tile_size=tile_size, resolution=resolution, max_tiles=max_tiles)

    app = FastAPI(
        title="Park Terrain API",
        description="Ground elevation queries for the park heightfield",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    if cors_origins is None:
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.height_field = height_field
    app.state.tiles = tiles

    @app.get("/health", response_model=HealthResponse)
    def health():
        """Health check endpoint."""

        return HealthResponse(
            status="healthy",
            world_extent=config.world_extent,
            hills=len(config.hills),
            basins=len(config.basins),
            cached_tiles=len(tiles)
        )

    @app.get("/height", response_model=HeightResponse)
    def height(x: float = Query(..., description="World X"), z: float = Query(..., description="World Z")):
        """Ground elevation at a single point."""

        if not (math.isfinite(x) and math.isfinite(z)):
            raise HTTPException(status_code=400, detail="Coordinates must be finite")

        return HeightResponse(x=x, z=z, y=query.height_at(x, z))

    @app.post("/heights", response_model=HeightsResponse)
    def heights(request: HeightsRequest):
        """Ground elevations for a batch of points, in request order."""

        values = query.heights_at((point.x, point.z) for point in request.points)
        return HeightsResponse(heights=values.tolist(), count=len(values))

    @app.post("/grid", response_model=GridResponse)
    def grid(request: GridRequest):
        """Sample the terrain on a regular grid."""

        start_time = time.time()

        xs, zs = grid_coordinates(
            request.origin_x, request.origin_z,
            request.width, request.depth,
            request.res_x, request.res_z
        )
        heightmap = query.grid(
            request.origin_x, request.origin_z,
            request.width, request.depth,
            request.res_x, request.res_z
        )

        response = GridResponse(
            shape=list(heightmap.shape),
            xs=xs.tolist(),
            zs=zs.tolist(),
            heights=heightmap.tolist(),
            generation_time=time.time() - start_time
        )

        if request.return_image:
            response.heightmap_image = heightmap_to_base64(heightmap)

        return response

    @app.get("/tiles/{tile_x}/{tile_z}", response_model=TileResponse)
    def tile(tile_x: int, tile_z: int):
        """A cached terrain tile."""

        # Tile origins stay within ±world_extent
        origin_x, origin_z = tiles.tile_origin(tile_x, tile_z)
        limit = height_field.world_extent
        if abs(origin_x) > limit or abs(origin_z) > limit:
            raise HTTPException(status_code=404, detail=f"Tile ({tile_x}, {tile_z}) lies outside the world")

        heightmap = tiles.get_tile(tile_x, tile_z)
        return TileResponse(
            tile_x=tile_x,
            tile_z=tile_z,
            origin=list(tiles.tile_origin(tile_x, tile_z)),
            tile_size=tiles.tile_size,
            heights=heightmap.tolist()
        )

    @app.get("/tiles/stats")
    def tile_stats() -> Dict[str, int]:
        return tiles.stats()

    @app.get("/config")
    def get_config():
        """Active terrain configuration."""

        return config.model_dump()

    return app


def main(argv: List[str] = None):
    """CLI entry point for API server."""

    parser = argparse.ArgumentParser(description="Park Terrain API Server")
    parser.add_argument("--config", help="Path to a heightfield config JSON (default: reference park)")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind server")
    parser.add_argument("--tile-size", type=float, default=25.0, help="World size of cached tiles")
    parser.add_argument("--resolution", type=int, default=32, help="Segments per cached tile")
    parser.add_argument("--max-tiles", type=int, default=256, help="Most cached tiles kept in memory")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config) if args.config else reference_config()
        app = create_app(
            config, tile_size=args.tile_size, resolution=args.resolution, max_tiles=args.max_tiles
        )
    except (OSError, ConfigError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print("Starting Park Terrain API server...")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Docs: http://{args.host}:{args.port}/docs")

    uvicorn.run(app, host=args.host, port=args.port, log_level="debug" if args.verbose else "info")
    return 0


if __name__ == "__main__":
    main()
