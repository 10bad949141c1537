"""
Command line interface for the park terrain.

Subcommands query single heights, export sampled grids, compute the park
object placement, print terrain statistics and run the HTTP service.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

import numpy as np
from tqdm import tqdm

from .config import ConfigError, load_config, reference_config
from .engine import GroundQuery, HeightField, HeightmapAnalyzer, grid_coordinates
from .engine.export import save_heightmap_npy, save_heightmap_png
from .placement import place_park
from .setup_logging import setup_logging


def _build_height_field(args) -> HeightField:
    config = load_config(args.config) if args.config else reference_config()
    return HeightField(config)


def cmd_height(args) -> int:
    height_field = _build_height_field(args)
    print(f"{height_field.evaluate(args.x, args.z):.6f}")
    return 0


def cmd_grid(args) -> int:
    height_field = _build_height_field(args)

    xs, zs = grid_coordinates(
        args.origin_x, args.origin_z, args.width, args.depth, args.res_x, args.res_z
    )
    rows = [height_field.evaluate_row(xs, z) for z in tqdm(zs, desc="Sampling terrain")]
    heightmap = np.vstack(rows)

    out = Path(args.out)
    if out.suffix.lower() == ".png":
        save_heightmap_png(heightmap, out)
    else:
        save_heightmap_npy(heightmap, out)

    print(f"Grid {heightmap.shape[0]}x{heightmap.shape[1]} written to {out}")
    print(f"Height range: {heightmap.min():.3f} to {heightmap.max():.3f}")
    return 0


def cmd_place(args) -> int:
    height_field = _build_height_field(args)
    placement = place_park(GroundQuery(height_field), seed=args.seed)

    if args.json:
        payload = {kind: [obj.to_dict() for obj in objects] for kind, objects in placement.items()}
        with open(args.json, "w") as f:
            json.dump(payload, f, indent=2)
        print(f"Placement written to {args.json}")

    for kind, objects in placement.items():
        heights = [obj.y for obj in objects]
        if heights:
            print(f"  {kind}: {len(objects)} (y {min(heights):.2f} to {max(heights):.2f})")
        else:
            print(f"  {kind}: 0")

    return 0


def cmd_analyze(args) -> int:
    height_field = _build_height_field(args)
    heightmap = height_field.evaluate_world(args.segments, workers=args.workers)

    analyzer = HeightmapAnalyzer(
        spacing=height_field.world_extent / args.segments,
        water_level=args.water_level
    )
    analysis = analyzer.analyze(heightmap)
    analysis["feature_detection"].pop("peak_locations", None)

    print(json.dumps(analysis, indent=2))
    return 0


def cmd_serve(args) -> int:
    from .service.api import main as serve_main

    argv = [
        "--host", args.host,
        "--port", str(args.port),
        "--tile-size", str(args.tile_size),
        "--resolution", str(args.resolution),
        "--max-tiles", str(args.max_tiles),
    ]
    if args.config:
        argv += ["--config", args.config]
    if args.verbose:
        argv.append("--verbose")
    return serve_main(argv)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Park terrain heightfield tools")
    parser.add_argument("--config", help="Path to a heightfield config JSON (default: reference park)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    height = subparsers.add_parser("height", help="Print the ground height at a point")
    height.add_argument("x", type=float, help="World X coordinate")
    height.add_argument("z", type=float, help="World Z coordinate")
    height.set_defaults(func=cmd_height)

    grid = subparsers.add_parser("grid", help="Sample a grid and write it to .npy or .png")
    grid.add_argument("--origin-x", type=float, default=-100.0, help="X of the first column")
    grid.add_argument("--origin-z", type=float, default=-100.0, help="Z of the first row")
    grid.add_argument("--width", type=float, default=200.0, help="Grid extent along X")
    grid.add_argument("--depth", type=float, default=200.0, help="Grid extent along Z")
    grid.add_argument("--res-x", type=int, default=128, help="Segments along X")
    grid.add_argument("--res-z", type=int, default=128, help="Segments along Z")
    grid.add_argument("--out", required=True, help="Output file (.npy or .png)")
    grid.set_defaults(func=cmd_grid)

    place = subparsers.add_parser("place", help="Place the park objects on the terrain")
    place.add_argument("--seed", type=int, default=42, help="Layout random seed")
    place.add_argument("--json", help="Write the placement to this JSON file")
    place.set_defaults(func=cmd_place)

    analyze = subparsers.add_parser("analyze", help="Print statistics of the whole world")
    analyze.add_argument("--segments", type=int, default=128, help="Segments per side")
    analyze.add_argument("--water-level", type=float, default=0.0, help="Elevation of water surfaces")
    analyze.add_argument("--workers", type=int, default=None, help="Threads used for sampling")
    analyze.set_defaults(func=cmd_analyze)

    serve = subparsers.add_parser("serve", help="Run the HTTP ground query service")
    serve.add_argument("--host", default="0.0.0.0", help="Host to bind server")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind server")
    serve.add_argument("--tile-size", type=float, default=25.0, help="World size of cached tiles")
    serve.add_argument("--resolution", type=int, default=32, help="Segments per cached tile")
    serve.add_argument("--max-tiles", type=int, default=256, help="Most cached tiles kept in memory")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: List[str] = None) -> int:
    """CLI entry point."""

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except (OSError, ConfigError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
