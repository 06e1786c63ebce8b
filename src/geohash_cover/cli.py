"""
Command-line interface for geohash-cover.

Provides commands for covering a region with cell codes, decoding codes
back to boxes, and showing per-depth cell sizes.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .bbox import BoundingBox, WORLD
from .codes import CODE_FORMATS, MAX_DEPTH_64, code_depth, code_to_bbox, format_code, parse_code
from .exceptions import GeoHashCoverError
from .geojson import bounding_box, parse_geojson
from .search import CoverSearcher, SearchConfig


def _add_world_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--world",
        type=float,
        nargs=4,
        metavar=("MIN_LAT", "MIN_LNG", "MAX_LAT", "MAX_LNG"),
        default=None,
        help="Root cell extent (default: -90 -180 90 180)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="geohash-cover",
        description="Compute quadtree cell codes covering a bounding box",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log search progress to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Cover command
    cover_parser = subparsers.add_parser(
        "cover",
        help="List the cells overlapping a region",
    )
    region = cover_parser.add_mutually_exclusive_group(required=True)
    region.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("MIN_LAT", "MIN_LNG", "MAX_LAT", "MAX_LNG"),
        help="Query region bounds",
    )
    region.add_argument(
        "--geojson",
        type=Path,
        help="GeoJSON file whose extent is the query region",
    )
    cover_parser.add_argument(
        "-d", "--depth",
        type=int,
        required=True,
        help="Number of subdivisions below the root",
    )
    cover_parser.add_argument(
        "-f", "--format",
        choices=CODE_FORMATS,
        default="bin",
        help="Code output format (default: bin)",
    )
    cover_parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH_64,
        help=f"Maximum accepted depth (default: {MAX_DEPTH_64})",
    )
    cover_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip input validation",
    )
    _add_world_argument(cover_parser)

    # Decode command
    decode_parser = subparsers.add_parser(
        "decode",
        help="Show the depth and bounds of cell codes",
    )
    decode_parser.add_argument(
        "codes",
        nargs="+",
        help="Codes as decimal, 0b... or 0x...",
    )
    _add_world_argument(decode_parser)

    # Stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Show cell sizes per depth",
    )
    stats_parser.add_argument(
        "-d", "--depth",
        type=int,
        default=16,
        help="Deepest level to list (default: 16)",
    )
    _add_world_argument(stats_parser)

    return parser


def _world_box(args: argparse.Namespace) -> BoundingBox:
    if args.world is None:
        return WORLD
    return BoundingBox(*args.world)


def cmd_cover(args: argparse.Namespace) -> int:
    """Handle the cover command."""
    if args.geojson is not None:
        try:
            text = args.geojson.read_bytes()
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        query_box = bounding_box(parse_geojson(text))
    else:
        query_box = BoundingBox(*args.bbox)

    config = SearchConfig(
        max_depth=args.max_depth,
        world_box=_world_box(args),
        validate=not args.no_validate,
    )
    searcher = CoverSearcher(config)
    codes = searcher.cover(query_box, args.depth)

    for code in codes:
        print(format_code(code, args.format))

    if args.verbose:
        stats = searcher.stats
        print(f"\nSearch statistics:", file=sys.stderr)
        print(f"  Query box: {query_box}", file=sys.stderr)
        print(f"  Codes emitted: {stats.codes_emitted}", file=sys.stderr)
        print(f"  Cells examined: {stats.cells_examined}", file=sys.stderr)
        print(f"  Cells pruned: {stats.cells_pruned}", file=sys.stderr)
        print(f"  Max frontier: {stats.max_frontier}", file=sys.stderr)

    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Handle the decode command."""
    world = _world_box(args)
    for text in args.codes:
        try:
            code = parse_code(text)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        box = code_to_bbox(world, code)
        print(
            f"{format_code(code)} depth={code_depth(code)} "
            f"lat=[{box.min_lat}, {box.max_lat}] lng=[{box.min_lng}, {box.max_lng}]"
        )
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle the stats command."""
    world = _world_box(args)

    print(f"Cell statistics for world box {world}:")
    for depth in range(args.depth + 1):
        scale = 2 ** depth
        print(
            f"  depth {depth:2d}: {4 ** depth:,} cells, "
            f"{world.height / scale:.9g} x {world.width / scale:.9g} degrees, "
            f"{2 * depth + 1} bit codes"
        )

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "cover":
            return cmd_cover(args)
        elif args.command == "decode":
            return cmd_decode(args)
        elif args.command == "stats":
            return cmd_stats(args)
    except GeoHashCoverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
