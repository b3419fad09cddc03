"""
Command-line interface for slippy map tile arithmetic.
"""

import argparse
import itertools
import json
import logging
import sys

from dotenv import load_dotenv
from tqdm import tqdm

from .bbox import BBox, size_bbox_zoom, size_bbox_zoom_metatiles
from .config import Settings
from .errors import ConfigError
from .iterators import MetatilesIterator
from .metatiles import valid_scale
from .paths import PathScheme
from .pretty import format_metatile_row, print_bbox_info, print_tile_table
from .tiles import MAX_ZOOM, Tile

logger = logging.getLogger(__name__)


def _parse_bbox_arg(text: str) -> BBox:
    bbox = BBox.from_string(text)
    if bbox is None:
        print(f"Error parsing bbox: {text!r}", file=sys.stderr)
        print(
            "Expected format: top,left,bottom,right (comma or space separated)",
            file=sys.stderr,
        )
        sys.exit(1)
    return bbox


def _check_zoom_range(minzoom: int, maxzoom: int):
    if not 0 <= minzoom <= maxzoom <= MAX_ZOOM:
        print(
            f"Error: zoom range must satisfy 0 <= minzoom <= maxzoom <= {MAX_ZOOM}",
            file=sys.stderr,
        )
        sys.exit(1)


def _tile_arg(args) -> Tile:
    tile = Tile.create(args.zoom, args.x, args.y)
    if tile is None:
        print(
            f"Error: {args.zoom}/{args.x}/{args.y} is not a valid tile "
            f"(zoom <= {MAX_ZOOM}, x and y < 2**zoom)",
            file=sys.stderr,
        )
        sys.exit(1)
    return tile


def cmd_tiles(args):
    """List tiles overlapping a bounding box between two zooms."""
    bbox = _parse_bbox_arg(args.bbox)
    _check_zoom_range(args.minzoom, args.maxzoom)

    total = sum(size_bbox_zoom(bbox, z) for z in range(args.minzoom, args.maxzoom + 1))
    logger.info(f"Listing about {total} tiles for {bbox}, zooms {args.minzoom}-{args.maxzoom}")

    candidates = itertools.takewhile(lambda t: t.zoom <= args.maxzoom, bbox.tiles())
    tiles = []
    with tqdm(total=total, unit="tile", disable=not args.progress, leave=False) as pbar:
        for tile in candidates:
            if tile.zoom >= args.minzoom:
                tiles.append(tile)
                pbar.update(1)

    if args.output_format == "json":
        output = {
            "bbox": bbox.as_tuple(),
            "minzoom": args.minzoom,
            "maxzoom": args.maxzoom,
            "tiles": [
                {
                    "z": t.zoom,
                    "x": t.x,
                    "y": t.y,
                    "path": t.path(args.scheme, args.ext),
                    "bbox": t.bbox().as_tuple(),
                }
                for t in tiles
            ],
        }
        print(json.dumps(output, indent=2))
        return

    print_bbox_info(bbox)
    print(f"Tiles at zooms {args.minzoom}-{args.maxzoom}: {len(tiles)} total\n")
    print_tile_table(tiles, args.scheme, args.ext)


def cmd_metatiles(args):
    """List metatiles covering a bounding box between two zooms."""
    bbox = _parse_bbox_arg(args.bbox)
    _check_zoom_range(args.minzoom, args.maxzoom)

    total = sum(
        size_bbox_zoom_metatiles(bbox, z, args.scale)
        for z in range(args.minzoom, args.maxzoom + 1)
    )
    metatiles = MetatilesIterator.for_bbox(
        args.scale, bbox, minzoom=args.minzoom, maxzoom=args.maxzoom
    )
    for metatile in tqdm(metatiles, total=total, unit="metatile", disable=not args.progress):
        print(format_metatile_row(metatile))


def cmd_path(args):
    """Print the cache path of one tile."""
    tile = _tile_arg(args)
    print(tile.path(args.scheme, args.ext))


def cmd_parse(args):
    """Parse a tile URL or path and describe the tile."""
    tile = Tile.from_address_string(args.address)
    if tile is None:
        print(f"Error: could not parse a valid z/x/y tile from {args.address!r}", file=sys.stderr)
        sys.exit(1)
    centre = tile.centre_point()
    print(f"Tile: {tile.zxy()}")
    print(f"Centre: lat={float(centre.lat):.6f} lon={float(centre.lon):.6f}")
    print_bbox_info(tile.bbox())


def cmd_info(args):
    """Show corners, parent, children and metatile of one tile."""
    tile = _tile_arg(args)
    print(f"Tile: {tile.zxy()}")
    for name, point in (
        ("NW", tile.nw_point()),
        ("NE", tile.ne_point()),
        ("SW", tile.sw_point()),
        ("SE", tile.se_point()),
        ("Centre", tile.centre_point()),
    ):
        print(f"  {name:<7} lat={float(point.lat):.6f} lon={float(point.lon):.6f}")

    parent = tile.parent()
    print(f"Parent: {parent.zxy() if parent else '-'}")
    children = tile.subtiles()
    print(f"Children: {', '.join(c.zxy() for c in children) if children else '-'}")
    metatile = tile.metatile(args.scale)
    print(f"Metatile (scale {args.scale}): {format_metatile_row(metatile)}")


def _add_path_options(parser: argparse.ArgumentParser, settings: Settings):
    parser.add_argument(
        "--scheme",
        choices=[s.value for s in PathScheme],
        default=settings.scheme.value,
        help=f"Cache path layout (default: {settings.scheme.value})",
    )
    parser.add_argument(
        "--ext",
        default=settings.ext,
        help=f"File extension (default: {settings.ext})",
    )


def _add_tile_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("zoom", type=int, help="Zoom level")
    parser.add_argument("x", type=int, help="Tile column")
    parser.add_argument("y", type=int, help="Tile row")


def _add_bbox_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--bbox",
        "-b",
        required=True,
        help="Bounding box: top,left,bottom,right",
    )
    parser.add_argument(
        "--minzoom",
        type=int,
        default=0,
        help="Lowest zoom to list (default: 0)",
    )
    parser.add_argument(
        "--maxzoom",
        "-z",
        type=int,
        required=True,
        help="Highest zoom to list",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )


def main(argv=None):
    """Main CLI entry point."""
    load_dotenv()

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=logging.WARNING,  # Default for external libs
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("slippy_tiles").setLevel(settings.log_level)

    parser = argparse.ArgumentParser(
        description="Slippy map tile, metatile and bounding box calculations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tiles_parser = subparsers.add_parser(
        "tiles",
        help="List tiles overlapping a bounding box",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --bbox "37.45,-122.15,37.42,-122.10" --minzoom 12 --maxzoom 14
  %(prog)s --bbox "51.6 -0.5 51.3 0.3" -z 10 --scheme tc --ext jpg
        """,
    )
    _add_bbox_arguments(tiles_parser)
    _add_path_options(tiles_parser, settings)
    tiles_parser.add_argument(
        "--output-format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    tiles_parser.set_defaults(func=cmd_tiles)

    metatiles_parser = subparsers.add_parser(
        "metatiles",
        help="List metatiles covering a bounding box",
    )
    _add_bbox_arguments(metatiles_parser)
    metatiles_parser.add_argument(
        "--scale",
        "-s",
        type=int,
        default=settings.metatile_scale,
        help=f"Metatile edge in tiles, a power of two (default: {settings.metatile_scale})",
    )
    metatiles_parser.set_defaults(func=cmd_metatiles)

    path_parser = subparsers.add_parser("path", help="Print the cache path of a tile")
    _add_tile_arguments(path_parser)
    _add_path_options(path_parser, settings)
    path_parser.set_defaults(func=cmd_path)

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a tile URL or z/x/y path",
    )
    parse_parser.add_argument("address", help="e.g. https://tile.example.org/12/2045/1361.png")
    parse_parser.set_defaults(func=cmd_parse)

    info_parser = subparsers.add_parser("info", help="Show details of a tile")
    _add_tile_arguments(info_parser)
    info_parser.add_argument(
        "--scale",
        "-s",
        type=int,
        default=settings.metatile_scale,
        help=f"Metatile scale (default: {settings.metatile_scale})",
    )
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger("slippy_tiles").setLevel(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if hasattr(args, "scale") and not valid_scale(args.scale):
        print("Error: --scale must be a power of two", file=sys.stderr)
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
