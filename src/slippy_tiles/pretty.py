from typing import Iterable, Union

from .bbox import BBox
from .metatiles import Metatile
from .paths import PathScheme
from .tiles import Tile


def print_bbox_info(bbox: BBox):
    """
    Print bounding box info with Google Maps URLs.

    Args:
        bbox: Bounding box to describe
    """
    top, left, bottom, right = bbox.as_tuple()

    print("\nBounding box:")
    print(f"   top={top:.6f} left={left:.6f} bottom={bottom:.6f} right={right:.6f}")
    print(f"   NW corner: https://www.google.com/maps/?q={top:.6f},{left:.6f}")
    print(f"   SE corner: https://www.google.com/maps/?q={bottom:.6f},{right:.6f}")
    if bbox.is_degenerate():
        print("   (degenerate: top <= bottom or right <= left, contains nothing)")
    print()


def format_tile_row(tile: Tile, scheme: Union[PathScheme, str], ext: str) -> str:
    """One text line: z/x/y, cache path and bbox edges."""
    top, left, bottom, right = tile.bbox().as_tuple()
    return (
        f"{tile.zxy():<20} {tile.path(scheme, ext):<40} "
        f"{top:<12.6f} {left:<12.6f} {bottom:<12.6f} {right:<12.6f}"
    )


def print_tile_table(tiles: Iterable[Tile], scheme: Union[PathScheme, str], ext: str):
    """Print tiles as a table with their path and bbox."""
    print(
        f"{'Tile (z/x/y)':<20} {'path':<40} {'top':<12} {'left':<12} {'bottom':<12} {'right':<12}"
    )
    print("-" * 124)
    for tile in tiles:
        print(format_tile_row(tile, scheme, ext))


def format_metatile_row(metatile: Metatile) -> str:
    return (
        f"{metatile.zoom}/{metatile.x}/{metatile.y} "
        f"scale={metatile.scale} size={metatile.size()} {metatile.mt_path()}"
    )
