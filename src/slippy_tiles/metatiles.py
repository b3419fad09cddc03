"""
Metatiles: aligned power-of-two blocks of tiles rendered and cached together.

A metatile of scale 8 at zoom 10 covers 8x8 tiles. At low zooms, where the
whole world is narrower than the scale, it covers every tile of the zoom.
"""

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .bbox import BBox
from .errors import InvalidMetatileError
from .latlon import LatLon, tile_nw_lat_lon
from .paths import zxy_to_mt_path
from .tiles import Tile, _as_index, valid_tile

if TYPE_CHECKING:
    from .iterators import MetatilesIterator


def valid_scale(scale: Any) -> bool:
    """True for a power of two >= 1."""
    scale = _as_index(scale)
    return scale is not None and scale >= 1 and scale & (scale - 1) == 0


@dataclass(frozen=True, order=True)
class Metatile:
    """A ``scale`` x ``scale`` block of tiles, addressed by its top-left tile."""
    scale: int
    zoom: int
    x: int
    y: int

    def __post_init__(self):
        if not valid_scale(self.scale):
            raise InvalidMetatileError("metatile scale must be a power of two", self.scale)
        if not valid_tile(self.zoom, self.x, self.y):
            raise InvalidMetatileError(
                "metatile origin is not a valid tile", (self.zoom, self.x, self.y)
            )
        scale = operator.index(self.scale)
        object.__setattr__(self, "scale", scale)
        object.__setattr__(self, "zoom", operator.index(self.zoom))
        # snap to the block origin
        object.__setattr__(self, "x", operator.index(self.x) // scale * scale)
        object.__setattr__(self, "y", operator.index(self.y) // scale * scale)

    @classmethod
    def create(cls, scale: Any, zoom: Any, x: Any, y: Any) -> Optional["Metatile"]:
        """
        Metatile of ``scale`` containing tile (zoom, x, y).

        Returns:
            The metatile with x/y rounded down to a multiple of ``scale``,
            or None for a scale that is not a power of two or an invalid tile
        """
        if not valid_scale(scale) or not valid_tile(zoom, x, y):
            return None
        return cls(scale, zoom, x, y)

    @staticmethod
    def all(scale: int) -> "MetatilesIterator":
        """Every metatile of ``scale``, zoom by zoom, z-order within a zoom."""
        from .iterators import MetatilesIterator

        return MetatilesIterator.all(scale)

    def size(self) -> int:
        """Edge length in tiles: ``scale``, or less at zooms narrower than that."""
        return min(self.scale, 1 << self.zoom)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return as (scale, zoom, x, y) tuple."""
        return (self.scale, self.zoom, self.x, self.y)

    def tiles(self) -> list[Tile]:
        """Constituent tiles, x offset in the outer loop."""
        size = self.size()
        return [
            Tile(self.zoom, self.x + dx, self.y + dy)
            for dx in range(size)
            for dy in range(size)
        ]

    def nw_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x, self.y)

    def se_point(self) -> LatLon:
        size = self.size()
        return tile_nw_lat_lon(self.zoom, self.x + size, self.y + size)

    def centre_point(self) -> LatLon:
        half = self.size() / 2.0
        return tile_nw_lat_lon(self.zoom, self.x + half, self.y + half)

    center_point = centre_point

    def bbox(self) -> BBox:
        nw = self.nw_point()
        se = self.se_point()
        return BBox(nw.lat, nw.lon, se.lat, se.lon)

    def mt_path(self, ext: str = "meta") -> str:
        """mod_tile style path of the metatile file."""
        return zxy_to_mt_path(self.zoom, self.x, self.y, ext)
