"""
Tile calculation module.

A tile is one cell of the quad-tree partition of the Web-Mercator world,
addressed by (zoom, x, y). Tile (0, 0, 0) covers the world; each tile has
four children at zoom + 1.
"""

import operator
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

import mercantile

from .bbox import BBox
from .errors import InvalidTileError
from .latlon import LatLon, lat_lon_to_tile, tile_nw_lat_lon
from .paths import (
    PathScheme,
    zxy_to_mp_path,
    zxy_to_mt_path,
    zxy_to_path,
    zxy_to_tc_path,
    zxy_to_ts_path,
    zxy_to_zxy_path,
)

if TYPE_CHECKING:
    from .iterators import AllSubtilesIterator, AllTilesIterator, AllTilesToZoomIterator
    from .metatiles import Metatile

# Zoom is kept well below the coordinate width so 2**zoom stays cheap and
# iterator bookkeeping has headroom.
MAX_ZOOM = 99

# Stand-in for the platform unsigned size type (64-bit usize)
SIZE_MAX = 2 ** 64 - 1

TMS_REGEX = re.compile(
    r"(?:^|/)(?P<zoom>[0-9]{1,2})/(?P<x>[0-9]{1,10})/(?P<y>[0-9]{1,10})(?:\.[a-zA-Z]{3,4})?$"
)


def _as_index(value: Any) -> Optional[int]:
    try:
        return operator.index(value)
    except TypeError:
        return None


def valid_tile(zoom: Any, x: Any, y: Any) -> bool:
    """True if (zoom, x, y) addresses a tile."""
    zoom, x, y = _as_index(zoom), _as_index(x), _as_index(y)
    if zoom is None or x is None or y is None:
        return False
    if not 0 <= zoom <= MAX_ZOOM:
        return False
    n = 1 << zoom
    return 0 <= x < n and 0 <= y < n


@dataclass(frozen=True, order=True)
class Tile:
    """Map tile coordinates."""
    zoom: int  # zoom level, 0..MAX_ZOOM
    x: int  # tile x coordinate, 0 is the west edge
    y: int  # tile y coordinate, 0 is the north edge

    def __post_init__(self):
        if not valid_tile(self.zoom, self.x, self.y):
            raise InvalidTileError(
                f"tile coordinates must satisfy zoom <= {MAX_ZOOM} and x, y < 2**zoom",
                (self.zoom, self.x, self.y),
            )
        object.__setattr__(self, "zoom", operator.index(self.zoom))
        object.__setattr__(self, "x", operator.index(self.x))
        object.__setattr__(self, "y", operator.index(self.y))

    @classmethod
    def create(cls, zoom: Any, x: Any, y: Any) -> Optional["Tile"]:
        """Build a tile, or return None for an invalid zoom or x/y."""
        if not valid_tile(zoom, x, y):
            return None
        return cls(zoom, x, y)

    @classmethod
    def from_address_string(cls, address: str) -> Optional["Tile"]:
        """
        Parse a ``z/x/y`` path, optionally with an extension.

        The match is anchored at the end only, so URLs like
        ``https://tiles.example.org/osm/12/2045/1361.png`` parse too.
        """
        match = TMS_REGEX.search(address)
        if match is None:
            return None
        return cls.create(int(match["zoom"]), int(match["x"]), int(match["y"]))

    from_tms = from_address_string

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float, zoom: int) -> Optional["Tile"]:
        """The tile at ``zoom`` containing (lat, lon), None for a bad zoom or point."""
        if _as_index(zoom) is None or not 0 <= zoom <= MAX_ZOOM:
            return None
        if LatLon.create(lat, lon) is None:
            return None
        x, y = lat_lon_to_tile(lat, lon, zoom)
        return cls(zoom, x, y)

    @classmethod
    def from_mercantile(cls, tile: mercantile.Tile) -> Optional["Tile"]:
        return cls.create(tile.z, tile.x, tile.y)

    @staticmethod
    def all() -> "AllTilesIterator":
        """Every tile, zoom by zoom, in z-order within a zoom."""
        from .iterators import AllTilesIterator

        return AllTilesIterator()

    @staticmethod
    def all_to_zoom(max_zoom: int) -> "AllTilesToZoomIterator":
        """Every tile up to and including ``max_zoom``."""
        from .iterators import AllTilesToZoomIterator

        return AllTilesToZoomIterator(max_zoom)

    def as_tuple(self) -> tuple[int, int, int]:
        """Return as (zoom, x, y) tuple."""
        return (self.zoom, self.x, self.y)

    def to_mercantile(self) -> mercantile.Tile:
        return mercantile.Tile(x=self.x, y=self.y, z=self.zoom)

    def parent(self) -> Optional["Tile"]:
        """The tile one zoom level up, None at zoom 0."""
        if self.zoom == 0:
            return None
        return Tile(self.zoom - 1, self.x // 2, self.y // 2)

    def subtiles(self) -> Optional[tuple["Tile", "Tile", "Tile", "Tile"]]:
        """
        The four children, None at MAX_ZOOM.

        Order is top-left, top-right, bottom-left, bottom-right.
        """
        if self.zoom >= MAX_ZOOM:
            return None
        z = self.zoom + 1
        x = 2 * self.x
        y = 2 * self.y
        return (Tile(z, x, y), Tile(z, x + 1, y), Tile(z, x, y + 1), Tile(z, x + 1, y + 1))

    def all_subtiles_iter(self) -> "AllSubtilesIterator":
        """Every descendant of this tile, level by level."""
        from .iterators import AllSubtilesIterator

        return AllSubtilesIterator(self)

    def metatile(self, scale: int) -> Optional["Metatile"]:
        """The metatile of ``scale`` containing this tile."""
        from .metatiles import Metatile

        return Metatile.create(scale, self.zoom, self.x, self.y)

    # --- Geographic points ---

    def nw_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x, self.y)

    def ne_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x + 1, self.y)

    def sw_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x, self.y + 1)

    def se_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x + 1, self.y + 1)

    def centre_point(self) -> LatLon:
        return tile_nw_lat_lon(self.zoom, self.x + 0.5, self.y + 0.5)

    center_point = centre_point

    def top(self) -> float:
        return self.nw_point().lat

    def bottom(self) -> float:
        return self.sw_point().lat

    def left(self) -> float:
        return self.nw_point().lon

    def right(self) -> float:
        return self.se_point().lon

    def bbox(self) -> BBox:
        """
        Convert a tile to its bounding box.

        The box includes the tile's top and left edges but not its bottom
        and right edges, like every BBox.
        """
        nw = self.nw_point()
        se = self.se_point()
        return BBox(nw.lat, nw.lon, se.lat, se.lon)

    # --- Cache paths ---

    def zxy(self) -> str:
        return f"{self.zoom}/{self.x}/{self.y}"

    def tc_path(self, ext: str) -> str:
        return zxy_to_tc_path(self.zoom, self.x, self.y, ext)

    def mp_path(self, ext: str) -> str:
        return zxy_to_mp_path(self.zoom, self.x, self.y, ext)

    def ts_path(self, ext: str) -> str:
        return zxy_to_ts_path(self.zoom, self.x, self.y, ext)

    def zxy_path(self, ext: str) -> str:
        return zxy_to_zxy_path(self.zoom, self.x, self.y, ext)

    def mt_path(self, ext: str) -> str:
        return zxy_to_mt_path(self.zoom, self.x, self.y, ext)

    def path(self, scheme: Union[PathScheme, str], ext: str) -> str:
        return zxy_to_path(scheme, self.zoom, self.x, self.y, ext)


def num_tiles_in_zoom(zoom: int) -> Optional[int]:
    """
    Tile count reported for a zoom level, or None when it overflows SIZE_MAX.

    Zoom 0 is 1. Otherwise this is ``2 ** (2 ** zoom)``, which fits the
    64-bit size type up to zoom 5 (4_294_967_296) and overflows from zoom 6.
    The exponent is checked before the power is taken.
    """
    if zoom == 0:
        return 1
    exponent = 1 << zoom
    if exponent >= SIZE_MAX.bit_length():
        return None
    return 1 << exponent


def tiles_in_zoom(zoom: int) -> int:
    """Exact number of tiles in one zoom level, 4 ** zoom."""
    return 1 << (2 * zoom)
