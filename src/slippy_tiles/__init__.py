"""
slippy_tiles - Slippy map tile, metatile and bounding box arithmetic.

Models the zoom/x/y quad-tree of Web-Mercator web maps: conversions between
tiles, geographic points and bounding boxes, tile cache path encodings, and
iterators that walk the (conceptually infinite) tile tree.
"""

__version__ = "0.1.0"

from .bbox import BBox, size_bbox_zoom, size_bbox_zoom_metatiles, tile_index_rect
from .errors import (
    ConfigError,
    InvalidBBoxError,
    InvalidLatLonError,
    InvalidMetatileError,
    InvalidTileError,
    SlippyTilesError,
)
from .iterators import (
    AllSubtilesIterator,
    AllTilesIterator,
    AllTilesToZoomIterator,
    BBoxTilesIterator,
    MetatilesIterator,
)
from .latlon import MAX_LAT, LatLon, lat_lon_to_tile, tile_nw_lat_lon
from .metatiles import Metatile
from .paths import (
    PathScheme,
    xy_to_mp,
    xy_to_mt,
    xy_to_tc,
    xy_to_ts,
    zxy_to_mp_path,
    zxy_to_mt_path,
    zxy_to_path,
    zxy_to_tc_path,
    zxy_to_ts_path,
    zxy_to_zxy_path,
)
from .tiles import MAX_ZOOM, SIZE_MAX, Tile, num_tiles_in_zoom, tiles_in_zoom
from .zorder import xy_to_zorder, zorder_to_xy

__all__ = [
    "AllSubtilesIterator",
    "AllTilesIterator",
    "AllTilesToZoomIterator",
    "BBox",
    "BBoxTilesIterator",
    "ConfigError",
    "InvalidBBoxError",
    "InvalidLatLonError",
    "InvalidMetatileError",
    "InvalidTileError",
    "LatLon",
    "MAX_LAT",
    "MAX_ZOOM",
    "Metatile",
    "MetatilesIterator",
    "PathScheme",
    "SIZE_MAX",
    "SlippyTilesError",
    "Tile",
    "lat_lon_to_tile",
    "num_tiles_in_zoom",
    "size_bbox_zoom",
    "size_bbox_zoom_metatiles",
    "tile_index_rect",
    "tile_nw_lat_lon",
    "tiles_in_zoom",
    "xy_to_mp",
    "xy_to_mt",
    "xy_to_tc",
    "xy_to_ts",
    "xy_to_zorder",
    "zorder_to_xy",
    "zxy_to_mp_path",
    "zxy_to_mt_path",
    "zxy_to_path",
    "zxy_to_tc_path",
    "zxy_to_ts_path",
    "zxy_to_zxy_path",
]
