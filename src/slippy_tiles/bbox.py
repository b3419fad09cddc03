"""
Axis aligned geographic bounding boxes.

Edges are range checked one by one. ``top > bottom`` and ``right > left``
are not enforced: a box given with swapped edges (or one crossing the
antimeridian) is accepted but contains no points, and only overlaps boxes
that span the whole gap between its swapped edges.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from .errors import InvalidBBoxError
from .latlon import LatLon, _as_float, lat_lon_to_tile, tile_nw_lat_lon, valid_lat, valid_lon

if TYPE_CHECKING:
    from .iterators import BBoxTilesIterator, MetatilesIterator

_NUMBER = r"-?[0-9]+(?:\.[0-9]{1,10})?"


def _bbox_regex(sep: str) -> re.Pattern:
    return re.compile(
        rf"(?P<minlon>{_NUMBER}){sep}(?P<minlat>{_NUMBER}){sep}"
        rf"(?P<maxlon>{_NUMBER}){sep}(?P<maxlat>{_NUMBER})"
    )


# One separator style per string: commas (optionally padded) or whitespace
BBOX_REGEXES = (_bbox_regex(r"\s*,\s*"), _bbox_regex(r"\s+"))


@dataclass(frozen=True, repr=False)
class BBox:
    """Geographic bounding box, edges in degrees."""
    top: np.float32
    left: np.float32
    bottom: np.float32
    right: np.float32

    def __post_init__(self):
        top, left, bottom, right = (
            _as_float(v) for v in (self.top, self.left, self.bottom, self.right)
        )
        if not (valid_lat(top) and valid_lat(bottom) and valid_lon(left) and valid_lon(right)):
            raise InvalidBBoxError(
                "bbox edges must be valid latitudes (top, bottom) and longitudes (left, right)",
                (self.top, self.left, self.bottom, self.right),
            )
        object.__setattr__(self, "top", np.float32(top))
        object.__setattr__(self, "left", np.float32(left))
        object.__setattr__(self, "bottom", np.float32(bottom))
        object.__setattr__(self, "right", np.float32(right))

    @classmethod
    def create(cls, top: Any, left: Any, bottom: Any, right: Any) -> Optional["BBox"]:
        """Build a bbox, or return None if any edge is out of range."""
        top, left, bottom, right = (_as_float(v) for v in (top, left, bottom, right))
        if not (valid_lat(top) and valid_lat(bottom) and valid_lon(left) and valid_lon(right)):
            return None
        return cls(top, left, bottom, right)

    @classmethod
    def from_points(cls, top_left: LatLon, bottom_right: LatLon) -> Optional["BBox"]:
        """Box spanning two corners. The corners are not reordered."""
        return cls.create(top_left.lat, top_left.lon, bottom_right.lat, bottom_right.lon)

    @classmethod
    def from_string(cls, string: str) -> Optional["BBox"]:
        """
        Parse four numbers separated by whitespace or by commas.

        Commas may be padded with whitespace (``"10, 20, 30, 40"``), but the
        two styles cannot be mixed: ``"10, 20 30,40"`` is rejected.

        The groups are named minlon, minlat, maxlon, maxlat but are handed
        to ``create`` in that order, i.e. as top, left, bottom, right:
        ``"10 20 30 40"`` gives top=10, left=20, bottom=30, right=40.

        Returns:
            The BBox, or None when the text has any other shape or an
            edge is out of range
        """
        text = string.strip()
        for regex in BBOX_REGEXES:
            match = regex.fullmatch(text)
            if match is not None:
                break
        else:
            return None
        return cls.create(
            float(match["minlon"]),
            float(match["minlat"]),
            float(match["maxlon"]),
            float(match["maxlat"]),
        )

    def __repr__(self):
        return (
            f"BBox(top={float(self.top)}, left={float(self.left)}, "
            f"bottom={float(self.bottom)}, right={float(self.right)})"
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return as (top, left, bottom, right)."""
        return (float(self.top), float(self.left), float(self.bottom), float(self.right))

    def contains_point(self, point: LatLon) -> bool:
        """
        True if ``point`` lies inside the box.

        The top and left edges are inside, the bottom and right edges are
        not, so neighbouring tiles never both contain a boundary point.
        """
        return bool(
            self.bottom < point.lat <= self.top and self.left <= point.lon < self.right
        )

    def overlaps_bbox(self, other: "BBox") -> bool:
        """True if the interiors intersect. Boxes sharing only an edge do not overlap."""
        return bool(
            self.left < other.right
            and self.right > other.left
            and self.top > other.bottom
            and self.bottom < other.top
        )

    def is_degenerate(self) -> bool:
        return bool(self.top <= self.bottom or self.right <= self.left)

    def nw_corner(self) -> LatLon:
        return LatLon(self.top, self.left)

    def ne_corner(self) -> LatLon:
        return LatLon(self.top, self.right)

    def sw_corner(self) -> LatLon:
        return LatLon(self.bottom, self.left)

    def se_corner(self) -> LatLon:
        return LatLon(self.bottom, self.right)

    def centre_point(self) -> LatLon:
        return LatLon(
            (float(self.top) + float(self.bottom)) / 2.0,
            (float(self.left) + float(self.right)) / 2.0,
        )

    center_point = centre_point

    def tiles(self) -> "BBoxTilesIterator":
        """All tiles overlapping this box, zoom by zoom. Never ends by itself."""
        from .iterators import BBoxTilesIterator

        return BBoxTilesIterator(self)

    def metatiles(
        self, scale: int, minzoom: int = 0, maxzoom: Optional[int] = None
    ) -> "MetatilesIterator":
        """Metatiles of ``scale`` covering this box, in z-order per zoom."""
        from .iterators import MetatilesIterator

        return MetatilesIterator.for_bbox(scale, self, minzoom=minzoom, maxzoom=maxzoom)


def tile_index_rect(bbox: BBox, zoom: int, scale: int = 1) -> tuple[int, int, int, int]:
    """
    Rectangle of tile (or metatile slot) indices covering ``bbox`` at ``zoom``.

    Holds exactly the tiles ``overlaps_bbox`` accepts, i.e. the ones
    ``BBox.tiles()`` yields at that zoom: a column or row that only touches
    the box along an edge is left out.

    Returns:
        Tuple of (start_x, start_y, width, height) in units of ``scale``
        tiles. Width and height are 0 for a degenerate box.
    """
    x1, y1 = lat_lon_to_tile(bbox.top, bbox.left, zoom)
    x2, y2 = lat_lon_to_tile(bbox.bottom, bbox.right, zoom)
    if bbox.is_degenerate():
        return (x1 // scale, y1 // scale, 0, 0)

    # Settle each end against the single precision edges tiles are built from
    last = (1 << zoom) - 1
    while x1 > 0 and _column_left(zoom, x1) > bbox.left:
        x1 -= 1
    while x1 < last and _column_left(zoom, x1 + 1) <= bbox.left:
        x1 += 1
    while y1 > 0 and _row_top(zoom, y1) < bbox.top:
        y1 -= 1
    while y1 < last and _row_top(zoom, y1 + 1) >= bbox.top:
        y1 += 1
    while x2 < last and _column_left(zoom, x2 + 1) < bbox.right:
        x2 += 1
    while x2 > x1 and _column_left(zoom, x2) >= bbox.right:
        x2 -= 1
    while y2 < last and _row_top(zoom, y2 + 1) > bbox.bottom:
        y2 += 1
    while y2 > y1 and _row_top(zoom, y2) <= bbox.bottom:
        y2 -= 1

    x1, y1, x2, y2 = x1 // scale, y1 // scale, max(x1, x2) // scale, max(y1, y2) // scale
    return (x1, y1, x2 - x1 + 1, y2 - y1 + 1)


def _column_left(zoom: int, x: int) -> np.float32:
    return tile_nw_lat_lon(zoom, x, 0).lon


def _row_top(zoom: int, y: int) -> np.float32:
    return tile_nw_lat_lon(zoom, 0, y).lat


def size_bbox_zoom(bbox: BBox, zoom: int) -> int:
    """
    Count tiles covering a bbox at one zoom without generating them.

    Useful for progress estimation.
    """
    _, _, width, height = tile_index_rect(bbox, zoom)
    return width * height


def size_bbox_zoom_metatiles(bbox: BBox, zoom: int, scale: int) -> int:
    """Count metatile slots of ``scale`` covering a bbox at one zoom."""
    _, _, width, height = tile_index_rect(bbox, zoom, scale)
    return width * height
