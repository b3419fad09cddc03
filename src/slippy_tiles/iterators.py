"""
Iterators over the tile quad-tree.

All iterators are plain pull based cursors: each owns its state and does
work only when ``next()`` is called. The unbounded ones (``Tile.all()``,
``BBox.tiles()``, ``Tile.all_subtiles_iter()``) only stop at MAX_ZOOM, so
callers should bound consumption themselves (itertools.islice/takewhile).
"""

import logging
import sys
from collections import deque
from typing import Optional

from .bbox import BBox, tile_index_rect
from .errors import InvalidMetatileError
from .metatiles import Metatile, valid_scale
from .tiles import MAX_ZOOM, SIZE_MAX, Tile, tiles_in_zoom
from .zorder import zorder_to_xy

logger = logging.getLogger(__name__)

SizeHint = tuple[int, Optional[int]]


def checked_add(a: int, b: int) -> Optional[int]:
    """a + b, or None if the sum does not fit SIZE_MAX."""
    total = a + b
    if total > SIZE_MAX:
        return None
    return total


def checked_tiles_in_zoom(zoom: int) -> Optional[int]:
    """4 ** zoom, or None if it does not fit SIZE_MAX."""
    if 2 * zoom >= SIZE_MAX.bit_length():
        return None
    return tiles_in_zoom(zoom)


class AllTilesIterator:
    """
    Every tile of the world.

    Zoom levels are visited in increasing order. Within a zoom, tiles are
    visited in z-order of (x, y), so the first tiles are
    (0,0,0), (1,0,0), (1,1,0), (1,0,1), (1,1,1).
    """

    def __init__(self, max_zoom: int = MAX_ZOOM):
        self._max_zoom = min(max_zoom, MAX_ZOOM)
        self._zoom = 0
        self._zorder = 0

    def __iter__(self):
        return self

    def __next__(self) -> Tile:
        if self._zoom > self._max_zoom:
            raise StopIteration
        x, y = zorder_to_xy(self._zorder)
        tile = Tile(self._zoom, x, y)
        self._zorder += 1
        if self._zorder >= tiles_in_zoom(self._zoom):
            self._zoom += 1
            self._zorder = 0
            logger.debug(f"all tiles iterator moved to zoom {self._zoom}")
        return tile

    def size_hint(self) -> SizeHint:
        """(lower, upper) bound of tiles left; upper is None when unknown."""
        if self._zoom > self._max_zoom:
            return (0, 0)
        return (SIZE_MAX, None)


class AllTilesToZoomIterator(AllTilesIterator):
    """
    Every tile from zoom 0 up to and including ``max_zoom``.

    ``size_hint()`` is exact while the remaining count fits SIZE_MAX and
    ``(SIZE_MAX, None)`` once it would overflow.
    """

    def __init__(self, max_zoom: int):
        if max_zoom < 0:
            raise ValueError(f"max_zoom must be >= 0, got {max_zoom}")
        super().__init__(max_zoom)

    def size_hint(self) -> SizeHint:
        if self._zoom > self._max_zoom:
            return (0, 0)
        level = checked_tiles_in_zoom(self._zoom)
        if level is None:
            return (SIZE_MAX, None)
        total = level - self._zorder
        for zoom in range(self._zoom + 1, self._max_zoom + 1):
            level = checked_tiles_in_zoom(zoom)
            if level is None:
                return (SIZE_MAX, None)
            total = checked_add(total, level)
            if total is None:
                return (SIZE_MAX, None)
        return (total, total)

    def __length_hint__(self):
        remaining, upper = self.size_hint()
        if upper is None or remaining > sys.maxsize:
            return NotImplemented
        return remaining


class AllSubtilesIterator:
    """
    Every descendant of one tile, level by level.

    A FIFO queue is seeded with the tile's four children; a dequeued tile
    has its own children appended to the queue before it is returned.
    """

    def __init__(self, tile: Tile):
        self._queue: deque[Tile] = deque(tile.subtiles() or ())

    def __iter__(self):
        return self

    def __next__(self) -> Tile:
        if not self._queue:
            raise StopIteration
        tile = self._queue.popleft()
        children = tile.subtiles()
        if children is not None:
            self._queue.extend(children)
        return tile


class BBoxTilesIterator:
    """
    Tiles overlapping a bounding box, breadth first.

    Starts at the world tile. When the current level is used up it is
    replaced by the children (in child order) of its tiles that overlap
    the box. Pruned branches are never revisited.
    """

    def __init__(self, bbox: BBox):
        self._bbox = bbox
        self._tiles: list[Tile] = [Tile(0, 0, 0)]
        self._index = 0

    def __iter__(self):
        return self

    def _next_level(self):
        self._tiles = [
            child
            for tile in self._tiles
            for child in (tile.subtiles() or ())
            if child.bbox().overlaps_bbox(self._bbox)
        ]
        self._index = 0
        if self._tiles:
            logger.debug(
                f"bbox iterator moved to zoom {self._tiles[0].zoom} with {len(self._tiles)} tiles"
            )

    def __next__(self) -> Tile:
        if self._index >= len(self._tiles):
            self._next_level()
            if not self._tiles:
                raise StopIteration
        tile = self._tiles[self._index]
        self._index += 1
        return tile


class MetatilesIterator:
    """
    Metatiles of one scale, zoom by zoom, in z-order within a zoom.

    Each zoom has a rectangle of metatile slots (start_x, start_y, width,
    height): the whole world, or the slots covering a bbox. A running
    z-order index is split into (i, j); indices with i or j outside the
    rectangle are skipped, and the zoom is done once both are outside.
    """

    def __init__(
        self,
        scale: int,
        bbox: Optional[BBox] = None,
        minzoom: int = 0,
        maxzoom: Optional[int] = None,
    ):
        if not valid_scale(scale):
            raise InvalidMetatileError("metatile scale must be a power of two", scale)
        if minzoom < 0:
            raise ValueError(f"minzoom must be >= 0, got {minzoom}")
        self._scale = scale
        self._bbox = bbox
        self._maxzoom = MAX_ZOOM if maxzoom is None else min(maxzoom, MAX_ZOOM)
        self._zoom = minzoom
        self._zorder = 0
        self._rect = (0, 0, 0, 0)
        self._set_zoom_rect()

    @classmethod
    def all(cls, scale: int) -> "MetatilesIterator":
        return cls(scale)

    @classmethod
    def for_bbox(
        cls,
        scale: int,
        bbox: BBox,
        minzoom: int = 0,
        maxzoom: Optional[int] = None,
    ) -> "MetatilesIterator":
        return cls(scale, bbox=bbox, minzoom=minzoom, maxzoom=maxzoom)

    def _set_zoom_rect(self):
        if self._zoom > self._maxzoom:
            return
        if self._bbox is None:
            max_index = ((1 << self._zoom) - 1) // self._scale
            self._rect = (0, 0, max_index + 1, max_index + 1)
        else:
            self._rect = tile_index_rect(self._bbox, self._zoom, self._scale)

    def _next_zoom(self):
        self._zoom += 1
        self._zorder = 0
        self._set_zoom_rect()
        logger.debug(f"metatile iterator moved to zoom {self._zoom}, slots {self._rect}")

    def __iter__(self):
        return self

    def __next__(self) -> Metatile:
        while self._zoom <= self._maxzoom:
            start_x, start_y, width, height = self._rect
            i, j = zorder_to_xy(self._zorder)
            if i >= width and j >= height:
                self._next_zoom()
                continue
            self._zorder += 1
            if i >= width or j >= height:
                continue
            return Metatile(
                self._scale,
                self._zoom,
                (start_x + i) * self._scale,
                (start_y + j) * self._scale,
            )
        raise StopIteration
