"""
Geographic points and the Web-Mercator projection.

Coordinates are stored in single precision (numpy.float32), which matches
the ~7 significant digits of the geodata tiles are cut from. Projection
math in both directions runs in double precision so points near tile
edges land on the right side, even at deep zooms.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from .errors import InvalidLatLonError

if TYPE_CHECKING:
    from .tiles import Tile

# Latitude where the Web-Mercator world becomes square, ~85.0511 degrees
MAX_LAT = math.degrees(math.atan(math.sinh(math.pi)))


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def valid_lat(lat: Optional[float]) -> bool:
    return lat is not None and -90.0 <= lat <= 90.0


def valid_lon(lon: Optional[float]) -> bool:
    return lon is not None and -180.0 <= lon <= 180.0


@dataclass(frozen=True, repr=False)
class LatLon:
    """A validated (latitude, longitude) pair in degrees."""
    lat: np.float32
    lon: np.float32

    def __post_init__(self):
        lat = _as_float(self.lat)
        lon = _as_float(self.lon)
        if not valid_lat(lat) or not valid_lon(lon):
            raise InvalidLatLonError(
                "latitude must be in [-90, 90] and longitude in [-180, 180]",
                (self.lat, self.lon),
            )
        object.__setattr__(self, "lat", np.float32(lat))
        object.__setattr__(self, "lon", np.float32(lon))

    @classmethod
    def create(cls, lat: Any, lon: Any) -> Optional["LatLon"]:
        """Build a point, or return None when either value is out of range."""
        if not valid_lat(_as_float(lat)) or not valid_lon(_as_float(lon)):
            return None
        return cls(lat, lon)

    def __repr__(self):
        return f"LatLon(lat={float(self.lat)}, lon={float(self.lon)})"

    def as_tuple(self) -> tuple[float, float]:
        """Return as (lat, lon) tuple."""
        return (float(self.lat), float(self.lon))

    def tile(self, zoom: int) -> Optional["Tile"]:
        """The tile at ``zoom`` containing this point."""
        from .tiles import Tile

        return Tile.from_lat_lon(self.lat, self.lon, zoom)


def tile_nw_lat_lon(zoom: int, x: float, y: float) -> LatLon:
    """
    Project tile-space coordinates to the geographic point.

    ``x`` and ``y`` may be fractional: (x + 0.5, y + 0.5) is a tile's centre,
    (x + 1, y + 1) its south-east corner. The math runs in double precision
    and only the result is rounded to single precision.
    """
    n = 2.0 ** zoom
    lon_deg = float(x) / n * 360.0 - 180.0
    lat_rad = math.atan(math.sinh(math.pi * (1.0 - 2.0 * float(y) / n)))
    return LatLon(math.degrees(lat_rad), lon_deg)


def lat_lon_to_tile(lat: float, lon: float, zoom: int) -> tuple[int, int]:
    """
    Return the (x, y) of the tile at ``zoom`` containing (lat, lon).

    Latitude is clamped to +/-MAX_LAT first. The result is clamped into the
    tile grid, so lon=180 maps to the last column.
    """
    lat = min(max(float(lat), -MAX_LAT), MAX_LAT)
    lat_rad = math.radians(lat)
    n = 2.0 ** zoom
    x = math.floor(n * (float(lon) + 180.0) / 360.0)
    y = math.floor(
        n * (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0
    )
    last = (1 << zoom) - 1
    return min(max(x, 0), last), min(max(y, 0), last)
