"""Tests for geographic points and projection helpers."""

import math

import mercantile
import numpy as np
import pytest

from slippy_tiles.errors import InvalidLatLonError
from slippy_tiles.latlon import MAX_LAT, LatLon, lat_lon_to_tile, tile_nw_lat_lon
from slippy_tiles.tiles import Tile


class TestLatLon:
    """Tests for LatLon construction and validation."""

    def test_creation(self):
        point = LatLon(37.42, -122.15)
        assert point.as_tuple() == pytest.approx((37.42, -122.15), abs=1e-5)

    def test_stored_single_precision(self):
        point = LatLon(0.1, 0.2)
        assert isinstance(point.lat, np.float32)
        assert isinstance(point.lon, np.float32)
        assert point.lat == np.float32(0.1)
        assert float(point.lat) != 0.1

    def test_string_numbers_accepted(self):
        assert LatLon.create("10", "20") == LatLon(10, 20)

    @pytest.mark.parametrize(
        "lat,lon",
        [(90, 180), (-90, -180), (0, 0), (85.0511, 179.9999)],
    )
    def test_valid_edges(self, lat, lon):
        assert LatLon.create(lat, lon) is not None

    @pytest.mark.parametrize(
        "lat,lon",
        [
            (90.0001, 0),
            (-91, 0),
            (0, 180.5),
            (0, -181),
            (float("nan"), 0),
            ("north", 0),
            (None, 0),
        ],
    )
    def test_create_invalid_returns_none(self, lat, lon):
        assert LatLon.create(lat, lon) is None

    def test_direct_construction_raises(self):
        with pytest.raises(InvalidLatLonError) as exc_info:
            LatLon(91, 0)
        assert "got (91, 0)" in str(exc_info.value)

    def test_equality_and_hash(self):
        assert LatLon(10, 20) == LatLon(10.0, 20.0)
        assert len({LatLon(10, 20), LatLon(10.0, 20.0)}) == 1

    def test_repr(self):
        assert repr(LatLon(1.5, -2.25)) == "LatLon(lat=1.5, lon=-2.25)"

    def test_tile(self):
        point = LatLon(51.5, -0.12)
        tile = point.tile(10)
        assert tile.to_mercantile() == mercantile.tile(-0.12, 51.5, 10)
        assert point.tile(100) is None


class TestProjection:
    """Tests for tile_nw_lat_lon and lat_lon_to_tile."""

    def test_max_lat(self):
        assert MAX_LAT == pytest.approx(85.0511287798, abs=1e-9)

    def test_world_nw_corner(self):
        point = tile_nw_lat_lon(0, 0, 0)
        assert float(point.lat) == pytest.approx(MAX_LAT, abs=1e-4)
        assert float(point.lon) == -180.0

    def test_fractional_coordinates(self):
        point = tile_nw_lat_lon(1, 1.0, 1.0)
        assert point == LatLon(0.0, 0.0)

    @pytest.mark.parametrize(
        "lat,lon,zoom,expected",
        [
            (0, 0, 1, (1, 1)),
            (90, -180, 3, (0, 0)),
            (-90, 180, 3, (7, 7)),
            (10, 10, 3, (4, 3)),
        ],
    )
    def test_lat_lon_to_tile(self, lat, lon, zoom, expected):
        assert lat_lon_to_tile(lat, lon, zoom) == expected

    def test_matches_mercantile(self):
        for lat, lon in [(48.85, 2.35), (-22.9, -43.2), (35.68, 139.69)]:
            for zoom in (1, 7, 13):
                tile = mercantile.tile(lon, lat, zoom)
                assert lat_lon_to_tile(lat, lon, zoom) == (tile.x, tile.y)

    def test_tile_corner_belongs_to_south_east_tile(self):
        corner = Tile(8, 100, 90).nw_point()
        assert lat_lon_to_tile(corner.lat, corner.lon, 8)[0] == 100

    def test_projection_round_trips_within_float32(self):
        tile = Tile(12, 655, 1583)
        nw = tile.nw_point()
        lat_rad = math.atan(math.sinh(math.pi * (1 - 2 * 1583 / 4096)))
        assert float(nw.lat) == pytest.approx(math.degrees(lat_rad), abs=1e-4)
        assert float(nw.lon) == pytest.approx(655 / 4096 * 360 - 180, abs=1e-4)
