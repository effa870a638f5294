"""Tests for geometry value types (Coordinate, BoundingBox, Polygon)."""

from __future__ import annotations

import math

import pytest

from roof_area.core.exceptions import InvalidInputError
from roof_area.models.footprint import Footprint
from roof_area.models.geometry import BoundingBox, Coordinate, Polygon
from tests.helpers import QUERY_POINT, REFERENCE_SQUARE


class TestCoordinate:
    def test_valid_coordinate(self) -> None:
        c = Coordinate(latitude=37.4419, longitude=-122.1430)
        assert c.to_dict() == {"latitude": 37.4419, "longitude": -122.1430}

    @pytest.mark.parametrize(("lat", "lon"), [(90.0, 180.0), (-90.0, -180.0), (0, 0)])
    def test_boundaries_accepted(self, lat: float, lon: float) -> None:
        Coordinate(latitude=lat, longitude=lon)

    @pytest.mark.parametrize(
        ("lat", "lon"),
        [
            (90.0001, 0.0),
            (-91.0, 0.0),
            (0.0, 180.5),
            (0.0, -181.0),
            (math.nan, 0.0),
            (0.0, math.inf),
        ],
    )
    def test_out_of_range_rejected(self, lat: float, lon: float) -> None:
        with pytest.raises(InvalidInputError):
            Coordinate(latitude=lat, longitude=lon)

    def test_non_numeric_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            Coordinate(latitude="37.4", longitude=-122.1)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        with pytest.raises(AttributeError):
            QUERY_POINT.latitude = 0.0  # type: ignore[misc]


class TestBoundingBox:
    def test_around_point(self) -> None:
        box = BoundingBox.around(QUERY_POINT, 0.0005)
        assert box.south == pytest.approx(37.4414)
        assert box.north == pytest.approx(37.4424)
        assert box.west == pytest.approx(-122.1435)
        assert box.east == pytest.approx(-122.1425)

    def test_of_ring(self) -> None:
        box = BoundingBox.of_ring(REFERENCE_SQUARE)
        assert box == BoundingBox(south=37.4415, west=-122.1430, north=37.4419, east=-122.1425)

    def test_overpass_order_is_south_west_north_east(self) -> None:
        box = BoundingBox(south=1.0, west=2.0, north=3.0, east=4.0)
        assert box.to_overpass() == "1.0,2.0,3.0,4.0"

    def test_wire_shape(self) -> None:
        box = BoundingBox(south=1.0, west=2.0, north=3.0, east=4.0)
        assert box.to_dict() == {"southwest": [2.0, 1.0], "northeast": [4.0, 3.0]}


class TestPolygon:
    def test_from_coordinates(self) -> None:
        poly = Polygon.from_coordinates([[list(c) for c in REFERENCE_SQUARE]])
        assert poly.exterior == REFERENCE_SQUARE
        assert poly.holes == ()
        assert poly.coordinate_count == 5

    def test_altitude_dropped(self) -> None:
        poly = Polygon.from_coordinates([[[0.0, 0.0, 12.0], [1.0, 0.0, 12.0], [1.0, 1.0, 12.0]]])
        assert poly.exterior == ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))

    @pytest.mark.parametrize(
        "coordinates",
        [None, [], [[]], "nope", [[[0.0]]], [[["a", "b"]]], [[[0.0, 95.0]]]],
    )
    def test_malformed_rejected(self, coordinates: object) -> None:
        with pytest.raises(InvalidInputError):
            Polygon.from_coordinates(coordinates)

    def test_round_trips_to_geojson(self) -> None:
        geometry = Polygon(exterior=REFERENCE_SQUARE).to_geojson()
        assert geometry["type"] == "Polygon"
        assert geometry["coordinates"][0][1] == [-122.1425, 37.4419]


class TestFootprintFeature:
    def test_feature_properties(self) -> None:
        fp = Footprint(
            polygon=Polygon(exterior=REFERENCE_SQUARE),
            source="OpenStreetMap",
            distance_to_query_m=31.6,
            metadata={"osm_id": 42, "building": "house"},
        )
        feature = fp.to_feature()
        assert feature["type"] == "Feature"
        assert feature["properties"] == {
            "source": "OpenStreetMap",
            "building": "house",
            "osm_id": 42,
            "distance_meters": 32,
        }
        assert feature["geometry"]["type"] == "Polygon"

    def test_building_defaults_to_yes(self) -> None:
        fp = Footprint(Polygon(exterior=REFERENCE_SQUARE), "Test", 0.4)
        props = fp.to_feature()["properties"]
        assert props["building"] == "yes"
        assert "osm_id" not in props
        assert props["distance_meters"] == 0
