"""
Portfolio Backend — Geo Helper Unit Tests
===========================================

What we test:
    ✅ Distance from a point to itself is zero
    ✅ Distance is symmetric
    ✅ Antipodal points are half the Earth's circumference apart, not NaN
    ✅ A 0.01° step in latitude is ~1.11 km
    ✅ Coordinate parsing accepts numbers and numeric strings
    ✅ Coordinate parsing rejects junk, non-finite and out-of-range values
"""

import math

import pytest

from app.exceptions import InvalidLocationError
from app.services.geo import (
    EARTH_RADIUS_KM,
    GeoPoint,
    haversine_km,
    parse_coordinate,
    parse_point,
)

NEW_DELHI = GeoPoint(28.6139, 77.2090)

SAMPLE_POINTS = [
    GeoPoint(0.0, 0.0),
    NEW_DELHI,
    GeoPoint(-33.8688, 151.2093),
    GeoPoint(51.5074, -0.1278),
    GeoPoint(89.9, 179.9),
    GeoPoint(-89.9, -179.9),
]


class TestHaversine:

    @pytest.mark.parametrize("point", SAMPLE_POINTS)
    def test_same_point_is_zero(self, point):
        assert haversine_km(point, point) == 0.0

    @pytest.mark.parametrize("a", SAMPLE_POINTS)
    @pytest.mark.parametrize("b", SAMPLE_POINTS)
    def test_symmetric(self, a, b):
        assert haversine_km(a, b) == pytest.approx(haversine_km(b, a), abs=1e-9)

    def test_antipodal_points(self):
        distance = haversine_km(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))
        assert not math.isnan(distance)
        assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_pole_to_pole(self):
        distance = haversine_km(GeoPoint(90.0, 0.0), GeoPoint(-90.0, 0.0))
        assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)

    def test_small_northward_move(self):
        """0.01° of latitude ≈ 1.11 km anywhere on the sphere."""
        distance = haversine_km(NEW_DELHI, GeoPoint(28.6239, 77.2090))
        assert distance == pytest.approx(1.112, abs=0.005)

    def test_known_city_distance(self):
        """London → New Delhi is roughly 6,700 km."""
        distance = haversine_km(GeoPoint(51.5074, -0.1278), NEW_DELHI)
        assert 6650 < distance < 6750


class TestParseCoordinate:

    @pytest.mark.parametrize("raw, expected", [
        (28.6139, 28.6139),
        (77, 77.0),
        ("28.6139", 28.6139),
        ("  -12.5 ", -12.5),
        ("90", 90.0),
        (-90.0, -90.0),
    ])
    def test_accepts_numbers_and_numeric_strings(self, raw, expected):
        assert parse_coordinate(raw, "latitude") == expected

    def test_longitude_allows_180(self):
        assert parse_coordinate("-180", "longitude") == -180.0

    @pytest.mark.parametrize("raw", [
        "abc", "", "   ", None, True, False, "nan", "inf", float("nan"), float("-inf"), [1.0],
    ])
    def test_rejects_unusable_values(self, raw):
        with pytest.raises(InvalidLocationError, match="Unprocessable location"):
            parse_coordinate(raw, "latitude")

    def test_rejects_out_of_range_latitude(self):
        with pytest.raises(InvalidLocationError, match="between -90 and 90"):
            parse_coordinate(91, "latitude")

    def test_rejects_out_of_range_longitude(self):
        with pytest.raises(InvalidLocationError, match="between -180 and 180"):
            parse_coordinate("180.5", "longitude")

    def test_error_names_the_field(self):
        with pytest.raises(InvalidLocationError) as exc_info:
            parse_point("28.6", "east")
        assert exc_info.value.field == "longitude"

    def test_parse_point(self):
        assert parse_point("28.6139", 77.2090) == NEW_DELHI
