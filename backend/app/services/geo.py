"""
Portfolio Backend — Geospatial Helpers
========================================

What:  Great-circle distance and coordinate parsing for visitor tracking.
Why:   The dedup check only ever compares two points, so a tiny geometry
       layer is enough; no GIS dependency is pulled in.

Distance formula (haversine, Earth radius 6371 km):
    a = sin²(Δlat/2) + cos(lat1)·cos(lat2)·sin²(Δlon/2)
    d = 2R·atan2(√a, √(1−a))

    a is clamped to [0, 1]; floating-point rounding can push it a hair past
    1 for near-antipodal points, and √(1−a) would then be NaN.
"""

import math
from dataclasses import dataclass
from typing import Any

from app.exceptions import InvalidLocationError

EARTH_RADIUS_KM = 6371.0

_BOUNDS = {
    "latitude": 90.0,
    "longitude": 180.0,
}


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def parse_coordinate(value: Any, field: str) -> float:
    """
    Convert a submitted coordinate to a float in range for its axis.

    Args:
        value: Number or numeric string from the request body
        field: "latitude" or "longitude"

    Raises:
        InvalidLocationError: non-numeric, non-finite or out-of-range value
    """
    # bool is an int subclass; True must not become latitude 1.0
    if value is None or isinstance(value, bool):
        raise InvalidLocationError(field, value)

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidLocationError(field, value, reason="is required")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidLocationError(field, value)

    if not math.isfinite(number):
        raise InvalidLocationError(field, value)

    bound = _BOUNDS[field]
    if not -bound <= number <= bound:
        raise InvalidLocationError(
            field, value, reason=f"must be between -{bound:g} and {bound:g}"
        )
    return number


def parse_point(latitude: Any, longitude: Any) -> GeoPoint:
    """Parse a submitted latitude/longitude pair into a GeoPoint."""
    return GeoPoint(
        latitude=parse_coordinate(latitude, "latitude"),
        longitude=parse_coordinate(longitude, "longitude"),
    )
