"""
Portfolio Backend — Visitor Tracking Schemas
==============================================

What:  API contracts for the /api/visited endpoints.

Coordinates are accepted as numbers or numeric strings because browsers
forward navigator.geolocation values in either form. They are parsed and
range-checked by the geo helpers, not here, so a bad value produces the
"unprocessable location" error instead of a generic schema error.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from app.models.visit import Visit
from app.schemas.common import CamelModel


class LocationReport(CamelModel):
    """
    Body of POST /api/visited/location.

    Typed Any so pydantic's lax coercion (true → 1.0) never runs; the raw
    JSON value goes to parse_coordinate, which rejects booleans, null and
    objects as an unprocessable location.
    """
    latitude: Any = Field(description="Latitude in decimal degrees (number or numeric string)")
    longitude: Any = Field(description="Longitude in decimal degrees (number or numeric string)")


class Coordinates(CamelModel):
    latitude: float
    longitude: float


class VisitResponse(CamelModel):
    """A stored visit as returned by the API."""
    id: int
    client_identity: str = Field(description="Network address + device fingerprint")
    network_address: str
    device_fingerprint: str
    location: Coordinates
    recorded_at: datetime = Field(description="When the visit was recorded (UTC ISO 8601)")

    @classmethod
    def from_model(cls, visit: Visit) -> "VisitResponse":
        return cls(
            id=visit.id,
            client_identity=visit.client_identity,
            network_address=visit.network_address,
            device_fingerprint=visit.device_fingerprint,
            location=Coordinates(latitude=visit.latitude, longitude=visit.longitude),
            recorded_at=visit.recorded_at,
        )


class LocationRecordResponse(CamelModel):
    """
    Outcome of a location report.

    stored=False means the client has not moved far enough since its last
    recorded visit; distance_km is then the measured movement.
    """
    message: str
    stored: bool
    distance_km: Optional[float] = Field(
        default=None,
        description="Distance from the client's previous visit; null for a first visit",
    )
    visit: Optional[VisitResponse] = Field(
        default=None,
        description="The stored visit, present only when stored=true",
    )
