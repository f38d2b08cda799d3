"""Pydantic v2 models for positions and the Nominatim reverse response.

The response models use extra="ignore": Nominatim returns many more address
keys (state, postcode, country_code, ...) than the composer reads.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict

from parkreport.location.errors import InvalidCoordinateError

LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0


def validate_coordinate(latitude: float, longitude: float) -> None:
    """Raise InvalidCoordinateError unless both components are finite and in range."""
    for value in (latitude, longitude):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidCoordinateError()
        if not math.isfinite(value):
            raise InvalidCoordinateError()
    if not (LAT_MIN <= latitude <= LAT_MAX and LNG_MIN <= longitude <= LNG_MAX):
        raise InvalidCoordinateError()


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class Coordinate(BaseModel):
    """A WGS84 position fix."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class PositionOptions(BaseModel):
    """Options passed to the location sensor for one request."""

    model_config = ConfigDict(frozen=True)

    enable_high_accuracy: bool
    timeout_ms: int


# ---------------------------------------------------------------------------
# Reverse geocoding response
# ---------------------------------------------------------------------------


class AddressFields(BaseModel):
    """Structured address parts (``addressdetails=1``); any may be absent."""

    model_config = ConfigDict(extra="ignore")

    city: Optional[str] = None
    county: Optional[str] = None
    suburb: Optional[str] = None
    city_district: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    road: Optional[str] = None
    house_number: Optional[str] = None


class ReverseGeocodeResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    display_name: Optional[str] = None
    address: Optional[AddressFields] = None
