"""Router for /api location lookups: reverse geocoding and district matching."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from parkreport.config import settings
from parkreport.location.districts import (
    POLICE_STATIONS,
    District,
    PoliceStation,
    find_district,
    normalize_address,
    station_for,
)
from parkreport.location.errors import (
    GeocodeRequestFailedError,
    InvalidCoordinateError,
    UnresolvedAddressError,
)
from parkreport.location.geocoder import ReverseGeocoder
from parkreport.location.watcher import is_district_mismatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["location"])

# Initialised at startup, torn down at shutdown.
_geocoder: ReverseGeocoder | None = None


async def startup() -> None:
    """Open the reverse geocoder.  Called from main.py @startup."""
    global _geocoder
    _geocoder = ReverseGeocoder(settings)
    await _geocoder.__aenter__()
    logger.info("Reverse geocoder ready (location router)")


async def shutdown() -> None:
    """Close the reverse geocoder.  Called from main.py @shutdown."""
    global _geocoder
    if _geocoder is not None:
        await _geocoder.__aexit__(None, None, None)
        _geocoder = None


def _station_json(station: PoliceStation | None) -> dict[str, str] | None:
    if station is None:
        return None
    return {
        "district": station.district.value,
        "station_name": station.station_name,
        "phone_number": station.phone_number,
    }


def _district_json(district: District | None) -> dict[str, Any]:
    return {
        "district": district.value if district is not None else None,
        "station": _station_json(station_for(district)) if district is not None else None,
    }


@router.get("/reverse-geocode")
async def reverse_geocode(lat: float, lng: float) -> dict[str, Any]:
    """Resolve a coordinate to an address and its receiving station."""
    if _geocoder is None:
        raise HTTPException(status_code=503, detail="Geocoder not ready")

    try:
        address = await _geocoder.reverse_geocode(lat, lng)
    except InvalidCoordinateError as exc:
        raise HTTPException(status_code=422, detail=exc.message) from exc
    except UnresolvedAddressError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except GeocodeRequestFailedError as exc:
        raise HTTPException(status_code=502, detail=exc.message) from exc

    return {"address": address, **_district_json(find_district(address))}


@router.get("/district")
def district(address: str = Query(..., max_length=100)) -> dict[str, Any]:
    return _district_json(find_district(address))


@router.get("/mismatch")
def mismatch(address: str, district: str | None = None) -> dict[str, bool]:
    selected = None
    if district is not None:
        try:
            selected = District(normalize_address(district))
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=f"Unknown district: {district}") from exc
    return {"mismatch": is_district_mismatch(address, selected)}


@router.get("/stations")
def stations() -> list[dict[str, str]]:
    return [_station_json(s) for s in POLICE_STATIONS]


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
