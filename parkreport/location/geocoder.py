"""ReverseGeocoder: coordinate → address string via OpenStreetMap Nominatim.

Pipeline per request:
  1. Validate the coordinate (no I/O for invalid input).
  2. Consult the injected GeocodeCache.
  3. GET /reverse with a per-attempt timeout; one retry after a fixed delay.
  4. Compose the address from structured fields, falling back to display_name.
  5. Cache the result. Failures are never cached.

Usage::

    async with ReverseGeocoder(settings) as geocoder:
        address = await geocoder.reverse_geocode(25.0330, 121.5654)

Retry strategy
--------------
- Transport errors, the attempt timeout, non-2xx responses and undecodable
  bodies all count as a failed attempt.
- Exactly 2 attempts, fixed wait between them (tenacity).
- A second failure raises GeocodeRequestFailedError chained to the last cause.

Concurrent calls for the same key are not joined: each one that misses the
cache performs its own round-trip.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from parkreport.config import Settings
from parkreport.location.cache import GeocodeCache, cache_key
from parkreport.location.errors import GeocodeRequestFailedError, UnresolvedAddressError
from parkreport.location.models import ReverseGeocodeResponse, validate_coordinate

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2

# ValueError covers both json decoding and pydantic validation failures.
_RETRYABLE = (httpx.HTTPError, asyncio.TimeoutError, ValueError)


# ---------------------------------------------------------------------------
# Address composition
# ---------------------------------------------------------------------------


def compose_address(response: ReverseGeocodeResponse) -> str:
    """Build a Taiwanese-order address from a reverse-geocode response.

    Precedence, concatenated without separators:
      1. city, else county
      2. suburb, else city_district, else town, else village
      3. road
      4. house_number

    Falls back to display_name when the structured parts are all empty.

    Raises:
        UnresolvedAddressError: Neither structured parts nor display_name.
    """
    fields = response.address
    if fields is not None:
        parts = (
            fields.city or fields.county,
            fields.suburb or fields.city_district or fields.town or fields.village,
            fields.road,
            fields.house_number,
        )
        composed = "".join(p for p in parts if p)
        if composed:
            return composed
    if response.display_name:
        return response.display_name
    raise UnresolvedAddressError()


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class ReverseGeocoder:
    """Async Nominatim client with validation, a FIFO cache and one retry.

    Intended to be used as an async context manager so that the underlying
    httpx.AsyncClient is always closed.
    """

    def __init__(self, settings: Settings, cache: Optional[GeocodeCache] = None) -> None:
        self._attempt_timeout = settings.geocode_timeout_ms / 1000
        self._retry_delay = settings.geocode_retry_delay_ms / 1000
        self._locale = settings.geocode_locale
        self._cache = cache if cache is not None else GeocodeCache(
            settings.geocode_cache_capacity
        )
        self._client = httpx.AsyncClient(
            base_url=settings.nominatim_base_url,
            headers={"User-Agent": settings.nominatim_user_agent},
            timeout=httpx.Timeout(self._attempt_timeout),
        )

    async def __aenter__(self) -> "ReverseGeocoder":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._client.aclose()

    @property
    def cache(self) -> GeocodeCache:
        return self._cache

    async def reverse_geocode(self, latitude: float, longitude: float) -> str:
        """Resolve a coordinate to a single address string.

        Raises:
            InvalidCoordinateError: Non-finite or out-of-range input.
            GeocodeRequestFailedError: Both attempts failed.
            UnresolvedAddressError: The response held no usable address.
        """
        validate_coordinate(latitude, longitude)
        key = cache_key(latitude, longitude)

        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Geocode cache hit for %s", key)
            return cached

        logger.info("Geocode cache miss for %s", key)
        try:
            response = await self._fetch(latitude, longitude)
        except _RETRYABLE as exc:
            logger.warning(
                "Reverse geocode failed for %s after %d attempts: %s",
                key, MAX_ATTEMPTS, exc,
            )
            raise GeocodeRequestFailedError() from exc

        address = compose_address(response)
        self._cache.put(key, address)
        logger.info("Resolved %s to %s", key, address)
        return address

    # -----------------------------------------------------------------------
    # Internal transport layer
    # -----------------------------------------------------------------------

    async def _fetch(self, latitude: float, longitude: float) -> ReverseGeocodeResponse:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_fixed(self._retry_delay),
            retry=retry_if_exception_type(_RETRYABLE),
            before_sleep=self._log_retry,
            reraise=True,
        )
        return await retrying(self._get_reverse, latitude, longitude)

    async def _get_reverse(self, latitude: float, longitude: float) -> ReverseGeocodeResponse:
        """One GET /reverse attempt, bounded by the per-attempt timeout."""
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "accept-language": self._locale,
            "addressdetails": 1,
        }
        response = await asyncio.wait_for(
            self._client.get("/reverse", params=params),
            timeout=self._attempt_timeout,
        )
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"Nominatim returned HTTP {response.status_code}",
                request=response.request,
                response=response,
            )
        return ReverseGeocodeResponse.model_validate(response.json())

    @staticmethod
    def _log_retry(retry_state) -> None:
        logger.warning(
            "Reverse geocode attempt %d failed (%s); retrying",
            retry_state.attempt_number,
            retry_state.outcome.exception(),
        )
