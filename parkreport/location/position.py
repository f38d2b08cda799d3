"""PositionAcquirer: two-phase device position acquisition.

The sensor API is callback based, like the browser's
``navigator.geolocation.getCurrentPosition``. Each request is wrapped in an
asyncio future and the two phases are composed sequentially:

  Phase 1: low accuracy, 3 s timeout.
  Phase 2: high accuracy, 10 s timeout, only if phase 1 failed for any
           reason other than PERMISSION_DENIED.

A refusal is never retried. Phase 2's outcome, success or failure, is final.

Usage::

    acquirer = PositionAcquirer(sensor, settings)
    coordinate = await acquirer.get_current_position()
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from parkreport.config import Settings
from parkreport.location.errors import (
    GeolocationError,
    GeolocationErrorKind,
    UnsupportedEnvironmentError,
)
from parkreport.location.models import Coordinate, PositionOptions

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sensor boundary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SensorError:
    """Failure reported by the sensor; ``code`` follows the W3C numbering."""

    code: int
    message: str = ""


SuccessCallback = Callable[[Coordinate], None]
ErrorCallback = Callable[[SensorError], None]


class LocationSensor(Protocol):
    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        ...


# ---------------------------------------------------------------------------
# Acquirer
# ---------------------------------------------------------------------------


class PositionAcquirer:
    """Wraps a LocationSensor with the fast-then-precise retry policy.

    While one call is in flight, further calls return None without touching
    the sensor, so repeated taps on "locate" never stack permission prompts.
    """

    def __init__(self, sensor: Optional[LocationSensor], settings: Settings) -> None:
        self._sensor = sensor
        self._fast = PositionOptions(
            enable_high_accuracy=False,
            timeout_ms=settings.position_fast_timeout_ms,
        )
        self._precise = PositionOptions(
            enable_high_accuracy=True,
            timeout_ms=settings.position_precise_timeout_ms,
        )
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def get_current_position(self) -> Optional[Coordinate]:
        """Acquire a position fix.

        Returns:
            The Coordinate, or None if another call is already in flight.

        Raises:
            UnsupportedEnvironmentError: No sensor is available.
            GeolocationError: Phase 1 was refused, or phase 2 failed.
        """
        if self._sensor is None:
            raise UnsupportedEnvironmentError()
        if self._in_flight:
            logger.debug("Position request already in flight; ignoring")
            return None

        self._in_flight = True
        try:
            try:
                return await self._request(self._fast)
            except GeolocationError as exc:
                if exc.kind is GeolocationErrorKind.PERMISSION_DENIED:
                    raise
                logger.info(
                    "Low-accuracy fix failed (%s); retrying with high accuracy",
                    exc.kind.value,
                )
            return await self._request(self._precise)
        finally:
            self._in_flight = False

    async def _request(self, options: PositionOptions) -> Coordinate:
        """Issue one sensor request and await its callback.

        A sensor that never calls back is cut off after ``options.timeout_ms``
        and reported as TIMEOUT.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Coordinate] = loop.create_future()

        def _settle_success(position: Coordinate) -> None:
            if not future.done():
                future.set_result(position)

        def _settle_error(error: SensorError) -> None:
            if not future.done():
                future.set_exception(
                    GeolocationError(GeolocationErrorKind.from_code(error.code))
                )

        def on_success(position: Coordinate) -> None:
            loop.call_soon_threadsafe(_settle_success, position)

        def on_error(error: SensorError) -> None:
            loop.call_soon_threadsafe(_settle_error, error)

        self._sensor.get_current_position(on_success, on_error, options)
        try:
            return await asyncio.wait_for(future, timeout=options.timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise GeolocationError(GeolocationErrorKind.TIMEOUT) from None
