"""LocationSession: the user-initiated "locate me" flow.

Ties the engine together the way the report form drives it: cancel any
pending debounced match, get a position fix, reverse geocode it, then apply
the address (and its district) immediately.
"""
from __future__ import annotations

import logging
from typing import Optional

from parkreport.location.errors import LocationError
from parkreport.location.geocoder import ReverseGeocoder
from parkreport.location.position import PositionAcquirer
from parkreport.location.watcher import DebouncedAddressWatcher

logger = logging.getLogger(__name__)


class LocationSession:
    def __init__(
        self,
        acquirer: PositionAcquirer,
        geocoder: ReverseGeocoder,
        watcher: DebouncedAddressWatcher,
    ) -> None:
        self._acquirer = acquirer
        self._geocoder = geocoder
        self._watcher = watcher
        self.is_locating = False
        self.last_error = ""

    async def locate(self) -> Optional[str]:
        """Run one locate flow and return the resolved address.

        Returns None when a flow is already running. On failure the
        localized message is kept in ``last_error`` and the error re-raised.
        """
        if self.is_locating:
            return None
        self._watcher.cancel_pending()
        self.is_locating = True
        self.last_error = ""
        try:
            coordinate = await self._acquirer.get_current_position()
            if coordinate is None:
                return None
            address = await self._geocoder.reverse_geocode(
                coordinate.latitude, coordinate.longitude
            )
            self._watcher.apply_address(address)
            return address
        except LocationError as exc:
            logger.warning("Locate flow failed: %s", exc.message)
            self.last_error = exc.message
            raise
        finally:
            self.is_locating = False
