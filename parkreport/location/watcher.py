"""Debounced address → district auto-selection and the mismatch predicate.

Each edit cancels the pending evaluation and schedules a new one; only after
a quiet period does the matcher run on the latest text. A match always
overwrites the current selection, including one the user picked manually:
typing a new address resyncs the guess.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from parkreport.config import settings
from parkreport.location.districts import District, find_district

logger = logging.getLogger(__name__)

Matcher = Callable[[str], Optional[District]]


def is_district_mismatch(address: str, selected: Optional[District]) -> bool:
    """True only if the address names a district and it differs from *selected*.

    An address that names no district is never a mismatch.
    """
    from_address = find_district(address)
    if from_address is None or selected is None:
        return False
    return from_address is not selected


class DebouncedAddressWatcher:
    """Owns the address text, the selected district and one pending evaluation.

    Must be driven from a running event loop. Call :meth:`close` when the
    consuming view is torn down.
    """

    def __init__(
        self,
        delay_ms: Optional[int] = None,
        matcher: Matcher = find_district,
        on_district_change: Optional[Callable[[District], None]] = None,
    ) -> None:
        if delay_ms is None:
            delay_ms = settings.district_debounce_ms
        self._delay = delay_ms / 1000
        self._matcher = matcher
        self._on_district_change = on_district_change
        self._pending: Optional[asyncio.Task[None]] = None
        self._closed = False
        self.address = ""
        self.selected_district: Optional[District] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def on_edit(self, text: str) -> None:
        """Record an edit and (re)start the quiet-period timer."""
        if self._closed:
            return
        self.address = text
        self.cancel_pending()
        self._pending = asyncio.get_running_loop().create_task(self._evaluate_later(text))

    def select_district(self, district: Optional[District]) -> None:
        self.selected_district = district

    def apply_address(self, text: str) -> Optional[District]:
        """Set the address immediately (e.g. from a GPS fix) and match it now."""
        self.cancel_pending()
        self.address = text
        return self._evaluate(text)

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def close(self) -> None:
        self._closed = True
        self.cancel_pending()

    def has_mismatch(self) -> bool:
        return is_district_mismatch(self.address, self.selected_district)

    async def _evaluate_later(self, text: str) -> None:
        await asyncio.sleep(self._delay)
        self._pending = None
        try:
            self._evaluate(text)
        except Exception:
            logger.exception("District auto-selection failed for %r", text)

    def _evaluate(self, text: str) -> Optional[District]:
        district = self._matcher(text)
        if district is None:
            return None
        if district is not self.selected_district:
            logger.info("Auto-selected district %s", district.value)
        self.selected_district = district
        if self._on_district_change is not None:
            self._on_district_change(district)
        return district
