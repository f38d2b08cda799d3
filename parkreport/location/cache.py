"""Bounded in-process cache for reverse-geocoding results.

Keys are coordinates rounded to 4 decimal places (roughly 11 m), so nearby
fixes share one cached address.

Eviction is FIFO by insertion: when the cache is full, the oldest-inserted
key is dropped. A lookup never refreshes an entry's position.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
KEY_PRECISION = 4
KEY_SEPARATOR = ","


def cache_key(latitude: float, longitude: float) -> str:
    """Return the cache key for a coordinate, e.g. ``"25.0330,121.5654"``."""
    return f"{_component(latitude)}{KEY_SEPARATOR}{_component(longitude)}"


def _component(value: float) -> str:
    # + 0.0 folds -0.0 into 0.0 so both sides of the equator/meridian agree
    return f"{round(value, KEY_PRECISION) + 0.0:.{KEY_PRECISION}f}"


class GeocodeCache:
    """Insertion-ordered key → address store holding at most *capacity* entries.

    Order is tracked explicitly in a deque next to the value dict, so the
    eviction policy does not depend on dict iteration order.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._order: deque[str] = deque()
        self._values: dict[str, str] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        """Store *value* under *key*, evicting the oldest entry if full.

        Re-putting an existing key replaces its value in place; its position
        in the eviction queue is unchanged.
        """
        if key in self._values:
            self._values[key] = value
            return
        if len(self._values) >= self._capacity:
            oldest = self._order.popleft()
            del self._values[oldest]
            logger.debug("Evicted geocode cache entry %s", oldest)
        self._order.append(key)
        self._values[key] = value

    def clear(self) -> None:
        self._order.clear()
        self._values.clear()
