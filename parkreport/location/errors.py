"""Failure taxonomy for the location engine.

Every error carries a ``message`` in zh-TW that the form shows verbatim.
None of them is fatal: the user can retry or type the address manually.

Hierarchy:
  LocationError
    UnsupportedEnvironmentError   -- no location sensor available
    GeolocationError              -- sensor failure, carries GeolocationErrorKind
    InvalidCoordinateError        -- out of range / non-finite, rejected before I/O
    GeocodeRequestFailedError     -- both reverse-geocode attempts failed
    UnresolvedAddressError        -- provider answered but gave nothing usable
"""
from __future__ import annotations

from enum import Enum


class GeolocationErrorKind(str, Enum):
    """Sensor failure kinds, mirroring the W3C GeolocationPositionError codes."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: int) -> "GeolocationErrorKind":
        return _KIND_BY_CODE.get(code, cls.UNKNOWN)


_KIND_BY_CODE = {
    1: GeolocationErrorKind.PERMISSION_DENIED,
    2: GeolocationErrorKind.POSITION_UNAVAILABLE,
    3: GeolocationErrorKind.TIMEOUT,
}

_GEOLOCATION_MESSAGES = {
    GeolocationErrorKind.PERMISSION_DENIED: "定位權限被拒絕，請允許存取位置資訊。",
    GeolocationErrorKind.POSITION_UNAVAILABLE: "無法取得位置資訊。",
    GeolocationErrorKind.TIMEOUT: "定位逾時，請稍後再試。",
    GeolocationErrorKind.UNKNOWN: "定位失敗，請稍後再試。",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LocationError(Exception):
    """Base class; ``message`` is the user-facing text."""

    default_message = "定位失敗，請稍後再試。"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UnsupportedEnvironmentError(LocationError):
    """Raised when the device exposes no location capability."""

    default_message = "您的瀏覽器不支援定位功能。"


class GeolocationError(LocationError):
    """Raised when the location sensor reports a failure."""

    def __init__(self, kind: GeolocationErrorKind) -> None:
        self.kind = kind
        super().__init__(_GEOLOCATION_MESSAGES[kind])


class InvalidCoordinateError(LocationError):
    """Raised for non-finite or out-of-range coordinates."""

    default_message = "座標無效。"


class GeocodeRequestFailedError(LocationError):
    """Raised when the reverse-geocode request and its single retry both fail."""

    default_message = "反向地理編碼失敗。"


class UnresolvedAddressError(LocationError):
    """Raised when the provider response yields no usable address."""

    default_message = "無法解析地址。"
