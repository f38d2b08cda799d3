"""Shared test fixtures for location engine tests."""
from __future__ import annotations

import pytest
import respx

from parkreport.config import Settings
from parkreport.location.models import Coordinate, PositionOptions
from parkreport.location.position import SensorError


BASE_URL = "https://nominatim.test"

TEST_SETTINGS = Settings(
    nominatim_base_url=BASE_URL,
    nominatim_user_agent="parkreport-tests",
    geocode_retry_delay_ms=0,
)


class FakeSensor:
    """Callback sensor that replays scripted outcomes, one per request.

    Each outcome is a Coordinate (success), a SensorError (failure) or None
    (never call back).
    """

    def __init__(self, *outcomes: Coordinate | SensorError | None) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[PositionOptions] = []
        self.parked: list[tuple] = []

    def get_current_position(self, on_success, on_error, options: PositionOptions) -> None:
        self.requests.append(options)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Coordinate):
            on_success(outcome)
        elif isinstance(outcome, SensorError):
            on_error(outcome)
        else:
            self.parked.append((on_success, on_error))


@pytest.fixture
def mock_nominatim():
    """respx mock transport for the Nominatim base URL."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def taipei_response():
    """Nominatim /reverse body for Taipei 101 with addressdetails=1."""
    return {
        "place_id": 12345,
        "display_name": "7號, 信義路五段, 信義區, 臺北市, 110, 臺灣",
        "address": {
            "house_number": "7號",
            "road": "信義路五段",
            "suburb": "信義區",
            "city": "臺北市",
            "postcode": "110",
            "country": "臺灣",
            "country_code": "tw",
        },
    }


@pytest.fixture
def test_settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def make_sensor():
    """Factory for FakeSensor instances with scripted outcomes."""
    return FakeSensor
