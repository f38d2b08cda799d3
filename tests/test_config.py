"""Tests for config.py default deployment constants."""
from parkreport.config import Settings


def test_defaults(monkeypatch):
    for name in (
        "GEOCODE_TIMEOUT_MS",
        "GEOCODE_RETRY_DELAY_MS",
        "GEOCODE_CACHE_CAPACITY",
        "POSITION_FAST_TIMEOUT_MS",
        "POSITION_PRECISE_TIMEOUT_MS",
        "DISTRICT_DEBOUNCE_MS",
        "GEOCODE_LOCALE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.geocode_timeout_ms == 8000
    assert settings.geocode_retry_delay_ms == 1000
    assert settings.geocode_cache_capacity == 100
    assert settings.position_fast_timeout_ms == 3000
    assert settings.position_precise_timeout_ms == 10000
    assert settings.district_debounce_ms == 300
    assert settings.geocode_locale == "zh-TW"
