"""Application settings loaded from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "report-via-mobile"
    geocode_locale: str = "zh-TW"
    geocode_timeout_ms: int = 8000
    geocode_retry_delay_ms: int = 1000
    geocode_cache_capacity: int = 100

    position_fast_timeout_ms: int = 3000
    position_precise_timeout_ms: int = 10000

    district_debounce_ms: int = 300

    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

settings = Settings()
