from __future__ import annotations

import os
from dotenv import load_dotenv
from dataclasses import dataclass


DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT = 10.0


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    openweather_api_key: str | None
    openweather_base_url: str
    openweather_units: str
    request_timeout: float
    log_level: str

    @classmethod
    def load(cls) -> "Settings":
        # Load .env file if present (no-op if not)
        load_dotenv()

        return cls(
            openweather_api_key=os.getenv("OPENWEATHER_API_KEY"),
            openweather_base_url=os.getenv("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL),
            openweather_units=os.getenv("OPENWEATHER_UNITS", "metric"),
            request_timeout=_float_env("WEATHER_REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.load()
