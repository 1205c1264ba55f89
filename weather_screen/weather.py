from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict
import logging

import requests

from .config import settings


EMPTY_CITY_MESSAGE = "Please enter a city name"
API_FALLBACK_MESSAGE = "Could not fetch weather"
TRANSPORT_FAILURE_MESSAGE = "Failed to fetch weather"

SUCCESS_CODE = 200

logger = logging.getLogger(__name__)


class WeatherError(Exception):
    """Base class for everything that can go wrong while fetching weather."""


class ValidationError(WeatherError):
    """Raised when the city name is empty or whitespace only."""

    def __init__(self, message: str = EMPTY_CITY_MESSAGE) -> None:
        super().__init__(message)


class WeatherAPIError(WeatherError):
    """Raised when the weather API reports a non-success ``cod``."""

    def __init__(self, message: str | None = None, code: int | None = None) -> None:
        self.message = message or API_FALLBACK_MESSAGE
        self.code = code
        super().__init__(self.message)


class TransportError(WeatherError):
    """Raised on network failures, timeouts and malformed response bodies."""


class ConfigurationError(WeatherError):
    """Raised when the API credential has not been provided."""


def validate_city(city: str | None) -> str:
    """Return ``city`` untouched, or raise ``ValidationError`` if it is blank.

    The raw value is what gets sent to the API; trimming only decides
    whether there is anything to send.
    """
    if not (city or "").strip():
        raise ValidationError()
    return city


def status_code(payload: Dict[str, Any]) -> int | None:
    """Read ``cod`` from a payload.

    OpenWeatherMap sends ``200`` as a number on success but error codes as
    strings (``"404"``), so both forms are accepted.
    """
    cod = payload.get("cod")
    if isinstance(cod, bool):
        return None
    if isinstance(cod, int):
        return cod
    if isinstance(cod, str) and cod.isdigit():
        return int(cod)
    return None


def parse_temperature(payload: Any) -> float:
    """Interpret a current-weather payload and return ``main.temp``."""
    if not isinstance(payload, dict):
        raise TransportError(f"Unexpected payload type: {type(payload).__name__}")

    code = status_code(payload)
    if code != SUCCESS_CODE:
        message = payload.get("message")
        raise WeatherAPIError(str(message) if message else None, code)

    main = payload.get("main")
    temp = main.get("temp") if isinstance(main, dict) else None
    if isinstance(temp, bool) or not isinstance(temp, Real):
        raise TransportError("Payload is missing a numeric main.temp")
    return temp


@dataclass
class WeatherClient:
    """Simple OpenWeatherMap client.

    Anything left as ``None`` is read from ``settings`` at request time so the
    credential is always injected from the environment.
    """

    api_key: str | None = None
    base_url: str | None = None
    units: str | None = None
    timeout: float | None = None

    def fetch_payload(self, city: str) -> Dict[str, Any]:
        api_key = self.api_key or settings.openweather_api_key
        if not api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY is not set.")

        params = {
            "q": city,
            "appid": api_key,
            "units": self.units or settings.openweather_units,
        }
        url = self.base_url or settings.openweather_base_url
        timeout = self.timeout if self.timeout is not None else settings.request_timeout

        # The body's ``cod`` decides success, so non-200 responses are still parsed.
        try:
            response = requests.get(url, params=params, timeout=timeout)
        except requests.RequestException as e:
            raise TransportError(f"Weather request failed: {e}") from e

        logger.debug("Weather API responded %s for %r", response.status_code, city)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Weather API returned a non-JSON body (status {response.status_code})"
            ) from e
