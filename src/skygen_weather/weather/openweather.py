"""OpenWeather current-weather provider implementation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import (
    ConfigurationError,
    InvalidCredentials,
    MalformedResponse,
    NotFound,
    ProviderError,
)
from ..models import CityLookup, CoordinateLookup, LookupRequest, WeatherCondition, WeatherSnapshot
from ..redaction import sanitize_for_logging, sanitize_text
from .base import WeatherProvider


class OpenWeatherClient(WeatherProvider):
    """Fetches current conditions from the OpenWeather `/weather` endpoint."""

    provider_name = "openweather"

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.base_url = str(settings.openweather_base_url)
        self._client = http_client or httpx.Client(
            timeout=settings.weather_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> OpenWeatherClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch(self, request: LookupRequest, api_key: str | None) -> WeatherSnapshot:
        """Run one lookup; no retries, no caching."""
        if not api_key:
            raise ConfigurationError("OpenWeather API Key is missing.")

        params = self._build_params(request, api_key)
        self.logger.debug(
            "OpenWeather %s lookup: %s", request.kind, sanitize_for_logging(params)
        )
        try:
            response = self._client.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            self.logger.warning(
                "OpenWeather request failed (%s): %s",
                type(exc).__name__,
                sanitize_text(str(exc)),
            )
            raise ProviderError(
                f"Weather API Error: {type(exc).__name__}",
                reason=type(exc).__name__,
            ) from exc

        self._raise_for_status(response, request)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse("Weather API returned a non-JSON response.") from exc
        return self.parse_snapshot(payload)

    @staticmethod
    def _build_params(request: LookupRequest, api_key: str) -> dict[str, str]:
        if isinstance(request, CityLookup):
            location = {"q": request.city}
        elif isinstance(request, CoordinateLookup):
            location = {"lat": str(request.latitude), "lon": str(request.longitude)}
        else:
            raise TypeError(f"Unsupported lookup request: {type(request).__name__}")
        return {**location, "units": "metric", "appid": api_key}

    def _raise_for_status(self, response: httpx.Response, request: LookupRequest) -> None:
        status = response.status_code
        if response.is_success:
            return
        self.logger.warning(
            "OpenWeather %s lookup returned HTTP %d: %s",
            request.kind,
            status,
            sanitize_text(response.text[:300]),
        )
        if status == 401:
            raise InvalidCredentials("Invalid OpenWeather API Key.")
        # 404 means "unknown city" only for name lookups.
        if status == 404 and isinstance(request, CityLookup):
            raise NotFound("City not found. Please try again.")
        reason = response.reason_phrase
        raise ProviderError(
            f"Weather API Error: {reason}",
            status_code=status,
            reason=reason,
        )

    @classmethod
    def parse_snapshot(cls, payload: Any) -> WeatherSnapshot:
        """Validate the provider body and map it onto a WeatherSnapshot."""
        if not isinstance(payload, dict):
            raise MalformedResponse(
                f"Weather API returned unexpected payload type {type(payload).__name__}."
            )

        name = payload.get("name")
        if not isinstance(name, str):
            raise MalformedResponse("Weather payload missing 'name'.")

        sys_block = payload.get("sys")
        country = sys_block.get("country") if isinstance(sys_block, dict) else None
        if country is not None and not isinstance(country, str):
            raise MalformedResponse("Weather payload 'sys.country' is not a string.")

        main = cls._require_dict(payload, "main")
        wind = cls._require_dict(payload, "wind")

        conditions = payload.get("weather")
        if not isinstance(conditions, list) or not conditions:
            raise MalformedResponse("Weather payload missing 'weather' list.")
        first = conditions[0]
        if not isinstance(first, dict):
            raise MalformedResponse("Weather payload 'weather[0]' is not an object.")

        return WeatherSnapshot(
            name=name,
            country=country or None,
            temperature=cls._require_number(main, "temp", "main"),
            feels_like=cls._require_number(main, "feels_like", "main"),
            humidity=cls._require_number(main, "humidity", "main"),
            wind_speed=cls._require_number(wind, "speed", "wind"),
            condition=WeatherCondition(
                description=cls._require_str(first, "description", "weather[0]"),
                icon=cls._require_str(first, "icon", "weather[0]"),
            ),
            retrieved_at=datetime.now(UTC),
        )

    @staticmethod
    def _require_dict(payload: dict[str, Any], key: str) -> dict[str, Any]:
        value = payload.get(key)
        if not isinstance(value, dict):
            raise MalformedResponse(f"Weather payload missing '{key}' object.")
        return value

    @staticmethod
    def _require_number(block: dict[str, Any], key: str, parent: str) -> float:
        value = block.get(key)
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MalformedResponse(f"Weather payload missing numeric '{parent}.{key}'.")
        return value

    @staticmethod
    def _require_str(block: dict[str, Any], key: str, parent: str) -> str:
        value = block.get(key)
        if not isinstance(value, str):
            raise MalformedResponse(f"Weather payload missing '{parent}.{key}'.")
        return value
