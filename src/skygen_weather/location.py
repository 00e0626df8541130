"""Turn user actions into concrete weather lookup requests."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError

from .config import Settings
from .exceptions import GeolocationDenied, GeolocationUnsupported
from .models import CityLookup, CoordinateLookup


class PositionUnavailable(Exception):
    """Raised by a position source that cannot produce a reading."""


class PositionSource(ABC):
    """Platform capability that reports the current position once per call."""

    @abstractmethod
    def current_position(self) -> tuple[float, float]:
        """Return `(latitude, longitude)` or raise PositionUnavailable."""


class ConfiguredPositionSource(PositionSource):
    """Position taken from `WEATHER_DEFAULT_LAT`/`WEATHER_DEFAULT_LON`."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude

    def current_position(self) -> tuple[float, float]:
        return self.latitude, self.longitude


def position_source_from_settings(settings: Settings) -> PositionSource | None:
    """Return a configured source, or None when no position is available."""
    if not settings.has_default_position:
        return None
    return ConfiguredPositionSource(settings.weather_default_lat, settings.weather_default_lon)


class LocationResolver:
    """Resolves a city submission or a current-position request into a lookup.

    Exactly one attempt is made per call and nothing is retried.
    """

    def __init__(self, position_source: PositionSource | None, logger: logging.Logger) -> None:
        self.position_source = position_source
        self.logger = logger

    def resolve_city(self, text: str) -> CityLookup | None:
        """Return a lookup for non-blank input, otherwise None."""
        if not text or not text.strip():
            return None
        return CityLookup(city=text)

    def resolve_current_position(self) -> CoordinateLookup:
        if self.position_source is None:
            raise GeolocationUnsupported("Geolocation is not supported on this platform")
        try:
            latitude, longitude = self.position_source.current_position()
            return CoordinateLookup(latitude=latitude, longitude=longitude)
        except (PositionUnavailable, ValidationError) as exc:
            self.logger.warning("Current position unavailable: %s", exc)
            raise GeolocationDenied("Unable to retrieve your location") from exc
