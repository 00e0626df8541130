"""Provider-agnostic weather interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import LookupRequest, WeatherSnapshot


class WeatherProvider(ABC):
    """Base contract for current-weather providers used by the dashboard."""

    @abstractmethod
    def fetch(self, request: LookupRequest, api_key: str | None) -> WeatherSnapshot:
        """Fetch and normalize current conditions for one lookup."""

    @abstractmethod
    def close(self) -> None:
        """Release provider resources."""
