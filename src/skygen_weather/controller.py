"""Wire user actions to the resolver, weather client and insight generator."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .exceptions import ConfigurationError, InsightError, WeatherLookupError
from .insight.gemini import InsightGenerator
from .location import LocationResolver
from .models import LookupRequest
from .state import (
    Action,
    DashboardState,
    InsightFailed,
    InsightStarted,
    InsightSucceeded,
    LookupFailed,
    LookupStarted,
    LookupSucceeded,
    reduce,
)
from .weather.base import WeatherProvider


class DashboardController:
    """Owns the dashboard state; every change goes through `dispatch`."""

    def __init__(
        self,
        *,
        weather_client: WeatherProvider,
        weather_api_key: str | None,
        insight_generator: InsightGenerator,
        resolver: LocationResolver,
        logger: logging.Logger,
        on_change: Callable[[DashboardState], None] | None = None,
    ) -> None:
        self.weather_client = weather_client
        self.weather_api_key = weather_api_key
        self.insight_generator = insight_generator
        self.resolver = resolver
        self.logger = logger
        self.on_change = on_change
        self._state = DashboardState()

    @property
    def state(self) -> DashboardState:
        return self._state

    def dispatch(self, action: Action) -> DashboardState:
        next_state = reduce(self._state, action)
        if next_state is not self._state:
            self._state = next_state
            if self.on_change is not None:
                self.on_change(next_state)
        return self._state

    def search_city(self, text: str) -> DashboardState:
        """Look up weather by city name; blank input is ignored."""
        request = self.resolver.resolve_city(text)
        if request is None:
            return self._state
        generation = self.dispatch(LookupStarted(city=text)).lookup_generation
        return self._run_lookup(generation, request)

    def use_current_location(self) -> DashboardState:
        """Look up weather for the platform-reported current position."""
        generation = self.dispatch(LookupStarted()).lookup_generation
        try:
            request = self.resolver.resolve_current_position()
        except WeatherLookupError as exc:
            return self.dispatch(LookupFailed(generation, str(exc)))
        return self._run_lookup(generation, request)

    def request_insight(self) -> DashboardState:
        """Ask the AI provider for commentary on the displayed snapshot.

        Failures are logged and leave the snapshot on screen; the command can
        simply be issued again.
        """
        snapshot = self._state.weather
        if snapshot is None:
            self.logger.warning("Insight requested before any successful weather lookup.")
            return self._state
        if self._state.insight_loading:
            return self._state

        generation = self._state.lookup_generation
        self.dispatch(InsightStarted(generation))
        try:
            insight = self.insight_generator.generate(snapshot)
        except (ConfigurationError, InsightError) as exc:
            self.logger.error("Insight generation failed: %s", exc)
            return self.dispatch(InsightFailed(generation))
        return self.dispatch(InsightSucceeded(generation, insight))

    def _run_lookup(self, generation: int, request: LookupRequest) -> DashboardState:
        try:
            snapshot = self.weather_client.fetch(request, self.weather_api_key)
        except (ConfigurationError, WeatherLookupError) as exc:
            self.logger.warning("Weather lookup failed (%s): %s", type(exc).__name__, exc)
            return self.dispatch(LookupFailed(generation, str(exc) or "Failed to fetch weather"))
        self.logger.info("Weather lookup succeeded for %s", snapshot.location_label)
        return self.dispatch(LookupSucceeded(generation, request, snapshot))
