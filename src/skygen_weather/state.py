"""Dashboard state record and the reducer that owns every transition."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .models import CoordinateLookup, InsightResult, LookupRequest, WeatherSnapshot


@dataclass(frozen=True, slots=True)
class DashboardState:
    """Everything the UI shows; replaced wholesale on each transition."""

    city: str = ""
    weather: WeatherSnapshot | None = None
    insight: InsightResult | None = None
    loading: bool = False
    insight_loading: bool = False
    error: str | None = None
    lookup_generation: int = 0

    @property
    def can_request_insight(self) -> bool:
        return self.weather is not None and not self.insight_loading and self.insight is None


@dataclass(frozen=True, slots=True)
class LookupStarted:
    city: str | None = None


@dataclass(frozen=True, slots=True)
class LookupSucceeded:
    generation: int
    request: LookupRequest
    snapshot: WeatherSnapshot


@dataclass(frozen=True, slots=True)
class LookupFailed:
    generation: int
    message: str


@dataclass(frozen=True, slots=True)
class InsightStarted:
    generation: int


@dataclass(frozen=True, slots=True)
class InsightSucceeded:
    generation: int
    insight: InsightResult


@dataclass(frozen=True, slots=True)
class InsightFailed:
    generation: int


Action = (
    LookupStarted
    | LookupSucceeded
    | LookupFailed
    | InsightStarted
    | InsightSucceeded
    | InsightFailed
)


def reduce(state: DashboardState, action: Action) -> DashboardState:
    """Apply one action and return the next state.

    Result actions carry the lookup generation they were started under; a
    result from an older generation leaves the state untouched, so a slow
    response can never overwrite a newer lookup.
    """
    if isinstance(action, LookupStarted):
        return replace(
            state,
            city=state.city if action.city is None else action.city,
            loading=True,
            error=None,
            insight=None,
            insight_loading=False,
            lookup_generation=state.lookup_generation + 1,
        )

    if isinstance(action, LookupSucceeded):
        if action.generation != state.lookup_generation:
            return state
        city = state.city
        if isinstance(action.request, CoordinateLookup) and action.snapshot.name:
            city = action.snapshot.name
        return replace(state, weather=action.snapshot, loading=False, city=city)

    if isinstance(action, LookupFailed):
        if action.generation != state.lookup_generation:
            return state
        return replace(
            state,
            weather=None,
            insight=None,
            loading=False,
            error=action.message,
        )

    if isinstance(action, InsightStarted):
        if action.generation != state.lookup_generation or state.weather is None:
            return state
        return replace(state, insight_loading=True)

    if isinstance(action, InsightSucceeded):
        if action.generation != state.lookup_generation or state.weather is None:
            return state
        return replace(state, insight=action.insight, insight_loading=False)

    if isinstance(action, InsightFailed):
        if action.generation != state.lookup_generation:
            return state
        return replace(state, insight_loading=False)

    raise TypeError(f"Unknown dashboard action: {type(action).__name__}")
