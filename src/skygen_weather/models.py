"""Shared typed models for lookups, weather snapshots and AI insights."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CityLookup(BaseModel):
    """Lookup by free-text city name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["city"] = "city"
    city: str

    @field_validator("city")
    @classmethod
    def strip_city(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("city must not be empty")
        return value


class CoordinateLookup(BaseModel):
    """Lookup by latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["coords"] = "coords"
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


LookupRequest = Annotated[CityLookup | CoordinateLookup, Field(discriminator="kind")]


class WeatherCondition(BaseModel):
    """Sky condition as reported by the provider."""

    model_config = ConfigDict(frozen=True)

    description: str
    icon: str


class WeatherSnapshot(BaseModel):
    """Current conditions for one location, values exactly as the provider sent them."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str | None = None
    temperature: float = Field(description="Air temperature in Celsius")
    feels_like: float = Field(description="Apparent temperature in Celsius")
    humidity: float = Field(description="Relative humidity in percent")
    wind_speed: float = Field(description="Wind speed in metres per second")
    condition: WeatherCondition
    retrieved_at: datetime

    @property
    def location_label(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


class InsightResult(BaseModel):
    """AI commentary derived from exactly one snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str
    outfit_advice: str = Field(alias="outfitAdvice")
    fun_fact: str = Field(alias="funFact")
