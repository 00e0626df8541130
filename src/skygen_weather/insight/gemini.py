"""Gemini-backed weather commentary."""

from __future__ import annotations

import logging
from typing import Any

from google import genai
from google.genai import types
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ConfigurationError, EmptyResponse, GenerationFailed
from ..models import InsightResult, WeatherSnapshot

INSIGHT_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "summary": types.Schema(type=types.Type.STRING),
        "outfitAdvice": types.Schema(type=types.Type.STRING),
        "funFact": types.Schema(type=types.Type.STRING),
    },
    required=["summary", "outfitAdvice", "funFact"],
)


def build_genai_client(settings: Settings) -> genai.Client | None:
    """Construct the SDK client once, only when a Gemini key is configured."""
    if not settings.gemini_api_key:
        return None
    return genai.Client(api_key=settings.gemini_api_key)


def build_insight_prompt(snapshot: WeatherSnapshot) -> str:
    country = snapshot.country or "unknown country"
    return f"""
Current weather data for {snapshot.name}, {country}:
- Temperature: {snapshot.temperature:g}°C (Feels like {snapshot.feels_like:g}°C)
- Condition: {snapshot.condition.description}
- Humidity: {snapshot.humidity:g}%
- Wind: {snapshot.wind_speed:g} m/s

Provide a response in JSON format with the following fields:
- summary: A witty, short summary of the weather (max 1 sentence).
- outfitAdvice: Practical clothing advice based on the data.
- funFact: A very short fun fact related to this kind of weather.
""".strip()


class InsightGenerator:
    """Produces an InsightResult from one snapshot via a structured-output call.

    The SDK client is injected; pass None when no credentials exist and every
    call fails fast with ConfigurationError.
    """

    def __init__(self, client: Any | None, model: str, logger: logging.Logger) -> None:
        self.client = client
        self.model = model
        self.logger = logger

    @classmethod
    def from_settings(cls, settings: Settings, logger: logging.Logger) -> InsightGenerator:
        return cls(build_genai_client(settings), settings.gemini_model, logger)

    @property
    def available(self) -> bool:
        return self.client is not None

    def generate(self, snapshot: WeatherSnapshot) -> InsightResult:
        if self.client is None:
            raise ConfigurationError("Gemini API Key is missing. Insight features are disabled.")

        prompt = build_insight_prompt(snapshot)
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=INSIGHT_RESPONSE_SCHEMA,
                ),
            )
        except Exception as exc:
            self.logger.error("Gemini insight request failed", exc_info=exc)
            raise GenerationFailed("Failed to generate AI insight.") from exc

        text = getattr(response, "text", None)
        if not text:
            self.logger.error("Gemini insight response was empty for %s", snapshot.name)
            raise EmptyResponse("No response from Gemini")

        try:
            return InsightResult.model_validate_json(text)
        except ValidationError as exc:
            self.logger.error("Gemini insight response did not match schema", exc_info=exc)
            raise GenerationFailed("Failed to generate AI insight.") from exc
