"""Tests for OpenWeather request building, status mapping and body parsing."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from skygen_weather.exceptions import (
    ConfigurationError,
    InvalidCredentials,
    MalformedResponse,
    NotFound,
    ProviderError,
)
from skygen_weather.models import CityLookup, CoordinateLookup
from skygen_weather.weather.openweather import OpenWeatherClient

BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

LONDON_PAYLOAD: dict[str, Any] = {
    "name": "London",
    "sys": {"country": "GB"},
    "main": {"temp": 15, "feels_like": 14, "humidity": 80},
    "wind": {"speed": 3},
    "weather": [{"description": "light rain", "icon": "10d"}],
}


def _make_settings(**overrides: Any) -> Any:
    defaults = {
        "openweather_base_url": BASE_URL,
        "weather_timeout_seconds": 5.0,
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _make_client(
    handler: Callable[[httpx.Request], httpx.Response],
) -> tuple[OpenWeatherClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http_client = httpx.Client(transport=httpx.MockTransport(_record))
    client = OpenWeatherClient(
        settings=_make_settings(),
        logger=logging.getLogger("test_openweather"),
        http_client=http_client,
    )
    return client, seen


def _status(code: int) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(code, json={"cod": code, "message": "nope"})


def test_city_lookup_snapshot_matches_payload_exactly() -> None:
    client, seen = _make_client(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))

    snapshot = client.fetch(CityLookup(city="London"), "secret-key")

    assert snapshot.name == "London"
    assert snapshot.country == "GB"
    assert snapshot.temperature == 15
    assert snapshot.feels_like == 14
    assert snapshot.humidity == 80
    assert snapshot.wind_speed == 3
    assert snapshot.condition.description == "light rain"
    assert snapshot.condition.icon == "10d"
    assert snapshot.retrieved_at.tzinfo is not None

    assert len(seen) == 1
    params = seen[0].url.params
    assert params["q"] == "London"
    assert params["units"] == "metric"
    assert params["appid"] == "secret-key"
    assert "lat" not in params


def test_city_name_is_stripped_and_escaped() -> None:
    client, seen = _make_client(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))

    client.fetch(CityLookup(city="  São Paulo & Co "), "k")

    assert seen[0].url.params["q"] == "São Paulo & Co"
    assert b"%26" in seen[0].url.query


def test_coordinate_lookup_sends_lat_lon() -> None:
    client, seen = _make_client(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))

    client.fetch(CoordinateLookup(latitude=51.5072, longitude=-0.1276), "k")

    params = seen[0].url.params
    assert params["lat"] == "51.5072"
    assert params["lon"] == "-0.1276"
    assert params["units"] == "metric"
    assert "q" not in params


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_fails_without_network(api_key: str | None) -> None:
    client, seen = _make_client(lambda request: httpx.Response(200, json=LONDON_PAYLOAD))

    with pytest.raises(ConfigurationError, match="OpenWeather API Key is missing"):
        client.fetch(CityLookup(city="London"), api_key)
    assert seen == []


@pytest.mark.parametrize(
    "request_",
    [CityLookup(city="London"), CoordinateLookup(latitude=10.0, longitude=20.0)],
)
def test_401_is_invalid_credentials_on_both_paths(request_: Any) -> None:
    client, _ = _make_client(_status(401))

    with pytest.raises(InvalidCredentials, match="Invalid OpenWeather API Key"):
        client.fetch(request_, "bad-key")


def test_404_on_city_lookup_is_not_found() -> None:
    client, _ = _make_client(_status(404))

    with pytest.raises(NotFound, match="City not found. Please try again."):
        client.fetch(CityLookup(city="InvalidCity123"), "k")


def test_404_on_coordinate_lookup_is_provider_error() -> None:
    client, _ = _make_client(_status(404))

    with pytest.raises(ProviderError) as excinfo:
        client.fetch(CoordinateLookup(latitude=0.0, longitude=0.0), "k")
    assert not isinstance(excinfo.value, NotFound)
    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Weather API Error: Not Found"


@pytest.mark.parametrize(
    ("code", "reason"),
    [(429, "Too Many Requests"), (500, "Internal Server Error"), (503, "Service Unavailable")],
)
def test_other_statuses_carry_reason_phrase(code: int, reason: str) -> None:
    client, _ = _make_client(_status(code))

    with pytest.raises(ProviderError) as excinfo:
        client.fetch(CityLookup(city="London"), "k")
    assert excinfo.value.status_code == code
    assert excinfo.value.reason == reason
    assert str(excinfo.value) == f"Weather API Error: {reason}"


def test_transport_failure_is_provider_error_without_status() -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, _ = _make_client(_boom)

    with pytest.raises(ProviderError) as excinfo:
        client.fetch(CityLookup(city="London"), "k")
    assert excinfo.value.status_code is None


def test_non_json_body_is_malformed() -> None:
    client, _ = _make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedResponse, match="non-JSON"):
        client.fetch(CityLookup(city="London"), "k")


@pytest.mark.parametrize(
    ("mutate", "match"),
    [
        (lambda p: p.pop("main"), "'main'"),
        (lambda p: p["main"].pop("feels_like"), "main.feels_like"),
        (lambda p: p["wind"].update(speed="fast"), "wind.speed"),
        (lambda p: p.update(weather=[]), "'weather' list"),
        (lambda p: p["weather"][0].pop("icon"), "weather\\[0\\].icon"),
        (lambda p: p.update(name=None), "'name'"),
    ],
)
def test_unexpected_body_shape_is_malformed(mutate: Any, match: str) -> None:
    payload = {
        **LONDON_PAYLOAD,
        "main": dict(LONDON_PAYLOAD["main"]),
        "wind": dict(LONDON_PAYLOAD["wind"]),
        "weather": [dict(LONDON_PAYLOAD["weather"][0])],
    }
    mutate(payload)

    with pytest.raises(MalformedResponse, match=match):
        OpenWeatherClient.parse_snapshot(payload)


def test_missing_country_is_tolerated() -> None:
    payload = {**LONDON_PAYLOAD, "name": "", "sys": {}}

    snapshot = OpenWeatherClient.parse_snapshot(payload)

    assert snapshot.country is None
    assert snapshot.location_label == ""


def test_api_key_is_redacted_from_failure_logs(caplog: pytest.LogCaptureFixture) -> None:
    client, _ = _make_client(_status(500))

    with caplog.at_level(logging.DEBUG, logger="test_openweather"):
        with pytest.raises(ProviderError):
            client.fetch(CityLookup(city="London"), "super-secret-key")

    assert "super-secret-key" not in caplog.text
