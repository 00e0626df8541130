"""Weather provider integrations."""

from .base import WeatherProvider
from .openweather import OpenWeatherClient

__all__ = [
    "OpenWeatherClient",
    "WeatherProvider",
]
