"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class ConfigurationError(ConfigError):
    """Raised when a feature is invoked without its required API key."""


class WeatherLookupError(Exception):
    """Raised when a weather lookup fails; the message is shown to the user."""


class InvalidCredentials(WeatherLookupError):
    """Raised when the weather provider rejects the API key (HTTP 401)."""


class NotFound(WeatherLookupError):
    """Raised when a city-name lookup matches no location (HTTP 404)."""


class ProviderError(WeatherLookupError):
    """Raised for any other provider failure, with status metadata."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class MalformedResponse(WeatherLookupError):
    """Raised when a successful response body does not have the expected shape."""


class LocationError(WeatherLookupError):
    """Raised when the current position cannot be turned into a lookup."""


class GeolocationUnsupported(LocationError):
    """Raised when no geolocation capability is available."""


class GeolocationDenied(LocationError):
    """Raised when the position source refuses or fails to report a position."""


class InsightError(Exception):
    """Raised when AI insight generation fails; logged, never shown as a blocking error."""


class EmptyResponse(InsightError):
    """Raised when the AI provider returns no response text."""


class GenerationFailed(InsightError):
    """Raised for any call-level, provider or parse failure during generation."""
