"""Error taxonomy for forecast lookups, each mapped to an HTTP status."""

from typing import Any


class WeatherProxyError(Exception):
    category = "server error"
    status_code = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.category, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(WeatherProxyError):
    """The server is missing configuration it needs, e.g. the CWA API key."""

    category = "server configuration error"
    status_code = 500


class InputError(WeatherProxyError):
    category = "invalid parameter"
    status_code = 400


class NotFoundError(WeatherProxyError):
    category = "no data"
    status_code = 404


class UpstreamError(WeatherProxyError):
    """CWA answered with an error response; carries its status and raw body."""

    category = "CWA API error"

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(message, details)
        self.status_code = status_code


class UnknownServerError(WeatherProxyError):
    category = "server error"
    status_code = 500
