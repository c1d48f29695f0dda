"""Forecast fetcher: validates input, calls CWA and flattens the response."""

import logging
from typing import Any

import httpx

from weatherproxy.ingest.cwa_client import CwaClient
from weatherproxy.models.errors import (
    ConfigurationError,
    InputError,
    NotFoundError,
    UnknownServerError,
    UpstreamError,
)
from weatherproxy.models.forecast import CityForecast, ForecastPeriod

logger = logging.getLogger(__name__)

# Element code -> (ForecastPeriod field, unit suffix)
ELEMENT_FIELDS: dict[str, tuple[str, str]] = {
    "Wx": ("weather", ""),
    "PoP": ("rain", "%"),
    "MinT": ("min_temp", "°C"),
    "MaxT": ("max_temp", "°C"),
    "CI": ("comfort", ""),
    "WS": ("wind_speed", ""),
}

FETCH_FAILED_MESSAGE = "Unable to fetch weather data, please try again later"


class ForecastFetcher:
    def __init__(self, cwa_client: CwaClient):
        self.cwa = cwa_client

    def fetch(self, city: str) -> CityForecast:
        """Fetch and normalize the forecast for a CWA location name.

        Raises a WeatherProxyError subclass on every failure. Configuration
        and input are checked before any network call.
        """
        if not self.cwa.api_key:
            raise ConfigurationError("Set CWA_API_KEY in the .env file")

        city = (city or "").strip()
        if not city:
            raise InputError(
                "Provide a city name in the path, e.g. /api/weather/臺北市"
            )

        try:
            raw = self.cwa.get_forecast(city)
        except httpx.HTTPStatusError as e:
            body = _response_body(e.response)
            message = body.get("message") if isinstance(body, dict) else None
            logger.error(
                "CWA returned %d for %s: %s", e.response.status_code, city, body
            )
            raise UpstreamError(
                e.response.status_code,
                message or "Unable to fetch weather data",
                details=body,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to fetch forecast for %s: %s", city, e)
            raise UnknownServerError(FETCH_FAILED_MESSAGE) from e

        try:
            return extract_city_forecast(raw, city)
        except NotFoundError:
            logger.warning("CWA has no location data for %s", city)
            raise
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.exception("Malformed CWA response for %s", city)
            raise UnknownServerError(FETCH_FAILED_MESSAGE) from e


def extract_city_forecast(raw: dict, city: str) -> CityForecast:
    """Flatten a CWA datastore document into a CityForecast.

    The first weather element's time series decides how many periods are
    produced and supplies their start/end times.
    """
    records = raw["records"]
    locations = records.get("location") or []
    if not locations:
        raise NotFoundError(
            f"Unable to get weather data for {city}, check that the city name is correct"
        )
    location = locations[0]

    elements = location.get("weatherElement") or []
    timeline = elements[0]["time"] if elements else []
    count = len(timeline)

    for element in elements[1:]:
        length = len(element.get("time", []))
        if length != count:
            logger.warning(
                "Element %s for %s has %d periods, expected %d",
                element.get("elementName"), city, length, count,
            )

    forecasts = tuple(
        _build_period(elements, timeline[i], i) for i in range(count)
    )
    return CityForecast(
        city=location.get("locationName") or city,
        update_time=records.get("datasetDescription", ""),
        forecasts=forecasts,
    )


def _build_period(elements: list[dict], slot: dict, index: int) -> ForecastPeriod:
    fields: dict[str, str] = {}
    for element in elements:
        mapping = ELEMENT_FIELDS.get(element.get("elementName"))
        if mapping is None:
            continue
        series = element.get("time", [])
        if index >= len(series):
            continue
        name, suffix = mapping
        value = (series[index].get("parameter") or {}).get("parameterName")
        if value is None or value == "":
            continue
        fields[name] = f"{value}{suffix}"
    return ForecastPeriod(
        start_time=slot.get("startTime", ""),
        end_time=slot.get("endTime", ""),
        **fields,
    )


def _response_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
