"""CWA weather proxy — FastAPI app serving normalized city forecasts."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weatherproxy.config.defaults import DEFAULT_CITY_TRANSLATIONS
from weatherproxy.config.schema import ProxyConfig
from weatherproxy.geo.locator import GeoIPLocator
from weatherproxy.geo.resolver import CityResolver, client_ip
from weatherproxy.ingest.cwa_client import CwaClient
from weatherproxy.ingest.forecast_fetcher import ForecastFetcher
from weatherproxy.models.common import utc_now_iso
from weatherproxy.models.errors import WeatherProxyError

logger = logging.getLogger(__name__)


def build_fetcher(config: ProxyConfig) -> ForecastFetcher:
    upstream = config.upstream
    client = CwaClient(
        api_key=upstream.api_key,
        base_url=upstream.base_url,
        dataset_id=upstream.dataset_id,
        timeout=upstream.timeout_seconds,
    )
    return ForecastFetcher(client)


def build_resolver(config: ProxyConfig) -> CityResolver:
    geo = config.geo
    return CityResolver(
        GeoIPLocator(geo.database_path),
        translations=geo.city_translations or DEFAULT_CITY_TRANSLATIONS,
        default_city=geo.default_city,
    )


def create_app(
    config: ProxyConfig | None = None,
    fetcher: ForecastFetcher | None = None,
    resolver: CityResolver | None = None,
) -> FastAPI:
    config = config or ProxyConfig()
    fetcher = fetcher or build_fetcher(config)
    resolver = resolver or build_resolver(config)

    app = FastAPI(title="CWA Weather Proxy", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.fetcher = fetcher
    app.state.resolver = resolver

    # ── Error envelopes ─────────────────────────────────────────

    @app.exception_handler(WeatherProxyError)
    async def handle_proxy_error(request: Request, exc: WeatherProxyError):
        logger.warning(
            "%s %s -> %d %s: %s",
            request.method, request.url.path, exc.status_code,
            exc.category, exc.message,
        )
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse({"error": "route not found"}, status_code=404)
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            {"error": "server error", "message": str(exc)}, status_code=500
        )

    # ── Routes ──────────────────────────────────────────────────

    @app.get("/")
    def index():
        return {
            "message": "Welcome to the CWA weather forecast API, all Taiwan cities",
            "endpoints": {
                "cityWeather": "/api/weather/:city (e.g. /api/weather/臺北市)",
                "currentWeather": "/api/weather/current",
                "health": "/api/health",
            },
        }

    @app.get("/api/health")
    def health():
        return {"status": "OK", "timestamp": utc_now_iso()}

    @app.get("/api/weather")
    @app.get("/api/weather/")
    def weather_missing_city():
        return _forecast_envelope(app.state.fetcher, "")

    @app.get("/api/weather/current")
    def weather_current(request: Request):
        peer = request.client.host if request.client else None
        ip = client_ip(request.headers.get("x-forwarded-for"), peer)
        city = app.state.resolver.resolve(ip)
        logger.info("Resolved %s to %s", ip or "<unknown>", city)
        return _forecast_envelope(app.state.fetcher, city)

    @app.get("/api/weather/{city}")
    def weather_by_city(city: str):
        return _forecast_envelope(app.state.fetcher, city)

    return app


def _forecast_envelope(fetcher: ForecastFetcher, city: str) -> dict:
    forecast = fetcher.fetch(city)
    return {"success": True, "data": forecast.to_dict()}
