"""Storm Reporting API: FastAPI app forwarding coordinates to weather, imagery and air-quality services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError

from stormapi.config.loader import load_config
from stormapi.config.schema import AppConfig
from stormapi.ingest.errors import UpstreamError
from stormapi.models.common import COORDINATE_PATTERN
from stormapi.models.responses import (
    AirQualityResponse,
    AlertOut,
    AlertsResponse,
    DailyForecastResponse,
    ErrorResponse,
    ForecastOut,
    HourlyForecastResponse,
    MergedForecastOut,
    SatelliteResponse,
    TenDayForecastResponse,
)
from stormapi.services.forecast_aggregator import ForecastAggregator

logger = logging.getLogger(__name__)

AIR_QUALITY_NOT_FOUND = "No air quality data found for the given location."
INVALID_COORDINATES = "lat and lon query parameters are required decimal degrees"

ERROR_RESPONSES = {500: {"model": ErrorResponse}}

# Kept as text so the coordinate reaches upstream exactly as supplied.
Latitude = Annotated[
    str, Query(description="Latitude of the location", pattern=COORDINATE_PATTERN)
]
Longitude = Annotated[
    str, Query(description="Longitude of the location", pattern=COORDINATE_PATTERN)
]


class ApiError(Exception):
    """Rendered as ``{"error": message}`` with the given status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@contextmanager
def upstream_guard(message: str) -> Iterator[None]:
    """Turn upstream failures into a generic 500; the cause stays in the server log.

    A ValidationError here means an upstream record did not fit the response
    schema, which is treated the same as any other malformed body.
    """
    try:
        yield
    except UpstreamError as e:
        logger.error("%s: %s", message, e)
        raise ApiError(500, message) from e
    except ValidationError as e:
        logger.error("%s: upstream record does not fit response schema (%d errors)",
                     message, e.error_count())
        raise ApiError(500, message) from e


def create_app(
    config: AppConfig | None = None,
    aggregator: ForecastAggregator | None = None,
) -> FastAPI:
    """Build the app. With no arguments, config comes from YAML + environment."""
    if config is None:
        config = load_config()
    if aggregator is None:
        aggregator = ForecastAggregator.from_config(config)

    app = FastAPI(
        title="Storm Reporting API",
        version="1.0.0",
        description=(
            "API for fetching weather data, storm alerts, and satellite "
            "imagery based on location"
        ),
        docs_url="/api-docs",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": INVALID_COORDINATES})

    # ── Weather endpoints ───────────────────────────────────────────

    @app.get(
        "/api/weather",
        response_model=HourlyForecastResponse,
        responses=ERROR_RESPONSES,
        summary="Get hourly weather data for a specific location",
    )
    def get_hourly_weather(lat: Latitude, lon: Longitude):
        with upstream_guard("Failed to fetch weather data"):
            point = aggregator.resolve_point(lat, lon)
            records = aggregator.fetch_hourly(point)
            return HourlyForecastResponse(
                hourly_forecast=[MergedForecastOut.from_record(r) for r in records]
            )

    @app.get(
        "/api/weather/daily",
        response_model=DailyForecastResponse,
        responses=ERROR_RESPONSES,
        summary="Get daily weather data for a specific location",
    )
    def get_daily_weather(lat: Latitude, lon: Longitude):
        with upstream_guard("Failed to fetch daily weather data"):
            point = aggregator.resolve_point(lat, lon)
            records = aggregator.fetch_daily(point)
            return DailyForecastResponse(
                daily_forecast=[ForecastOut.from_record(r) for r in records]
            )

    @app.get(
        "/api/weather/10days",
        response_model=TenDayForecastResponse,
        responses=ERROR_RESPONSES,
        summary="Get 10-day weather forecast data for a specific location",
    )
    def get_ten_day_weather(lat: Latitude, lon: Longitude):
        with upstream_guard("Failed to fetch 10-day weather data"):
            point = aggregator.resolve_point(lat, lon)
            records = aggregator.fetch_ten_day(point)
            return TenDayForecastResponse(
                next_10_days_forecast=[ForecastOut.from_record(r) for r in records]
            )

    @app.get(
        "/api/alerts",
        response_model=AlertsResponse,
        responses=ERROR_RESPONSES,
        summary="Get active storm alerts for a specific location",
    )
    def get_alerts(lat: Latitude, lon: Longitude):
        with upstream_guard("Failed to fetch storm alerts"):
            point = aggregator.resolve_point(lat, lon)
            alerts = aggregator.fetch_alerts(point)
            return AlertsResponse(storm_alerts=[AlertOut.from_record(a) for a in alerts])

    # ── Imagery and air quality ─────────────────────────────────────

    @app.get(
        "/api/satellite",
        response_model=SatelliteResponse,
        summary="Get live regional satellite view for a specific location",
    )
    def get_satellite(lat: Latitude, lon: Longitude):
        return SatelliteResponse(image_url=aggregator.satellite_image_url(lat, lon))

    @app.get(
        "/api/airquality",
        response_model=AirQualityResponse,
        responses={404: {"model": ErrorResponse}, **ERROR_RESPONSES},
        summary="Get air quality data for a specific location",
    )
    def get_air_quality(lat: Latitude, lon: Longitude):
        with upstream_guard("Failed to fetch air quality data"):
            record = aggregator.fetch_air_quality(lat, lon)
            if record is not None:
                return AirQualityResponse.from_record(record)
        raise ApiError(404, AIR_QUALITY_NOT_FOUND)

    # ── Serve the built browser client ──────────────────────────────

    if config.server.static_dir:
        static_root = Path(config.server.static_dir).resolve()
        if static_root.is_dir():
            _mount_client(app, static_root)
        else:
            logger.warning("Static dir %s does not exist, not serving client", static_root)

    return app


def _mount_client(app: FastAPI, static_root: Path) -> None:
    index_html = static_root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_client(full_path: str):
        if full_path.startswith("api/"):
            raise ApiError(404, "Not found")
        candidate = (static_root / full_path).resolve()
        if not candidate.is_relative_to(static_root):
            raise ApiError(404, "Not found")
        if full_path and candidate.is_file():
            return FileResponse(candidate)
        if index_html.exists():
            return FileResponse(index_html, media_type="text/html")
        raise ApiError(404, "Not found")
