"""Forecast aggregator: resolves a point, fetches linked resources, merges them."""

import logging
from collections.abc import Sequence
from typing import Any

from stormapi.config.schema import AppConfig
from stormapi.ingest.airnow_client import AirNowClient
from stormapi.ingest.errors import UpstreamError
from stormapi.ingest.nasa_imagery import NasaImagery
from stormapi.ingest.nws_client import SERVICE_NAME as NWS_SERVICE
from stormapi.ingest.nws_client import NwsClient
from stormapi.models.air_quality import AirQualityRecord
from stormapi.models.alert import AlertRecord
from stormapi.models.common import NOT_AVAILABLE, Reading, or_not_available
from stormapi.models.forecast import (
    ForecastPeriod,
    ForecastRecord,
    GridSeries,
    MergedForecastRecord,
    PointResource,
)

logger = logging.getLogger(__name__)


class ForecastAggregator:
    """Chains upstream calls for one request. Holds no per-request state."""

    def __init__(
        self,
        nws: NwsClient,
        airnow: AirNowClient,
        imagery: NasaImagery,
        ten_day_limit: int = 10,
    ):
        self.nws = nws
        self.airnow = airnow
        self.imagery = imagery
        self.ten_day_limit = ten_day_limit

    @classmethod
    def from_config(cls, config: AppConfig) -> "ForecastAggregator":
        upstream = config.upstream
        secrets = config.secrets
        return cls(
            nws=NwsClient(
                base_url=upstream.weather_base_url,
                alerts_base_url=upstream.alerts_base_url,
                user_agent=upstream.user_agent,
                timeout=upstream.timeout_seconds,
            ),
            airnow=AirNowClient(
                api_key=secrets.airnow_api_key.get_secret_value(),
                base_url=upstream.airnow_base_url,
                distance_miles=upstream.airnow_distance_miles,
                timeout=upstream.timeout_seconds,
            ),
            imagery=NasaImagery(
                api_key=secrets.nasa_api_key.get_secret_value(),
                base_url=upstream.nasa_imagery_url,
                dim=upstream.satellite_dim,
            ),
            ten_day_limit=upstream.ten_day_limit,
        )

    # --- Point resolution ---

    def resolve_point(self, lat: str, lon: str) -> PointResource:
        """Look up the weather.gov point for a coordinate. No range checks."""
        raw = self.nws.get_point(lat, lon)
        properties = _properties(raw)
        return PointResource(
            forecast_url=properties.get("forecast"),
            forecast_hourly_url=properties.get("forecastHourly"),
            forecast_grid_data_url=properties.get("forecastGridData"),
            forecast_zone_url=properties.get("forecastZone"),
        )

    # --- Forecasts ---

    def fetch_hourly(self, point: PointResource) -> list[MergedForecastRecord]:
        """Hourly periods merged by index with grid humidity/precipitation.

        Both dependent fetches must succeed; there is no partial result.
        """
        hourly_url = _require_link(point.forecast_hourly_url, "forecastHourly")
        grid_url = _require_link(point.forecast_grid_data_url, "forecastGridData")

        periods = _parse_periods(self.nws.get_linked(hourly_url))
        grid = _parse_grid(self.nws.get_linked(grid_url))

        if len(grid.humidity) < len(periods) or len(grid.precipitation_probability) < len(periods):
            logger.debug(
                "Grid series shorter than %d periods (humidity=%d, precipitation=%d)",
                len(periods), len(grid.humidity), len(grid.precipitation_probability),
            )
        return pair_with_grid(periods, grid)

    def fetch_daily(self, point: PointResource) -> list[ForecastRecord]:
        """Every period of the daily forecast, mapped to ForecastRecord."""
        forecast_url = _require_link(point.forecast_url, "forecast")
        raw = self.nws.get_linked(forecast_url)
        return [_to_forecast_record(p) for p in _raw_periods(raw)]

    def fetch_ten_day(self, point: PointResource) -> list[ForecastRecord]:
        """The first ``ten_day_limit`` daily periods."""
        return self.fetch_daily(point)[: self.ten_day_limit]

    # --- Alerts ---

    def fetch_alerts(self, point: PointResource) -> list[AlertRecord]:
        zone_id = point.zone_id
        if not zone_id:
            raise UpstreamError(NWS_SERVICE, "point has no forecastZone link")
        raw = self.nws.get_active_alerts(zone_id)
        features = raw.get("features") if isinstance(raw, dict) else None
        if not isinstance(features, list):
            raise UpstreamError(NWS_SERVICE, "alerts response has no features list")
        return [_to_alert_record(f) for f in features if isinstance(f, dict)]

    # --- Satellite and air quality ---

    def satellite_image_url(self, lat: str, lon: str) -> str:
        return self.imagery.image_url(lat, lon)

    def fetch_air_quality(self, lat: str, lon: str) -> AirQualityRecord | None:
        """First current observation near the coordinate, or None if there are none."""
        observations = self.airnow.get_current_observations(lat, lon)
        if not observations:
            return None
        first = observations[0]
        if not isinstance(first, dict):
            raise UpstreamError("AirNow", "observation is not an object")
        category = first.get("Category")
        return AirQualityRecord(
            date_observed=or_not_available(first.get("DateObserved")),
            aqi=or_not_available(first.get("AQI")),
            category=or_not_available(
                category.get("Name") if isinstance(category, dict) else None
            ),
            pollutant=or_not_available(first.get("ParameterName")),
        )


def pair_with_grid(
    periods: Sequence[ForecastPeriod], grid: GridSeries
) -> list[MergedForecastRecord]:
    """Attach grid values to periods by position.

    Output length always equals ``len(periods)``. An index missing from a
    grid series, or a null value at that index, becomes NOT_AVAILABLE.
    """
    return [
        MergedForecastRecord(
            start_time=period.start_time,
            temperature=period.temperature,
            condition=period.condition,
            wind_speed=period.wind_speed,
            wind_direction=period.wind_direction,
            detailed_forecast=period.detailed_forecast,
            humidity=_value_at(grid.humidity, i),
            precipitation_probability=_value_at(grid.precipitation_probability, i),
        )
        for i, period in enumerate(periods)
    ]


def _value_at(series: Sequence[Reading | None], index: int) -> Reading:
    if index >= len(series):
        return NOT_AVAILABLE
    return or_not_available(series[index])


def _require_link(url: str | None, name: str) -> str:
    if not url:
        raise UpstreamError(NWS_SERVICE, f"point has no {name} link")
    return url


def _properties(raw: Any) -> dict:
    properties = raw.get("properties") if isinstance(raw, dict) else None
    if not isinstance(properties, dict):
        raise UpstreamError(NWS_SERVICE, "response has no properties object")
    return properties


def _raw_periods(raw: Any) -> list[dict]:
    periods = _properties(raw).get("periods")
    if not isinstance(periods, list) or not all(isinstance(p, dict) for p in periods):
        raise UpstreamError(NWS_SERVICE, "forecast has no periods list")
    return periods


def _reading(value: Any) -> Reading:
    """Unwrap a QuantitativeValue ({"value": ...}) or pass a scalar through."""
    if isinstance(value, dict):
        value = value.get("value")
    return or_not_available(value)


def _parse_periods(raw: Any) -> list[ForecastPeriod]:
    return [
        ForecastPeriod(
            start_time=_start_time(p),
            temperature=_reading(p.get("temperature")),
            condition=or_not_available(p.get("shortForecast")),
            wind_speed=_reading(p.get("windSpeed") or None),
            wind_direction=or_not_available(p.get("windDirection") or None),
            detailed_forecast=p.get("detailedForecast") or "",
        )
        for p in _raw_periods(raw)
    ]


def _series_values(properties: dict, name: str) -> tuple[Reading | None, ...]:
    series = properties.get(name)
    values = series.get("values") if isinstance(series, dict) else None
    if not isinstance(values, list):
        return ()
    return tuple(v.get("value") if isinstance(v, dict) else None for v in values)


def _parse_grid(raw: Any) -> GridSeries:
    properties = _properties(raw)
    return GridSeries(
        humidity=_series_values(properties, "relativeHumidity"),
        precipitation_probability=_series_values(properties, "probabilityOfPrecipitation"),
    )


def _start_time(p: dict) -> str:
    start_time = p.get("startTime")
    return start_time if isinstance(start_time, str) else ""


def _to_forecast_record(p: dict) -> ForecastRecord:
    return ForecastRecord(
        date=_start_time(p).split("T")[0],
        temperature_high=_reading(p.get("temperature")),
        condition=or_not_available(p.get("shortForecast")),
        wind_speed=_reading(p.get("windSpeed") or None),
        wind_direction=or_not_available(p.get("windDirection") or None),
        detailed_forecast=p.get("detailedForecast") or "",
        precipitation_probability=_reading(p.get("probabilityOfPrecipitation")),
        humidity=_reading(p.get("relativeHumidity")),
    )


def _to_alert_record(feature: dict) -> AlertRecord:
    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}
    return AlertRecord(
        event=or_not_available(props.get("event")),
        severity=or_not_available(props.get("severity")),
        description=or_not_available(props.get("description")),
        instruction=or_not_available(props.get("instruction")),
        effective=or_not_available(props.get("effective")),
        expires=or_not_available(props.get("expires")),
    )
