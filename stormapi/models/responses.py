"""Wire schemas for the HTTP API (camelCase keys, as the browser client expects)."""

from dataclasses import asdict
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stormapi.models.common import Reading


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_record(cls, record: Any):
        return cls(**asdict(record))


class MergedForecastOut(CamelModel):
    start_time: str
    temperature: Reading
    condition: Reading
    wind_speed: Reading
    wind_direction: Reading
    detailed_forecast: str
    humidity: Reading
    precipitation_probability: Reading


class ForecastOut(CamelModel):
    date: str
    temperature_high: Reading
    condition: Reading
    wind_speed: Reading
    wind_direction: Reading
    detailed_forecast: str
    precipitation_probability: Reading
    humidity: Reading


class AlertOut(CamelModel):
    event: str
    severity: str
    description: str
    instruction: str
    effective: str
    expires: str


class HourlyForecastResponse(CamelModel):
    hourly_forecast: list[MergedForecastOut]


class DailyForecastResponse(CamelModel):
    daily_forecast: list[ForecastOut]


class TenDayForecastResponse(CamelModel):
    next_10_days_forecast: list[ForecastOut] = Field(alias="next10DaysForecast")


class AlertsResponse(CamelModel):
    storm_alerts: list[AlertOut]


class SatelliteResponse(CamelModel):
    image_url: str


class AirQualityResponse(CamelModel):
    date_observed: str = Field(alias="DateObserved")
    aqi: Reading = Field(alias="AQI")
    category: str = Field(alias="Category")
    pollutant: str = Field(alias="Pollutant")


class ErrorResponse(BaseModel):
    error: str
