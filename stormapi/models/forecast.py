"""weather.gov point and forecast data models."""

from dataclasses import dataclass

from stormapi.models.common import Reading


@dataclass(frozen=True)
class PointResource:
    forecast_url: str | None
    forecast_hourly_url: str | None
    forecast_grid_data_url: str | None
    forecast_zone_url: str | None

    @property
    def zone_id(self) -> str | None:
        if not self.forecast_zone_url:
            return None
        return self.forecast_zone_url.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ForecastPeriod:
    start_time: str
    temperature: Reading
    condition: Reading
    wind_speed: Reading
    wind_direction: Reading
    detailed_forecast: str


@dataclass(frozen=True)
class GridSeries:
    """Per-index grid values, aligned to the hourly periods by position only."""

    humidity: tuple[Reading | None, ...]
    precipitation_probability: tuple[Reading | None, ...]


@dataclass(frozen=True)
class MergedForecastRecord:
    start_time: str
    temperature: Reading
    condition: Reading
    wind_speed: Reading
    wind_direction: Reading
    detailed_forecast: str
    humidity: Reading
    precipitation_probability: Reading


@dataclass(frozen=True)
class ForecastRecord:
    date: str  # YYYY-MM-DD
    temperature_high: Reading
    condition: Reading
    wind_speed: Reading
    wind_direction: Reading
    detailed_forecast: str
    precipitation_probability: Reading
    humidity: Reading
