"""AirNow observation model."""

from dataclasses import dataclass

from stormapi.models.common import Reading


@dataclass(frozen=True)
class AirQualityRecord:
    date_observed: str
    aqi: Reading
    category: str
    pollutant: str
