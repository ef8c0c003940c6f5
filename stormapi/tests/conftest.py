"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from stormapi.config.schema import AppConfig
from stormapi.services.forecast_aggregator import ForecastAggregator

NWS_BASE = "https://test-nws.example.com"
AIRNOW_BASE = "https://test-airnow.example.com"
NASA_IMAGERY = "https://test-nasa.example.com/planetary/earth/imagery"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir: Path):
    def _load(name: str):
        with open(fixtures_dir / name) as f:
            return json.load(f)

    return _load


@pytest.fixture
def app_config() -> AppConfig:
    """Config pointed at test hosts, with known fake keys."""
    return AppConfig(
        upstream={
            "weather_base_url": NWS_BASE,
            "alerts_base_url": NWS_BASE,
            "airnow_base_url": AIRNOW_BASE,
            "nasa_imagery_url": NASA_IMAGERY,
            "timeout_seconds": 2.0,
        },
        secrets={
            "nasa_api_key": "test-nasa-key",
            "airnow_api_key": "test-airnow-key",
        },
    )


@pytest.fixture
def aggregator(app_config: AppConfig) -> ForecastAggregator:
    return ForecastAggregator.from_config(app_config)


@pytest.fixture
def hourly_payload():
    """Build an hourly forecast body with ``count`` periods."""

    def _build(count: int) -> dict:
        periods = [
            {
                "number": i + 1,
                "startTime": f"2026-10-17T{i % 24:02d}:00:00-04:00",
                "endTime": f"2026-10-17T{(i + 1) % 24:02d}:00:00-04:00",
                "isDaytime": 6 <= i % 24 < 18,
                "temperature": 50 + i,
                "temperatureUnit": "F",
                "windSpeed": f"{5 + i} mph",
                "windDirection": "SW",
                "shortForecast": "Mostly Clear",
                "detailedForecast": "",
            }
            for i in range(count)
        ]
        return {"properties": {"periods": periods}}

    return _build


@pytest.fixture
def grid_payload():
    """Build a grid-data body with separate humidity/precipitation lengths."""

    def _build(humidity_count: int, precip_count: int) -> dict:
        return {
            "properties": {
                "relativeHumidity": {
                    "uom": "wmoUnit:percent",
                    "values": [
                        {"validTime": f"2026-10-17T{i % 24:02d}:00:00+00:00/PT1H", "value": 60 + i}
                        for i in range(humidity_count)
                    ],
                },
                "probabilityOfPrecipitation": {
                    "uom": "wmoUnit:percent",
                    "values": [
                        {"validTime": f"2026-10-17T{i % 24:02d}:00:00+00:00/PT1H", "value": i * 10}
                        for i in range(precip_count)
                    ],
                },
            }
        }

    return _build


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "upstream": {"timeout_seconds": 5.0},
        "server": {"port": 8080},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
