"""AirNow current-observation client (credentialed)."""

import logging

from stormapi.config.defaults import AIRNOW_BASE_URL
from stormapi.ingest.errors import UpstreamError
from stormapi.ingest.http import fetch_json

logger = logging.getLogger(__name__)

SERVICE_NAME = "AirNow"


class AirNowClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = AIRNOW_BASE_URL,
        distance_miles: int = 25,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.distance_miles = distance_miles
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"AirNowClient(base_url={self.base_url!r})"

    def get_current_observations(self, lat: str, lon: str) -> list[dict]:
        """Current observations near a coordinate, one entry per pollutant."""
        url = f"{self.base_url}/aq/observation/latLong/current/"
        params = {
            "format": "application/json",
            "latitude": lat,
            "longitude": lon,
            "distance": self.distance_miles,
            "API_KEY": self.api_key,
        }
        data = fetch_json(
            SERVICE_NAME, url, params=params, timeout=self.timeout, log_url=False
        )
        if not isinstance(data, list):
            # AirNow reports bad keys and bad parameters as a 200 with an object body.
            logger.error("AirNow returned %s instead of a list", type(data).__name__)
            raise UpstreamError(SERVICE_NAME, "unexpected response shape")
        return data
