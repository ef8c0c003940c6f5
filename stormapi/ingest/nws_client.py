"""weather.gov (NWS) API client: points, linked forecast resources and alerts."""

import logging

from stormapi.config.defaults import DEFAULT_USER_AGENT, NWS_BASE_URL
from stormapi.ingest.http import fetch_json

logger = logging.getLogger(__name__)

SERVICE_NAME = "weather.gov"


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        alerts_base_url: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.alerts_base_url = (alerts_base_url or base_url).rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        # NWS rejects requests without an identifying User-Agent.
        return {"User-Agent": self.user_agent, "Accept": "application/geo+json"}

    def get_point(self, lat: str, lon: str) -> dict:
        """Fetch the point metadata for a coordinate pair.

        weather.gov answers over-precise coordinates with a 301 to the
        rounded point; redirects are followed.
        """
        url = f"{self.base_url}/points/{lat},{lon}"
        return fetch_json(
            SERVICE_NAME, url, headers=self._headers(), timeout=self.timeout
        )

    def get_linked(self, url: str) -> dict:
        """Fetch a resource whose absolute URL came from a point response."""
        return fetch_json(
            SERVICE_NAME, url, headers=self._headers(), timeout=self.timeout
        )

    def get_active_alerts(self, zone_id: str) -> dict:
        url = f"{self.alerts_base_url}/alerts/active"
        logger.debug("Fetching active alerts for zone %s", zone_id)
        return fetch_json(
            SERVICE_NAME,
            url,
            params={"zone": zone_id},
            headers=self._headers(),
            timeout=self.timeout,
        )
