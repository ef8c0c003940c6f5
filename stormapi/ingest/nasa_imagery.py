"""NASA Earth imagery URL builder. Makes no network calls."""

from urllib.parse import urlencode

from stormapi.config.defaults import NASA_IMAGERY_URL


class NasaImagery:
    def __init__(
        self,
        api_key: str,
        base_url: str = NASA_IMAGERY_URL,
        dim: float = 0.05,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.dim = dim

    def __repr__(self) -> str:
        return f"NasaImagery(base_url={self.base_url!r}, dim={self.dim})"

    def image_url(self, lat: str, lon: str) -> str:
        """Build the imagery URL for the browser to load directly.

        The key is embedded as the imagery service requires; an empty key is
        passed through unchanged.
        """
        query = urlencode(
            {"lat": lat, "lon": lon, "dim": self.dim, "api_key": self.api_key}
        )
        return f"{self.base_url}?{query}"
