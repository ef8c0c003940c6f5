"""Tests for the NASA imagery URL builder."""

from urllib.parse import parse_qs, urlsplit

import respx

from stormapi.ingest.nasa_imagery import NasaImagery

BASE = "https://test-nasa.example.com/planetary/earth/imagery"


class TestImageUrl:
    def test_contains_coordinates_and_dim(self):
        url = NasaImagery(api_key="k", base_url=BASE).image_url("40.7128", "-74.006")
        parts = urlsplit(url)
        query = parse_qs(parts.query)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == BASE
        assert query["lat"] == ["40.7128"]
        assert query["lon"] == ["-74.006"]
        assert query["dim"] == ["0.05"]
        assert query["api_key"] == ["k"]

    def test_empty_key_passed_through(self):
        url = NasaImagery(api_key="", base_url=BASE).image_url("1", "2")
        assert url.endswith("api_key=")

    def test_custom_dim(self):
        url = NasaImagery(api_key="k", base_url=BASE, dim=0.1).image_url("1", "2")
        assert "dim=0.1" in url

    def test_no_network_call(self):
        with respx.mock() as router:
            NasaImagery(api_key="k", base_url=BASE).image_url("40.7128", "-74.006")
        assert len(router.calls) == 0
