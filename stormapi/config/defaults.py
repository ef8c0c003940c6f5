"""Default upstream endpoints and environment variable bindings."""

NWS_BASE_URL = "https://api.weather.gov"
NASA_IMAGERY_URL = "https://api.nasa.gov/planetary/earth/imagery"
AIRNOW_BASE_URL = "https://www.airnowapi.org"
DEFAULT_USER_AGENT = "stormapi/0.1.0 (storm reporting service)"

DEFAULT_CONFIG_PATH = "config/stormapi.yaml"

# Environment variable -> dotted config key. Applied on top of the YAML file.
ENV_OVERRIDES: dict[str, str] = {
    "NASA_API_KEY": "secrets.nasa_api_key",
    "AIRNOW_API_KEY": "secrets.airnow_api_key",
    "PORT": "server.port",
    "STATIC_DIR": "server.static_dir",
    "LOG_LEVEL": "server.log_level",
}
