"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, SecretStr

from stormapi.config.defaults import (
    AIRNOW_BASE_URL,
    DEFAULT_USER_AGENT,
    NASA_IMAGERY_URL,
    NWS_BASE_URL,
)


class UpstreamConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather_base_url: str = NWS_BASE_URL
    alerts_base_url: str = NWS_BASE_URL
    nasa_imagery_url: str = NASA_IMAGERY_URL
    airnow_base_url: str = AIRNOW_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    airnow_distance_miles: int = Field(default=25, ge=1)
    satellite_dim: float = Field(default=0.05, gt=0.0)
    ten_day_limit: int = Field(default=10, ge=1)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]
    static_dir: str | None = None
    log_level: str = "INFO"


class SecretsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    nasa_api_key: SecretStr = SecretStr("")
    airnow_api_key: SecretStr = SecretStr("")


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    upstream: UpstreamConfig = UpstreamConfig()
    server: ServerConfig = ServerConfig()
    secrets: SecretsConfig = SecretsConfig()
