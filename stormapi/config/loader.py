"""YAML config loader with environment overrides and dotted-key lookup."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from stormapi.config.defaults import DEFAULT_CONFIG_PATH, ENV_OVERRIDES
from stormapi.config.schema import AppConfig

logger = logging.getLogger(__name__)


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
    dotenv: bool = True,
) -> AppConfig:
    """Load and validate config from an optional YAML file plus the environment.

    A missing or empty YAML file yields the defaults. Variables listed in
    ENV_OVERRIDES win over the file. When ``environ`` is not given, a ``.env``
    file in the working directory is read into ``os.environ`` first.
    """
    raw: dict[str, Any] = {}
    path = Path(path) if path is not None else Path(DEFAULT_CONFIG_PATH)
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.debug("Config file %s not found, using defaults", path)

    if environ is None:
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        environ = dict(os.environ)

    for env_name, dotted_key in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            _set_raw(raw, dotted_key, value)

    return AppConfig(**raw)


def _set_raw(raw: dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = dotted_key.split(".")
    target = raw
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'upstream.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
