"""CLI entry point for the storm reporting service."""

import argparse
import json
import logging

from pydantic import ValidationError

from stormapi.config.defaults import DEFAULT_CONFIG_PATH
from stormapi.config.loader import get_config_value, load_config
from stormapi.ingest.errors import UpstreamError
from stormapi.models.common import parse_coordinate
from stormapi.models.responses import (
    AirQualityResponse,
    AlertOut,
    AlertsResponse,
    DailyForecastResponse,
    ForecastOut,
    HourlyForecastResponse,
    MergedForecastOut,
    SatelliteResponse,
    TenDayForecastResponse,
)
from stormapi.services.forecast_aggregator import ForecastAggregator

FETCH_KINDS = ("hourly", "daily", "10days", "alerts", "satellite", "airquality")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stormapi",
        description="Storm reporting API: weather, alerts, imagery and air quality",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Config YAML path"
    )
    parser.add_argument("--log-level", default=None, help="Override log level")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config (secrets masked)")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. upstream.timeout_seconds")

    # fetch
    fetch_p = sub.add_parser("fetch", help="Fetch one endpoint's data and print it")
    fetch_p.add_argument("kind", choices=FETCH_KINDS)
    fetch_p.add_argument("--lat", type=parse_coordinate, required=True)
    fetch_p.add_argument("--lon", type=parse_coordinate, required=True)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=(args.log_level or config.server.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "fetch":
        return _cmd_fetch(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from stormapi.app import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get KEY")
        return 1


def _cmd_fetch(config, args) -> int:
    aggregator = ForecastAggregator.from_config(config)
    try:
        body = _fetch_body(aggregator, args.kind, args.lat, args.lon)
    except (UpstreamError, ValidationError) as e:
        print(json.dumps({"error": str(e)}))
        return 1
    if body is None:
        print(json.dumps({"error": "No air quality data found for the given location."}))
        return 1
    print(body.model_dump_json(by_alias=True, indent=2))
    return 0


def _fetch_body(aggregator: ForecastAggregator, kind: str, lat: str, lon: str):
    if kind == "satellite":
        return SatelliteResponse(image_url=aggregator.satellite_image_url(lat, lon))
    if kind == "airquality":
        record = aggregator.fetch_air_quality(lat, lon)
        return AirQualityResponse.from_record(record) if record else None

    point = aggregator.resolve_point(lat, lon)
    if kind == "hourly":
        return HourlyForecastResponse(
            hourly_forecast=[MergedForecastOut.from_record(r) for r in aggregator.fetch_hourly(point)]
        )
    if kind == "daily":
        return DailyForecastResponse(
            daily_forecast=[ForecastOut.from_record(r) for r in aggregator.fetch_daily(point)]
        )
    if kind == "10days":
        return TenDayForecastResponse(
            next_10_days_forecast=[ForecastOut.from_record(r) for r in aggregator.fetch_ten_day(point)]
        )
    return AlertsResponse(
        storm_alerts=[AlertOut.from_record(a) for a in aggregator.fetch_alerts(point)]
    )
