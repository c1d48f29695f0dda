"""CLI entry point for the CWA weather proxy."""

import argparse
import json
import logging

from weatherproxy.config.loader import get_config_value, load_config, load_dotenv_file
from weatherproxy.models.errors import WeatherProxyError
from weatherproxy.server import build_fetcher, build_resolver, create_app

DEFAULT_CONFIG = "config/weatherproxy.yaml"
# Fields never printed by the CLI
SECRET_FIELDS = {"upstream": {"api_key"}}

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherproxy",
        description="CWA weather forecast proxy",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", help="Bind address")
    serve_p.add_argument("--port", type=int, help="Bind port")

    # forecast / resolve
    forecast_p = sub.add_parser("forecast", help="Fetch one city forecast")
    forecast_p.add_argument("city", help="CWA location name, e.g. 臺北市")
    resolve_p = sub.add_parser("resolve", help="Resolve an IP to a city")
    resolve_p.add_argument("ip")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Read a config value")
    get_p.add_argument("key", help="Dotted key, e.g. upstream.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv_file()
    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "resolve":
        return _cmd_resolve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info(
        "Starting weather proxy on %s:%d (CWA API key %s)",
        host, port, "configured" if config.upstream.api_key else "MISSING",
    )
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_forecast(config, args) -> int:
    fetcher = build_fetcher(config)
    try:
        forecast = fetcher.fetch(args.city)
    except WeatherProxyError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False, indent=2))
        return 1
    print(json.dumps({"success": True, "data": forecast.to_dict()}, ensure_ascii=False, indent=2))
    return 0


def _cmd_resolve(config, args) -> int:
    resolver = build_resolver(config)
    print(resolver.resolve(args.ip))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2, exclude=SECRET_FIELDS))
        return 0
    elif args.config_command == "get":
        visible = json.loads(config.model_dump_json(exclude=SECRET_FIELDS))
        try:
            value = get_config_value(visible, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        if isinstance(value, (dict, list)):
            print(json.dumps(value, ensure_ascii=False, indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
