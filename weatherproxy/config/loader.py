"""YAML config loader with environment overlay and dotted-key reads."""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from weatherproxy.config.schema import ProxyConfig

logger = logging.getLogger(__name__)

# Environment variable -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "CWA_API_KEY": ("upstream", "api_key"),
    "PORT": ("server", "port"),
    "GEOIP_DATABASE": ("geo", "database_path"),
}


def load_dotenv_file(path: str | Path = ".env") -> bool:
    """Load a .env file from the working directory if present."""
    path = Path(path)
    if not path.is_file():
        return False
    return load_dotenv(dotenv_path=path, override=False)


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ProxyConfig:
    """Load and validate config from an optional YAML file.

    Environment variables listed in ENV_OVERRIDES win over the file. Pass
    ``env`` to use a mapping instead of ``os.environ``.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.warning("Config file %s not found, using defaults", path)

    source = env if env is not None else os.environ
    for var, (section, field) in ENV_OVERRIDES.items():
        value = source.get(var)
        if value:
            # An empty YAML section ("upstream:") loads as None
            if raw.get(section) is None:
                raw[section] = {}
            raw[section][field] = value

    return ProxyConfig(**raw)


def get_config_value(config: ProxyConfig | dict, dotted_key: str) -> Any:
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
