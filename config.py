"""
Service configuration

Settings come from the process environment, after loading a .env file
when one exists. MONGOURI is the only required variable.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when the environment cannot produce usable settings."""


@dataclass(frozen=True)
class Settings:
    mongo_uri: str
    database_name: str = "car_dealer"
    collection_name: str = "cars"
    request_timeout: float = 10.0
    host: str = "0.0.0.0"
    port: int = 6000
    log_level: str = "INFO"
    log_format: str = "console"


def _number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        load_dotenv()
        environ = os.environ

    mongo_uri = (environ.get("MONGOURI") or "").strip()
    if not mongo_uri:
        raise ConfigurationError("MONGOURI is not set")

    timeout = _number(environ, "REQUEST_TIMEOUT", 10.0, float)
    if timeout <= 0:
        raise ConfigurationError("REQUEST_TIMEOUT must be positive")

    log_format = environ.get("LOG_FORMAT", "console").lower()
    if log_format not in ("console", "json"):
        raise ConfigurationError(f"LOG_FORMAT must be 'console' or 'json', got {log_format!r}")

    return Settings(
        mongo_uri=mongo_uri,
        database_name=environ.get("DATABASE_NAME") or "car_dealer",
        collection_name=environ.get("COLLECTION_NAME") or "cars",
        request_timeout=timeout,
        host=environ.get("HOST") or "0.0.0.0",
        port=_number(environ, "PORT", 6000, int),
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
        log_format=log_format,
    )
