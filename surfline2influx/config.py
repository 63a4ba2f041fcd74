# ABOUTME: Application configuration from environment plus the YAML spot/InfluxDB document
# ABOUTME: The InfluxDB token lives in its own secrets file and is never read from the YAML

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from surfline2influx.errors import ConfigError

load_dotenv()

# Unparseable numeric settings, reported by Config.validate() instead of failing at import
_invalid_env: list[str] = []


def _env_number(name: str, default: str, cast: type):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        _invalid_env.append(f"{name}={raw!r} is not a number")
        return cast(default)


class Config:
    """Application configuration"""

    # Paths to the config document and the token file
    CONFIG_PATH = os.getenv("CONFIG_PATH", "config.yaml")
    SECRETS_PATH = os.getenv("SECRETS_PATH", "secrets.txt")

    # Forecast window: 5 days ahead at 1 hour resolution
    FORECAST_DAYS = _env_number("FORECAST_DAYS", "5", int)
    FORECAST_INTERVAL_HOURS = _env_number("FORECAST_INTERVAL_HOURS", "1", int)

    # Retry policy per spot
    MAX_RETRIES = _env_number("MAX_RETRIES", "3", int)
    RETRY_DELAY_SECONDS = _env_number("RETRY_DELAY_SECONDS", "5", float)

    # Surfline API
    SURFLINE_BASE_URL = os.getenv("SURFLINE_BASE_URL", "https://services.surfline.com/kbyg/spots/forecasts")
    REQUEST_TIMEOUT_SECONDS = _env_number("REQUEST_TIMEOUT_SECONDS", "10", float)

    # Wind forecast flags passed straight through to Surfline
    WIND_CORRECTED = os.getenv("WIND_CORRECTED", "true").lower() == "true"
    WIND_CACHE_ENABLED = os.getenv("WIND_CACHE_ENABLED", "true").lower() == "true"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Debug mode
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def validate(cls) -> None:
        """
        Check the environment driven settings.

        Raises:
            ConfigError: listing every value that is not a number or out of range
        """
        problems = list(_invalid_env)
        if cls.FORECAST_DAYS < 1:
            problems.append(f"FORECAST_DAYS must be at least 1, got {cls.FORECAST_DAYS}")
        if cls.FORECAST_INTERVAL_HOURS < 1:
            problems.append(f"FORECAST_INTERVAL_HOURS must be at least 1, got {cls.FORECAST_INTERVAL_HOURS}")
        if cls.MAX_RETRIES < 1:
            problems.append(f"MAX_RETRIES must be at least 1, got {cls.MAX_RETRIES}")
        if cls.RETRY_DELAY_SECONDS < 0:
            problems.append(f"RETRY_DELAY_SECONDS must not be negative, got {cls.RETRY_DELAY_SECONDS}")
        if cls.REQUEST_TIMEOUT_SECONDS <= 0:
            problems.append(f"REQUEST_TIMEOUT_SECONDS must be positive, got {cls.REQUEST_TIMEOUT_SECONDS}")
        if problems:
            raise ConfigError(f"Invalid environment settings: {'; '.join(problems)}")


@dataclass(frozen=True)
class InfluxSettings:
    """Connection details for the InfluxDB bucket"""
    url: str
    org: str
    bucket: str


@dataclass(frozen=True)
class Settings:
    """Parsed contents of the YAML config document"""
    influxdb: InfluxSettings
    spots: dict[str, str] = field(default_factory=dict)  # label -> Surfline spot id


def load_settings(path: str | Path) -> Settings:
    """
    Read and validate the YAML config document.

    Args:
        path: Location of config.yaml

    Returns:
        Settings with InfluxDB connection details and the spots to poll

    Raises:
        ConfigError: if the file cannot be read or is missing required keys
    """
    try:
        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    influx = raw.get("influxdb")
    if not isinstance(influx, dict):
        raise ConfigError("Config is missing the 'influxdb' section")

    missing = [key for key in ("url", "org", "bucket") if not influx.get(key)]
    if missing:
        raise ConfigError(f"Config 'influxdb' section is missing: {', '.join(missing)}")

    spots = raw.get("spots") or {}
    if not isinstance(spots, dict):
        raise ConfigError("Config 'spots' must map labels to spot ids")

    blank = [str(label) for label, spot_id in spots.items() if spot_id is None or not str(spot_id).strip()]
    if blank:
        raise ConfigError(f"Config 'spots' entries have no spot id: {', '.join(blank)}")

    return Settings(
        influxdb=InfluxSettings(
            url=str(influx["url"]),
            org=str(influx["org"]),
            bucket=str(influx["bucket"]),
        ),
        spots={str(label): str(spot_id).strip() for label, spot_id in spots.items()},
    )


def load_token(path: str | Path) -> str:
    """
    Read the InfluxDB write token from the secrets file.

    Raises:
        ConfigError: if the file is unreadable or empty
    """
    try:
        token = Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read secrets file {path}: {e}") from e

    if not token:
        raise ConfigError(f"Secrets file {path} is empty")
    return token
