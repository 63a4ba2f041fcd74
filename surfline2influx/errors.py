# ABOUTME: Exception types raised across the fetch-and-publish pipeline
# ABOUTME: Config errors are fatal at startup, forecast errors are retried per spot


class Surfline2InfluxError(Exception):
    """Base class for all application errors"""


class ConfigError(Surfline2InfluxError):
    """Config document or secrets file is unreadable or malformed"""


class ForecastError(Surfline2InfluxError):
    """A Surfline forecast request failed for one spot and forecast kind"""

    def __init__(self, kind: str, spot_id: str, message: str):
        self.kind = kind
        self.spot_id = spot_id
        super().__init__(f"error fetching {kind} forecast for {spot_id}: {message}")
