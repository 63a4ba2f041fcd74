# ABOUTME: Surfline KBYG API client for wind, wave, tide, and rating forecasts
# ABOUTME: Decodes JSON into forecast models and raises ForecastError on any failure

from typing import Any, Callable, Protocol

import requests

from surfline2influx.config import Config
from surfline2influx.debug import debug_log
from surfline2influx.errors import ForecastError
from surfline2influx.forecast.models import (
    RATING,
    TIDE,
    WAVE,
    WIND,
    Location,
    RatingForecast,
    RatingSample,
    SurfRange,
    SwellComponent,
    TideForecast,
    TideLocation,
    TideSample,
    WaveForecast,
    WaveSample,
    WindForecast,
    WindSample,
)


class ForecastClient(Protocol):
    """The four forecast lookups the pipeline depends on"""

    def get_wind_forecast(
        self, spot_id: str, days: int, interval_hours: int, corrected: bool, cache_enabled: bool
    ) -> WindForecast: ...

    def get_wave_forecast(self, spot_id: str, days: int, interval_hours: int) -> WaveForecast: ...

    def get_tide_forecast(self, spot_id: str, days: int, interval_hours: int) -> TideForecast: ...

    def get_rating_forecast(self, spot_id: str, days: int, interval_hours: int) -> RatingForecast: ...


class SurflineClient:
    """
    Client for the Surfline "Know Before You Go" spot forecast endpoints.

    Safe to share between threads: every call is an independent request.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or Config.SURFLINE_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT_SECONDS

    def get_wind_forecast(
        self,
        spot_id: str,
        days: int,
        interval_hours: int,
        corrected: bool = True,
        cache_enabled: bool = True,
    ) -> WindForecast:
        params = {
            "spotId": spot_id,
            "days": days,
            "intervalHours": interval_hours,
            "corrected": str(corrected).lower(),
            "cacheEnabled": str(cache_enabled).lower(),
        }
        data = self._get("wind", params, kind=WIND, spot_id=spot_id)
        return self._decode(WIND, spot_id, data, self._parse_wind)

    def get_wave_forecast(self, spot_id: str, days: int, interval_hours: int) -> WaveForecast:
        params = {"spotId": spot_id, "days": days, "intervalHours": interval_hours}
        data = self._get("wave", params, kind=WAVE, spot_id=spot_id)
        return self._decode(WAVE, spot_id, data, self._parse_wave)

    def get_tide_forecast(self, spot_id: str, days: int, interval_hours: int) -> TideForecast:
        # Tide extremes come at their own times, intervalHours is accepted but ignored upstream
        params = {"spotId": spot_id, "days": days, "intervalHours": interval_hours}
        data = self._get("tides", params, kind=TIDE, spot_id=spot_id)
        return self._decode(TIDE, spot_id, data, self._parse_tide)

    def get_rating_forecast(self, spot_id: str, days: int, interval_hours: int) -> RatingForecast:
        params = {"spotId": spot_id, "days": days, "intervalHours": interval_hours}
        data = self._get("rating", params, kind=RATING, spot_id=spot_id)
        return self._decode(RATING, spot_id, data, self._parse_rating)

    # ==================== HTTP ====================

    def _get(self, path: str, params: dict[str, Any], kind: str, spot_id: str) -> dict:
        url = f"{self.base_url}/{path}"
        debug_log(f"GET {url} {params}", "SURFLINE")

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ForecastError(kind, spot_id, f"request failed: {e}") from e

        if response.status_code != 200:
            raise ForecastError(kind, spot_id, f"HTTP {response.status_code} - {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise ForecastError(kind, spot_id, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ForecastError(kind, spot_id, f"unexpected response type {type(data).__name__}")
        return data

    @staticmethod
    def _decode(kind: str, spot_id: str, data: dict, parser: Callable[[dict], Any]) -> Any:
        try:
            return parser(data)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ForecastError(kind, spot_id, f"malformed response: {e!r}") from e

    # ==================== Parsing ====================

    @staticmethod
    def _parse_wind(data: dict) -> WindForecast:
        location = data["associated"]["location"]
        samples = [
            WindSample(
                timestamp=int(item["timestamp"]),
                utc_offset=item.get("utcOffset", 0),
                speed=item["speed"],
                direction=item["direction"],
                direction_type=item.get("directionType", ""),
                gust=item["gust"],
                optimal_score=item.get("optimalScore", 0),
            )
            for item in data["data"]["wind"]
        ]
        return WindForecast(
            location=Location(lat=float(location["lat"]), lon=float(location["lon"])),
            samples=samples,
        )

    @staticmethod
    def _parse_wave(data: dict) -> WaveForecast:
        samples = []
        for item in data["data"]["wave"]:
            surf = item["surf"]
            raw = surf.get("raw", {})
            swells = [
                SwellComponent(
                    height=swell["height"],
                    period=swell["period"],
                    impact=swell.get("impact", 0),
                    power=swell.get("power", 0),
                    direction=swell["direction"],
                    direction_min=swell.get("directionMin", 0),
                    optimal_score=swell.get("optimalScore", 0),
                )
                for swell in item.get("swells", [])
            ]
            samples.append(WaveSample(
                timestamp=int(item["timestamp"]),
                utc_offset=item.get("utcOffset", 0),
                probability=item.get("probability"),
                surf=SurfRange(
                    min=surf["min"],
                    max=surf["max"],
                    optimal_score=surf.get("optimalScore", 0),
                    human_relation=surf.get("humanRelation", ""),
                    raw_min=raw.get("min", surf["min"]),
                    raw_max=raw.get("max", surf["max"]),
                ),
                power=item.get("power", 0),
                swells=swells,
            ))
        return WaveForecast(samples=samples)

    @staticmethod
    def _parse_tide(data: dict) -> TideForecast:
        station = data["associated"]["tideLocation"]
        samples = [
            TideSample(
                timestamp=int(item["timestamp"]),
                utc_offset=item.get("utcOffset", 0),
                type=item["type"],
                height=item["height"],
            )
            for item in data["data"]["tides"]
        ]
        return TideForecast(
            location=TideLocation(
                lat=float(station["lat"]),
                lon=float(station["lon"]),
                name=station.get("name", ""),
            ),
            samples=samples,
        )

    @staticmethod
    def _parse_rating(data: dict) -> RatingForecast:
        samples = [
            RatingSample(
                timestamp=int(item["timestamp"]),
                utc_offset=item.get("utcOffset", 0),
                key=item["rating"]["key"],
                value=item["rating"]["value"],
            )
            for item in data["data"]["rating"]
        ]
        return RatingForecast(samples=samples)
