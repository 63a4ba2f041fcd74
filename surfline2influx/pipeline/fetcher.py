# ABOUTME: Fetches all four forecast kinds for one spot and writes the resulting points
# ABOUTME: Stops at the first provider failure, keeps writing past individual point failures

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable

from surfline2influx.debug import debug_log
from surfline2influx.forecast.client import ForecastClient
from surfline2influx.forecast.models import RATING, TIDE, WAVE, WIND
from surfline2influx.pipeline.outcomes import FetchOutcome, WriteFailure
from surfline2influx.points.builder import PointBuilder
from surfline2influx.points.models import AGE_TAG, TimeSeriesPoint
from surfline2influx.spots import Spot
from surfline2influx.storage.sink import TimeSeriesSink

log = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SpotFetcher:
    """
    One fetch-and-publish attempt for a single spot.

    No retries happen here; RetryingFetchOrchestrator decides whether to
    call again.
    """

    def __init__(
        self,
        client: ForecastClient,
        sink: TimeSeriesSink,
        builder: PointBuilder | None = None,
        clock: Callable[[], datetime] = utc_now,
        wind_corrected: bool = True,
        wind_cache_enabled: bool = True,
    ):
        self.client = client
        self.sink = sink
        self.builder = builder or PointBuilder()
        self.clock = clock
        self.wind_corrected = wind_corrected
        self.wind_cache_enabled = wind_cache_enabled

    def fetch_and_publish(self, spot: Spot, days: int, interval_hours: int) -> FetchOutcome:
        """
        Fetch wind, wave, tide, and rating forecasts and write every point.

        Args:
            spot: Spot to fetch
            days: Lookahead window in days
            interval_hours: Sampling interval in hours

        Returns:
            FetchOutcome with the failing kind and cause if any forecast call
            failed, plus every point write that failed along the way
        """
        steps = (
            (WIND, self._publish_wind),
            (WAVE, self._publish_wave),
            (TIDE, self._publish_tide),
            (RATING, self._publish_rating),
        )

        written = 0
        failures: list[WriteFailure] = []

        for kind, publish in steps:
            try:
                points = publish(spot, days, interval_hours)
            except Exception as e:
                log.error(f"Error fetching {kind} forecast for {spot}: {e}")
                return FetchOutcome(
                    spot=spot,
                    error=e,
                    failed_kind=kind,
                    points_written=written,
                    write_failures=tuple(failures),
                )

            ok, failed = self._write_all(spot, kind, points)
            written += ok
            failures.extend(failed)
            debug_log(f"{spot} {kind}: {ok} written, {len(failed)} failed", "FETCHER")

        return FetchOutcome(spot=spot, points_written=written, write_failures=tuple(failures))

    # ==================== Per-kind fetch + build ====================

    def _publish_wind(self, spot: Spot, days: int, interval_hours: int) -> list[TimeSeriesPoint]:
        forecast = self.client.get_wind_forecast(
            spot.spot_id, days, interval_hours, self.wind_corrected, self.wind_cache_enabled
        )
        now = self.clock()
        points = []
        for sample in forecast.samples:
            points.extend(self.builder.wind_points(forecast, sample, spot, now))
        return points

    def _publish_wave(self, spot: Spot, days: int, interval_hours: int) -> list[TimeSeriesPoint]:
        forecast = self.client.get_wave_forecast(spot.spot_id, days, interval_hours)
        now = self.clock()
        points = []
        for sample in forecast.samples:
            points.extend(self.builder.wave_points(sample, spot, now))
        return points

    def _publish_tide(self, spot: Spot, days: int, interval_hours: int) -> list[TimeSeriesPoint]:
        forecast = self.client.get_tide_forecast(spot.spot_id, days, interval_hours)
        now = self.clock()
        points = []
        for sample in forecast.samples:
            points.extend(self.builder.tide_points(forecast, sample, spot, now))
        return points

    def _publish_rating(self, spot: Spot, days: int, interval_hours: int) -> list[TimeSeriesPoint]:
        forecast = self.client.get_rating_forecast(spot.spot_id, days, interval_hours)
        now = self.clock()
        points = []
        for sample in forecast.samples:
            points.extend(self.builder.rating_points(sample, spot, now))
        return points

    # ==================== Writes ====================

    def _write_all(
        self, spot: Spot, kind: str, points: Iterable[TimeSeriesPoint]
    ) -> tuple[int, list[WriteFailure]]:
        written = 0
        failures: list[WriteFailure] = []
        for point in points:
            try:
                self.sink.write_point(point)
                written += 1
            except Exception as e:
                with_age = "with" if AGE_TAG in point.tags else "without"
                log.error(f"Error writing {point.measurement} point {with_age} age_h tag for {spot} ({kind}): {e}")
                failures.append(WriteFailure(
                    spot_id=spot.spot_id,
                    kind=kind,
                    measurement=point.measurement,
                    timestamp=point.timestamp,
                    error=e,
                ))
        return written, failures
