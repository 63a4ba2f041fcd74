# ABOUTME: Turns decoded Surfline forecast records into InfluxDB-ready time-series points
# ABOUTME: Pure functions of (record, batch metadata, spot, now) so they test without a clock

import math
from datetime import datetime, timezone

from surfline2influx.forecast.models import (
    Location,
    RatingSample,
    TideForecast,
    TideSample,
    WaveSample,
    WindForecast,
    WindSample,
)
from surfline2influx.points.models import (
    RatingPoint,
    SwellPoint,
    TidePoint,
    TimeSeriesPoint,
    WavePoint,
    WindPoint,
)
from surfline2influx.spots import Spot


def record_time(timestamp: int) -> datetime:
    """Epoch seconds -> aware UTC datetime"""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def forecast_age_hours(timestamp: int, now: datetime) -> int:
    """
    Whole hours between a record's timestamp and now.

    Floors toward negative infinity, so a record two and a half hours in the
    future has an age of -3. Future records are normal for a forecast.

    Args:
        timestamp: Record time in epoch seconds (UTC)
        now: Publication time, must be timezone-aware

    Returns:
        floor((now - timestamp) / 1 hour)
    """
    elapsed = now.timestamp() - timestamp
    return math.floor(elapsed / 3600)


def format_location(location: Location) -> str:
    return f"{location.lat:f},{location.lon:f}"


class PointBuilder:
    """Builds dual-tagged points for each forecast kind"""

    def wind_points(self, forecast: WindForecast, sample: WindSample, spot: Spot, now: datetime) -> list[TimeSeriesPoint]:
        point = WindPoint(
            spot_id=spot.spot_id,
            spot_name=spot.name,
            age_h=forecast_age_hours(sample.timestamp, now),
            timestamp=record_time(sample.timestamp),
            location=format_location(forecast.location),
            speed=sample.speed,
            direction=sample.direction,
            direction_type=sample.direction_type,
            gust=sample.gust,
            optimal_score=sample.optimal_score,
            utc_offset=sample.utc_offset,
        )
        return point.variants()

    def wave_points(self, sample: WaveSample, spot: Spot, now: datetime) -> list[TimeSeriesPoint]:
        """
        Wave point plus one swell point per swell component.

        Swells carry the parent wave's timestamp and tags, so a sample with N
        swells yields 2 * (N + 1) points.
        """
        age_h = forecast_age_hours(sample.timestamp, now)
        timestamp = record_time(sample.timestamp)

        wave = WavePoint(
            spot_id=spot.spot_id,
            spot_name=spot.name,
            age_h=age_h,
            timestamp=timestamp,
            probability=sample.probability,
            min_surf=sample.surf.min,
            max_surf=sample.surf.max,
            optimal_score=sample.surf.optimal_score,
            human_relation=sample.surf.human_relation,
            raw_min_surf=sample.surf.raw_min,
            raw_max_surf=sample.surf.raw_max,
            power=sample.power,
            utc_offset=sample.utc_offset,
        )
        points = wave.variants()

        for swell in sample.swells:
            swell_point = SwellPoint(
                spot_id=spot.spot_id,
                spot_name=spot.name,
                age_h=age_h,
                timestamp=timestamp,
                height=swell.height,
                period=swell.period,
                impact=swell.impact,
                power=swell.power,
                direction=swell.direction,
                direction_min=swell.direction_min,
                optimal_score=swell.optimal_score,
            )
            points.extend(swell_point.variants())

        return points

    def tide_points(self, forecast: TideForecast, sample: TideSample, spot: Spot, now: datetime) -> list[TimeSeriesPoint]:
        point = TidePoint(
            spot_id=spot.spot_id,
            spot_name=spot.name,
            age_h=forecast_age_hours(sample.timestamp, now),
            timestamp=record_time(sample.timestamp),
            location=format_location(forecast.location),
            station_name=forecast.location.name,
            type=sample.type,
            height=sample.height,
            utc_offset=sample.utc_offset,
        )
        return point.variants()

    def rating_points(self, sample: RatingSample, spot: Spot, now: datetime) -> list[TimeSeriesPoint]:
        point = RatingPoint(
            spot_id=spot.spot_id,
            spot_name=spot.name,
            age_h=forecast_age_hours(sample.timestamp, now),
            timestamp=record_time(sample.timestamp),
            rating_key=sample.key,
            rating_value=sample.value,
            utc_offset=sample.utc_offset,
        )
        return point.variants()
