# ABOUTME: Typed time-series points per measurement plus the generic point the sink writes
# ABOUTME: Each typed point expands into two TimeSeriesPoints: with and without the age_h tag

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Union

FieldValue = Union[int, float, str, bool]

WIND_MEASUREMENT = "windForecast"
WAVE_MEASUREMENT = "waveForecast"
SWELL_MEASUREMENT = "swellForecast"
TIDE_MEASUREMENT = "tideForecast"
RATING_MEASUREMENT = "spotForecastRating"

AGE_TAG = "age_h"


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Generic point handed to a TimeSeriesSink"""
    measurement: str
    tags: dict[str, str]
    fields: dict[str, FieldValue]
    timestamp: datetime


@dataclass(frozen=True)
class ForecastPoint:
    """
    Tags and timestamp shared by every measurement.

    Subclasses add their own tags and fields; `variants()` produces the
    age-bearing and age-less TimeSeriesPoints written for each record.
    """
    MEASUREMENT: ClassVar[str] = ""

    spot_id: str
    spot_name: str
    age_h: int
    timestamp: datetime

    def extra_tags(self) -> dict[str, str]:
        return {}

    def fields(self) -> dict[str, FieldValue]:
        raise NotImplementedError

    def tags(self, with_age: bool) -> dict[str, str]:
        tags = dict(self.extra_tags())
        tags["spotId"] = self.spot_id
        tags["spotName"] = self.spot_name
        if with_age:
            tags[AGE_TAG] = str(self.age_h)
        return tags

    def to_point(self, with_age: bool) -> TimeSeriesPoint:
        return TimeSeriesPoint(
            measurement=self.MEASUREMENT,
            tags=self.tags(with_age),
            fields=self.fields(),
            timestamp=self.timestamp,
        )

    def variants(self) -> list[TimeSeriesPoint]:
        """Age-bearing point first, then the age-less one for older queries"""
        return [self.to_point(with_age=True), self.to_point(with_age=False)]


@dataclass(frozen=True)
class WindPoint(ForecastPoint):
    MEASUREMENT: ClassVar[str] = WIND_MEASUREMENT

    location: str = ""
    speed: float = 0.0
    direction: float = 0.0
    direction_type: str = ""
    gust: float = 0.0
    optimal_score: int = 0
    utc_offset: int = 0

    def extra_tags(self) -> dict[str, str]:
        return {"location": self.location}

    def fields(self) -> dict[str, FieldValue]:
        return {
            "speed": self.speed,
            "direction": self.direction,
            "directionType": self.direction_type,
            "gust": self.gust,
            "optimalScore": self.optimal_score,
            "utcOffset": self.utc_offset,
        }


@dataclass(frozen=True)
class WavePoint(ForecastPoint):
    MEASUREMENT: ClassVar[str] = WAVE_MEASUREMENT

    probability: Optional[float] = None
    min_surf: float = 0.0
    max_surf: float = 0.0
    optimal_score: int = 0
    human_relation: str = ""
    raw_min_surf: float = 0.0
    raw_max_surf: float = 0.0
    power: float = 0.0
    utc_offset: int = 0

    def fields(self) -> dict[str, FieldValue]:
        fields: dict[str, FieldValue] = {
            "minSurf": self.min_surf,
            "maxSurf": self.max_surf,
            "optimalScore": self.optimal_score,
            "humanRelation": self.human_relation,
            "rawMinSurf": self.raw_min_surf,
            "rawMaxSurf": self.raw_max_surf,
            "power": self.power,
            "utcOffset": self.utc_offset,
        }
        # Surfline omits probability past the first few forecast days
        if self.probability is not None:
            fields["probability"] = self.probability
        return fields


@dataclass(frozen=True)
class SwellPoint(ForecastPoint):
    MEASUREMENT: ClassVar[str] = SWELL_MEASUREMENT

    height: float = 0.0
    period: int = 0
    impact: float = 0.0
    power: float = 0.0
    direction: float = 0.0
    direction_min: float = 0.0
    optimal_score: int = 0

    def fields(self) -> dict[str, FieldValue]:
        return {
            "height": self.height,
            "period": self.period,
            "impact": self.impact,
            "power": self.power,
            "direction": self.direction,
            "directionMin": self.direction_min,
            "optimalScore": self.optimal_score,
        }


@dataclass(frozen=True)
class TidePoint(ForecastPoint):
    MEASUREMENT: ClassVar[str] = TIDE_MEASUREMENT

    location: str = ""
    station_name: str = ""
    type: str = ""
    height: float = 0.0
    utc_offset: int = 0

    def extra_tags(self) -> dict[str, str]:
        return {"location": self.location, "name": self.station_name}

    def fields(self) -> dict[str, FieldValue]:
        return {
            "type": self.type,
            "height": self.height,
            "utcOffset": self.utc_offset,
        }


@dataclass(frozen=True)
class RatingPoint(ForecastPoint):
    MEASUREMENT: ClassVar[str] = RATING_MEASUREMENT

    rating_key: str = ""
    rating_value: float = 0.0
    utc_offset: int = 0

    def extra_tags(self) -> dict[str, str]:
        return {"ratingKey": self.rating_key}

    def fields(self) -> dict[str, FieldValue]:
        return {
            "ratingValue": self.rating_value,
            "utcOffset": self.utc_offset,
        }
