# ABOUTME: Decoded Surfline forecast records for wind, wave, tide, and rating
# ABOUTME: Each *Forecast batch pairs ordered samples with shared response metadata

from dataclasses import dataclass, field
from typing import Optional

WIND = "wind"
WAVE = "wave"
TIDE = "tide"
RATING = "rating"


@dataclass
class Location:
    """Coordinate pair reported with a forecast response"""
    lat: float
    lon: float


@dataclass
class TideLocation(Location):
    """Tide station the tide forecast was computed for"""
    name: str = ""


@dataclass
class WindSample:
    timestamp: int            # epoch seconds, UTC
    utc_offset: int
    speed: float
    direction: float
    direction_type: str       # e.g. "Offshore", "Cross-shore"
    gust: float
    optimal_score: int


@dataclass
class SwellComponent:
    """One swell train inside a wave sample. Shares the parent's timestamp."""
    height: float
    period: int
    impact: float
    power: float
    direction: float
    direction_min: float
    optimal_score: int


@dataclass
class SurfRange:
    min: float
    max: float
    optimal_score: int
    human_relation: str
    raw_min: float
    raw_max: float


@dataclass
class WaveSample:
    timestamp: int
    utc_offset: int
    probability: Optional[float]
    surf: SurfRange
    power: float
    swells: list[SwellComponent] = field(default_factory=list)


@dataclass
class TideSample:
    timestamp: int
    utc_offset: int
    type: str                 # "HIGH", "LOW", or "NORMAL"
    height: float


@dataclass
class RatingSample:
    timestamp: int
    utc_offset: int
    key: str                  # e.g. "FAIR", "GOOD"
    value: float


@dataclass
class WindForecast:
    location: Location
    samples: list[WindSample] = field(default_factory=list)


@dataclass
class WaveForecast:
    samples: list[WaveSample] = field(default_factory=list)


@dataclass
class TideForecast:
    location: TideLocation
    samples: list[TideSample] = field(default_factory=list)


@dataclass
class RatingForecast:
    samples: list[RatingSample] = field(default_factory=list)
