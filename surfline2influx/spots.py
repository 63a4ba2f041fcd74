# ABOUTME: Spot identity and the spot id -> display name lookup
# ABOUTME: Names come from the config document, unknown ids resolve to "Unknown"

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

UNKNOWN_SPOT_NAME = "Unknown"


@dataclass(frozen=True)
class Spot:
    """A Surfline spot to poll"""
    spot_id: str
    name: str = UNKNOWN_SPOT_NAME

    def __str__(self) -> str:
        return f"{self.name} ({self.spot_id})"


class SpotNameResolver:
    """Read-only mapping from Surfline spot id to a human readable name"""

    def __init__(self, names: Mapping[str, str]):
        self._names = MappingProxyType(dict(names))

    @classmethod
    def from_spots(cls, spots: Mapping[str, str]) -> "SpotNameResolver":
        """
        Build a resolver from the config 'spots' section.

        Args:
            spots: label -> spot id, as written in config.yaml

        Returns:
            Resolver mapping each spot id back to its label
        """
        return cls({spot_id: label for label, spot_id in spots.items()})

    def resolve(self, spot_id: str) -> str:
        return self._names.get(spot_id, UNKNOWN_SPOT_NAME)

    def spot(self, spot_id: str) -> Spot:
        return Spot(spot_id=spot_id, name=self.resolve(spot_id))
