# ABOUTME: Result types reported per spot by the fetcher and the retrying orchestrator
# ABOUTME: A failed point write is recorded but never turns a fetch into a failure

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from surfline2influx.spots import Spot


@dataclass(frozen=True)
class WriteFailure:
    """One point the sink refused"""
    spot_id: str
    kind: str
    measurement: str
    timestamp: datetime
    error: Exception


@dataclass(frozen=True)
class FetchOutcome:
    """
    Terminal result of fetching and publishing one spot.

    Built once per attempt by the fetcher. The orchestrator keeps the last
    attempt's outcome, stamps the attempt count on it, and carries forward
    write failures from earlier attempts.
    """
    spot: Spot
    error: Optional[Exception] = None
    failed_kind: Optional[str] = None
    attempts: int = 1
    points_written: int = 0
    write_failures: tuple[WriteFailure, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.ok:
            return (
                f"{self.spot}: ok after {self.attempts} attempt(s), "
                f"{self.points_written} points written, {len(self.write_failures)} write failures"
            )
        return f"{self.spot}: failed after {self.attempts} attempt(s) on {self.failed_kind}: {self.error}"
