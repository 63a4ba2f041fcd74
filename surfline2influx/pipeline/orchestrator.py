# ABOUTME: Runs the per-spot fetcher for every spot in parallel with bounded, fixed-delay retry
# ABOUTME: Joins all workers before returning and reports exactly one outcome per spot

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from typing import Callable, Iterable, Iterator, Optional

from surfline2influx.debug import debug_log
from surfline2influx.pipeline.fetcher import SpotFetcher
from surfline2influx.pipeline.outcomes import FetchOutcome, WriteFailure
from surfline2influx.spots import Spot

log = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5.0


class RetryingFetchOrchestrator:
    """
    Fans out one worker thread per spot.

    Each worker calls SpotFetcher up to `max_attempts` times, waiting
    `retry_delay` seconds between failed attempts. A slow or failing spot
    never holds up the others. The wait between attempts is cut short by
    `stop()`, after which no new attempts start.
    """

    def __init__(
        self,
        fetcher: SpotFetcher,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay: float = RETRY_DELAY_SECONDS,
        wait: Optional[Callable[[float], bool]] = None,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.fetcher = fetcher
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self._stop_event = threading.Event()
        # wait(seconds) -> True when a stop was requested during the wait
        self._wait = wait or self._stop_event.wait

    def stop(self) -> None:
        """Abandon pending retries. Attempts already in flight finish normally."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self, spots: Iterable[Spot], days: int, interval_hours: int) -> dict[Spot, FetchOutcome]:
        """
        Fetch and publish every spot, returning once all of them are done.

        Args:
            spots: Spots to poll, duplicates are collapsed
            days: Lookahead window in days
            interval_hours: Sampling interval in hours

        Returns:
            One FetchOutcome per spot. Failures are reported here, never raised.
        """
        outcomes: dict[Spot, FetchOutcome] = {}
        for spot, outcome in self.iter_outcomes(spots, days, interval_hours):
            outcomes[spot] = outcome
            if outcome.ok:
                log.info(str(outcome))
            else:
                log.error(str(outcome))
        return outcomes

    def iter_outcomes(
        self, spots: Iterable[Spot], days: int, interval_hours: int
    ) -> Iterator[tuple[Spot, FetchOutcome]]:
        """Yield (spot, outcome) pairs in completion order"""
        unique_spots = list(dict.fromkeys(spots))
        if not unique_spots:
            return

        debug_log(f"Starting {len(unique_spots)} spot workers", "ORCHESTRATOR")

        # Leaving the with-block joins every worker, even if the caller stops iterating early
        with ThreadPoolExecutor(max_workers=len(unique_spots), thread_name_prefix="spot") as executor:
            futures = {
                executor.submit(self.fetch_with_retry, spot, days, interval_hours): spot
                for spot in unique_spots
            }
            for future in as_completed(futures):
                yield futures[future], future.result()

    def fetch_with_retry(self, spot: Spot, days: int, interval_hours: int) -> FetchOutcome:
        """
        Call the fetcher until it succeeds, attempts run out, or stop() is called.

        An exception escaping the fetcher ends the spot at once as a failure;
        it is not retried.

        Returns:
            The last attempt's outcome with the total attempt count and the
            write failures of every attempt
        """
        write_failures: list[WriteFailure] = []
        outcome: Optional[FetchOutcome] = None
        attempt = 0

        while attempt < self.max_attempts:
            attempt += 1
            try:
                outcome = self.fetcher.fetch_and_publish(spot, days, interval_hours)
            except Exception as e:
                log.exception(f"Unexpected error fetching spot {spot} on attempt {attempt}")
                outcome = FetchOutcome(spot=spot, error=e)
                break

            write_failures.extend(outcome.write_failures)

            if outcome.ok or attempt >= self.max_attempts:
                break

            # The fetcher already logged the failure itself
            log.info(f"Retrying {spot} in {self.retry_delay:g}s (attempt {attempt} of {self.max_attempts} failed)")
            if self.stopped or self._wait(self.retry_delay):
                log.warning(f"Stop requested, giving up on {spot} after {attempt} attempt(s)")
                break

        return replace(outcome, attempts=attempt, write_failures=tuple(write_failures))
