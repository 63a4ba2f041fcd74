# ABOUTME: Command line entry point: load config, fetch every spot, publish to InfluxDB
# ABOUTME: Config problems exit non-zero; per-spot failures are logged and exit zero

import logging
import signal
import sys

from surfline2influx.config import Config, load_settings, load_token
from surfline2influx.errors import ConfigError
from surfline2influx.forecast.client import SurflineClient
from surfline2influx.logging_config import setup_logging
from surfline2influx.pipeline.fetcher import SpotFetcher
from surfline2influx.pipeline.orchestrator import RetryingFetchOrchestrator
from surfline2influx.pipeline.outcomes import FetchOutcome
from surfline2influx.spots import Spot, SpotNameResolver
from surfline2influx.storage.sink import InfluxSink

log = logging.getLogger(__name__)


def summarize(outcomes: dict[Spot, FetchOutcome]) -> str:
    succeeded = sum(1 for outcome in outcomes.values() if outcome.ok)
    written = sum(outcome.points_written for outcome in outcomes.values())
    write_failures = sum(len(outcome.write_failures) for outcome in outcomes.values())
    return (
        f"Done. Spots ok: {succeeded}/{len(outcomes)}, "
        f"points written: {written}, write failures: {write_failures}"
    )


def main() -> int:
    setup_logging()

    try:
        Config.validate()
        settings = load_settings(Config.CONFIG_PATH)
        token = load_token(Config.SECRETS_PATH)
    except ConfigError as e:
        log.error(str(e))
        return 1

    resolver = SpotNameResolver.from_spots(settings.spots)
    spots = [resolver.spot(spot_id) for spot_id in settings.spots.values()]
    if not spots:
        log.warning("No spots configured, nothing to do")
        return 0

    log.info(f"Fetching {Config.FORECAST_DAYS} day forecasts for {len(spots)} spots")

    with InfluxSink(
        url=settings.influxdb.url,
        token=token,
        org=settings.influxdb.org,
        bucket=settings.influxdb.bucket,
    ) as sink:
        fetcher = SpotFetcher(
            client=SurflineClient(),
            sink=sink,
            wind_corrected=Config.WIND_CORRECTED,
            wind_cache_enabled=Config.WIND_CACHE_ENABLED,
        )
        orchestrator = RetryingFetchOrchestrator(
            fetcher,
            max_attempts=Config.MAX_RETRIES,
            retry_delay=Config.RETRY_DELAY_SECONDS,
        )

        def handle_signal(signum, frame):
            log.warning(f"Received signal {signum}, abandoning pending retries")
            orchestrator.stop()

        signal.signal(signal.SIGINT, handle_signal)
        signal.signal(signal.SIGTERM, handle_signal)

        outcomes = orchestrator.run(spots, Config.FORECAST_DAYS, Config.FORECAST_INTERVAL_HOURS)

    log.info(summarize(outcomes))
    # Partial data is better than none: spot failures do not fail the run
    return 0


if __name__ == "__main__":
    sys.exit(main())
