# ABOUTME: Root logger setup for the command line entry point
# ABOUTME: One console handler, UTC timestamps, quiet HTTP libraries

import logging
import time

from surfline2influx.config import Config


class UTCFormatter(logging.Formatter):
    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        # Keep only the module name, not the full dotted path
        record.name = record.name.split('.')[-1]
        return super().format(record)


def setup_logging(level: str | None = None) -> None:
    formatter = UTCFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S UTC"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level or Config.LOG_LEVEL)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("influxdb_client").setLevel(logging.WARNING)
