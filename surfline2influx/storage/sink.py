# ABOUTME: InfluxDB sink that writes one time-series point per call, blocking until acknowledged
# ABOUTME: Shared by every spot worker thread, so write_point must be safe to call concurrently

import logging
from typing import Protocol

from influxdb_client import InfluxDBClient, Point, WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS

from surfline2influx.debug import debug_log
from surfline2influx.points.models import TimeSeriesPoint

log = logging.getLogger(__name__)


class TimeSeriesSink(Protocol):
    """
    Blocking single point writer.

    Implementations are called from several threads at once and must not
    need external locking.
    """

    def write_point(self, point: TimeSeriesPoint) -> None: ...


def to_influx_point(point: TimeSeriesPoint) -> Point:
    """Convert a generic point into an influxdb_client Point with second precision"""
    influx_point = Point(point.measurement)
    for key, value in point.tags.items():
        influx_point = influx_point.tag(key, value)
    for key, value in point.fields.items():
        influx_point = influx_point.field(key, value)
    return influx_point.time(point.timestamp, WritePrecision.S)


class InfluxSink:
    """
    Writes points to an InfluxDB v2 bucket through the synchronous write API.

    The synchronous API performs one HTTP request per write over a pooled
    urllib3 connection, which is safe to share between threads.
    """

    def __init__(self, url: str, token: str, org: str, bucket: str, timeout_ms: int = 10_000):
        self.org = org
        self.bucket = bucket
        self.client = InfluxDBClient(url=url, token=token, org=org, timeout=timeout_ms)
        self.write_api = self.client.write_api(write_options=SYNCHRONOUS)

    def write_point(self, point: TimeSeriesPoint) -> None:
        """Write one point; any client or HTTP error propagates to the caller"""
        record = to_influx_point(point)
        debug_log(f"write {point.measurement} {point.tags}", "INFLUX")
        self.write_api.write(bucket=self.bucket, org=self.org, record=record)

    def close(self) -> None:
        log.debug(f"Closing InfluxDB client for bucket {self.bucket}")
        self.write_api.close()
        self.client.close()

    def __enter__(self) -> "InfluxSink":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
