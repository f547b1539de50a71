"""
Custom metrics utilities for monitoring analytics engine performance.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generator

from google.cloud import monitoring_v3

from src.common.logging_utils import get_logger

logger = get_logger(__name__)

METRIC_PREFIX = "custom.googleapis.com/delivery_analytics"


@dataclass
class MetricPoint:
    """A single metric data point."""

    name: str
    value: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    labels: dict[str, str] = field(default_factory=dict)


class MetricsClient:
    """Client for publishing custom metrics to Cloud Monitoring."""

    def __init__(self, project_id: str, environment: str = "dev", buffer_size: int = 100):
        self.project_id = project_id
        self.environment = environment
        self.project_name = f"projects/{project_id}"
        self._client: monitoring_v3.MetricServiceClient | None = None
        self._buffer: list[MetricPoint] = []
        self._buffer_size = buffer_size
        # Request threads and the zone fan-out workers share one client
        self._lock = threading.Lock()

    @property
    def client(self) -> monitoring_v3.MetricServiceClient:
        """Lazy initialization of the monitoring client."""
        if self._client is None:
            self._client = monitoring_v3.MetricServiceClient()
        return self._client

    def _create_time_series(self, metric: MetricPoint) -> monitoring_v3.TimeSeries:
        """Create a TimeSeries object from a MetricPoint."""
        series = monitoring_v3.TimeSeries()
        series.metric.type = f"{METRIC_PREFIX}/{metric.name}"

        series.metric.labels["environment"] = self.environment
        for key, value in metric.labels.items():
            series.metric.labels[key] = str(value)

        series.resource.type = "global"
        series.resource.labels["project_id"] = self.project_id

        point = monitoring_v3.Point()
        point.value.double_value = metric.value

        now = metric.timestamp
        seconds = int(now.timestamp())
        nanos = int((now.timestamp() - seconds) * 10**9)
        point.interval.end_time.seconds = seconds
        point.interval.end_time.nanos = nanos

        series.points = [point]

        return series

    def record(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Record a metric value.

        Args:
            name: Metric name (prefixed with custom.googleapis.com/delivery_analytics/)
            value: Metric value
            labels: Optional labels for the metric
        """
        metric = MetricPoint(name=name, value=value, labels=labels or {})
        with self._lock:
            self._buffer.append(metric)
            should_flush = len(self._buffer) >= self._buffer_size

        if should_flush:
            self.flush()

    def flush(self) -> None:
        """Flush buffered metrics to Cloud Monitoring."""
        with self._lock:
            pending, self._buffer = self._buffer, []

        if not pending:
            return

        try:
            time_series = [self._create_time_series(m) for m in pending]

            # Cloud Monitoring allows max 200 time series per request
            for i in range(0, len(time_series), 200):
                batch = time_series[i : i + 200]
                self.client.create_time_series(name=self.project_name, time_series=batch)

            logger.debug("Flushed %d metrics", len(pending))

        except Exception as e:
            logger.error("Failed to flush metrics: %s", e, exc_info=True)

    @contextmanager
    def timer(self, name: str, labels: dict[str, str] | None = None) -> Generator[None, None, None]:
        """
        Context manager for timing operations.

        Usage:
            with metrics.timer("zone_performance", labels={"zone_id": zone_id}):
                compute()
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.record(f"{name}_ms", duration_ms, labels)

    def close(self) -> None:
        """Flush remaining metrics and close the client."""
        self.flush()
        if self._client:
            self._client = None


@contextmanager
def timed(
    metrics_client: MetricsClient | None,
    name: str,
    labels: dict[str, str] | None = None,
) -> Generator[None, None, None]:
    """Time a block with ``metrics_client`` when one is configured."""
    if metrics_client is None:
        yield
        return
    with metrics_client.timer(name, labels):
        yield
