"""
Delivery query facade and delivery analytics.
"""

from datetime import datetime, timezone, tzinfo

from src.analytics import (
    build_timeline,
    compute_metrics,
    hourly_distribution,
    status_distribution,
)
from src.api.services.record_store import DeliveryRecordStore
from src.common.exceptions import DeliveryNotFoundError
from src.common.logging_utils import get_logger
from src.common.metrics import MetricsClient, timed
from src.models.analytics import DeliveryTimeline, DeliveryTrend
from src.models.delivery import Delivery, DeliveryLogEntry, TimeRange
from src.models.filters import DeliveryFilter, DeliveryLogFilter

logger = get_logger(__name__)


class DeliveryService:
    """Filters delivery records and derives trends and timelines from them."""

    def __init__(
        self,
        store: DeliveryRecordStore,
        tz: tzinfo | None = timezone.utc,
        metrics_client: MetricsClient | None = None,
    ):
        self.store = store
        self.tz = tz
        self.metrics_client = metrics_client

    def list_deliveries(self, filters: DeliveryFilter) -> list[Delivery]:
        """Deliveries matching ``filters``, newest created first."""
        deliveries = self.store.list_deliveries(filters)
        logger.info(
            "Listed deliveries",
            count=len(deliveries),
            zone_id=filters.zone_id,
            courier_id=filters.courier_id,
        )
        return deliveries

    def get_delivery(self, delivery_id: str) -> Delivery:
        delivery = self.store.get_delivery(delivery_id)
        if delivery is None:
            raise DeliveryNotFoundError(delivery_id)
        return delivery

    def delivery_trends(self, filters: DeliveryFilter) -> list[DeliveryTrend]:
        """
        Snapshot of delivery metrics for the filtered set.

        Always a single-element list. ``time_range`` labels the snapshot;
        bucketing is hourly regardless of its value.
        """
        deliveries = self.list_deliveries(filters)

        with timed(self.metrics_client, "delivery_trends"):
            trend = DeliveryTrend(
                timestamp=datetime.now(timezone.utc),
                time_range=filters.time_range or TimeRange.DAILY,
                metrics=compute_metrics(deliveries),
                hourly_distribution=hourly_distribution(deliveries, self.tz),
                status_distribution=status_distribution(deliveries),
            )

        logger.debug(
            "Computed delivery trend",
            total_deliveries=trend.metrics.total_deliveries,
            buckets=len(trend.hourly_distribution),
        )
        return [trend]

    def delivery_timeline(self, delivery_id: str) -> DeliveryTimeline:
        """
        Status timeline of one delivery.

        Raises:
            DeliveryNotFoundError: If the delivery does not exist
        """
        self.get_delivery(delivery_id)
        entries = self.store.list_delivery_log_entries(delivery_id)

        with timed(self.metrics_client, "delivery_timeline"):
            timeline = build_timeline(delivery_id, entries)

        logger.debug(
            "Built delivery timeline",
            delivery_id=delivery_id,
            events=len(timeline.events),
            total_duration=timeline.total_duration,
        )
        return timeline

    def delivery_logs(self, filters: DeliveryLogFilter) -> list[DeliveryLogEntry]:
        """Raw log entries for auditing, newest first."""
        return self.store.list_delivery_logs(filters)
