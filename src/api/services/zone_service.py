"""
Zone aggregation: per-zone performance snapshots and zone listings.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone, tzinfo

from src.analytics import compute_zone_metrics, courier_distribution, hourly_metrics
from src.api.services.delivery_service import DeliveryService
from src.api.services.record_store import DeliveryRecordStore
from src.common.exceptions import ZoneNotFoundError
from src.common.logging_utils import get_logger
from src.common.metrics import MetricsClient, timed
from src.models.analytics import ZonePerformance
from src.models.delivery import Delivery
from src.models.filters import DeliveryFilter, ZoneFilter
from src.models.zone import Zone

logger = get_logger(__name__)


class ZoneService:
    """Composes zone delivery sets with the analytics calculators."""

    def __init__(
        self,
        store: DeliveryRecordStore,
        deliveries: DeliveryService,
        tz: tzinfo | None = timezone.utc,
        max_workers: int = 8,
        metrics_client: MetricsClient | None = None,
    ):
        self.store = store
        self.deliveries = deliveries
        self.tz = tz
        self.max_workers = max_workers
        self.metrics_client = metrics_client

    def list_zones(self, filters: ZoneFilter) -> list[Zone]:
        """
        Zones matching the status filter, enriched per the include flags.

        Without ``include_metrics`` each zone carries its persisted metrics
        snapshot. All requested enrichments are computed from one delivery
        query covering every listed zone.
        """
        zones = self.store.list_zones(filters.status)

        wants_deliveries = (
            filters.include_metrics
            or filters.include_courier_distribution
            or filters.include_hourly_metrics
        )
        if not wants_deliveries:
            return zones

        grouped = self.store.list_zone_deliveries(
            [zone.id for zone in zones], filters.start_date, filters.end_date
        )

        enriched = []
        for zone in zones:
            zone_deliveries = grouped.get(zone.id, [])
            update: dict = {}
            if filters.include_metrics:
                update["metrics"] = compute_zone_metrics(zone_deliveries)
            if filters.include_courier_distribution:
                update["courier_distribution"] = courier_distribution(zone_deliveries)
            if filters.include_hourly_metrics:
                update["hourly_metrics"] = hourly_metrics(zone_deliveries, self.tz)
            enriched.append(zone.model_copy(update=update))

        logger.info("Listed zones", count=len(enriched), status=filters.status)
        return enriched

    def zone_performance(self, zone_id: str, filters: ZoneFilter) -> ZonePerformance:
        """
        Performance snapshot of one zone.

        Raises:
            ZoneNotFoundError: If the zone does not exist
        """
        if self.store.get_zone(zone_id) is None:
            raise ZoneNotFoundError(zone_id)
        return self._performance(zone_id, filters)

    def zone_performance_trends(self, filters: ZoneFilter) -> list[ZonePerformance]:
        """
        Performance snapshot of every zone matching the status filter.

        Zones are computed concurrently, at most ``max_workers`` at a time,
        and returned in listing order.
        """
        zones = self.store.list_zones(filters.status)
        if not zones:
            return []

        workers = min(self.max_workers, len(zones))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="zone-performance") as executor:
            results = list(executor.map(lambda zone: self._performance(zone.id, filters), zones))

        logger.info("Computed zone performance trends", zones=len(results), workers=workers)
        return results

    def _performance(self, zone_id: str, filters: ZoneFilter) -> ZonePerformance:
        deliveries = self.deliveries.list_deliveries(DeliveryFilter(
            zone_id=zone_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
        ))

        with timed(self.metrics_client, "zone_performance", labels={"zone_id": zone_id}):
            performance = self._assemble(zone_id, deliveries, filters)

        logger.debug(
            "Computed zone performance",
            zone_id=zone_id,
            total_deliveries=performance.metrics.total_deliveries,
        )
        return performance

    def _assemble(self, zone_id: str, deliveries: list[Delivery], filters: ZoneFilter) -> ZonePerformance:
        return ZonePerformance(
            zone_id=zone_id,
            timestamp=datetime.now(timezone.utc),
            metrics=compute_zone_metrics(deliveries),
            courier_distribution=(
                courier_distribution(deliveries) if filters.include_courier_distribution else []
            ),
            hourly_metrics=(
                hourly_metrics(deliveries, self.tz) if filters.include_hourly_metrics else []
            ),
        )
