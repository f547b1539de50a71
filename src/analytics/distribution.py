"""
Bucketed distributions over delivery sets.

All distributions are sparse: a bucket only appears when at least one
delivery falls into it.
"""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import tzinfo

from src.analytics.accessors import effective_duration, hour_of_day
from src.models.analytics import CourierLoad, HourlyBucket, HourlyMetric
from src.models.delivery import Delivery, DeliveryStatus


@dataclass
class _Accumulator:
    count: int = 0
    total_time: float = 0.0
    completed: int = 0
    active: int = 0

    def add(self, delivery: Delivery) -> None:
        self.count += 1
        self.total_time += effective_duration(delivery)
        if delivery.status == DeliveryStatus.DELIVERED:
            self.completed += 1
        elif delivery.status.is_active:
            self.active += 1

    @property
    def average_time(self) -> float:
        return self.total_time / self.count


def _by_hour(deliveries: Sequence[Delivery], tz: tzinfo | None) -> dict[int, _Accumulator]:
    buckets: dict[int, _Accumulator] = defaultdict(_Accumulator)
    for delivery in deliveries:
        buckets[hour_of_day(delivery.timestamps.created, tz)].add(delivery)
    return dict(sorted(buckets.items()))


def hourly_distribution(
    deliveries: Sequence[Delivery],
    tz: tzinfo | None = None,
) -> list[HourlyBucket]:
    """
    Count and average duration per creation hour.

    Args:
        deliveries: Deliveries to bucket
        tz: Local timezone for the hour-of-day key

    Returns:
        Buckets sorted by hour; empty hours are omitted
    """
    return [
        HourlyBucket(hour=hour, count=acc.count, average_time=acc.average_time)
        for hour, acc in _by_hour(deliveries, tz).items()
    ]


def hourly_metrics(
    deliveries: Sequence[Delivery],
    tz: tzinfo | None = None,
) -> list[HourlyMetric]:
    """Hourly distribution with the share of delivered orders per bucket."""
    return [
        HourlyMetric(
            hour=hour,
            deliveries=acc.count,
            average_time=acc.average_time,
            success_rate=(acc.completed / acc.count) * 100,
        )
        for hour, acc in _by_hour(deliveries, tz).items()
    ]


def courier_distribution(deliveries: Sequence[Delivery]) -> list[CourierLoad]:
    """
    Workload per courier, in order of first appearance.

    Active counts non-terminal deliveries and completed counts DELIVERED;
    cancelled and failed deliveries only weigh into the average time.
    """
    couriers: dict[str, _Accumulator] = defaultdict(_Accumulator)
    for delivery in deliveries:
        couriers[delivery.courier_id].add(delivery)

    return [
        CourierLoad(
            courier_id=courier_id,
            active_deliveries=acc.active,
            completed_deliveries=acc.completed,
            average_time=acc.average_time,
        )
        for courier_id, acc in couriers.items()
    ]


def status_distribution(deliveries: Sequence[Delivery]) -> dict[DeliveryStatus, int]:
    """Delivery count for every status, zero-filled."""
    counts = {status: 0 for status in DeliveryStatus}
    for delivery in deliveries:
        counts[delivery.status] += 1
    return counts
