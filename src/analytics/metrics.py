"""Aggregate metric calculators."""

from collections.abc import Sequence

from src.analytics.accessors import effective_duration, effective_rating, mean
from src.analytics.efficiency import courier_efficiency
from src.models.analytics import DeliveryMetrics, ZoneMetrics
from src.models.delivery import Delivery, DeliveryStatus


def compute_metrics(deliveries: Sequence[Delivery]) -> DeliveryMetrics:
    """
    Compute headline metrics for a delivery set.

    Average time covers every delivery, so in-flight ones contribute their
    planned duration. Satisfaction divides by the full count, unrated
    deliveries included.

    Args:
        deliveries: Deliveries to aggregate

    Returns:
        DeliveryMetrics, all zero for an empty input
    """
    total = len(deliveries)
    completed = sum(1 for d in deliveries if d.status == DeliveryStatus.DELIVERED)

    return DeliveryMetrics(
        total_deliveries=total,
        completed_deliveries=completed,
        average_delivery_time=mean([effective_duration(d) for d in deliveries]),
        success_rate=(completed / total) * 100 if total else 0.0,
        customer_satisfaction=mean([effective_rating(d) for d in deliveries]),
    )


def compute_zone_metrics(deliveries: Sequence[Delivery]) -> ZoneMetrics:
    """Delivery metrics extended with active workload and courier efficiency."""
    base = compute_metrics(deliveries)
    return ZoneMetrics(
        **base.model_dump(),
        active_deliveries=sum(1 for d in deliveries if d.status.is_active),
        courier_efficiency=courier_efficiency(deliveries),
    )
