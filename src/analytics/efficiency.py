"""Courier efficiency scoring."""

from collections import defaultdict
from collections.abc import Sequence

from src.analytics.accessors import effective_duration, mean
from src.models.delivery import Delivery

# km/min is scaled so typical urban couriers land in a 0-100 range
EFFICIENCY_SCALE = 100


def courier_score(deliveries: Sequence[Delivery]) -> float:
    """Mean distance over mean time for one courier's deliveries, scaled."""
    mean_time = mean([effective_duration(d) for d in deliveries])
    if mean_time <= 0:
        return 0.0
    mean_distance = mean([d.metrics.distance for d in deliveries])
    return (mean_distance / mean_time) * EFFICIENCY_SCALE


def courier_efficiency(deliveries: Sequence[Delivery]) -> float:
    """
    Zone-level efficiency: unweighted mean of per-courier scores.

    A courier with a single delivery counts as much as one with hundreds.
    """
    by_courier: dict[str, list[Delivery]] = defaultdict(list)
    for delivery in deliveries:
        by_courier[delivery.courier_id].append(delivery)

    return mean([courier_score(items) for items in by_courier.values()])
