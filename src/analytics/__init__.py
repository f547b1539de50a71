"""Pure calculators turning delivery records into metrics, distributions and timelines."""

from src.analytics.accessors import effective_duration, effective_rating, hour_of_day
from src.analytics.distribution import (
    courier_distribution,
    hourly_distribution,
    hourly_metrics,
    status_distribution,
)
from src.analytics.efficiency import courier_efficiency
from src.analytics.metrics import compute_metrics, compute_zone_metrics
from src.analytics.timeline import build_timeline

__all__ = [
    "build_timeline",
    "compute_metrics",
    "compute_zone_metrics",
    "courier_distribution",
    "courier_efficiency",
    "effective_duration",
    "effective_rating",
    "hour_of_day",
    "hourly_distribution",
    "hourly_metrics",
    "status_distribution",
]
