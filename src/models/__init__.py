"""Data models for the delivery analytics platform."""

from src.models.analytics import (
    CourierLoad,
    DeliveryMetrics,
    DeliveryTimeline,
    DeliveryTrend,
    HourlyBucket,
    HourlyMetric,
    TimelineEvent,
    ZoneMetrics,
    ZonePerformance,
)
from src.models.delivery import (
    Customer,
    Delivery,
    DeliveryLogEntry,
    DeliveryStatus,
    TimeRange,
)
from src.models.filters import DeliveryFilter, DeliveryLogFilter, ZoneFilter
from src.models.zone import Zone, ZoneStatus

__all__ = [
    "CourierLoad",
    "Customer",
    "Delivery",
    "DeliveryFilter",
    "DeliveryLogEntry",
    "DeliveryLogFilter",
    "DeliveryMetrics",
    "DeliveryStatus",
    "DeliveryTimeline",
    "DeliveryTrend",
    "HourlyBucket",
    "HourlyMetric",
    "TimeRange",
    "TimelineEvent",
    "Zone",
    "ZoneFilter",
    "ZoneMetrics",
    "ZonePerformance",
    "ZoneStatus",
]
