"""
Derived analytics payloads.

These are computed on every request from delivery records and never
persisted.
"""

from datetime import datetime

from pydantic import Field

from src.models.base import ApiModel, GeoPoint
from src.models.delivery import DeliveryStatus, TimeRange


class DeliveryMetrics(ApiModel):
    """Aggregate metrics over a set of deliveries."""

    total_deliveries: int = 0
    completed_deliveries: int = 0
    average_delivery_time: float = 0.0
    success_rate: float = Field(default=0.0, ge=0, le=100, description="Percent delivered")
    customer_satisfaction: float = 0.0


class ZoneMetrics(DeliveryMetrics):
    """Delivery metrics plus zone workload figures."""

    active_deliveries: int = 0
    courier_efficiency: float = Field(default=0.0, description="Mean km/min * 100 across couriers")


class HourlyBucket(ApiModel):
    """Deliveries created within one hour of the day."""

    hour: int = Field(..., ge=0, le=23)
    count: int = Field(..., ge=1)
    average_time: float


class HourlyMetric(ApiModel):
    """Hourly bucket with its success rate."""

    hour: int = Field(..., ge=0, le=23)
    deliveries: int = Field(..., ge=1)
    average_time: float
    success_rate: float


class CourierLoad(ApiModel):
    """Workload of one courier within a delivery set."""

    courier_id: str
    active_deliveries: int
    completed_deliveries: int
    average_time: float


class DeliveryTrend(ApiModel):
    """Point-in-time snapshot of delivery metrics."""

    timestamp: datetime
    time_range: TimeRange = TimeRange.DAILY
    metrics: DeliveryMetrics
    hourly_distribution: list[HourlyBucket]
    status_distribution: dict[DeliveryStatus, int] = Field(default_factory=dict)


class ZonePerformance(ApiModel):
    """Point-in-time snapshot of one zone's performance."""

    zone_id: str
    timestamp: datetime
    metrics: ZoneMetrics
    courier_distribution: list[CourierLoad] = Field(default_factory=list)
    hourly_metrics: list[HourlyMetric] = Field(default_factory=list)


class TimelineEvent(ApiModel):
    """One status transition in a delivery timeline."""

    timestamp: datetime
    status: DeliveryStatus
    location: GeoPoint | None = None
    duration: float | None = Field(default=None, description="Minutes since the previous event")


class DeliveryTimeline(ApiModel):
    """Replayed status history of one delivery."""

    delivery_id: str
    events: list[TimelineEvent]
    total_duration: float = 0.0
    status_durations: dict[DeliveryStatus, float] = Field(default_factory=dict)
