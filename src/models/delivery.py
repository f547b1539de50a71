"""Delivery and delivery log record definitions."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from src.models.base import ApiModel, GeoPoint, Place


class DeliveryStatus(str, Enum):
    """Delivery status enumeration."""

    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    PICKED_UP = "PICKED_UP"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        """No further transitions are expected from this status."""
        return self in TERMINAL_STATUSES

    @property
    def is_active(self) -> bool:
        return not self.is_terminal


TERMINAL_STATUSES = frozenset(
    {DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED, DeliveryStatus.FAILED}
)


class TimeRange(str, Enum):
    """Reporting period label for trend requests."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class DeliveryTimestamps(ApiModel):
    """Lifecycle timestamps; each is set once the matching transition happens."""

    created: datetime = Field(..., description="Creation time")
    assigned: datetime | None = Field(default=None, description="Courier assignment time")
    picked_up: datetime | None = Field(default=None, description="Pickup time")
    delivered: datetime | None = Field(default=None, description="Delivery time")
    cancelled: datetime | None = Field(default=None, description="Cancellation time")


class DeliveryMeasurements(ApiModel):
    """Distance and duration figures for a delivery."""

    distance: float = Field(default=0.0, ge=0, description="Route distance in km")
    duration: float = Field(default=0.0, ge=0, description="Planned duration in minutes")
    actual_duration: float | None = Field(
        default=None, ge=0, description="Elapsed minutes, set once delivered or failed"
    )


class DeliveryLocation(ApiModel):
    """Pickup and dropoff places."""

    pickup: Place
    delivery: Place


class Customer(ApiModel):
    """Customer attached to a delivery."""

    id: str = Field(..., description="Customer identifier")
    name: str = Field(default="", description="Customer name (PII)")
    phone: str = Field(default="", description="Customer phone (PII)")
    rating: float | None = Field(default=None, description="Satisfaction rating")
    feedback: str | None = Field(default=None, description="Free-text feedback")


class Delivery(ApiModel):
    """A single fulfillment unit."""

    id: str = Field(..., description="Unique delivery identifier")
    courier_id: str = Field(..., description="Assigned courier")
    zone_id: str = Field(..., description="Operating zone")
    status: DeliveryStatus = Field(..., description="Current status")
    timestamps: DeliveryTimestamps
    metrics: DeliveryMeasurements = Field(default_factory=DeliveryMeasurements)
    location: DeliveryLocation
    customer: Customer


class DeliveryLogMetadata(ApiModel):
    """Context recorded with a status transition."""

    courier_id: str
    zone_id: str
    reason: str | None = None
    notes: str | None = None


class DeliveryLogEntry(ApiModel):
    """Immutable record of a status transition for one delivery."""

    id: str = Field(..., description="Log entry identifier")
    delivery_id: str = Field(..., description="Parent delivery")
    timestamp: datetime = Field(..., description="When the status was entered")
    status: DeliveryStatus = Field(..., description="Status entered at this timestamp")
    location: GeoPoint | None = Field(default=None, description="Courier position, if reported")
    metadata: DeliveryLogMetadata
