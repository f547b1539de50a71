"""Zone record definitions."""

from enum import Enum
from typing import Literal

from pydantic import Field

from src.models.analytics import CourierLoad, HourlyMetric, ZoneMetrics
from src.models.base import ApiModel


class ZoneStatus(str, Enum):
    """Zone operating status."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"


class ZoneBoundary(ApiModel):
    """Polygon ring of (lng, lat) pairs."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[tuple[float, float]] = Field(default_factory=list)


class Zone(ApiModel):
    """A geographic operating area."""

    id: str = Field(..., description="Zone identifier")
    name: str = Field(..., description="Display name")
    description: str | None = Field(default=None, description="Optional description")
    boundaries: ZoneBoundary = Field(default_factory=ZoneBoundary)
    status: ZoneStatus = Field(..., description="Operating status")
    active_couriers: int = Field(default=0, ge=0, description="Couriers currently on shift")
    metrics: ZoneMetrics = Field(default_factory=ZoneMetrics)

    # Present only when the listing request asks for them
    courier_distribution: list[CourierLoad] | None = None
    hourly_metrics: list[HourlyMetric] | None = None
