"""Caller-supplied query filters.

All fields are optional and combine conjunctively. Date bounds are
inclusive on both sides.
"""

from datetime import datetime, timezone

from pydantic import field_validator, model_validator

from src.common.exceptions import InvalidFilterError
from src.models.base import ApiModel
from src.models.delivery import DeliveryStatus, TimeRange
from src.models.zone import ZoneStatus


class _DateRangeFilter(ApiModel):
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Naive bounds are read as UTC, the record store's clock."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise InvalidFilterError(
                f"startDate {self.start_date.isoformat()} is after endDate {self.end_date.isoformat()}"
            )
        return self


class DeliveryFilter(_DateRangeFilter):
    """Filter over delivery records; dates bound the creation time."""

    courier_id: str | None = None
    zone_id: str | None = None
    status: DeliveryStatus | None = None
    time_range: TimeRange | None = None


class DeliveryLogFilter(_DateRangeFilter):
    """Filter over delivery log entries; dates bound the entry timestamp."""

    delivery_id: str | None = None
    courier_id: str | None = None
    zone_id: str | None = None
    status: DeliveryStatus | None = None
    include_location: bool = False


class ZoneFilter(_DateRangeFilter):
    """Filter over zones; dates bound the creation time of zone deliveries."""

    status: ZoneStatus | None = None
    include_metrics: bool = False
    include_courier_distribution: bool = False
    include_hourly_metrics: bool = False
