"""
Fallback rules shared by every calculator.

Each derived field reads delivery data through exactly one accessor here so
the actual-over-planned and missing-rating rules cannot drift between
calculators.
"""

from datetime import datetime, tzinfo

from src.models.delivery import Delivery


def effective_duration(delivery: Delivery) -> float:
    """Actual elapsed minutes when recorded, otherwise the planned duration."""
    actual = delivery.metrics.actual_duration
    if actual is not None:
        return actual
    return delivery.metrics.duration


def effective_rating(delivery: Delivery) -> float:
    """Customer rating, with a missing rating counted as 0."""
    rating = delivery.customer.rating
    return rating if rating is not None else 0.0


def hour_of_day(timestamp: datetime, tz: tzinfo | None = None) -> int:
    """
    Hour (0-23) of ``timestamp`` on the local clock.

    Aware timestamps are converted into ``tz``; naive ones are taken as
    already local.
    """
    if tz is not None and timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.hour


def mean(values: list[float]) -> float:
    """Arithmetic mean, 0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)
