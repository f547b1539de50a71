"""Delivery timeline reconstruction from status log entries."""

from collections.abc import Sequence

from src.models.analytics import DeliveryTimeline, TimelineEvent
from src.models.delivery import DeliveryLogEntry, DeliveryStatus


def build_timeline(delivery_id: str, entries: Sequence[DeliveryLogEntry]) -> DeliveryTimeline:
    """
    Replay ordered log entries into a timeline.

    The gap between two consecutive entries is time spent in the earlier
    entry's status, so it is credited to the status being exited. The final
    status accrues nothing.

    Args:
        delivery_id: Delivery the entries belong to
        entries: Log entries in ascending timestamp order

    Returns:
        DeliveryTimeline; with fewer than two entries the durations are empty
    """
    events: list[TimelineEvent] = []
    status_durations: dict[DeliveryStatus, float] = {}
    total_duration = 0.0

    previous: DeliveryLogEntry | None = None
    for entry in entries:
        duration = None
        if previous is not None:
            duration = (entry.timestamp - previous.timestamp).total_seconds() / 60
            status_durations[previous.status] = status_durations.get(previous.status, 0.0) + duration
            total_duration += duration

        events.append(TimelineEvent(
            timestamp=entry.timestamp,
            status=entry.status,
            location=entry.location,
            duration=duration,
        ))
        previous = entry

    return DeliveryTimeline(
        delivery_id=delivery_id,
        events=events,
        total_duration=total_duration,
        status_durations=status_durations,
    )
