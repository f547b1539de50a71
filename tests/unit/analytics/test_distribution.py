"""
Unit tests for hourly, courier and status distributions.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.analytics import courier_distribution, hourly_distribution, hourly_metrics, status_distribution
from src.models.delivery import DeliveryStatus


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 1, 15, hour, minute, tzinfo=timezone.utc)


class TestHourlyDistribution:
    """Tests for hourly_distribution."""

    def test_buckets_by_creation_hour(self, delivery_factory):
        """Test grouping, sorting and per-bucket averages."""
        deliveries = [
            delivery_factory("DEL-1", created=at(14), duration=20),
            delivery_factory("DEL-2", created=at(10), duration=30),
            delivery_factory("DEL-3", created=at(10, 45), duration=40, actual_duration=50),
        ]

        buckets = hourly_distribution(deliveries)

        assert [b.hour for b in buckets] == [10, 14]
        assert buckets[0].count == 2
        assert buckets[0].average_time == 40
        assert buckets[1].count == 1
        assert buckets[1].average_time == 20

    def test_sparse_and_complete(self, delivery_factory):
        """Test that no bucket is empty and counts add up to the input size."""
        deliveries = [delivery_factory(f"DEL-{h}", created=at(h)) for h in (0, 3, 3, 7, 23)]

        buckets = hourly_distribution(deliveries)

        assert all(b.count > 0 for b in buckets)
        assert sum(b.count for b in buckets) == len(deliveries)
        assert len(buckets) == 4

    def test_empty_input(self):
        """Test that no deliveries yields no buckets."""
        assert hourly_distribution([]) == []

    def test_hour_uses_local_timezone(self, delivery_factory):
        """Test that aware timestamps are converted before bucketing."""
        deliveries = [delivery_factory(created=datetime(2024, 1, 15, 22, 30, tzinfo=timezone.utc))]

        buckets = hourly_distribution(deliveries, ZoneInfo("Europe/Istanbul"))

        assert buckets[0].hour == 1

    def test_naive_timestamps_taken_as_local(self, delivery_factory):
        """Test that naive timestamps are bucketed on their own clock."""
        deliveries = [delivery_factory(created=datetime(2024, 1, 15, 9, 15))]

        buckets = hourly_distribution(deliveries, ZoneInfo("Europe/Istanbul"))

        assert buckets[0].hour == 9


class TestHourlyMetrics:
    """Tests for hourly_metrics."""

    def test_success_rate_per_bucket(self, delivery_factory):
        """Test delivered share within each hour."""
        deliveries = [
            delivery_factory("DEL-1", created=at(9), status="DELIVERED"),
            delivery_factory("DEL-2", created=at(9, 30), status="FAILED"),
            delivery_factory("DEL-3", created=at(12), status="DELIVERED"),
        ]

        metrics = hourly_metrics(deliveries)

        assert [(m.hour, m.deliveries) for m in metrics] == [(9, 2), (12, 1)]
        assert metrics[0].success_rate == pytest.approx(50)
        assert metrics[1].success_rate == pytest.approx(100)


class TestCourierDistribution:
    """Tests for courier_distribution."""

    def test_active_and_completed_counts(self, delivery_factory):
        """Test classification and that cancelled/failed count in neither column."""
        deliveries = [
            delivery_factory("DEL-1", courier_id="a", status="DELIVERED", duration=20),
            delivery_factory("DEL-2", courier_id="a", status="PICKED_UP", duration=40),
            delivery_factory("DEL-3", courier_id="b", status="CANCELLED", duration=10),
            delivery_factory("DEL-4", courier_id="b", status="FAILED", duration=30),
        ]

        loads = {load.courier_id: load for load in courier_distribution(deliveries)}

        assert loads["a"].active_deliveries == 1
        assert loads["a"].completed_deliveries == 1
        assert loads["a"].average_time == 30
        assert loads["b"].active_deliveries == 0
        assert loads["b"].completed_deliveries == 0
        assert loads["b"].average_time == 20

    def test_each_courier_appears_once(self, delivery_factory):
        """Test that every courier id maps to exactly one bucket."""
        couriers = ["a", "b", "a", "c", "b", "a"]
        deliveries = [delivery_factory(f"DEL-{i}", courier_id=c) for i, c in enumerate(couriers)]

        ids = [load.courier_id for load in courier_distribution(deliveries)]

        assert sorted(ids) == ["a", "b", "c"]
        assert ids == ["a", "b", "c"]


class TestStatusDistribution:
    """Tests for status_distribution."""

    def test_zero_filled(self, delivery_factory):
        """Test that every status is present in the result."""
        deliveries = [
            delivery_factory("DEL-1", status="DELIVERED"),
            delivery_factory("DEL-2", status="DELIVERED"),
            delivery_factory("DEL-3", status="PENDING"),
        ]

        counts = status_distribution(deliveries)

        assert set(counts) == set(DeliveryStatus)
        assert counts[DeliveryStatus.DELIVERED] == 2
        assert counts[DeliveryStatus.PENDING] == 1
        assert counts[DeliveryStatus.FAILED] == 0
        assert sum(counts.values()) == len(deliveries)
