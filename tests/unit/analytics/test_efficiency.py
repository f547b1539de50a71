"""
Unit tests for courier efficiency scoring.
"""

import pytest

from src.analytics import courier_efficiency


class TestCourierEfficiency:
    """Tests for courier_efficiency."""

    def test_single_courier(self, delivery_factory):
        """Test km per minute scaled by 100 for one delivery."""
        deliveries = [delivery_factory(distance=10, duration=20)]

        assert courier_efficiency(deliveries) == 50

    def test_uses_actual_duration(self, delivery_factory):
        """Test that actual duration replaces the planned one."""
        deliveries = [delivery_factory(distance=10, duration=20, actual_duration=40)]

        assert courier_efficiency(deliveries) == 25

    def test_couriers_weigh_equally(self, delivery_factory):
        """Test that the zone score is an unweighted mean across couriers."""
        deliveries = [
            delivery_factory("DEL-1", courier_id="fast", distance=10, duration=20),
            delivery_factory("DEL-2", courier_id="slow", distance=2, duration=20),
            delivery_factory("DEL-3", courier_id="slow", distance=2, duration=20),
            delivery_factory("DEL-4", courier_id="slow", distance=2, duration=20),
        ]

        # fast: 50, slow: 10
        assert courier_efficiency(deliveries) == pytest.approx(30)

    def test_zero_time_courier_scores_zero(self, delivery_factory):
        """Test the division-by-zero guard for a courier with no recorded time."""
        deliveries = [
            delivery_factory("DEL-1", courier_id="idle", distance=3, duration=0),
            delivery_factory("DEL-2", courier_id="busy", distance=10, duration=20),
        ]

        assert courier_efficiency(deliveries) == pytest.approx(25)

    def test_empty_input(self):
        """Test that no deliveries yields 0."""
        assert courier_efficiency([]) == 0
