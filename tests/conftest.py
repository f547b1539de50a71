"""
Pytest configuration and fixtures for the test suite.
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# Set environment for testing
os.environ["ENVIRONMENT"] = "test"
os.environ["GCP_PROJECT"] = "test-project"

BASE_TIME = datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


def make_delivery(
    delivery_id: str = "DEL-001",
    status: str = "DELIVERED",
    courier_id: str = "courier-1",
    zone_id: str = "zone-1",
    created: datetime = BASE_TIME,
    distance: float = 5.0,
    duration: float = 30.0,
    actual_duration: float | None = None,
    rating: float | None = None,
):
    """Build a Delivery with sensible defaults for everything not under test."""
    from src.models.delivery import Delivery

    return Delivery(
        id=delivery_id,
        courier_id=courier_id,
        zone_id=zone_id,
        status=status,
        timestamps={"created": created},
        metrics={"distance": distance, "duration": duration, "actual_duration": actual_duration},
        location={
            "pickup": {"lat": 41.0082, "lng": 28.9784, "address": "Istiklal Cd. 10"},
            "delivery": {"lat": 41.0151, "lng": 28.9795, "address": "Galata Kulesi Sk. 3"},
        },
        customer={"id": f"cust-{delivery_id}", "name": "Ayse Yilmaz", "phone": "+905551112233", "rating": rating},
    )


def make_log_entry(
    status: str,
    timestamp: datetime,
    delivery_id: str = "DEL-001",
    entry_id: str | None = None,
    location: dict[str, float] | None = None,
):
    """Build a DeliveryLogEntry."""
    from src.models.delivery import DeliveryLogEntry

    return DeliveryLogEntry(
        id=entry_id or f"log-{status.lower()}",
        delivery_id=delivery_id,
        timestamp=timestamp,
        status=status,
        location=location,
        metadata={"courier_id": "courier-1", "zone_id": "zone-1"},
    )


@pytest.fixture
def zone_deliveries():
    """Three deliveries in one zone: delivered, in transit, cancelled."""
    return [
        make_delivery("DEL-001", status="DELIVERED", duration=30, actual_duration=25, rating=5),
        make_delivery("DEL-002", status="IN_TRANSIT", duration=40, rating=None),
        make_delivery("DEL-003", status="CANCELLED", duration=15, rating=0),
    ]


@pytest.fixture
def delivery_row() -> dict[str, Any]:
    """A raw row from the deliveries table."""
    return {
        "id": "DEL-001",
        "courier_id": "courier-1",
        "zone_id": "zone-1",
        "status": "DELIVERED",
        "created_at": BASE_TIME,
        "assigned_at": BASE_TIME + timedelta(minutes=2),
        "picked_up_at": BASE_TIME + timedelta(minutes=10),
        "delivered_at": BASE_TIME + timedelta(minutes=35),
        "cancelled_at": None,
        "distance_km": 4.2,
        "duration_minutes": 30.0,
        "actual_duration_minutes": 33.0,
        "pickup_lat": 41.0082,
        "pickup_lng": 28.9784,
        "pickup_address": "Istiklal Cd. 10",
        "delivery_lat": 41.0151,
        "delivery_lng": 28.9795,
        "delivery_address": "Galata Kulesi Sk. 3",
        "customer_id": "cust-001",
        "customer_name": "Ayse Yilmaz",
        "customer_phone": "+905551112233",
        "customer_rating": 4.5,
        "customer_feedback": None,
    }


@pytest.fixture
def zone_row() -> dict[str, Any]:
    """A raw row from the zones table."""
    return {
        "id": "zone-1",
        "name": "Beyoglu",
        "description": "Central district",
        "boundary": '{"type": "Polygon", "coordinates": [[28.97, 41.03], [28.99, 41.03], [28.99, 41.02], [28.97, 41.03]]}',
        "status": "ACTIVE",
        "active_couriers": 4,
        "total_deliveries": 120,
        "completed_deliveries": 100,
        "active_deliveries": 6,
        "average_delivery_time": 28.5,
        "success_rate": 83.3,
        "customer_satisfaction": 4.1,
        "courier_efficiency": 21.0,
    }


@pytest.fixture
def mock_bq_service():
    """Return a mock BigQueryService with real table reference formatting."""
    from src.api.services.bigquery_service import BigQueryService

    service = MagicMock(spec=BigQueryService)
    service.get_table_ref.side_effect = lambda table: f"`test-project.curated.{table}`"
    service.execute_query.return_value = []
    return service


@pytest.fixture
def mock_store():
    """Return a mock DeliveryRecordStore."""
    from src.api.services.record_store import DeliveryRecordStore

    store = MagicMock(spec=DeliveryRecordStore)
    store.list_deliveries.return_value = []
    store.list_zones.return_value = []
    store.list_zone_deliveries.return_value = {}
    store.list_delivery_log_entries.return_value = []
    store.list_delivery_logs.return_value = []
    return store


@pytest.fixture
def test_config_dir(tmp_path) -> Path:
    """Create a temporary config directory with test configs."""
    import yaml

    config_dir = tmp_path / "config"
    config_dir.mkdir()

    base_config = {
        "log_level": "INFO",
        "gcp": {"project_id": "${TEST_GCP_PROJECT:-base-project}"},
        "bigquery": {"curated_dataset": "curated", "query_timeout_seconds": 30},
        "analytics": {"timezone": "UTC", "max_concurrent_zones": 8},
        "api": {"cors_origins": ["${TEST_CORS_ORIGIN:-https://dashboard.example.com}"]},
    }
    test_config = {
        "log_level": "DEBUG",
        "analytics": {"timezone": "Europe/Istanbul"},
    }

    with open(config_dir / "base.yaml", "w") as f:
        yaml.dump(base_config, f)
    with open(config_dir / "test.yaml", "w") as f:
        yaml.dump(test_config, f)

    return config_dir


@pytest.fixture
def delivery_factory():
    """Return the Delivery builder."""
    return make_delivery


@pytest.fixture
def log_entry_factory():
    """Return the DeliveryLogEntry builder."""
    return make_log_entry
