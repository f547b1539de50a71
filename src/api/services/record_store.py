"""
Read-only access to delivery, delivery log and zone records.

Backed by the curated BigQuery tables written by the dispatch workflow:

    deliveries      one row per delivery, customer columns denormalized
    delivery_logs   append-only status transitions
    zones           zone definitions with a persisted metrics snapshot
"""

import json
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

from src.api.services.bigquery_service import BigQueryService
from src.common.exceptions import StorageError
from src.common.logging_utils import get_logger
from src.models.analytics import ZoneMetrics
from src.models.delivery import (
    Customer,
    Delivery,
    DeliveryLocation,
    DeliveryLogEntry,
    DeliveryLogMetadata,
    DeliveryMeasurements,
    DeliveryTimestamps,
)
from src.models.base import GeoPoint, Place
from src.models.filters import DeliveryFilter, DeliveryLogFilter
from src.models.zone import Zone, ZoneBoundary, ZoneStatus

logger = get_logger(__name__)

DELIVERY_COLUMNS = """
    id, courier_id, zone_id, status,
    created_at, assigned_at, picked_up_at, delivered_at, cancelled_at,
    distance_km, duration_minutes, actual_duration_minutes,
    pickup_lat, pickup_lng, pickup_address,
    delivery_lat, delivery_lng, delivery_address,
    customer_id, customer_name, customer_phone, customer_rating, customer_feedback
"""

ZONE_COLUMNS = """
    id, name, description, boundary, status, active_couriers,
    total_deliveries, completed_deliveries, active_deliveries,
    average_delivery_time, success_rate, customer_satisfaction, courier_efficiency
"""


def _where(conditions: list[str]) -> str:
    return f"WHERE {' AND '.join(conditions)}" if conditions else ""


def _date_bounds(
    column: str,
    start_date: datetime | None,
    end_date: datetime | None,
    conditions: list[str],
    parameters: dict[str, Any],
) -> None:
    """Append inclusive bounds on ``column``."""
    if start_date is not None:
        conditions.append(f"{column} >= @start_date")
        parameters["start_date"] = start_date
    if end_date is not None:
        conditions.append(f"{column} <= @end_date")
        parameters["end_date"] = end_date


@contextmanager
def _malformed_row(table: str, row: dict[str, Any]) -> Iterator[None]:
    """Surface a row that does not map onto its model as a storage fault."""
    try:
        yield
    except (KeyError, TypeError, ValueError) as e:
        # pydantic.ValidationError and json.JSONDecodeError are both ValueErrors
        logger.error("Malformed record", table=table, record_id=row.get("id"), error=str(e))
        raise StorageError(f"Malformed {table} record {row.get('id')!r}") from e


class DeliveryRecordStore:
    """Queries the curated delivery tables and maps rows to models."""

    def __init__(
        self,
        bq: BigQueryService,
        deliveries_table: str = "deliveries",
        delivery_logs_table: str = "delivery_logs",
        zones_table: str = "zones",
    ):
        self.bq = bq
        self.deliveries_table = bq.get_table_ref(deliveries_table)
        self.delivery_logs_table = bq.get_table_ref(delivery_logs_table)
        self.zones_table = bq.get_table_ref(zones_table)

    # Deliveries

    def list_deliveries(self, filters: DeliveryFilter) -> list[Delivery]:
        """Deliveries matching every set filter field, newest first."""
        conditions: list[str] = []
        parameters: dict[str, Any] = {}

        _date_bounds("created_at", filters.start_date, filters.end_date, conditions, parameters)
        if filters.courier_id:
            conditions.append("courier_id = @courier_id")
            parameters["courier_id"] = filters.courier_id
        if filters.zone_id:
            conditions.append("zone_id = @zone_id")
            parameters["zone_id"] = filters.zone_id
        if filters.status:
            conditions.append("status = @status")
            parameters["status"] = filters.status.value

        query = f"""
            SELECT {DELIVERY_COLUMNS}
            FROM {self.deliveries_table}
            {_where(conditions)}
            ORDER BY created_at DESC
        """
        rows = self.bq.execute_query(query, parameters)
        logger.debug("Fetched deliveries", row_count=len(rows), filters=list(parameters))
        return [self._map_delivery(row) for row in rows]

    def get_delivery(self, delivery_id: str) -> Delivery | None:
        query = f"""
            SELECT {DELIVERY_COLUMNS}
            FROM {self.deliveries_table}
            WHERE id = @delivery_id
            LIMIT 1
        """
        rows = self.bq.execute_query(query, {"delivery_id": delivery_id})
        return self._map_delivery(rows[0]) if rows else None

    def list_zone_deliveries(
        self,
        zone_ids: list[str],
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> dict[str, list[Delivery]]:
        """Deliveries of several zones in one query, grouped by zone id."""
        grouped: dict[str, list[Delivery]] = {zone_id: [] for zone_id in zone_ids}
        if not zone_ids:
            return grouped

        conditions = ["zone_id IN UNNEST(@zone_ids)"]
        parameters: dict[str, Any] = {"zone_ids": list(zone_ids)}
        _date_bounds("created_at", start_date, end_date, conditions, parameters)

        query = f"""
            SELECT {DELIVERY_COLUMNS}
            FROM {self.deliveries_table}
            {_where(conditions)}
            ORDER BY created_at DESC
        """
        for row in self.bq.execute_query(query, parameters):
            delivery = self._map_delivery(row)
            grouped.setdefault(delivery.zone_id, []).append(delivery)
        return grouped

    # Delivery logs

    def list_delivery_logs(self, filters: DeliveryLogFilter) -> list[DeliveryLogEntry]:
        """Log entries matching the filter, newest first."""
        conditions: list[str] = []
        parameters: dict[str, Any] = {}

        for field_name in ("delivery_id", "courier_id", "zone_id"):
            value = getattr(filters, field_name)
            if value:
                conditions.append(f"{field_name} = @{field_name}")
                parameters[field_name] = value
        if filters.status:
            conditions.append("status = @status")
            parameters["status"] = filters.status.value
        _date_bounds("timestamp", filters.start_date, filters.end_date, conditions, parameters)

        location_columns = ", lat, lng" if filters.include_location else ""
        query = f"""
            SELECT id, delivery_id, timestamp, status, courier_id, zone_id, reason, notes{location_columns}
            FROM {self.delivery_logs_table}
            {_where(conditions)}
            ORDER BY timestamp DESC
        """
        rows = self.bq.execute_query(query, parameters)
        return [self._map_log_entry(row) for row in rows]

    def list_delivery_log_entries(self, delivery_id: str) -> list[DeliveryLogEntry]:
        """All log entries of one delivery, oldest first."""
        query = f"""
            SELECT id, delivery_id, timestamp, status, courier_id, zone_id, reason, notes, lat, lng
            FROM {self.delivery_logs_table}
            WHERE delivery_id = @delivery_id
            ORDER BY timestamp ASC
        """
        rows = self.bq.execute_query(query, {"delivery_id": delivery_id})
        return [self._map_log_entry(row) for row in rows]

    # Zones

    def list_zones(self, status: ZoneStatus | None = None) -> list[Zone]:
        parameters: dict[str, Any] = {}
        conditions: list[str] = []
        if status:
            conditions.append("status = @status")
            parameters["status"] = status.value

        query = f"""
            SELECT {ZONE_COLUMNS}
            FROM {self.zones_table}
            {_where(conditions)}
            ORDER BY name
        """
        return [self._map_zone(row) for row in self.bq.execute_query(query, parameters)]

    def get_zone(self, zone_id: str) -> Zone | None:
        query = f"""
            SELECT {ZONE_COLUMNS}
            FROM {self.zones_table}
            WHERE id = @zone_id
            LIMIT 1
        """
        rows = self.bq.execute_query(query, {"zone_id": zone_id})
        return self._map_zone(rows[0]) if rows else None

    # Row mapping

    def _map_delivery(self, row: dict[str, Any]) -> Delivery:
        with _malformed_row("deliveries", row):
            return Delivery(
                id=row["id"],
                courier_id=row["courier_id"],
                zone_id=row["zone_id"],
                status=row["status"],
                timestamps=DeliveryTimestamps(
                    created=row["created_at"],
                    assigned=row.get("assigned_at"),
                    picked_up=row.get("picked_up_at"),
                    delivered=row.get("delivered_at"),
                    cancelled=row.get("cancelled_at"),
                ),
                metrics=DeliveryMeasurements(
                    distance=row.get("distance_km") or 0.0,
                    duration=row.get("duration_minutes") or 0.0,
                    actual_duration=row.get("actual_duration_minutes"),
                ),
                location=DeliveryLocation(
                    pickup=Place(
                        lat=row.get("pickup_lat") or 0.0,
                        lng=row.get("pickup_lng") or 0.0,
                        address=row.get("pickup_address") or "",
                    ),
                    delivery=Place(
                        lat=row.get("delivery_lat") or 0.0,
                        lng=row.get("delivery_lng") or 0.0,
                        address=row.get("delivery_address") or "",
                    ),
                ),
                customer=Customer(
                    id=row.get("customer_id") or "",
                    name=row.get("customer_name") or "",
                    phone=row.get("customer_phone") or "",
                    rating=row.get("customer_rating"),
                    feedback=row.get("customer_feedback"),
                ),
            )

    def _map_log_entry(self, row: dict[str, Any]) -> DeliveryLogEntry:
        with _malformed_row("delivery_logs", row):
            location = None
            if row.get("lat") is not None and row.get("lng") is not None:
                location = GeoPoint(lat=row["lat"], lng=row["lng"])

            return DeliveryLogEntry(
                id=row["id"],
                delivery_id=row["delivery_id"],
                timestamp=row["timestamp"],
                status=row["status"],
                location=location,
                metadata=DeliveryLogMetadata(
                    courier_id=row.get("courier_id") or "",
                    zone_id=row.get("zone_id") or "",
                    reason=row.get("reason"),
                    notes=row.get("notes"),
                ),
            )

    def _map_zone(self, row: dict[str, Any]) -> Zone:
        with _malformed_row("zones", row):
            boundary = row.get("boundary")
            if isinstance(boundary, str):
                boundary = json.loads(boundary)

            snapshot = ZoneMetrics(
                total_deliveries=row.get("total_deliveries") or 0,
                completed_deliveries=row.get("completed_deliveries") or 0,
                active_deliveries=row.get("active_deliveries") or 0,
                average_delivery_time=row.get("average_delivery_time") or 0.0,
                success_rate=row.get("success_rate") or 0.0,
                customer_satisfaction=row.get("customer_satisfaction") or 0.0,
                courier_efficiency=row.get("courier_efficiency") or 0.0,
            )

            return Zone(
                id=row["id"],
                name=row["name"],
                description=row.get("description"),
                boundaries=ZoneBoundary(**boundary) if boundary else ZoneBoundary(),
                status=row["status"],
                active_couriers=row.get("active_couriers") or 0,
                metrics=snapshot,
            )
