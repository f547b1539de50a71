"""
FastAPI dependency providers.

Services are constructed per request from the clients held on
``app.state``; nothing here is a module-level singleton.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException, Query, Request

from src.api.services.bigquery_service import BigQueryService
from src.api.services.delivery_service import DeliveryService
from src.api.services.record_store import DeliveryRecordStore
from src.api.services.zone_service import ZoneService
from src.common.config_loader import Config
from src.models.delivery import DeliveryStatus, TimeRange
from src.models.filters import DeliveryFilter, DeliveryLogFilter, ZoneFilter
from src.models.zone import ZoneStatus


def get_app_config(request: Request) -> Config:
    return request.app.state.config


def get_bq_service(request: Request, config: Config = Depends(get_app_config)) -> BigQueryService:
    """Get BigQuery service instance."""
    client = getattr(request.app.state, "bq_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return BigQueryService(
        client,
        config.gcp.project_id,
        config.bigquery.curated_dataset,
        timeout=config.bigquery.query_timeout_seconds,
    )


def get_record_store(
    bq: BigQueryService = Depends(get_bq_service),
    config: Config = Depends(get_app_config),
) -> DeliveryRecordStore:
    return DeliveryRecordStore(
        bq,
        deliveries_table=config.bigquery.deliveries_table,
        delivery_logs_table=config.bigquery.delivery_logs_table,
        zones_table=config.bigquery.zones_table,
    )


def get_delivery_service(
    request: Request,
    store: DeliveryRecordStore = Depends(get_record_store),
    config: Config = Depends(get_app_config),
) -> DeliveryService:
    return DeliveryService(
        store,
        tz=ZoneInfo(config.analytics.timezone),
        metrics_client=getattr(request.app.state, "metrics_client", None),
    )


def get_zone_service(
    request: Request,
    store: DeliveryRecordStore = Depends(get_record_store),
    deliveries: DeliveryService = Depends(get_delivery_service),
    config: Config = Depends(get_app_config),
) -> ZoneService:
    return ZoneService(
        store,
        deliveries,
        tz=ZoneInfo(config.analytics.timezone),
        max_workers=config.analytics.max_concurrent_zones,
        metrics_client=getattr(request.app.state, "metrics_client", None),
    )


# Query filters. Malformed dates and unknown enum values fail FastAPI
# validation; an inverted date range raises InvalidFilterError.

def delivery_filter(
    start_date: datetime | None = Query(default=None, alias="startDate", description="Created on or after"),
    end_date: datetime | None = Query(default=None, alias="endDate", description="Created on or before"),
    courier_id: str | None = Query(default=None, alias="courierId", description="Filter by courier"),
    zone_id: str | None = Query(default=None, alias="zoneId", description="Filter by zone"),
    status: DeliveryStatus | None = Query(default=None, description="Filter by status"),
    time_range: TimeRange | None = Query(default=None, alias="timeRange", description="Trend label"),
) -> DeliveryFilter:
    return DeliveryFilter(
        start_date=start_date,
        end_date=end_date,
        courier_id=courier_id,
        zone_id=zone_id,
        status=status,
        time_range=time_range,
    )


def delivery_log_filter(
    delivery_id: str | None = Query(default=None, alias="deliveryId", description="Filter by delivery"),
    courier_id: str | None = Query(default=None, alias="courierId", description="Filter by courier"),
    zone_id: str | None = Query(default=None, alias="zoneId", description="Filter by zone"),
    status: DeliveryStatus | None = Query(default=None, description="Filter by status entered"),
    start_date: datetime | None = Query(default=None, alias="startDate", description="Logged on or after"),
    end_date: datetime | None = Query(default=None, alias="endDate", description="Logged on or before"),
    include_location: bool = Query(default=False, alias="includeLocation", description="Return coordinates"),
) -> DeliveryLogFilter:
    return DeliveryLogFilter(
        delivery_id=delivery_id,
        courier_id=courier_id,
        zone_id=zone_id,
        status=status,
        start_date=start_date,
        end_date=end_date,
        include_location=include_location,
    )


def zone_filter(
    status: ZoneStatus | None = Query(default=None, description="Filter by zone status"),
    start_date: datetime | None = Query(default=None, alias="startDate", description="Deliveries created on or after"),
    end_date: datetime | None = Query(default=None, alias="endDate", description="Deliveries created on or before"),
    include_metrics: bool = Query(default=False, alias="includeMetrics"),
    include_courier_distribution: bool = Query(default=False, alias="includeCourierDistribution"),
    include_hourly_metrics: bool = Query(default=False, alias="includeHourlyMetrics"),
) -> ZoneFilter:
    return ZoneFilter(
        status=status,
        start_date=start_date,
        end_date=end_date,
        include_metrics=include_metrics,
        include_courier_distribution=include_courier_distribution,
        include_hourly_metrics=include_hourly_metrics,
    )
