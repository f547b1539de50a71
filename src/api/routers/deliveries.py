"""Delivery analytics endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import delivery_filter, delivery_log_filter, get_delivery_service
from src.api.services.delivery_service import DeliveryService
from src.common.exceptions import StorageError
from src.common.logging_utils import get_logger
from src.models.analytics import DeliveryTimeline, DeliveryTrend
from src.models.delivery import Delivery, DeliveryLogEntry
from src.models.filters import DeliveryFilter, DeliveryLogFilter

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_model=list[Delivery])
def list_deliveries(
    filters: DeliveryFilter = Depends(delivery_filter),
    service: DeliveryService = Depends(get_delivery_service),
):
    """
    List deliveries with optional filtering, newest first.
    """
    try:
        return service.list_deliveries(filters)
    except StorageError as e:
        logger.error(f"Failed to fetch deliveries: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch deliveries")


@router.get("/trends", response_model=list[DeliveryTrend])
def get_delivery_trends(
    filters: DeliveryFilter = Depends(delivery_filter),
    service: DeliveryService = Depends(get_delivery_service),
):
    """Get a metrics snapshot with hourly distribution for the filtered deliveries."""
    try:
        return service.delivery_trends(filters)
    except StorageError as e:
        logger.error(f"Failed to fetch delivery trends: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch delivery trends")


@router.get("/logs", response_model=list[DeliveryLogEntry], response_model_exclude_none=True)
def get_delivery_logs(
    filters: DeliveryLogFilter = Depends(delivery_log_filter),
    service: DeliveryService = Depends(get_delivery_service),
):
    """
    Get raw status log entries for auditing.

    Coordinates are only returned with ``includeLocation=true``.
    """
    try:
        return service.delivery_logs(filters)
    except StorageError as e:
        logger.error(f"Failed to fetch delivery logs: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch delivery logs")


@router.get("/{delivery_id}", response_model=Delivery)
def get_delivery(
    delivery_id: str,
    service: DeliveryService = Depends(get_delivery_service),
):
    """Get details for a specific delivery."""
    try:
        return service.get_delivery(delivery_id)
    except StorageError as e:
        logger.error(f"Failed to fetch delivery: {e}", delivery_id=delivery_id)
        raise HTTPException(status_code=500, detail="Failed to fetch delivery")


@router.get("/{delivery_id}/timeline", response_model=DeliveryTimeline)
def get_delivery_timeline(
    delivery_id: str,
    service: DeliveryService = Depends(get_delivery_service),
):
    """
    Get the status timeline of a delivery.

    Returns one event per status transition with time spent in each status.
    """
    try:
        return service.delivery_timeline(delivery_id)
    except StorageError as e:
        logger.error(f"Failed to fetch delivery timeline: {e}", delivery_id=delivery_id)
        raise HTTPException(status_code=500, detail="Failed to fetch delivery timeline")
