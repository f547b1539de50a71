"""Zone listing and performance endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_zone_service, zone_filter
from src.api.services.zone_service import ZoneService
from src.common.exceptions import StorageError
from src.common.logging_utils import get_logger
from src.models.analytics import ZonePerformance
from src.models.filters import ZoneFilter
from src.models.zone import Zone

logger = get_logger(__name__)

router = APIRouter()


@router.get("/", response_model=list[Zone], response_model_exclude_none=True)
def list_zones(
    filters: ZoneFilter = Depends(zone_filter),
    service: ZoneService = Depends(get_zone_service),
):
    """
    List zones, optionally enriched with freshly computed metrics,
    courier distribution and hourly metrics.
    """
    try:
        return service.list_zones(filters)
    except StorageError as e:
        logger.error(f"Failed to fetch zones: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch zones")


@router.get("/performance/trends", response_model=list[ZonePerformance])
def get_zone_performance_trends(
    filters: ZoneFilter = Depends(zone_filter),
    service: ZoneService = Depends(get_zone_service),
):
    """Get a performance snapshot for every zone."""
    try:
        return service.zone_performance_trends(filters)
    except StorageError as e:
        logger.error(f"Failed to fetch zone performance trends: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch zone performance trends")


@router.get("/{zone_id}/performance", response_model=ZonePerformance)
def get_zone_performance(
    zone_id: str,
    filters: ZoneFilter = Depends(zone_filter),
    service: ZoneService = Depends(get_zone_service),
):
    """Get a performance snapshot for a single zone."""
    try:
        return service.zone_performance(zone_id, filters)
    except StorageError as e:
        logger.error(f"Failed to fetch zone performance: {e}", zone_id=zone_id)
        raise HTTPException(status_code=500, detail="Failed to fetch zone performance")
