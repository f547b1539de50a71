"""Common utilities shared across the platform."""

from src.common.config_loader import Config, ConfigLoader, get_config
from src.common.exceptions import (
    AnalyticsError,
    DeliveryNotFoundError,
    InvalidFilterError,
    NotFoundError,
    StorageError,
    ZoneNotFoundError,
)
from src.common.logging_utils import get_logger, setup_logging
from src.common.metrics import MetricsClient

__all__ = [
    "Config",
    "ConfigLoader",
    "get_config",
    "get_logger",
    "setup_logging",
    "MetricsClient",
    "AnalyticsError",
    "DeliveryNotFoundError",
    "InvalidFilterError",
    "NotFoundError",
    "StorageError",
    "ZoneNotFoundError",
]
