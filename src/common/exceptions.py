"""Error taxonomy for the analytics engine."""


class AnalyticsError(Exception):
    """Base exception for analytics engine errors."""


class NotFoundError(AnalyticsError):
    """A requested entity does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: str):
        super().__init__(f"{self.entity} '{entity_id}' not found")
        self.entity_id = entity_id


class DeliveryNotFoundError(NotFoundError):
    entity = "Delivery"


class ZoneNotFoundError(NotFoundError):
    entity = "Zone"


class InvalidFilterError(AnalyticsError):
    """Filter parameters are malformed or inconsistent."""


class StorageError(AnalyticsError):
    """The record store failed or could not be reached."""
