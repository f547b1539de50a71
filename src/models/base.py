"""Base model and shared value types for the analytics data model."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base class for all records and response payloads.

    Fields are declared in snake_case and serialized in camelCase, matching
    the JSON contract of the dashboard clients. Either spelling is accepted
    on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeoPoint(ApiModel):
    """Geographic coordinate."""

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")


class Place(GeoPoint):
    """Coordinate with a free-text address."""

    address: str = Field(default="", description="Street address")
