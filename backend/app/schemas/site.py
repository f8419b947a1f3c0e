"""
Site schemas.
"""
from typing import Any

from pydantic import Field

from app.models.site import DeliveryType
from app.schemas.common import BaseSchema, IDSchema, TimestampSchema


class SiteCreate(BaseSchema):
    """Create site request."""

    base_url: str = Field(min_length=8, max_length=2048, pattern=r"^https?://")
    name: str | None = Field(default=None, max_length=255)
    delivery_type: DeliveryType = DeliveryType.OTHER
    is_live: bool = False
    config: dict[str, Any] | None = None


class SiteUpdate(BaseSchema):
    """Update site request."""

    name: str | None = None
    delivery_type: DeliveryType | None = None
    is_live: bool | None = None


class SiteResponse(IDSchema, TimestampSchema):
    """Site response."""

    base_url: str
    name: str | None
    delivery_type: DeliveryType
    is_live: bool
    config: dict[str, Any]
