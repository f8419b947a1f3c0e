"""
SQLAlchemy models for SiteHub.
"""
from app.models.base import Base, BaseModel
from app.models.site import DeliveryType, Site

__all__ = [
    "Base",
    "BaseModel",
    "DeliveryType",
    "Site",
]
