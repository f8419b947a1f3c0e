"""
Site model for customer websites.
"""
from copy import deepcopy
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, Enum, String

from app.models.base import Base, BaseModel, JSONDocument
from app.schemas.site_config import DEFAULT_CONFIG
from app.services.site_config import SiteConfig


class DeliveryType(str, PyEnum):
    AEM_EDGE = "aem_edge"
    AEM_CS = "aem_cs"
    OTHER = "other"


class Site(Base, BaseModel):
    """Site model representing a customer website and its audit configuration."""

    __tablename__ = "sites"

    base_url = Column(String(2048), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    delivery_type = Column(
        Enum(DeliveryType),
        default=DeliveryType.OTHER,
        nullable=False,
    )
    is_live = Column(Boolean, default=False, nullable=False)
    config = Column(JSONDocument, default=lambda: deepcopy(DEFAULT_CONFIG), nullable=False)

    def get_config(self) -> SiteConfig:
        """Resolve the stored document into a live ``SiteConfig``."""
        return SiteConfig.from_storage(self.config or deepcopy(DEFAULT_CONFIG))

    def set_config(self, config: SiteConfig) -> None:
        """Store the persisted facets of ``config``."""
        self.config = SiteConfig.to_storage(config)

    def __repr__(self) -> str:
        return f"<Site {self.base_url}>"
