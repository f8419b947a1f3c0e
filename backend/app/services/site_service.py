"""
Site service for business logic.
"""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.site import Site
from app.schemas.site import SiteCreate, SiteUpdate
from app.services.site_config import SiteConfig

logger = logging.getLogger(__name__)


class SiteService:
    """Service for site operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, site_id: UUID) -> Site | None:
        """Get site by ID."""
        result = await self.db.execute(select(Site).where(Site.id == site_id))
        return result.scalar_one_or_none()

    async def get_by_base_url(self, base_url: str) -> Site | None:
        """Get site by base URL."""
        result = await self.db.execute(
            select(Site).where(Site.base_url == base_url.rstrip("/"))
        )
        return result.scalar_one_or_none()

    async def list_sites(
        self,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
    ) -> tuple[list[Site], int]:
        """List sites with pagination."""
        query = select(Site)
        count_query = select(func.count(Site.id))

        if search:
            search_filter = Site.name.ilike(f"%{search}%") | Site.base_url.ilike(f"%{search}%")
            query = query.where(search_filter)
            count_query = count_query.where(search_filter)

        total_result = await self.db.execute(count_query)
        total = total_result.scalar()

        query = query.order_by(Site.created_at.desc(), Site.base_url)
        query = query.offset((page - 1) * per_page).limit(per_page)
        result = await self.db.execute(query)
        sites = result.scalars().all()

        return list(sites), total

    async def create(self, data: SiteCreate) -> Site:
        """Create a new site.

        Raises:
            ConfigValidationError: if the initial configuration is invalid.
        """
        site = Site(
            base_url=data.base_url.rstrip("/"),
            name=data.name,
            delivery_type=data.delivery_type,
            is_live=data.is_live,
        )
        if data.config is not None:
            site.set_config(SiteConfig(data.config))
        self.db.add(site)
        await self.db.flush()
        await self.db.refresh(site)
        logger.info(f"Created site {site.id} ({site.base_url})")
        return site

    async def update(self, site_id: UUID, data: SiteUpdate) -> Site | None:
        """Update a site."""
        site = await self.get_by_id(site_id)
        if not site:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(site, field, value)

        await self.db.flush()
        await self.db.refresh(site)
        return site

    async def delete(self, site_id: UUID) -> bool:
        """Delete a site together with its configuration."""
        site = await self.get_by_id(site_id)
        if not site:
            return False

        await self.db.delete(site)
        await self.db.flush()
        logger.info(f"Deleted site {site_id}")
        return True

    async def replace_config(self, site_id: UUID, data: dict[str, Any]) -> Site | None:
        """Validate and store a new configuration document for a site.

        Raises:
            ConfigValidationError: if the document is invalid; nothing is stored.
        """
        site = await self.get_by_id(site_id)
        if not site:
            return None

        site.set_config(SiteConfig(data))
        await self.db.flush()
        await self.db.refresh(site)
        logger.info(f"Replaced configuration of site {site_id}")
        return site

    async def toggle_import(
        self,
        site_id: UUID,
        import_type: str,
        enable: bool,
        overrides: dict[str, Any] | None = None,
    ) -> Site | None:
        """Enable or disable an import for a site and persist the result.

        Raises:
            UnknownImportTypeError: if ``import_type`` is not known.
            ConfigValidationError: if the resulting configuration is invalid;
                nothing is stored.
        """
        site = await self.get_by_id(site_id)
        if not site:
            return None

        config = site.get_config()
        if enable:
            config.enable_import(import_type, overrides)
        else:
            config.disable_import(import_type)

        site.set_config(config)
        await self.db.flush()
        await self.db.refresh(site)
        logger.info(
            f"{'Enabled' if enable else 'Disabled'} import {import_type} for site {site_id}"
        )
        return site
