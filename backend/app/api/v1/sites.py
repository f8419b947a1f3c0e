"""
Site management endpoints.
"""
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.database import get_db
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.site import SiteCreate, SiteResponse, SiteUpdate
from app.services.site_service import SiteService

router = APIRouter(prefix="/sites", tags=["Sites"])


@router.get("", response_model=PaginatedResponse[SiteResponse])
async def list_sites(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100),
    search: str | None = None,
):
    """List sites."""
    service = SiteService(db)
    sites, total = await service.list_sites(page, per_page, search)

    return PaginatedResponse.create(
        items=[SiteResponse.model_validate(s) for s in sites],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post("", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_site(
    data: SiteCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a new site, optionally with an initial configuration."""
    service = SiteService(db)

    existing = await service.get_by_base_url(data.base_url)
    if existing:
        raise ConflictError("Site with this base URL already exists")

    site = await service.create(data)
    return SiteResponse.model_validate(site)


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(
    site_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a site by ID."""
    service = SiteService(db)
    site = await service.get_by_id(site_id)

    if not site:
        raise NotFoundError("Site")

    return SiteResponse.model_validate(site)


@router.patch("/{site_id}", response_model=SiteResponse)
async def update_site(
    site_id: UUID,
    data: SiteUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a site."""
    service = SiteService(db)
    site = await service.update(site_id, data)

    if not site:
        raise NotFoundError("Site")

    return SiteResponse.model_validate(site)


@router.delete("/{site_id}", response_model=MessageResponse)
async def delete_site(
    site_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a site."""
    service = SiteService(db)
    deleted = await service.delete(site_id)

    if not deleted:
        raise NotFoundError("Site")

    return MessageResponse(message="Site deleted successfully")


# ============================================================================
# Configuration
# ============================================================================

@router.get("/{site_id}/config")
async def get_site_config(
    site_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """Get the configuration document of a site."""
    service = SiteService(db)
    site = await service.get_by_id(site_id)

    if not site:
        raise NotFoundError("Site")

    return site.config


@router.put("/{site_id}/config")
async def replace_site_config(
    site_id: UUID,
    data: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """Replace the configuration document of a site."""
    service = SiteService(db)
    site = await service.replace_config(site_id, data)

    if not site:
        raise NotFoundError("Site")

    return site.config


@router.post("/{site_id}/imports/{import_type}", response_model=SiteResponse)
async def enable_site_import(
    site_id: UUID,
    import_type: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    overrides: Annotated[dict[str, Any] | None, Body()] = None,
):
    """Enable an import for a site, replacing any existing one of the same type."""
    service = SiteService(db)
    site = await service.toggle_import(site_id, import_type, True, overrides)

    if not site:
        raise NotFoundError("Site")

    return SiteResponse.model_validate(site)


@router.delete("/{site_id}/imports/{import_type}", response_model=SiteResponse)
async def disable_site_import(
    site_id: UUID,
    import_type: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Disable an import for a site."""
    service = SiteService(db)
    site = await service.toggle_import(site_id, import_type, False)

    if not site:
        raise NotFoundError("Site")

    return SiteResponse.model_validate(site)
