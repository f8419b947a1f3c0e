"""
Pydantic schemas for SiteHub API.

Request/response schemas for sites live in ``app.schemas.site``; they depend on
the models and are imported from there directly.
"""
from app.schemas.common import (
    BaseSchema,
    IDSchema,
    TimestampSchema,
    PaginatedResponse,
    MessageResponse,
    ErrorResponse,
)
from app.schemas.site_config import (
    DEFAULT_CONFIG,
    DEFAULT_IMPORT_CONFIGS,
    IMPORT_SCHEMAS,
    IMPORT_TYPES,
    SiteConfigSchema,
)

__all__ = [
    "BaseSchema",
    "IDSchema",
    "TimestampSchema",
    "PaginatedResponse",
    "MessageResponse",
    "ErrorResponse",
    "DEFAULT_CONFIG",
    "DEFAULT_IMPORT_CONFIGS",
    "IMPORT_SCHEMAS",
    "IMPORT_TYPES",
    "SiteConfigSchema",
]
