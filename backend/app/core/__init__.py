"""
Core utilities for SiteHub.
"""
from app.core.exceptions import (
    ConfigError,
    ConfigSchemaViolation,
    ConfigValidationError,
    ConflictError,
    InvalidImportConfigError,
    NotFoundError,
    UnknownImportTypeError,
    Violation,
)

__all__ = [
    "ConfigError",
    "ConfigSchemaViolation",
    "ConfigValidationError",
    "ConflictError",
    "InvalidImportConfigError",
    "NotFoundError",
    "UnknownImportTypeError",
    "Violation",
]
