"""
Custom exceptions for SiteHub.
"""
from dataclasses import dataclass, field
from typing import Any

from fastapi import HTTPException, status


@dataclass(frozen=True)
class Violation:
    """A single configuration rule violation."""

    message: str
    path: tuple[str | int, ...]
    type: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "path": list(self.path),
            "type": self.type,
            "context": self.context,
        }


class ConfigError(ValueError):
    """Base class for site configuration errors."""


class ConfigSchemaViolation(ConfigError):
    """Structured list of violations behind a failed validation."""

    def __init__(self, details: list[Violation]):
        self.details = details
        super().__init__(". ".join(v.message for v in details))


class ConfigValidationError(ConfigError):
    """Raised when a configuration document fails schema validation.

    The structured violations are available on ``details`` and on the chained
    ``__cause__`` (a :class:`ConfigSchemaViolation`).
    """

    prefix = "Configuration validation error"

    def __init__(self, violation: ConfigSchemaViolation):
        self.details = violation.details
        super().__init__(f"{self.prefix}: {violation}")


class InvalidImportConfigError(ConfigValidationError):
    """Raised when a single import job body does not match its schema."""

    prefix = "Invalid import config"


class UnknownImportTypeError(ConfigError):
    """Raised when an import type has no schema."""

    def __init__(self, import_type: str):
        self.import_type = import_type
        super().__init__(f"Unknown import type: {import_type}")


class NotFoundError(HTTPException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found"
        )


class ConflictError(HTTPException):
    """Conflict exception (e.g., duplicate resource)."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail
        )
