"""
Site configuration schemas.

Declarative rule sets for the configuration document stored on a site: slack
integration, per-handler settings, import jobs, fetch overrides and brand
metadata. Field aliases are the camelCase keys of the stored JSON document.
"""
from typing import Annotated, Any, Literal, Union
from urllib.parse import urlsplit

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _check_uri(value: str) -> str:
    parts = urlsplit(value)
    if not parts.scheme or not parts.netloc:
        raise PydanticCustomError("uri", "must be a valid uri")
    return value


AbsoluteURI = Annotated[str, AfterValidator(_check_uri)]

ImportSource = Literal["ahrefs", "google", "rum"]
ImportDestination = Literal["default"]


class ClosedSchema(BaseModel):
    """Schema that rejects unknown keys.

    Known fields default to None when absent; an explicit null fails their
    type check.
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel)


class OpenSchema(BaseModel):
    """Schema that keeps unknown keys verbatim. Known fields follow the
    same null rule as :class:`ClosedSchema`.
    """

    model_config = ConfigDict(extra="allow", alias_generator=to_camel)


# ============================================================================
# Slack / handlers
# ============================================================================

class SlackConfig(ClosedSchema):
    workspace: str = None
    channel: str = None
    invited_user_count: StrictInt = Field(default=None, ge=0)


class URLOverride(ClosedSchema):
    """Broken link target mapped to its replacement."""

    broken_target_url: str = Field(default=None, alias="brokenTargetURL")
    target_url: str = Field(default=None, alias="targetURL")


class GroupedURL(ClosedSchema):
    name: str = None
    pattern: str = None


class LatestMetrics(ClosedSchema):
    page_views_change: StrictFloat = None
    ctr_change: StrictFloat = None
    projected_traffic_value: StrictFloat = None


class HandlerConfig(OpenSchema):
    """Settings for a single audit handler, keyed by handler type."""

    mentions: dict[str, list[str]] = None
    excluded_urls: list[str] = Field(default=None, alias="excludedURLs")
    included_urls: list[str] = Field(default=None, alias="includedURLs")
    manual_overwrites: list[URLOverride] = None
    fixed_urls: list[URLOverride] = Field(default=None, alias="fixedURLs")
    grouped_urls: list[GroupedURL] = Field(default=None, alias="groupedURLs")
    moving_avg_threshold: StrictFloat = Field(default=None, ge=1)
    percentage_change_threshold: StrictFloat = Field(default=None, ge=1)
    latest_metrics: LatestMetrics = None


class FetchConfig(ClosedSchema):
    headers: dict[str, str] = None
    override_base_url: AbsoluteURI = Field(default=None, alias="overrideBaseURL")


class BrandConfig(ClosedSchema):
    brand_id: str


# ============================================================================
# Import jobs
# ============================================================================

class ImportJobBase(ClosedSchema):
    """Fields shared by every import job type."""

    type: str
    destinations: list[ImportDestination]
    sources: list[ImportSource]
    enabled: StrictBool = True
    url: AbsoluteURI = None
    page_url: str = None

    @model_validator(mode="before")
    @classmethod
    def _default_enabled(cls, data: Any) -> Any:
        # Defaults are only dumped when present in the input
        if isinstance(data, dict) and "enabled" not in data:
            data = {**data, "enabled": True}
        return data


class OrganicKeywordsImport(ImportJobBase):
    type: Literal["organic-keywords"]
    geo: str = None
    limit: StrictInt = Field(default=None, ge=1, le=100)


class OrganicTrafficImport(ImportJobBase):
    type: Literal["organic-traffic"]


class AllTrafficImport(ImportJobBase):
    type: Literal["all-traffic"]


class TopPagesImport(ImportJobBase):
    type: Literal["top-pages"]
    geo: str = None
    limit: StrictInt = Field(default=None, ge=1, le=2000)


ImportJob = Annotated[
    Union[OrganicKeywordsImport, OrganicTrafficImport, AllTrafficImport, TopPagesImport],
    Field(discriminator="type"),
]

IMPORT_SCHEMAS: dict[str, type[ImportJobBase]] = {
    "organic-keywords": OrganicKeywordsImport,
    "organic-traffic": OrganicTrafficImport,
    "all-traffic": AllTrafficImport,
    "top-pages": TopPagesImport,
}

IMPORT_TYPES: tuple[str, ...] = tuple(IMPORT_SCHEMAS)

DEFAULT_IMPORT_CONFIGS: dict[str, dict[str, Any]] = {
    "organic-keywords": {
        "type": "organic-keywords",
        "destinations": ["default"],
        "sources": ["ahrefs"],
        "enabled": True,
    },
    "organic-traffic": {
        "type": "organic-traffic",
        "destinations": ["default"],
        "sources": ["ahrefs"],
        "enabled": True,
    },
    "all-traffic": {
        "type": "all-traffic",
        "destinations": ["default"],
        "sources": ["rum"],
        "enabled": True,
    },
    "top-pages": {
        "type": "top-pages",
        "destinations": ["default"],
        "sources": ["ahrefs"],
        "enabled": True,
        "geo": "global",
    },
}


# ============================================================================
# Aggregate document
# ============================================================================

class SiteConfigSchema(OpenSchema):
    """The configuration document attached to a site."""

    slack: SlackConfig = None
    imports: list[ImportJob] = None
    handlers: dict[str, HandlerConfig] = None
    fetch_config: FetchConfig = None
    brand_config: BrandConfig = None


DEFAULT_CONFIG: dict[str, Any] = {
    "slack": {},
    "handlers": {},
}
