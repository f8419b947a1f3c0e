"""
Site configuration accessor.

``SiteConfig`` wraps a validated configuration document and exposes typed
getters and setters for each facet. Leaf setters on handler settings write
straight into the document; setters touching closed-shape structures
(grouped URLs, imports, fetch and brand config) re-validate the whole document
afterwards and raise without rolling the change back.
"""
from copy import deepcopy
from typing import Any

from app.core.exceptions import UnknownImportTypeError
from app.schemas.site_config import DEFAULT_IMPORT_CONFIGS
from app.services.config_validator import validate_configuration, validate_import_config

STORED_FACETS = ("slack", "handlers", "imports", "fetchConfig", "brandConfig")


class SiteConfig:
    """Accessor over the configuration document of a site."""

    __slots__ = ("_state",)

    def __init__(self, data: dict[str, Any] | None = None):
        self._state: dict[str, Any] = validate_configuration(data)

    def __repr__(self) -> str:
        return f"<SiteConfig {self._state!r}>"

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def from_storage(cls, raw: dict[str, Any] | None) -> "SiteConfig":
        """Build a config from its stored document."""
        return cls(raw)

    @staticmethod
    def to_storage(config: "SiteConfig") -> dict[str, Any]:
        """Project the persisted facets of a config into a plain document.

        Only ``slack``, ``handlers``, ``imports``, ``fetchConfig`` and
        ``brandConfig`` are stored; absent facets are left out.
        """
        facets = {
            "slack": config.get_slack_config(),
            "handlers": config.get_handlers(),
            "imports": config.get_imports(),
            "fetchConfig": config.get_fetch_config(),
            "brandConfig": config.get_brand_config(),
        }
        return {key: value for key, value in facets.items() if value is not None}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get(self, key: str) -> Any:
        return deepcopy(self._state.get(key))

    def _handler_value(self, handler_type: str, key: str) -> Any:
        handler = (self._state.get("handlers") or {}).get(handler_type)
        if not isinstance(handler, dict):
            return None
        return deepcopy(handler.get(key))

    def _ensure_handler(self, handler_type: str) -> dict[str, Any]:
        if not isinstance(self._state.get("handlers"), dict):
            self._state["handlers"] = {}
        handlers = self._state["handlers"]
        if not isinstance(handlers.get(handler_type), dict):
            handlers[handler_type] = {}
        return handlers[handler_type]

    def _revalidate(self) -> None:
        self._state = validate_configuration(self._state)

    # ------------------------------------------------------------------
    # Slack
    # ------------------------------------------------------------------

    def get_slack_config(self) -> dict[str, Any] | None:
        """Get the slack record."""
        return self._get("slack")

    def is_internal_customer(self) -> bool:
        """Check whether the site belongs to the internal slack workspace."""
        slack = self._state.get("slack") or {}
        return slack.get("workspace") == "internal"

    def update_slack_config(
        self,
        channel: str | None,
        workspace: str | None,
        invited_user_count: int | None = None,
    ) -> None:
        """Replace the slack record."""
        slack = {
            "channel": channel,
            "workspace": workspace,
            "invitedUserCount": invited_user_count,
        }
        self._state["slack"] = {key: value for key, value in slack.items() if value is not None}

    def get_slack_mentions(self, handler_type: str) -> list[str] | None:
        """Get the slack users mentioned for a handler."""
        mentions = self._handler_value(handler_type, "mentions")
        if not isinstance(mentions, dict):
            return None
        return mentions.get("slack")

    def update_slack_mentions(self, handler_type: str, mentions: list[str]) -> None:
        """Set the slack users mentioned for a handler."""
        handler = self._ensure_handler(handler_type)
        if not isinstance(handler.get("mentions"), dict):
            handler["mentions"] = {}
        handler["mentions"]["slack"] = mentions

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def get_handlers(self) -> dict[str, Any] | None:
        """Get all handler settings keyed by handler type."""
        return self._get("handlers")

    def get_handler_config(self, handler_type: str) -> dict[str, Any] | None:
        """Get the settings of a single handler."""
        return deepcopy((self._state.get("handlers") or {}).get(handler_type))

    def get_excluded_urls(self, handler_type: str) -> list[str] | None:
        """Get URLs a handler skips."""
        return self._handler_value(handler_type, "excludedURLs")

    def update_excluded_urls(self, handler_type: str, excluded_urls: list[str]) -> None:
        """Set URLs a handler skips."""
        self._ensure_handler(handler_type)["excludedURLs"] = excluded_urls

    def get_included_urls(self, handler_type: str) -> list[str] | None:
        """Get URLs a handler always covers."""
        return self._handler_value(handler_type, "includedURLs")

    def update_included_urls(self, handler_type: str, included_urls: list[str]) -> None:
        """Set URLs a handler always covers."""
        self._ensure_handler(handler_type)["includedURLs"] = included_urls

    def get_manual_overwrites(self, handler_type: str) -> list[dict[str, str]] | None:
        """Get manually mapped broken link targets."""
        return self._handler_value(handler_type, "manualOverwrites")

    def update_manual_overwrites(self, handler_type: str, manual_overwrites: list[dict[str, str]]) -> None:
        """Set manually mapped broken link targets."""
        self._ensure_handler(handler_type)["manualOverwrites"] = manual_overwrites

    def get_fixed_urls(self, handler_type: str) -> list[dict[str, str]] | None:
        """Get broken link targets already fixed."""
        return self._handler_value(handler_type, "fixedURLs")

    def update_fixed_urls(self, handler_type: str, fixed_urls: list[dict[str, str]]) -> None:
        """Set broken link targets already fixed."""
        self._ensure_handler(handler_type)["fixedURLs"] = fixed_urls

    def get_latest_metrics(self, handler_type: str) -> dict[str, float] | None:
        """Get the latest metrics recorded for a handler."""
        return self._handler_value(handler_type, "latestMetrics")

    def update_latest_metrics(self, handler_type: str, latest_metrics: dict[str, float]) -> None:
        """Set the latest metrics recorded for a handler."""
        self._ensure_handler(handler_type)["latestMetrics"] = latest_metrics

    def get_grouped_urls(self, handler_type: str) -> Any:
        """Get URL groups of a handler."""
        return self._handler_value(handler_type, "groupedURLs")

    def update_grouped_urls(self, handler_type: str, grouped_urls: Any) -> None:
        """Set grouped URLs and re-validate the document.

        Raises:
            ConfigValidationError: if the document no longer validates. The
                rejected value stays visible through ``get_grouped_urls``.
        """
        self._ensure_handler(handler_type)["groupedURLs"] = grouped_urls
        self._revalidate()

    # ------------------------------------------------------------------
    # Fetch / brand
    # ------------------------------------------------------------------

    def get_fetch_config(self) -> dict[str, Any] | None:
        """Get fetch overrides."""
        return self._get("fetchConfig")

    def update_fetch_config(self, fetch_config: dict[str, Any]) -> None:
        """Replace fetch overrides and re-validate the document."""
        self._state["fetchConfig"] = fetch_config
        self._revalidate()

    def get_brand_config(self) -> dict[str, Any] | None:
        """Get brand metadata."""
        return self._get("brandConfig")

    def update_brand_config(self, brand_config: dict[str, Any]) -> None:
        """Replace brand metadata and re-validate the document."""
        self._state["brandConfig"] = brand_config
        self._revalidate()

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def get_imports(self) -> list[dict[str, Any]] | None:
        """Get all import jobs."""
        return self._get("imports")

    def update_imports(self, imports: list[dict[str, Any]]) -> None:
        """Replace the import jobs and re-validate the document."""
        self._state["imports"] = imports
        self._revalidate()

    def get_import_config(self, import_type: str) -> dict[str, Any] | None:
        """Get the first import job of a type."""
        for entry in self._state.get("imports") or []:
            if isinstance(entry, dict) and entry.get("type") == import_type:
                return deepcopy(entry)
        return None

    def is_import_enabled(self, import_type: str) -> bool:
        """Check whether an import of the given type is enabled."""
        import_config = self.get_import_config(import_type)
        return bool(import_config and import_config.get("enabled"))

    def enable_import(self, import_type: str, overrides: dict[str, Any] | None = None) -> None:
        """Enable an import, replacing any existing entry of the same type.

        The import body is the type's default merged with ``overrides``.

        Raises:
            UnknownImportTypeError: if the type has no schema.
            InvalidImportConfigError: if the merged body is invalid; nothing
                is changed in that case.
            ConfigValidationError: if the resulting document is invalid.
        """
        if import_type not in DEFAULT_IMPORT_CONFIGS:
            raise UnknownImportTypeError(import_type)

        candidate = {
            **DEFAULT_IMPORT_CONFIGS[import_type],
            **(overrides or {}),
            "type": import_type,
            "enabled": True,
        }
        entry = validate_import_config(import_type, candidate)

        imports = [
            existing
            for existing in self._state.get("imports") or []
            if not (isinstance(existing, dict) and existing.get("type") == import_type)
        ]
        imports.append(entry)
        self._state["imports"] = imports
        self._revalidate()

    def disable_import(self, import_type: str) -> None:
        """Mark every import of the given type as disabled."""
        imports = self._state.get("imports")
        if not imports:
            return

        self._state["imports"] = [
            {**entry, "enabled": False}
            if isinstance(entry, dict) and entry.get("type") == import_type
            else entry
            for entry in imports
        ]
        self._revalidate()
