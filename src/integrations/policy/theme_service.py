"""
Theme Service

Reads the site-wide theme out of the persisted admin configuration. Reads never
fail from the caller's point of view: storage errors and empty storage both
resolve to the canonical default theme so the UI is never blocked on config.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from src.integrations.contracts.shortdrama import ThemeConfig, ThemeEnvelope
from src.utils.config_loader import ThemeDefaults

logger = logging.getLogger(__name__)

THEME_CONFIG_KEY = "ThemeConfig"


class ThemeValidationError(ValueError):
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class ThemeService:
    def __init__(self, store, defaults: Optional[ThemeDefaults] = None):
        # store is anything exposing get_admin_config() / save_admin_config()
        self.store = store
        self.defaults = defaults or ThemeDefaults()

    def default_theme(self) -> ThemeConfig:
        return ThemeConfig(
            defaultTheme=self.defaults.default_theme,
            customCSS=self.defaults.custom_css,
            allowUserCustomization=self.defaults.allow_user_customization,
        )

    def get_theme(self) -> ThemeEnvelope:
        """
        Return the stored theme, or the default with success=False when the
        default had to be substituted.
        """
        try:
            config = self.store.get_admin_config()
        except Exception as e:
            logger.error("Failed to read admin config, serving default theme: %s", e, exc_info=True)
            return ThemeEnvelope(success=False, data=self.default_theme())

        if not isinstance(config, dict):
            if config is not None:
                logger.warning("Admin config is not a mapping (%s), serving default theme", type(config).__name__)
            config = {}

        stored = config.get(THEME_CONFIG_KEY)
        if not stored:
            logger.info("No theme config stored, serving default theme")
            return ThemeEnvelope(success=False, data=self.default_theme())

        try:
            theme = ThemeConfig(**stored)
        except (TypeError, ValidationError) as e:
            logger.warning("Stored theme config is malformed, serving default theme: %s", e)
            return ThemeEnvelope(success=False, data=self.default_theme())

        return ThemeEnvelope(success=True, data=theme)

    def update_theme(self, payload: Dict[str, Any]) -> ThemeConfig:
        """
        Validate and persist a new site-wide theme. Storage errors propagate;
        an admin write is never silently dropped.
        """
        theme_id = payload.get("defaultTheme")
        if theme_id not in self.defaults.available_themes:
            raise ThemeValidationError("Invalid theme name", field="defaultTheme")

        custom_css = payload.get("customCSS", "")
        if not isinstance(custom_css, str):
            raise ThemeValidationError("customCSS must be a string", field="customCSS")

        allow = payload.get("allowUserCustomization", self.defaults.allow_user_customization)
        if not isinstance(allow, bool):
            raise ThemeValidationError("allowUserCustomization must be a boolean", field="allowUserCustomization")

        theme = ThemeConfig(defaultTheme=theme_id, customCSS=custom_css, allowUserCustomization=allow)

        config = self.store.get_admin_config() or {}
        config[THEME_CONFIG_KEY] = theme.model_dump()
        self.store.save_admin_config(config)
        logger.info("Site theme updated: theme=%s custom_css_chars=%d", theme_id, len(custom_css))
        return theme
