import pytest

from src.database.redis import AdminConfigStore
from src.integrations.policy.theme_service import ThemeService, ThemeValidationError


class BrokenStore:
    def get_admin_config(self):
        raise ConnectionError("storage unreachable")

    def save_admin_config(self, config):
        raise ConnectionError("storage unreachable")


def test_empty_storage_serves_default_theme():
    envelope = ThemeService(AdminConfigStore()).get_theme()

    assert envelope.success is False
    assert envelope.data.model_dump() == {"defaultTheme": "default", "customCSS": "", "allowUserCustomization": True}


def test_storage_error_serves_default_theme():
    envelope = ThemeService(BrokenStore()).get_theme()

    assert envelope.success is False
    assert envelope.data.defaultTheme == "default"
    assert envelope.data.customCSS == ""


def test_stored_theme_is_returned():
    store = AdminConfigStore({"ThemeConfig": {"defaultTheme": "warm", "customCSS": "body{}", "allowUserCustomization": False}})

    envelope = ThemeService(store).get_theme()

    assert envelope.success is True
    assert envelope.data.defaultTheme == "warm"
    assert envelope.data.allowUserCustomization is False


def test_malformed_stored_theme_serves_default():
    store = AdminConfigStore({"ThemeConfig": {"defaultTheme": ["not", "a", "string"]}})

    envelope = ThemeService(store).get_theme()

    assert envelope.success is False
    assert envelope.data.defaultTheme == "default"


class ListStore:
    def get_admin_config(self):
        return ["ThemeConfig"]


def test_non_mapping_admin_config_serves_default():
    envelope = ThemeService(ListStore()).get_theme()

    assert envelope.success is False
    assert envelope.data.defaultTheme == "default"


def test_update_theme_persists_and_keeps_other_admin_settings():
    store = AdminConfigStore({"SiteConfig": {"SiteName": "demo"}})
    svc = ThemeService(store)

    theme = svc.update_theme({"defaultTheme": "fresh", "customCSS": ".a{}"})

    assert theme.defaultTheme == "fresh"
    saved = store.get_admin_config()
    assert saved["SiteConfig"] == {"SiteName": "demo"}
    assert saved["ThemeConfig"]["customCSS"] == ".a{}"
    assert svc.get_theme().data.defaultTheme == "fresh"


def test_update_theme_rejects_unknown_theme():
    with pytest.raises(ThemeValidationError) as exc_info:
        ThemeService(AdminConfigStore()).update_theme({"defaultTheme": "neon"})
    assert exc_info.value.field == "defaultTheme"


def test_update_theme_propagates_storage_errors():
    with pytest.raises(ConnectionError):
        ThemeService(BrokenStore()).update_theme({"defaultTheme": "minimal"})
