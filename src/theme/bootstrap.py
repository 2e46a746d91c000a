"""
Pre-paint theme bootstrap.

Runs once per page load, before the UI mounts, and applies the theme cached in
the browser so the first paint already has the right look. It trusts only the
local cache; the app reconciles the cache with GET /api/theme later and writes
the result back for the next load.

Two renditions share the same constants:
- ``bootstrap_theme`` drives any ``ThemeDocument`` (used by tests and by
  anything rendering documents server-side)
- ``render_bootstrap_script`` emits the JavaScript served at /theme-init.js
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

THEME_STORAGE_KEY = "theme"
CSS_STORAGE_KEY = "customCSS"
THEME_ATTRIBUTE = "data-theme"
STYLE_ELEMENT_ID = "custom-theme-css"
DEFAULT_THEME = "default"


# ---------------------------------------------------------------------------
# Document / storage interfaces
# ---------------------------------------------------------------------------

class ThemeStorage(ABC):
    """String-keyed, string-valued cache, shaped like window.localStorage."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...


class ThemeDocument(ABC):
    @abstractmethod
    def remove_root_attribute(self, name: str) -> None:
        ...

    @abstractmethod
    def set_root_attribute(self, name: str, value: str) -> None:
        ...

    @abstractmethod
    def get_element_by_id(self, element_id: str) -> Optional["StyleElement"]:
        ...

    @abstractmethod
    def append_style_element(self, element_id: str) -> "StyleElement":
        ...


@dataclass
class StyleElement:
    id: str
    text_content: str = ""


@dataclass
class InMemoryDocument(ThemeDocument):
    root_attributes: Dict[str, str] = field(default_factory=dict)
    head: List[StyleElement] = field(default_factory=list)

    def remove_root_attribute(self, name: str) -> None:
        self.root_attributes.pop(name, None)

    def set_root_attribute(self, name: str, value: str) -> None:
        self.root_attributes[name] = value

    def get_element_by_id(self, element_id: str) -> Optional[StyleElement]:
        for element in self.head:
            if element.id == element_id:
                return element
        return None

    def append_style_element(self, element_id: str) -> StyleElement:
        element = StyleElement(id=element_id)
        self.head.append(element)
        return element


@dataclass
class DictStorage(ThemeStorage):
    items: Dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)


# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------

def apply_theme(document: ThemeDocument, theme_id: str, css: str = "") -> None:
    """Apply a theme; repeated calls replace state instead of stacking it."""
    document.remove_root_attribute(THEME_ATTRIBUTE)
    if theme_id != DEFAULT_THEME:
        document.set_root_attribute(THEME_ATTRIBUTE, theme_id)

    style = document.get_element_by_id(STYLE_ELEMENT_ID)
    if style is None:
        style = document.append_style_element(STYLE_ELEMENT_ID)
    style.text_content = css


def bootstrap_theme(document: ThemeDocument, storage: ThemeStorage) -> bool:
    """
    Apply the cached theme, or the default baseline when nothing is cached.

    Never raises: a broken cache or document is logged and page load goes on.
    Returns True when the theme was applied.
    """
    try:
        saved_theme = storage.get_item(THEME_STORAGE_KEY)
        saved_css = storage.get_item(CSS_STORAGE_KEY) or ""

        if saved_theme:
            apply_theme(document, saved_theme, saved_css)
        else:
            apply_theme(document, DEFAULT_THEME, "")
        return True
    except Exception as e:
        logger.error("Theme bootstrap failed: %s", e, exc_info=True)
        return False


_SCRIPT_TEMPLATE = """(function () {
  try {
    var THEME_KEY = %(theme_key)s;
    var CSS_KEY = %(css_key)s;
    var ATTRIBUTE = %(attribute)s;
    var STYLE_ID = %(style_id)s;
    var DEFAULT_THEME = %(default_theme)s;

    function applyTheme(themeId, css) {
      var html = document.documentElement;
      html.removeAttribute(ATTRIBUTE);
      if (themeId !== DEFAULT_THEME) {
        html.setAttribute(ATTRIBUTE, themeId);
      }
      var styleEl = document.getElementById(STYLE_ID);
      if (!styleEl) {
        styleEl = document.createElement('style');
        styleEl.id = STYLE_ID;
        document.head.appendChild(styleEl);
      }
      styleEl.textContent = css;
    }

    var savedTheme = window.localStorage.getItem(THEME_KEY);
    var savedCss = window.localStorage.getItem(CSS_KEY) || '';
    if (savedTheme) {
      applyTheme(savedTheme, savedCss);
    } else {
      applyTheme(DEFAULT_THEME, '');
    }
  } catch (error) {
    console.error('Theme bootstrap failed:', error);
  }
})();
"""


def render_bootstrap_script() -> str:
    """JavaScript rendition of ``bootstrap_theme`` for a blocking <script> in <head>."""
    return _SCRIPT_TEMPLATE % {
        "theme_key": json.dumps(THEME_STORAGE_KEY),
        "css_key": json.dumps(CSS_STORAGE_KEY),
        "attribute": json.dumps(THEME_ATTRIBUTE),
        "style_id": json.dumps(STYLE_ELEMENT_ID),
        "default_theme": json.dumps(DEFAULT_THEME),
    }
