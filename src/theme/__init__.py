"""
Client theme bootstrap (pre-paint theme application).
"""
from .bootstrap import (
    CSS_STORAGE_KEY,
    STYLE_ELEMENT_ID,
    THEME_ATTRIBUTE,
    THEME_STORAGE_KEY,
    apply_theme,
    bootstrap_theme,
    render_bootstrap_script,
)

__all__ = [
    'CSS_STORAGE_KEY',
    'STYLE_ELEMENT_ID',
    'THEME_ATTRIBUTE',
    'THEME_STORAGE_KEY',
    'apply_theme',
    'bootstrap_theme',
    'render_bootstrap_script',
]
