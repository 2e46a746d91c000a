"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- The upstream short drama catalog API (categories, search, episode parsing)

Key rule:
- Routes MUST NOT call the upstream API directly.
- Routes should call the integration client (under src/integrations/clients).
- When the client fails, routes substitute payloads from src/fallback_handler.py.

Switching implementations:
- The client is built in ONE place (src/api/dependencies.py) from the loaded config.
"""

from .contracts.shortdrama import (
    CatalogCategory,
    CatalogListItem,
    CatalogSearchResult,
    CategoriesResponse,
    EpisodeParseResult,
    FailureReason,
    ListPage,
    RecommendPage,
    SearchPage,
    ThemeConfig,
    ThemeEnvelope,
)

__all__ = [
    "CatalogCategory", "CatalogListItem", "CatalogSearchResult",
    "CategoriesResponse", "EpisodeParseResult", "FailureReason",
    "ListPage", "RecommendPage", "SearchPage",
    "ThemeConfig", "ThemeEnvelope",
]
