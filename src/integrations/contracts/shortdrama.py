"""
Short drama catalog contracts.

Response shapes shared by the real upstream client, the fallback synthesizer
and the proxy routes. Field names follow the upstream wire format so that a
synthesized payload is indistinguishable in shape from a genuine one.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

PLACEHOLDER_COVER = "https://via.placeholder.com/300x400"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FailureReason(str, Enum):
    TIMED_OUT = "TIMED_OUT"
    HTTP_ERROR = "HTTP_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"


# ---------------------------------------------------------------------------
# Catalog models
# ---------------------------------------------------------------------------

class CatalogCategory(BaseModel):
    type_id: int
    type_name: str


class CategoriesResponse(BaseModel):
    categories: List[CatalogCategory]
    total: int


class CatalogSearchResult(BaseModel):
    id: int
    name: str
    cover: str
    update_time: str                     # ISO-8601
    score: int = Field(ge=1, le=10)


class SearchPage(BaseModel):
    total: int
    totalPages: int
    currentPage: int
    list: List[CatalogSearchResult]


class CatalogListItem(BaseModel):
    """Normalized item returned by list, latest and recommend."""

    id: str
    vod_id: Optional[int] = None
    name: str
    cover: str
    update_time: str
    score: float = 0
    total_episodes: str = "1"
    vod_class: str = ""
    vod_tag: str = ""


class ListPage(BaseModel):
    total: int
    totalPages: int
    currentPage: int
    list: List[CatalogListItem]


class RecommendPage(BaseModel):
    mode: str = "random"
    categoryId: int = 0
    categoryName: Optional[str] = None
    total: int
    items: List[CatalogListItem]


# ---------------------------------------------------------------------------
# Episode parsing
# ---------------------------------------------------------------------------

class EpisodeParseResult(BaseModel):
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None


class EpisodeSource(BaseModel):
    index: int
    label: str
    parsedUrl: Optional[str] = None
    parseInfo: Dict[str, Any] = Field(default_factory=dict)
    status: str
    reason: Optional[str] = None


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

class ThemeConfig(BaseModel):
    defaultTheme: str = "default"
    customCSS: str = ""
    allowUserCustomization: bool = True


class ThemeEnvelope(BaseModel):
    success: bool
    data: ThemeConfig
