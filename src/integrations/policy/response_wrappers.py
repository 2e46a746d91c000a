from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from src.integrations.contracts.shortdrama import (
    PLACEHOLDER_COVER,
    CatalogListItem,
    ListPage,
    RecommendPage,
)

UNKNOWN_TITLE = "未知短剧"


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


def normalize_list_page(raw: Any, *, page: str = "1") -> ListPage:
    """Category hot list: the upstream ``id`` is already the video id."""
    items = _require_items(raw, "list")
    transformed = [_build_model(CatalogListItem, _hot_item(item), item) for item in items]
    return _build_model(
        ListPage,
        {
            "total": _first_present(raw, "total", default=0),
            "totalPages": _first_present(raw, "totalPages", "pagecount", default=1),
            "currentPage": _first_present(raw, "currentPage", "page", default=_to_int(page, 1)),
            "list": transformed,
        },
        raw,
    )


def normalize_latest_items(raw: Any) -> List[CatalogListItem]:
    """Latest episodes: ``vod_id`` is the playable id, ``id`` only a row key."""
    items = _require_items(raw, "list")
    return [_build_model(CatalogListItem, _latest_item(item), item) for item in items]


def normalize_recommend_page(raw: Any) -> RecommendPage:
    items = _require_items(raw, "items")
    transformed = [_build_model(CatalogListItem, _recommend_item(item), item) for item in items]
    return _build_model(
        RecommendPage,
        {
            "mode": _first_present(raw, "mode", default="random"),
            "categoryId": _first_present(raw, "categoryId", default=0),
            "categoryName": raw.get("categoryName") or None,
            "total": _first_present(raw, "total", default=len(transformed)),
            "items": transformed,
        },
        raw,
    )


def filter_playable_sources(raw: Any) -> Dict[str, Any]:
    """
    Keep only sources that parsed successfully and carry a usable URL.

    Raises IntegrationResponseError when the payload has no ``results`` array
    or when nothing playable is left after filtering.
    """
    results = _require_list(raw, "results")
    valid = [item for item in results if _is_playable(item)]
    if not valid:
        raise IntegrationResponseError("No valid video sources found", payload=raw)

    processed = dict(raw)
    processed.update(
        {
            "results": valid,
            "totalEpisodes": len(valid),
            "successfulCount": len(valid),
            "originalTotalEpisodes": raw.get("totalEpisodes"),
            "originalSuccessfulCount": raw.get("successfulCount"),
            "filteredCount": len(results) - len(valid),
        }
    )
    return processed


def _is_playable(item: Any) -> bool:
    if not isinstance(item, dict) or item.get("status") != "success":
        return False
    url = item.get("parsedUrl")
    return isinstance(url, str) and bool(url.strip())


def _hot_item(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": _as_text(item.get("id")),
        "vod_id": item.get("id"),
        "name": item.get("name") or UNKNOWN_TITLE,
        "cover": item.get("cover") or PLACEHOLDER_COVER,
        "update_time": item.get("update_time") or _now_iso(),
        "score": item.get("score") or 0,
        "total_episodes": "1",
        "vod_class": item.get("vod_class") or "",
        "vod_tag": item.get("vod_tag") or "",
    }


def _latest_item(item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": _as_text(item.get("id")) or _as_text(item.get("vod_id")),
        "vod_id": item.get("vod_id"),
        "name": item.get("vod_name") or UNKNOWN_TITLE,
        "cover": item.get("vod_pic") or PLACEHOLDER_COVER,
        "update_time": item.get("vod_time") or _now_iso(),
        "score": _first_present(item, "vod_score", "vod_douban_score", default=0),
        "total_episodes": _as_text(item.get("vod_total")) or "1",
        "vod_class": item.get("vod_class") or "",
        "vod_tag": item.get("vod_tag") or "",
    }


def _recommend_item(item: Dict[str, Any]) -> Dict[str, Any]:
    remarks = str(item.get("vod_remarks") or "")
    episodes = "".join(ch for ch in remarks if ch.isdigit())
    return {
        "id": _as_text(item.get("vod_id")) or _as_text(item.get("id")),
        "vod_id": item.get("vod_id"),
        "name": item.get("vod_name") or UNKNOWN_TITLE,
        "cover": item.get("vod_pic") or PLACEHOLDER_COVER,
        "update_time": item.get("vod_time") or _now_iso(),
        "score": item.get("vod_score") or 0,
        "total_episodes": episodes or "1",
        "vod_class": item.get("vod_class") or "",
        "vod_tag": item.get("vod_tag") or "",
    }


def _require_list(raw: Any, key: str) -> List[Any]:
    if not isinstance(raw, dict) or not isinstance(raw.get(key), list):
        raise IntegrationResponseError(
            f"Invalid response format from external API: missing '{key}' array",
            payload=raw if isinstance(raw, dict) else {"raw": raw},
        )
    return raw[key]


def _require_items(raw: Any, key: str) -> List[Dict[str, Any]]:
    items = _require_list(raw, key)
    if not all(isinstance(item, dict) for item in items):
        raise IntegrationResponseError(f"Invalid response format from external API: non-object in '{key}'", payload=raw)
    return items


def _first_present(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _build_model(model_type, payload: Dict[str, Any], raw: Dict[str, Any]):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
