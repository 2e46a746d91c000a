"""
Short drama proxy routes.

Each route validates its parameters, makes one upstream call and, when the
upstream fails, answers 200 with a synthesized payload of the same shape.
Missing parameters are client errors and are never masked.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from src.api.dependencies import get_error_handler, get_fallback_handler, get_shortdrama_client
from src.error_handler import UPSTREAM_ERRORS, ErrorHandler
from src.fallback_handler import FallbackHandler
from src.integrations.clients.real_http.shortdrama import ShortDramaClient
from src.integrations.policy.response_wrappers import (
    filter_playable_sources,
    normalize_latest_items,
    normalize_list_page,
    normalize_recommend_page,
)

logger = logging.getLogger(__name__)

api = APIRouter()
shortdrama_api = api


def _missing(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


def _to_int(value: Optional[str], default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@api.get("/categories", tags=["Short Drama"])
async def get_categories(
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    """Category list. Never reports an error to the caller."""
    try:
        return await client.get_categories()
    except Exception as e:
        errors.handle_upstream_failure(e, {"operation": "categories"})
        return fallback.categories().model_dump()


@api.get("/search", tags=["Short Drama"])
async def search(
    name: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    if not name:
        return _missing("name parameter is required")

    try:
        return await client.search(name)
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "search", "name": name})
        return fallback.search(name).model_dump()


@api.get("/list", tags=["Short Drama"])
async def list_by_category(
    category_id: Optional[str] = Query(default=None, alias="categoryId"),
    page: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    if not category_id:
        return _missing("categoryId is required")

    page = page or "1"
    try:
        raw = await client.get_list(category_id, page)
        return normalize_list_page(raw, page=page).model_dump()
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "list", "categoryId": category_id, "page": page})
        return fallback.list_page(_to_int(page, 1)).model_dump()


@api.get("/latest", tags=["Short Drama"])
async def latest(
    page: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    page = page or "1"
    try:
        raw = await client.get_latest(page)
        return [item.model_dump() for item in normalize_latest_items(raw)]
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "latest", "page": page})
        return [item.model_dump() for item in fallback.latest()]


@api.get("/recommend", tags=["Short Drama"])
async def recommend(
    category_id: Optional[str] = Query(default=None, alias="categoryId"),
    size: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    size = size or "25"
    try:
        raw = await client.get_recommend(category_id, size)
        return normalize_recommend_page(raw).model_dump()
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "recommend", "categoryId": category_id})
        return fallback.recommend(_to_int(category_id, 0)).model_dump()


@api.get("/parse/single", tags=["Short Drama"])
async def parse_single(
    video_id: Optional[str] = Query(default=None, alias="id"),
    episode: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    if not video_id:
        return _missing("id parameter is required")

    try:
        return await client.parse_single(video_id, episode)
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "parse_single", "id": video_id, "episode": episode})
        return fallback.parse_single().model_dump()


@api.get("/parse/batch", tags=["Short Drama"])
async def parse_batch(
    video_id: Optional[str] = Query(default=None, alias="id"),
    episodes: Optional[str] = Query(default=None),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    if not video_id:
        return _missing("id parameter is required")

    try:
        return await client.parse_batch(video_id, episodes)
    except UPSTREAM_ERRORS as e:
        errors.handle_upstream_failure(e, {"operation": "parse_batch", "id": video_id, "episodes": episodes})
        return fallback.parse_batch().model_dump()


@api.get("/parse/all", tags=["Short Drama"])
async def parse_all(
    video_id: Optional[str] = Query(default=None, alias="id"),
    client: ShortDramaClient = Depends(get_shortdrama_client),
    fallback: FallbackHandler = Depends(get_fallback_handler),
    errors: ErrorHandler = Depends(get_error_handler),
):
    if not video_id:
        return _missing("id parameter is required")

    try:
        raw = await client.parse_all(video_id)
        processed = filter_playable_sources(raw)
        logger.info(
            "All-episode parse ok: id=%s playable=%s filtered=%s",
            video_id,
            processed["successfulCount"],
            processed["filteredCount"],
        )
        return processed
    except UPSTREAM_ERRORS as e:
        failure = errors.handle_upstream_failure(e, {"operation": "parse_all", "id": video_id})
        return JSONResponse(
            content=fallback.parse_all(video_id, reason=failure["category"]),
            headers={"X-Fallback-Data": "true", "X-Error-Category": failure["category"]},
        )
