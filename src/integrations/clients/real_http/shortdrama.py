"""
Short Drama Upstream HTTP Client.

Purpose:
- Issues exactly one bounded GET per call to the upstream short drama API
- Classifies every failure into a single UpstreamFailure exception

Implementation notes:
- The timeout ceiling comes from UpstreamConfig and covers the whole call,
  body included; a call past it is cancelled and surfaces as
  FailureReason.TIMED_OUT
- No retries here; retrying is a caller decision

Important:
- Keep this client as the ONLY place where upstream catalog HTTP calls are made.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from src.integrations.contracts.shortdrama import FailureReason
from src.utils.config_loader import UpstreamConfig

logger = logging.getLogger(__name__)

CATEGORIES_PATH = "/vod/categories"
SEARCH_PATH = "/vod/search"
PARSE_SINGLE_PATH = "/vod/parse/single"
PARSE_BATCH_PATH = "/vod/parse/batch"
PARSE_ALL_PATH = "/vod/parse/all"
LIST_PATH = "/vod/list"
LATEST_PATH = "/vod/latest"
RECOMMEND_PATH = "/vod/recommend"


class UpstreamFailure(Exception):
    def __init__(
        self,
        reason: FailureReason,
        message: str,
        *,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.path = path
        self.status_code = status_code


class ShortDramaClient:
    def __init__(
        self,
        config: UpstreamConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._transport = transport

    async def get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Perform one GET against the upstream and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        timeout = self.config.timeout_for(path)

        try:
            # httpx timeouts are per phase; wait_for bounds the whole call.
            return await asyncio.wait_for(self._fetch(url, params, timeout), timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamFailure(
                FailureReason.TIMED_OUT,
                f"Upstream request timed out after {timeout}s",
                path=path,
            ) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise UpstreamFailure(
                FailureReason.HTTP_ERROR,
                f"Upstream request failed: {status_code}",
                path=path,
                status_code=status_code,
            ) from e
        except httpx.RequestError as e:
            raise UpstreamFailure(
                FailureReason.NETWORK_ERROR,
                f"Upstream request could not be sent: {e}",
                path=path,
            ) from e
        except ValueError as e:
            raise UpstreamFailure(
                FailureReason.INVALID_RESPONSE,
                "Upstream returned a body that is not valid JSON",
                path=path,
            ) from e

    async def _fetch(self, url: str, params: Optional[Dict[str, str]], timeout: float) -> Any:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers=dict(self.config.headers),
            transport=self._transport,
        ) as client:
            response = await client.get(url, params=params or None)
            response.raise_for_status()
            return response.json()

    # --- Catalog -------------------------------------------------------------

    async def get_categories(self) -> Any:
        return await self.get_json(CATEGORIES_PATH)

    async def search(self, name: str) -> Any:
        return await self.get_json(SEARCH_PATH, {"name": name})

    async def get_list(self, category_id: str, page: str = "1") -> Any:
        return await self.get_json(LIST_PATH, {"categoryId": category_id, "page": page})

    async def get_latest(self, page: str = "1") -> Any:
        return await self.get_json(LATEST_PATH, {"page": page})

    async def get_recommend(self, category_id: Optional[str] = None, size: str = "25") -> Any:
        params: Dict[str, str] = {}
        if category_id:
            params["categoryId"] = category_id
        params["size"] = size
        return await self.get_json(RECOMMEND_PATH, params)

    # --- Episode parsing -----------------------------------------------------

    async def parse_single(self, video_id: str, episode: Optional[str] = None) -> Any:
        params: Dict[str, str] = {"id": video_id}
        if episode:
            params["episode"] = episode
        # Media is always proxied, whatever the caller asked for.
        params["proxy"] = "true"
        return await self.get_json(PARSE_SINGLE_PATH, params)

    async def parse_batch(self, video_id: str, episodes: Optional[str] = None) -> Any:
        params: Dict[str, str] = {"id": video_id}
        if episodes:
            params["episodes"] = episodes
        return await self.get_json(PARSE_BATCH_PATH, params)

    async def parse_all(self, video_id: str) -> Any:
        return await self.get_json(PARSE_ALL_PATH, {"id": video_id, "proxy": "true"})
