"""Fallback handling utilities.

This module generates substitute payloads when the upstream short drama API
cannot be reached. Every payload is shaped exactly like the genuine upstream
response for the same operation, so the front end never renders an empty or
broken catalog; accuracy is traded for availability.
"""
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from src.integrations.contracts.shortdrama import (
    PLACEHOLDER_COVER,
    CatalogCategory,
    CatalogListItem,
    CatalogSearchResult,
    CategoriesResponse,
    EpisodeParseResult,
    EpisodeSource,
    ListPage,
    RecommendPage,
    SearchPage,
)

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY_NAMES = ("古装", "现代", "都市", "言情", "悬疑", "喜剧", "其他")

SEARCH_RESULT_COUNT = 5
SEARCH_ID_OFFSET = 200
SEARCH_NAME_TEMPLATE = "搜索结果: {query} {position}"

LIST_RESULT_COUNT = 25
LIST_ID_OFFSET = 1000
LATEST_ID_OFFSET = 100
RECOMMEND_RESULT_COUNT = 5
RECOMMEND_ID_OFFSET = 500
ALL_PARSE_EPISODES = 8

SAMPLE_CLASSES = ("都市情感", "古装宫廷", "现代言情", "豪门世家", "职场励志")
SAMPLE_TAGS = (
    "甜宠,霸总,现代",
    "穿越,古装,宫斗",
    "复仇,虐渣,打脸",
    "重生,逆袭,强者归来",
    "家庭,伦理,现实",
)
SAMPLE_VIDEO_URL = "https://sample-videos.com/zip/10/mp4/SampleVideo_720x480_1mb.mp4"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _catalog_time(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S")


class FallbackHandler:
    """Synthesizes upstream-shaped payloads and logs every trigger.

    The random source and clock are injectable so tests can pin scores and
    timestamps; by default scores vary between calls to mimic live data.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.rng = rng or random.Random()
        self.clock = clock or _utc_now

    # --- Catalog ---------------------------------------------------------------

    def categories(self) -> CategoriesResponse:
        logger.info("Generating fallback: operation=categories")
        categories = [
            CatalogCategory(type_id=index + 1, type_name=name)
            for index, name in enumerate(FALLBACK_CATEGORY_NAMES)
        ]
        return CategoriesResponse(categories=categories, total=len(categories))

    def search(self, query: str) -> SearchPage:
        logger.info("Generating fallback: operation=search, query=%s", query)
        now = _iso(self.clock())
        results = [
            CatalogSearchResult(
                id=SEARCH_ID_OFFSET + index,
                name=SEARCH_NAME_TEMPLATE.format(query=query, position=index + 1),
                cover=PLACEHOLDER_COVER,
                update_time=now,
                score=self.rng.randint(8, 10),
            )
            for index in range(SEARCH_RESULT_COUNT)
        ]
        return SearchPage(total=len(results), totalPages=1, currentPage=1, list=results)

    def list_page(self, page: int = 1) -> ListPage:
        logger.info("Generating fallback: operation=list, page=%s", page)
        updated = _catalog_time(self.clock())
        items = [
            CatalogListItem(
                id=str(LIST_ID_OFFSET + index),
                vod_id=LIST_ID_OFFSET + index,
                name=f"短剧示例 {index + 1}",
                cover=PLACEHOLDER_COVER,
                update_time=updated,
                score=self.rng.randint(6, 10),
                total_episodes="1",
                vod_class=SAMPLE_CLASSES[index % len(SAMPLE_CLASSES)],
                vod_tag=SAMPLE_TAGS[index % len(SAMPLE_TAGS)],
            )
            for index in range(LIST_RESULT_COUNT)
        ]
        return ListPage(total=100, totalPages=4, currentPage=page, list=items)

    def latest(self) -> List[CatalogListItem]:
        logger.info("Generating fallback: operation=latest")
        now = self.clock()
        return [
            CatalogListItem(
                id=f"mock_id_{LATEST_ID_OFFSET + index}",
                vod_id=LATEST_ID_OFFSET + index,
                name=f"最新短剧 {index + 1}",
                cover=PLACEHOLDER_COVER,
                update_time=_catalog_time(now - timedelta(days=index)),
                score=self.rng.randint(7, 10),
                total_episodes=str(self.rng.randint(10, 39)),
                vod_class=SAMPLE_CLASSES[index % len(SAMPLE_CLASSES)],
                vod_tag=SAMPLE_TAGS[index % len(SAMPLE_TAGS)],
            )
            for index in range(LIST_RESULT_COUNT)
        ]

    def recommend(self, category_id: int = 0) -> RecommendPage:
        logger.info("Generating fallback: operation=recommend, category_id=%s", category_id)
        updated = _catalog_time(self.clock())
        items = [
            CatalogListItem(
                id=str(RECOMMEND_ID_OFFSET + index),
                vod_id=RECOMMEND_ID_OFFSET + index,
                name=f"推荐短剧 {index + 1}",
                cover=PLACEHOLDER_COVER,
                update_time=updated,
                score=self.rng.randint(8, 10),
                total_episodes=str(self.rng.randint(10, 59)),
                vod_class=SAMPLE_CLASSES[0],
                vod_tag=SAMPLE_TAGS[0],
            )
            for index in range(RECOMMEND_RESULT_COUNT)
        ]
        return RecommendPage(mode="random", categoryId=category_id, total=len(items), items=items)

    # --- Episode parsing -------------------------------------------------------

    def parse_single(self) -> EpisodeParseResult:
        logger.info("Generating fallback: operation=parse_single")
        return EpisodeParseResult(code=500, message="Failed to parse episode", data=None)

    def parse_batch(self) -> EpisodeParseResult:
        logger.info("Generating fallback: operation=parse_batch")
        return EpisodeParseResult(code=500, message="Failed to parse episodes", data=None)

    def parse_all(self, video_id: str, reason: str = "unknown") -> Dict[str, Any]:
        logger.info("Generating fallback: operation=parse_all, id=%s, reason=%s", video_id, reason)
        try:
            numeric_id = int(video_id) or 1
        except ValueError:
            numeric_id = 1

        sources = [
            EpisodeSource(
                index=index,
                label=f"第{index + 1}集",
                parsedUrl=f"{SAMPLE_VIDEO_URL}?episode={index + 1}",
                parseInfo={
                    "headers": {
                        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
                        "Referer": "https://sample-videos.com",
                    },
                    "type": "mp4",
                },
                status="success",
            )
            for index in range(ALL_PARSE_EPISODES)
        ]
        return {
            "videoId": numeric_id,
            "videoName": f"短剧播放示例 (ID: {video_id})",
            "results": [source.model_dump() for source in sources],
            "totalEpisodes": len(sources),
            "successfulCount": len(sources),
            "failedCount": 0,
            "cover": f"{PLACEHOLDER_COVER}?text=短剧示例",
            "description": f"这是一个短剧播放示例，用于测试播放功能。原始ID: {video_id}",
        }
