"""
Real Redis-backed admin config store for production when
ADMIN_CONFIG_REDIS_URL is set. Implements the same interface as
src.database.redis (in-memory stub).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import redis

logger = logging.getLogger(__name__)


class AdminConfigStore:
    """
    Redis-backed admin configuration. The whole config is one JSON document.
    """

    def __init__(self, url: str, key: str = "admin:config") -> None:
        self._client = redis.from_url(url, decode_responses=True)
        self._key = key

    def get_admin_config(self) -> Optional[Dict[str, Any]]:
        raw = self._client.get(self._key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Admin config under %s is not valid JSON; ignoring it", self._key)
            return None
        return data if isinstance(data, dict) else None

    def save_admin_config(self, config: Dict[str, Any]) -> None:
        self._client.set(self._key, json.dumps(config, default=str))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
