"""
FastAPI dependencies for the gateway.

This is the ONE place where the upstream client, the fallback handler and the
admin config store are built. Tests swap any of them through
``app.dependency_overrides``.
"""
import logging
from functools import lru_cache

from dotenv import load_dotenv
from fastapi import Depends

from src.error_handler import ErrorHandler
from src.fallback_handler import FallbackHandler
from src.integrations.clients.real_http.shortdrama import ShortDramaClient
from src.integrations.policy.theme_service import ThemeService
from src.utils.config_loader import GatewayConfig, load_gateway_config

load_dotenv()

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_gateway_config() -> GatewayConfig:
    return load_gateway_config()


@lru_cache(maxsize=1)
def get_admin_config_store():
    # Real Redis when configured, else the in-memory stub
    cfg = get_gateway_config()
    if cfg.admin_config_redis_url:
        from src.database.redis_real import AdminConfigStore

        logger.info("Using Redis admin config store")
        return AdminConfigStore(url=cfg.admin_config_redis_url)

    from src.database.redis import AdminConfigStore

    logger.info("Using in-memory admin config store")
    return AdminConfigStore()


def get_shortdrama_client() -> ShortDramaClient:
    return ShortDramaClient(get_gateway_config().upstream)


def get_fallback_handler() -> FallbackHandler:
    return FallbackHandler()


def get_error_handler() -> ErrorHandler:
    return ErrorHandler()


def get_theme_service(store=Depends(get_admin_config_store)) -> ThemeService:
    return ThemeService(store, defaults=get_gateway_config().theme)
