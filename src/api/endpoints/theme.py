import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, Response

from src.api.dependencies import get_theme_service
from src.integrations.policy.theme_service import ThemeService, ThemeValidationError
from src.theme.bootstrap import render_bootstrap_script

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/theme", tags=["Theme"])
async def get_theme(service: ThemeService = Depends(get_theme_service)):
    """
    Site-wide theme. Always 200; ``success`` is False when the default was
    substituted for missing or unreadable configuration.
    """
    return service.get_theme().model_dump()


@router.post("/api/admin/theme", tags=["Theme"])
async def update_theme(body: Dict[str, Any], service: ThemeService = Depends(get_theme_service)):
    try:
        theme = service.update_theme(body)
    except ThemeValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message, "field": e.field})
    except Exception as e:
        logger.error("Failed to save theme config: %s", e, exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Failed to save theme config"})
    return {"success": True, "data": theme.model_dump()}


@router.get("/theme-init.js", tags=["Theme"])
async def theme_init_script():
    """Blocking pre-paint script; include it in <head> before any app bundle."""
    return Response(
        content=render_bootstrap_script(),
        media_type="application/javascript",
        headers={"Cache-Control": "no-cache"},
    )
