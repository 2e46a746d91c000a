"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import get_admin_config_store, get_gateway_config
from src.api.endpoints.shortdrama import shortdrama_api
from src.api.endpoints.theme import router as theme_router
from src.api.endpoints.websocket import router as websocket_router

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Short Drama Gateway",
    description="Resilient proxy for the short drama catalog API plus theme configuration",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(shortdrama_api, prefix="/api/shortdrama")
app.include_router(theme_router)
app.include_router(websocket_router)


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": "Short Drama Gateway", "status": "healthy", "version": "1.0.0", "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(store=Depends(get_admin_config_store)):
    """Detailed health check (admin config store)."""
    return {"status": "healthy", "admin_config_store": store.ping(), "timestamp": datetime.now().isoformat()}


# ============================================================================
# STARTUP EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Load gateway config up front so a broken config fails the boot, not a request."""
    logger.info("Starting Short Drama Gateway...")
    cfg = get_gateway_config()
    logger.info("Upstream base URL: %s (timeout %ss)", cfg.upstream.base_url, cfg.upstream.timeout_seconds)
