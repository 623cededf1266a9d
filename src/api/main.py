"""
FastAPI application - Main entry point

Run locally with:
  uvicorn src.api.main:app --host 127.0.0.1 --port 3000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from src.api.dependencies import get_config, get_error_handler, get_token_manager
from src.api.endpoints.feed import router as feed_router
from src.api.endpoints.oauth import router as oauth_router
from src.integrations.contracts.errors import FeedError
from src.integrations.policy.token_service import TokenManager

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

config = get_config()

# Initialize FastAPI app
app = FastAPI(
    title="Cafe24 AI Feed",
    description="Serves the mall's product catalogue as schema.org JSON-LD for crawlers and AI agents",
    version="1.0.0",
)


# ============================================================================
# ERROR HANDLING
# ============================================================================
@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError):
    handler = get_error_handler()
    page = handler.render_page(exc, context={"path": request.url.path})
    return HTMLResponse(content=page, status_code=handler.status_code)


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/health", tags=["Health"])
async def health_check(token_manager: TokenManager = Depends(get_token_manager)):
    """Token status and store connectivity (no token values)."""
    return {
        "status": "healthy",
        "integrations_mode": config.integrations_mode,
        "token": token_manager.status(),
        "token_store": token_manager.store.ping(),
        "timestamp": datetime.now().isoformat(),
    }


app.include_router(oauth_router)
app.include_router(feed_router)

# Static files (public/) last so the routes above take precedence.
app.mount("/", StaticFiles(directory=config.resolve_path(config.server.public_dir), check_dir=False), name="public")


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Cafe24 AI Feed (mode=%s, grant=%s)...", config.integrations_mode, config.cafe24.grant_mode.value)
    if config.integrations_mode == "real" and not config.cafe24.mall_id:
        logger.warning("CAFE24_MALL_ID is not set; /ai-feed will fail until it is configured")
    logger.info("OAuth redirect URI: %s", config.cafe24.redirect_uri)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Cafe24 AI Feed...")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.server.port)
