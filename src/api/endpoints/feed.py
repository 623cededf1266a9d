import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from src.api.dependencies import get_feed_service
from src.integrations.policy.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ai-feed", response_class=HTMLResponse, tags=["Feed"])
async def ai_feed(feed_service: FeedService = Depends(get_feed_service)):
    logger.info("AI-FEED request received.")
    page = await feed_service.build_feed()
    headers = {"X-Feed-Product-Count": str(page.product_count)}
    if page.truncated:
        headers["X-Feed-Truncated"] = "true"
    return HTMLResponse(content=page.html, headers=headers)
