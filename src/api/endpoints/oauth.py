import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from src.api.dependencies import get_token_manager
from src.integrations.policy.token_service import TokenManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/auth", tags=["OAuth"])
async def start_authorization(token_manager: TokenManager = Depends(get_token_manager)):
    """Send the operator's browser to the Cafe24 consent page (one-time manual step)."""
    logger.info("Redirecting to Cafe24 for authorization...")
    return RedirectResponse(token_manager.oauth_client.authorize_url(), status_code=302)


@router.get("/", tags=["OAuth"])
async def root_or_callback(
    code: Optional[str] = None,
    token_manager: TokenManager = Depends(get_token_manager),
):
    """
    Registered Redirect URI. A plain visit goes to the feed; a visit carrying
    `code` is Cafe24 returning from the consent page.
    """
    if not code:
        return RedirectResponse("/ai-feed", status_code=302)

    (await token_manager.exchange_authorization_code(code)).unwrap()
    logger.info("Token exchange successful! Redirecting to /ai-feed.")
    return RedirectResponse("/ai-feed", status_code=302)
