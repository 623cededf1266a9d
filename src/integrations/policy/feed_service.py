"""
AI feed composition: token -> catalogue walk -> JSON-LD render.

Each call is a single read-through transform; nothing fetched here outlives
the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.integrations.contracts.product_catalogues import CatalogueClient
from src.integrations.policy.token_service import TokenManager
from src.processors.feed_renderer import FeedRenderer, load_template

logger = logging.getLogger(__name__)


@dataclass
class FeedPage:
    html: str
    product_count: int
    pages_fetched: int
    truncated: bool = False


class FeedService:
    def __init__(
        self,
        token_manager: TokenManager,
        catalogue_client: CatalogueClient,
        renderer: FeedRenderer,
        template_path: Path,
    ) -> None:
        self.token_manager = token_manager
        self.catalogue_client = catalogue_client
        self.renderer = renderer
        self.template_path = template_path

    async def build_feed(self) -> FeedPage:
        """
        Raises the FeedError carried by a failed step (AuthRequired,
        UpstreamAuthError, UpstreamApiError, TemplateError).
        """
        token = (await self.token_manager.acquire_token()).unwrap()

        result = await self.catalogue_client.fetch_all_products(token)
        if result.error is not None:
            raise result.error

        template_html = load_template(self.template_path)
        html = self.renderer.render_feed(result.products, template_html)
        logger.info(
            "Rendered AI feed with %d products from %d page(s)%s",
            len(result.products),
            result.pages_fetched,
            " (truncated)" if result.truncated else "",
        )
        return FeedPage(
            html=html,
            product_count=len(result.products),
            pages_fetched=result.pages_fetched,
            truncated=result.truncated,
        )
