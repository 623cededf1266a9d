"""
Cafe24 Product Catalogue HTTP Client.

Purpose:
- Walks GET /api/v2/products page by page with a bearer token
- Returns every product record for one feed request (nothing is cached)

Paging rules:
- An empty page ends the walk, even on page 1
- A page shorter than the page size is the last page
- max_pages bounds the walk; hitting it while pages are still full marks
  the result as truncated

Important:
- A failed page discards everything accumulated for the request.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from src.integrations.contracts.errors import UpstreamApiError
from src.integrations.contracts.product_catalogues import CatalogueClient, CatalogueResult, ProductRecord
from src.integrations.policy.response_wrappers import normalize_products_page
from src.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class Cafe24ProductCatalogueClient(CatalogueClient):
    def __init__(
        self,
        mall_id: str,
        base_url: Optional[str] = None,
        page_size: int = MAX_PAGE_SIZE,
        max_pages: int = 200,
        timeout_seconds: float = 20.0,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.mall_id = mall_id
        self.base_url = (base_url or f"https://{mall_id}.cafe24api.com").rstrip("/")
        self.page_size = min(page_size, MAX_PAGE_SIZE)
        self.max_pages = max_pages
        self.timeout_seconds = timeout_seconds
        self.rate_limiter = rate_limiter
        self._transport = transport

    @property
    def products_url(self) -> str:
        return f"{self.base_url}/api/v2/products"

    async def fetch_all_products(self, token: str) -> CatalogueResult:
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        all_products: List[ProductRecord] = []
        page = 1

        async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
            while True:
                if self.rate_limiter is not None:
                    await self.rate_limiter.wait_if_needed()

                logger.info("Fetching product page %d...", page)
                try:
                    products = await self._fetch_page(client, headers, page)
                except UpstreamApiError as e:
                    logger.error("Product page %d failed: %s", page, e)
                    return CatalogueResult(pages_fetched=page, error=e)

                if not products:
                    logger.info("All product data collected (%d products).", len(all_products))
                    return CatalogueResult(products=all_products, pages_fetched=page)

                all_products.extend(products)
                if len(products) < self.page_size:
                    logger.info("Last page collected (%d products).", len(all_products))
                    return CatalogueResult(products=all_products, pages_fetched=page)

                if page >= self.max_pages:
                    logger.warning(
                        "Stopped after %d pages (%d products); catalogue may be truncated.",
                        page,
                        len(all_products),
                    )
                    return CatalogueResult(products=all_products, pages_fetched=page, truncated=True)
                page += 1

    async def _fetch_page(self, client: httpx.AsyncClient, headers: dict, page: int) -> List[ProductRecord]:
        params = {"limit": self.page_size, "page": page}
        try:
            response = await client.get(self.products_url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamApiError("Product API request failed (network error)", status_code=None, body=str(exc)) from exc

        if not response.is_success:
            raise UpstreamApiError("Product API request failed", status_code=response.status_code, body=response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamApiError(
                "Product API returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        return normalize_products_page(data, status_code=response.status_code)
