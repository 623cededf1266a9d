"""
Local Product Catalogue Client (Mock/Local).

Purpose:
- Acts as a development-time catalogue source when Cafe24 access is not available.
- Loads product records from data/sample_products.json and pages over them with
  the same rules as the real client (empty page or short page ends the walk).

Swap:
Replaced by clients/real_http/cafe24_products.py when INTEGRATIONS_MODE is real.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from src.integrations.contracts.product_catalogues import CatalogueClient, CatalogueResult, ProductRecord

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_PATH = Path(__file__).parent.parent.parent.parent.parent / "data" / "sample_products.json"


class LocalProductCatalogueClient(CatalogueClient):
    def __init__(
        self,
        products: Optional[List[ProductRecord]] = None,
        sample_path: Optional[Path] = None,
        page_size: int = 100,
    ) -> None:
        self._products = products
        self.sample_path = sample_path or DEFAULT_SAMPLE_PATH
        self.page_size = page_size

    def _load(self) -> List[ProductRecord]:
        if self._products is not None:
            return list(self._products)
        if not self.sample_path.exists():
            logger.warning("Sample catalogue %s not found; serving an empty catalogue", self.sample_path)
            return []
        with open(self.sample_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("products", [])) if isinstance(data, dict) else list(data)

    async def fetch_all_products(self, token: str) -> CatalogueResult:
        records = self._load()
        collected: List[ProductRecord] = []
        page = 1
        while True:
            start = (page - 1) * self.page_size
            chunk = records[start:start + self.page_size]
            if not chunk:
                break
            collected.extend(chunk)
            if len(chunk) < self.page_size:
                break
            page += 1
        logger.info("[CATALOGUE MOCK] Served %d products over %d page(s)", len(collected), page)
        return CatalogueResult(products=collected, pages_fetched=page)
