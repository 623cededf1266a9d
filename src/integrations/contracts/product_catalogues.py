"""
Product catalogue contracts.

Defines the shapes used by:
- clients/mocks/local_product_catalogues.py (local sample data for development)
- clients/real_http/cafe24_products.py (Cafe24 product listing API)
- processors/feed_renderer.py (JSON-LD output)

Upstream product records stay plain dicts: only the fields mapped into
JSON-LD are read, everything else passes through untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import UpstreamApiError

ProductRecord = Dict[str, Any]

SCHEMA_ORG = "https://schema.org"


# ---------------------------------------------------------------------------
# Fetch outcome
# ---------------------------------------------------------------------------

@dataclass
class CatalogueResult:
    products: List[ProductRecord] = field(default_factory=list)
    pages_fetched: int = 0
    truncated: bool = False              # page cap reached while pages were still full
    error: Optional[UpstreamApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogueClient(ABC):
    @abstractmethod
    async def fetch_all_products(self, token: str) -> CatalogueResult:
        """Walk every listing page and return the accumulated records."""


# ---------------------------------------------------------------------------
# JSON-LD output
# ---------------------------------------------------------------------------

class JsonLdOffer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type_: str = Field(default="Offer", alias="@type")
    price: Union[str, float, int, None] = None
    price_currency: str = Field(default="KRW", alias="priceCurrency")
    availability: str


class JsonLdProduct(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    context: str = Field(default=SCHEMA_ORG, alias="@context")
    type_: str = Field(default="Product", alias="@type")
    name: Optional[str] = None
    image: Optional[str] = None
    url: str
    sku: Union[str, int, None] = None
    offers: JsonLdOffer

    def to_jsonld(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
