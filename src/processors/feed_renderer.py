"""
Product feed rendering.

Maps Cafe24 product records to schema.org Product JSON-LD and splices a single
<script type="application/ld+json"> block into the static feed template.

Injection point, in order of preference:
1. the dedicated placeholder comment (replaced, first occurrence only)
2. immediately before the first </head>
If neither exists the template is returned unchanged and a warning is logged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from src.integrations.contracts.errors import TemplateError
from src.integrations.contracts.product_catalogues import SCHEMA_ORG, JsonLdOffer, JsonLdProduct, ProductRecord

logger = logging.getLogger(__name__)

HEAD_CLOSE = "</head>"
DEFAULT_PLACEHOLDER = "<!-- AI_FEED_JSONLD -->"


def availability_for(stock_quantity: Any) -> str:
    try:
        in_stock = float(stock_quantity) > 0
    except (TypeError, ValueError):
        in_stock = False
    return f"{SCHEMA_ORG}/{'InStock' if in_stock else 'OutOfStock'}"


def _image_for(product: ProductRecord) -> Optional[str]:
    return product.get("detail_image") or product.get("list_image") or None


def to_jsonld_product(product: ProductRecord, shop_base_url: str, currency: str = "KRW") -> JsonLdProduct:
    product_no = product.get("product_no")
    return JsonLdProduct(
        name=product.get("product_name"),
        image=_image_for(product),
        url=f"{shop_base_url.rstrip('/')}/product/detail.html?product_no={product_no}",
        sku=product_no,
        offers=JsonLdOffer(
            price=product.get("price"),
            price_currency=currency,
            availability=availability_for(product.get("stock_quantity")),
        ),
    )


def build_jsonld(products: Iterable[ProductRecord], shop_base_url: str, currency: str = "KRW") -> List[Dict[str, Any]]:
    return [to_jsonld_product(p, shop_base_url, currency).to_jsonld() for p in products]


def jsonld_script_tag(items: List[Dict[str, Any]]) -> str:
    body = json.dumps(items, ensure_ascii=False, indent=2)
    # "</" inside a string would end the script element early.
    body = body.replace("</", "<\\/")
    return f'<script type="application/ld+json">{body}</script>'


def inject_script(template_html: str, script_tag: str, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    if placeholder and placeholder in template_html:
        return template_html.replace(placeholder, script_tag, 1)
    if HEAD_CLOSE in template_html:
        return template_html.replace(HEAD_CLOSE, f"{script_tag}\n{HEAD_CLOSE}", 1)
    logger.warning("Feed template has neither %r nor %s; structured data not injected", placeholder, HEAD_CLOSE)
    return template_html


def load_template(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Could not read feed template {path}: {e}") from e


class FeedRenderer:
    """render_feed(products, template_html) bound to one shop's URL and currency."""

    def __init__(self, shop_base_url: str, currency: str = "KRW", placeholder: str = DEFAULT_PLACEHOLDER) -> None:
        self.shop_base_url = shop_base_url
        self.currency = currency
        self.placeholder = placeholder

    def render_feed(self, products: Iterable[ProductRecord], template_html: str) -> str:
        items = build_jsonld(products, self.shop_base_url, self.currency)
        return inject_script(template_html, jsonld_script_tag(items), self.placeholder)
