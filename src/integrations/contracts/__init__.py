"""
Contracts (data models).

This folder defines the shapes exchanged with external systems:
- token state and OAuth grant responses
- product catalogue pages and the JSON-LD we publish
- the error taxonomy surfaced to the HTTP layer

Both mock and real HTTP clients must use these contracts.
"""

from .errors import (
    AuthRequired,
    FeedConfigError,
    FeedError,
    TemplateError,
    UpstreamApiError,
    UpstreamAuthError,
    UpstreamError,
)
from .product_catalogues import CatalogueClient, CatalogueResult, JsonLdOffer, JsonLdProduct, ProductRecord
from .tokens import GrantMode, OAuthClient, TokenGrant, TokenResult, TokenState, TokenStore

__all__ = [
    "AuthRequired",
    "CatalogueClient",
    "CatalogueResult",
    "FeedConfigError",
    "FeedError",
    "GrantMode",
    "JsonLdOffer",
    "JsonLdProduct",
    "OAuthClient",
    "ProductRecord",
    "TemplateError",
    "TokenGrant",
    "TokenResult",
    "TokenState",
    "TokenStore",
    "UpstreamApiError",
    "UpstreamAuthError",
    "UpstreamError",
]
