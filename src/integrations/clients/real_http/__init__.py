"""
Real HTTP integration clients.

These clients talk to Cafe24 over HTTP (httpx.AsyncClient):
- cafe24_oauth: token endpoint grants and the authorize URL
- cafe24_products: paginated product listing

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in src/api/dependencies.py only.
"""

from .cafe24_oauth import Cafe24OAuthClient
from .cafe24_products import Cafe24ProductCatalogueClient

__all__ = ["Cafe24OAuthClient", "Cafe24ProductCatalogueClient"]
