"""
Mock integration clients.

These clients return fake (but realistic) responses without calling Cafe24.
They are used when:
- Cafe24 app credentials are not yet available
- We want to exercise the feed end-to-end without external dependencies

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*

Switching to real:
Set INTEGRATIONS_MODE=real (the default); src/api/dependencies.py then wires
clients/real_http/* instead.
"""

from .local_oauth import MockOAuthClient
from .local_product_catalogues import LocalProductCatalogueClient

__all__ = ["MockOAuthClient", "LocalProductCatalogueClient"]
