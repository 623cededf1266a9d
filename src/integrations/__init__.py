"""
Integrations layer.
This package contains all code used to communicate with Cafe24:
- the OAuth token endpoint (client_credentials / refresh_token / authorization_code)
- the product listing API

Key rule:
- Routes and the feed renderer MUST NOT call Cafe24 directly.
- They go through the TokenManager and catalogue clients in this package.
- MOCK clients are used for local development; REAL_HTTP clients in production.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""
