"""
Real Redis-backed token cache for deployments where REDIS_URL is set.
Implements the same interface as src.database.redis (in-memory stub) and
keeps the refresh token across restarts and serverless cold starts.

Only OAuth tokens are stored here; product data is never cached.
"""

from __future__ import annotations

import json

import redis

from src.integrations.contracts.tokens import TokenState, TokenStore


class TokenCache(TokenStore):
    """
    Redis-backed token cache keyed by mall id.
    """

    def __init__(self, url: str, mall_id: str, client=None) -> None:
        self._client = client if client is not None else redis.from_url(url, decode_responses=True)
        self._key = f"ai_feed:tokens:{mall_id}"

    def get(self) -> TokenState:
        raw = self._client.get(self._key)
        if not raw:
            return TokenState()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return TokenState()
        return TokenState(
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            expires_at=float(data.get("expires_at") or 0.0),
        )

    def set(self, state: TokenState) -> None:
        payload = json.dumps(
            {
                "access_token": state.access_token,
                "refresh_token": state.refresh_token,
                "expires_at": state.expires_at,
            }
        )
        self._client.set(self._key, payload)

    def clear(self) -> None:
        self._client.delete(self._key)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
