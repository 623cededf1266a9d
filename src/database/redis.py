"""
Lightweight in-memory token cache for local development and single-process
deployments.

Implements the TokenStore interface so the TokenManager can run without a
real Redis instance. Tokens are lost when the process restarts, which on a
serverless platform means after every cold start.
"""

from __future__ import annotations

from src.integrations.contracts.tokens import TokenState, TokenStore


class TokenCache(TokenStore):
    def __init__(self) -> None:
        self._state = TokenState()

    def get(self) -> TokenState:
        return self._state

    def set(self, state: TokenState) -> None:
        self._state = state

    def clear(self) -> None:
        self._state = TokenState()

    def ping(self) -> bool:
        """
        The health check calls this; always True for the in-memory store.
        """
        return True
