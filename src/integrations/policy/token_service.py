"""
Token lifecycle for the Cafe24 API.

The TokenManager is the gatekeeper every feed request goes through:
- a cached access token is reused until it is within the refresh margin
  of its expiry
- renewal uses the client_credentials grant or the refresh_token grant,
  depending on the deployment's grant mode
- with no refresh token in authorization-code mode the operator has to
  approve the app once at /auth

Renewals are single-flight per grant mode: concurrent callers that all see an
expired token wait for one in-flight renewal and then reuse its result.
Failures are returned as TokenResult variants rather than raised.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Dict

from src.integrations.contracts.errors import AuthRequired, UpstreamAuthError
from src.integrations.contracts.tokens import GrantMode, OAuthClient, TokenGrant, TokenResult, TokenState, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_MARGIN_SECONDS = 300


class TokenManager:
    def __init__(
        self,
        store: TokenStore,
        oauth_client: OAuthClient,
        grant_mode: GrantMode = GrantMode.AUTHORIZATION_CODE,
        refresh_margin_seconds: float = DEFAULT_REFRESH_MARGIN_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.oauth_client = oauth_client
        self.grant_mode = GrantMode(grant_mode)
        self.refresh_margin_seconds = refresh_margin_seconds
        self._clock = clock
        self._renewal_locks: Dict[GrantMode, asyncio.Lock] = {}

    def _lock_for(self, mode: GrantMode) -> asyncio.Lock:
        lock = self._renewal_locks.get(mode)
        if lock is None:
            lock = self._renewal_locks[mode] = asyncio.Lock()
        return lock

    def _cached_token(self):
        state = self.store.get()
        if state.is_fresh(self._clock(), self.refresh_margin_seconds):
            return state.access_token
        return None

    async def acquire_token(self) -> TokenResult:
        """Return a usable access token, renewing it when needed."""
        token = self._cached_token()
        if token:
            logger.debug("Using cached access token.")
            return TokenResult.success(token)

        async with self._lock_for(self.grant_mode):
            # Another request may have renewed while we waited.
            token = self._cached_token()
            if token:
                logger.debug("Access token renewed by a concurrent request.")
                return TokenResult.success(token)

            if self.grant_mode is GrantMode.CLIENT_CREDENTIALS:
                return await self._renew_with_client_credentials()
            return await self._renew_with_refresh_token()

    async def _renew_with_client_credentials(self) -> TokenResult:
        logger.info("Access token expired or missing. Requesting client credentials grant...")
        try:
            grant = await self.oauth_client.client_credentials_grant()
        except UpstreamAuthError as e:
            self.store.clear()
            logger.error("Client credentials grant failed: %s", e)
            return TokenResult.failure(e)

        self.store.set(self._state_from_grant(grant, fallback_refresh_token=None))
        logger.info("Client credentials token acquired.")
        return TokenResult.success(grant.access_token)

    async def _renew_with_refresh_token(self) -> TokenResult:
        current = self.store.get()
        if not current.refresh_token:
            logger.warning("No refresh token available; operator authorization required.")
            return TokenResult.failure(AuthRequired())

        logger.info("Access token expired. Refreshing...")
        try:
            grant = await self.oauth_client.refresh_grant(current.refresh_token)
        except UpstreamAuthError as e:
            # The refresh token itself may be expired or revoked.
            self.store.clear()
            logger.error("Refresh access token error: %s", e)
            return TokenResult.failure(e)

        self.store.set(self._state_from_grant(grant, fallback_refresh_token=current.refresh_token))
        logger.info("Token refreshed successfully.")
        return TokenResult.success(grant.access_token)

    async def exchange_authorization_code(self, code: str) -> TokenResult:
        """Exchange the one-time code from the OAuth callback for the first token pair."""
        logger.info("Authorization code received. Exchanging for token...")
        async with self._lock_for(GrantMode.AUTHORIZATION_CODE):
            try:
                grant = await self.oauth_client.authorization_code_grant(code)
            except UpstreamAuthError as e:
                current = self.store.get()
                self.store.set(TokenState(refresh_token=current.refresh_token))
                logger.error("Auth callback error: %s", e)
                return TokenResult.failure(e)

            self.store.set(self._state_from_grant(grant, fallback_refresh_token=None))
        logger.info("Token exchange successful.")
        return TokenResult.success(grant.access_token)

    def _state_from_grant(self, grant: TokenGrant, fallback_refresh_token) -> TokenState:
        return TokenState(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token or fallback_refresh_token,
            expires_at=self._clock() + grant.expires_in,
        )

    def status(self) -> dict:
        """Token summary for the health endpoint; never includes token values."""
        state = self.store.get()
        now = self._clock()
        return {
            "grant_mode": self.grant_mode.value,
            "has_access_token": bool(state.access_token),
            "has_refresh_token": bool(state.refresh_token),
            "access_token_fresh": state.is_fresh(now, self.refresh_margin_seconds),
            "expires_in_seconds": max(0, int(state.expires_at - now)) if state.access_token else None,
        }
