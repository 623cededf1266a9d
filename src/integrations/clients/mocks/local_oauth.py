"""
Cafe24 OAuth: MOCK client.

⚠️  This is a mock implementation for local development and testing.
    It issues locally generated tokens without any network call so the feed
    can be exercised before Cafe24 app credentials are available.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import urlencode

from src.integrations.contracts.errors import UpstreamAuthError
from src.integrations.contracts.tokens import OAuthClient, TokenGrant

logger = logging.getLogger(__name__)


class MockOAuthClient(OAuthClient):
    """
    Mock token endpoint.

    Parameters
    ----------
    expires_in : float
        Lifetime in seconds of every issued access token. Default 7200.
    reject_codes : set of str
        Authorization codes the mock refuses, to exercise the failure page.
    redirect_uri : str
        Where the fake authorize page sends the browser back to.
    """

    def __init__(
        self,
        expires_in: float = 7200,
        reject_codes: Optional[set] = None,
        redirect_uri: str = "/",
    ):
        self._expires_in = expires_in
        self._reject_codes = set(reject_codes or ())
        self._redirect_uri = redirect_uri
        self.calls = []

        logger.info("[OAUTH MOCK] Client initialised (expires_in=%ss)", expires_in)

    def _issue(self, grant_type: str, with_refresh: bool) -> TokenGrant:
        self.calls.append(grant_type)
        return TokenGrant(
            access_token=f"mock-access-{uuid.uuid4().hex[:12]}",
            refresh_token=f"mock-refresh-{uuid.uuid4().hex[:12]}" if with_refresh else None,
            expires_in=self._expires_in,
        )

    async def client_credentials_grant(self) -> TokenGrant:
        return self._issue("client_credentials", with_refresh=False)

    async def refresh_grant(self, refresh_token: str) -> TokenGrant:
        return self._issue("refresh_token", with_refresh=True)

    async def authorization_code_grant(self, code: str) -> TokenGrant:
        if code in self._reject_codes:
            self.calls.append("authorization_code")
            raise UpstreamAuthError("Token exchange failed", status_code=400, body='{"error":"invalid_grant"}')
        return self._issue("authorization_code", with_refresh=True)

    def authorize_url(self) -> str:
        # Skip the consent screen: bounce straight back with a fake code.
        return f"{self._redirect_uri}?{urlencode({'code': 'mock-code'})}"
