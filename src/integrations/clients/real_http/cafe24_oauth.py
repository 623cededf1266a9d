"""
Cafe24 OAuth HTTP Client.

Purpose:
- Performs the client_credentials, refresh_token and authorization_code grants
  against https://{mall_id}.cafe24api.com/oauth/token (path configurable)
- Builds the authorize URL the operator visits once to approve the app

Important:
- This client is the ONLY place that talks to the Cafe24 token endpoint.
- It never touches the token store; the TokenManager decides what to keep.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urlencode

import httpx

from src.integrations.contracts.errors import UpstreamAuthError
from src.integrations.contracts.tokens import OAuthClient, TokenGrant
from src.integrations.policy.response_wrappers import normalize_token_response

logger = logging.getLogger(__name__)


class Cafe24OAuthClient(OAuthClient):
    def __init__(
        self,
        mall_id: str,
        client_id: str,
        client_secret: str,
        scope: str,
        redirect_uri: str,
        base_url: Optional[str] = None,
        token_path: str = "/oauth/token",
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.mall_id = mall_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.redirect_uri = redirect_uri
        self.base_url = (base_url or f"https://{mall_id}.cafe24api.com").rstrip("/")
        self.token_path = "/" + token_path.lstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def token_url(self) -> str:
        return f"{self.base_url}{self.token_path}"

    def authorize_url(self) -> str:
        query = urlencode(
            {
                "response_type": "code",
                "client_id": self.client_id,
                "scope": self.scope,
                "redirect_uri": self.redirect_uri,
            }
        )
        return f"{self.base_url}/api/v2/oauth/authorize?{query}"

    async def client_credentials_grant(self) -> TokenGrant:
        return await self._post_grant(
            "Client credentials grant failed",
            {
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": self.scope,
            },
        )

    async def refresh_grant(self, refresh_token: str) -> TokenGrant:
        return await self._post_grant(
            "Refresh token failed",
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        )

    async def authorization_code_grant(self, code: str) -> TokenGrant:
        return await self._post_grant(
            "Token exchange failed",
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        )

    async def _post_grant(self, failure_message: str, form: Dict[str, str]) -> TokenGrant:
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        logger.info("Requesting %s grant from %s", form["grant_type"], self.token_url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(self.token_url, data=form, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamAuthError(f"{failure_message} (network error)", status_code=None, body=str(exc)) from exc

        if not response.is_success:
            logger.warning("%s with status %s", failure_message, response.status_code)
            raise UpstreamAuthError(failure_message, status_code=response.status_code, body=response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamAuthError(
                f"{failure_message} (response was not JSON)",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        return normalize_token_response(data, status_code=response.status_code)
