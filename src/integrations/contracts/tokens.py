"""
Token contracts.

Defines the credential state held between requests, the parsed token
endpoint response, and the interfaces implemented by:
- src/database/redis.py / src/database/redis_real.py (TokenStore)
- clients/mocks/local_oauth.py / clients/real_http/cafe24_oauth.py (OAuthClient)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import AuthRequired, UpstreamAuthError


class GrantMode(str, Enum):
    CLIENT_CREDENTIALS = "client_credentials"
    AUTHORIZATION_CODE = "authorization_code"


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenState:
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: float = 0.0              # epoch seconds; meaningless without access_token

    def is_fresh(self, now: float, margin_seconds: float) -> bool:
        return bool(self.access_token) and now < self.expires_at - margin_seconds


@dataclass(frozen=True)
class TokenGrant:
    access_token: str
    expires_in: float
    refresh_token: Optional[str] = None


@dataclass(frozen=True)
class TokenResult:
    """Outcome of acquiring a token: exactly one of access_token / error is set."""
    access_token: Optional[str] = None
    error: Optional[Union[AuthRequired, UpstreamAuthError]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, access_token: str) -> "TokenResult":
        return cls(access_token=access_token)

    @classmethod
    def failure(cls, error: Union[AuthRequired, UpstreamAuthError]) -> "TokenResult":
        return cls(error=error)

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.access_token


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class TokenStore(ABC):
    """Holds the current TokenState for one mall."""

    @abstractmethod
    def get(self) -> TokenState:
        """Return the current state (empty TokenState when nothing is stored)."""

    @abstractmethod
    def set(self, state: TokenState) -> None:
        """Replace the stored state wholesale."""

    @abstractmethod
    def clear(self) -> None:
        """Forget both tokens."""

    def ping(self) -> bool:
        return True


class OAuthClient(ABC):
    """The only component that talks to the upstream token endpoint."""

    @abstractmethod
    async def client_credentials_grant(self) -> TokenGrant:
        """Authenticate the app itself. Raises UpstreamAuthError on rejection."""

    @abstractmethod
    async def refresh_grant(self, refresh_token: str) -> TokenGrant:
        """Exchange a refresh token. Raises UpstreamAuthError on rejection."""

    @abstractmethod
    async def authorization_code_grant(self, code: str) -> TokenGrant:
        """Exchange a one-time authorization code. Raises UpstreamAuthError on rejection."""

    @abstractmethod
    def authorize_url(self) -> str:
        """URL the operator's browser is sent to for the authorization-code flow."""
