"""
Error taxonomy shared by the token, catalogue and rendering layers.

Every error the feed pipeline can surface derives from FeedError so the API
layer can render them through a single exception handler.
"""

from __future__ import annotations

from typing import Optional

BODY_EXCERPT_CHARS = 300


def excerpt(text: Optional[str], limit: int = BODY_EXCERPT_CHARS) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class FeedError(Exception):
    """Base class for failures surfaced to the feed caller."""


class FeedConfigError(FeedError):
    pass


class AuthRequired(FeedError):
    """No usable credential path; the operator must authorize the app at /auth."""

    def __init__(self, message: str = "Not authorized. No refresh token available. Please visit /auth to authorize the app.") -> None:
        super().__init__(message)


class UpstreamError(FeedError):
    def __init__(self, message: str, *, status_code: Optional[int], body: str = "") -> None:
        self.status_code = status_code
        self.body = excerpt(body)
        detail = " - ".join(str(part) for part in (status_code, self.body) if part)
        super().__init__(f"{message}: {detail}" if detail else message)


class UpstreamAuthError(UpstreamError):
    """Token, refresh or code-exchange call rejected by the OAuth endpoint."""


class UpstreamApiError(UpstreamError):
    """Product listing call rejected."""


class TemplateError(FeedError):
    pass
