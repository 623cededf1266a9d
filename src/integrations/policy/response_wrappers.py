from __future__ import annotations

import json
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from src.integrations.contracts.errors import UpstreamApiError, UpstreamAuthError
from src.integrations.contracts.product_catalogues import ProductRecord
from src.integrations.contracts.tokens import TokenGrant

# Cafe24 reports expires_at as Korean wall-clock time without an offset.
CAFE24_TIMEZONE = timezone(timedelta(hours=9), "KST")


def normalize_token_response(
    raw: Dict[str, Any],
    *,
    status_code: int = 200,
    clock: Callable[[], float] = time.time,
) -> TokenGrant:
    """Turn a token endpoint success body into a TokenGrant.

    Cafe24 documents `expires_at` (ISO-8601, naive values in KST) while
    generic OAuth servers send `expires_in`; either is accepted, and a body with neither is treated as
    already expired.
    """
    access_token = _first_non_empty(raw, "access_token")
    if access_token is None:
        raise UpstreamAuthError(
            "Token response missing access_token",
            status_code=status_code,
            body=json.dumps(raw, default=str),
        )

    expires_in = _coerce_expires_in(raw, clock)
    refresh_token = _first_non_empty(raw, "refresh_token")

    return TokenGrant(
        access_token=str(access_token),
        expires_in=expires_in,
        refresh_token=str(refresh_token) if refresh_token is not None else None,
    )


def normalize_products_page(raw: Any, *, status_code: int = 200) -> List[ProductRecord]:
    products = raw.get("products") if isinstance(raw, dict) else None
    if not isinstance(products, list):
        raise UpstreamApiError(
            "Unexpected product listing payload",
            status_code=status_code,
            body=json.dumps(raw, default=str),
        )
    return [p for p in products if isinstance(p, dict)]


def _coerce_expires_in(raw: Dict[str, Any], clock: Callable[[], float]) -> float:
    value = _first_non_empty(raw, "expires_in")
    if value is not None:
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            pass

    expires_at = _first_non_empty(raw, "expires_at")
    if expires_at is not None:
        try:
            parsed = datetime.fromisoformat(str(expires_at))
        except ValueError:
            return 0.0
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=CAFE24_TIMEZONE)
        return max(0.0, parsed.timestamp() - clock())

    return 0.0


def _first_non_empty(data: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None
