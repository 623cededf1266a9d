"""
Configuration loader for the AI feed service.

Non-secret tuning lives in config/feed_config.yml; credentials and
deployment-specific values come from the environment (.env is loaded by
the entrypoints via python-dotenv).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.errors import FeedConfigError
from src.integrations.contracts.tokens import GrantMode

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "feed_config.yml"


class RateLimitConfig(BaseModel):
    """Rate limiting configuration for catalogue page requests"""

    enabled: bool = True
    requests_per_minute: int = Field(default=120, ge=1, le=6000)


class Cafe24Config(BaseModel):
    mall_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    scope: str = "mall.read_product"
    token_path: str = "/oauth/token"
    grant_mode: GrantMode = GrantMode.AUTHORIZATION_CODE
    public_base_url: str = "http://localhost:3000"

    @property
    def api_base_url(self) -> str:
        return f"https://{self.mall_id}.cafe24api.com"

    @property
    def redirect_uri(self) -> str:
        # Must match the Redirect URI registered in the Cafe24 developer console exactly.
        return f"{self.public_base_url.rstrip('/')}/"


class TokenConfig(BaseModel):
    refresh_margin_seconds: int = Field(default=300, ge=0)
    request_timeout_seconds: float = Field(default=20.0, gt=0)


class CatalogueConfig(BaseModel):
    page_size: int = Field(default=100, ge=1, le=100)
    max_pages: int = Field(default=200, ge=1)
    request_timeout_seconds: float = Field(default=20.0, gt=0)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)


class RenderConfig(BaseModel):
    currency: str = "KRW"
    shop_base_url: Optional[str] = None
    template_path: str = "public/ai-feed.html"
    placeholder: str = "<!-- AI_FEED_JSONLD -->"


class ServerConfig(BaseModel):
    port: int = Field(default=3000, ge=1, le=65535)
    public_dir: str = "public"


class FeedConfig(BaseModel):
    integrations_mode: Literal["real", "mock"] = "real"
    redis_url: Optional[str] = None
    cafe24: Cafe24Config = Field(default_factory=Cafe24Config)
    token: TokenConfig = Field(default_factory=TokenConfig)
    catalogue: CatalogueConfig = Field(default_factory=CatalogueConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    def shop_base_url(self) -> str:
        return (self.render.shop_base_url or f"https://{self.cafe24.mall_id}.com").rstrip("/")

    def resolve_path(self, value: str) -> Path:
        path = Path(value)
        return path if path.is_absolute() else BASE_DIR / path

    def require_credentials(self) -> None:
        """Raise FeedConfigError when the settings needed to reach Cafe24 are missing."""
        if self.integrations_mode == "mock":
            return
        missing = [
            name
            for name, value in (
                ("CAFE24_MALL_ID", self.cafe24.mall_id),
                ("CAFE24_CLIENT_ID", self.cafe24.client_id),
                ("CAFE24_SECRET_KEY", self.cafe24.client_secret),
            )
            if not value
        ]
        if missing:
            raise FeedConfigError(f"Missing required configuration: {', '.join(missing)}")


# env var -> (section, key)
_ENV_OVERRIDES = {
    "CAFE24_MALL_ID": ("cafe24", "mall_id"),
    "CAFE24_CLIENT_ID": ("cafe24", "client_id"),
    "CAFE24_SECRET_KEY": ("cafe24", "client_secret"),
    "CAFE24_API_SCOPE": ("cafe24", "scope"),
    "CAFE24_GRANT_MODE": ("cafe24", "grant_mode"),
    "PUBLIC_BASE_URL": ("cafe24", "public_base_url"),
    "SHOP_BASE_URL": ("render", "shop_base_url"),
    "PORT": ("server", "port"),
}


def _apply_env(data: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = (env.get(var) or "").strip()
        if value:
            data.setdefault(section, {})[key] = value

    mode = (env.get("INTEGRATIONS_MODE") or "").strip().lower()
    if mode in {"mock", "test"}:
        data["integrations_mode"] = "mock"
    elif mode in {"real", "live"}:
        data["integrations_mode"] = "real"

    redis_url = (env.get("REDIS_URL") or "").strip()
    if redis_url:
        data["redis_url"] = redis_url
    return data


def load_feed_config(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> FeedConfig:
    """
    Load the YAML tuning file (if present) and overlay environment values.

    Args:
        config_path: Path to config file. Defaults to config/feed_config.yml
        env: Environment mapping. Defaults to os.environ

    Raises:
        FeedConfigError: If the merged values don't match the schema
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    if env is None:
        env = os.environ

    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded feed config from %s", config_path)
    else:
        logger.info("Feed config file %s not found; using defaults", config_path)

    try:
        return FeedConfig(**_apply_env(data, env))
    except ValidationError as e:
        logger.error(f"Feed config validation failed: {e}")
        raise FeedConfigError(f"Invalid feed configuration: {e}") from e
