"""
Dependency wiring for the AI feed API.

The selection of mock vs real clients and of the in-memory vs Redis token
store happens here and nowhere else. Routes receive their collaborators
through FastAPI's Depends so tests can swap them with
app.dependency_overrides.
"""

import logging
from functools import lru_cache

from src.database.redis import TokenCache as InMemoryTokenCache
from src.error_handler import ErrorHandler
from src.integrations.clients.mocks.local_oauth import MockOAuthClient
from src.integrations.clients.mocks.local_product_catalogues import LocalProductCatalogueClient
from src.integrations.clients.real_http.cafe24_oauth import Cafe24OAuthClient
from src.integrations.clients.real_http.cafe24_products import Cafe24ProductCatalogueClient
from src.integrations.contracts.product_catalogues import CatalogueClient
from src.integrations.contracts.tokens import OAuthClient, TokenStore
from src.integrations.policy.feed_service import FeedService
from src.integrations.policy.token_service import TokenManager
from src.processors.feed_renderer import FeedRenderer
from src.utils.config_loader import FeedConfig, load_feed_config
from src.utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_config() -> FeedConfig:
    return load_feed_config()


def build_token_store(config: FeedConfig) -> TokenStore:
    if config.redis_url:
        from src.database.redis_real import TokenCache as RedisTokenCache

        logger.info("Using Redis token store")
        return RedisTokenCache(url=config.redis_url, mall_id=config.cafe24.mall_id or "default")
    logger.info("REDIS_URL not set; tokens are kept in process memory")
    return InMemoryTokenCache()


def build_oauth_client(config: FeedConfig) -> OAuthClient:
    if config.integrations_mode == "mock":
        return MockOAuthClient(redirect_uri=config.cafe24.redirect_uri)
    config.require_credentials()
    return Cafe24OAuthClient(
        mall_id=config.cafe24.mall_id,
        client_id=config.cafe24.client_id,
        client_secret=config.cafe24.client_secret,
        scope=config.cafe24.scope,
        redirect_uri=config.cafe24.redirect_uri,
        token_path=config.cafe24.token_path,
        timeout_seconds=config.token.request_timeout_seconds,
    )


def build_catalogue_client(config: FeedConfig) -> CatalogueClient:
    if config.integrations_mode == "mock":
        return LocalProductCatalogueClient(page_size=config.catalogue.page_size)
    config.require_credentials()
    rate_limit = config.catalogue.rate_limit
    return Cafe24ProductCatalogueClient(
        mall_id=config.cafe24.mall_id,
        page_size=config.catalogue.page_size,
        max_pages=config.catalogue.max_pages,
        timeout_seconds=config.catalogue.request_timeout_seconds,
        rate_limiter=RateLimiter(rate_limit.requests_per_minute) if rate_limit.enabled else None,
    )


def build_token_manager(config: FeedConfig) -> TokenManager:
    return TokenManager(
        store=build_token_store(config),
        oauth_client=build_oauth_client(config),
        grant_mode=config.cafe24.grant_mode,
        refresh_margin_seconds=config.token.refresh_margin_seconds,
    )


def build_feed_service(config: FeedConfig, token_manager: TokenManager) -> FeedService:
    return FeedService(
        token_manager=token_manager,
        catalogue_client=build_catalogue_client(config),
        renderer=FeedRenderer(
            shop_base_url=config.shop_base_url(),
            currency=config.render.currency,
            placeholder=config.render.placeholder,
        ),
        template_path=config.resolve_path(config.render.template_path),
    )


# Process-wide singletons: the token manager owns the token store and the
# renewal locks, so every request must share the same instance.
_token_manager = None
_feed_service = None


def get_token_manager() -> TokenManager:
    global _token_manager
    if _token_manager is None:
        _token_manager = build_token_manager(get_config())
    return _token_manager


def get_feed_service() -> FeedService:
    global _feed_service
    if _feed_service is None:
        _feed_service = build_feed_service(get_config(), get_token_manager())
    return _feed_service


def get_error_handler() -> ErrorHandler:
    return ErrorHandler()
