"""
Utility modules for the AI feed service
"""
from .config_loader import FeedConfig, load_feed_config
from .rate_limiter import RateLimiter

__all__ = [
    'FeedConfig',
    'load_feed_config',
    'RateLimiter',
]
