"""
Processors package.

Processing turns raw Cafe24 product records into the JSON-LD feed page.
"""

from .feed_renderer import FeedRenderer

__all__ = ["FeedRenderer"]
