"""
Rate limiting utility for upstream API calls
"""
import asyncio
import time
from collections import deque
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Rate limiter that enforces requests per minute limit
    Uses sliding window algorithm
    """

    def __init__(self, requests_per_minute: int, clock: Callable[[], float] = time.monotonic):
        """
        Initialize rate limiter

        Args:
            requests_per_minute: Maximum number of requests allowed per minute
            clock: Monotonic time source (overridable in tests)
        """
        self.requests_per_minute = requests_per_minute
        self.request_times: deque = deque()
        self.last_request_time: Optional[float] = None
        self._clock = clock

    def _cleanup_old_requests(self, current_time: float) -> None:
        """Remove requests older than 1 minute"""
        while self.request_times and current_time - self.request_times[0] > 60.0:
            self.request_times.popleft()

    def _wait_time(self, current_time: float) -> float:
        if len(self.request_times) < self.requests_per_minute:
            return 0.0
        oldest_time = self.request_times[0]
        return max(0.0, 60.0 - (current_time - oldest_time) + 0.1)  # Add small buffer

    async def wait_if_needed(self) -> None:
        """
        Wait if necessary to respect rate limit
        Should be awaited before each request
        """
        if not self.requests_per_minute:
            return

        current_time = self._clock()
        self._cleanup_old_requests(current_time)

        wait_time = self._wait_time(current_time)
        if wait_time > 0:
            logger.debug(f"Rate limit reached. Waiting {wait_time:.2f} seconds")
            await asyncio.sleep(wait_time)
            current_time = self._clock()
            self._cleanup_old_requests(current_time)

        # Record this request
        self.request_times.append(current_time)
        self.last_request_time = current_time

    def get_stats(self) -> dict:
        """Get current rate limiter statistics"""
        current_time = self._clock()
        self._cleanup_old_requests(current_time)

        return {
            'requests_in_last_minute': len(self.request_times),
            'limit': self.requests_per_minute,
            'last_request_time': self.last_request_time
        }
