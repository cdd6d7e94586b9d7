"""
Base service class for scoutboard services.

Provides access to the backend client and retry logic for transient
network failures.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from scoutboard.config import Config
from scoutboard.utils.leaderboard_exceptions import BackendNetworkError

logger = logging.getLogger(__name__)

class BaseService:
    """Base class for all services that read from the backend."""

    def __init__(self, client):
        """
        Initialize base service with a backend client.

        Args:
            client: WebAppClient instance
        """
        self.client = client

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[Any]],
        max_retries: int = None
    ) -> Any:
        """Execute a backend call, retrying only on network errors."""
        max_retries = max_retries or Config.MAX_RETRIES
        for attempt in range(max_retries):
            try:
                return await func()
            except BackendNetworkError as e:
                if attempt == max_retries - 1:
                    raise
                logger.warning(f"Retry attempt {attempt + 1} for {getattr(func, '__name__', 'backend call')}: {e}")
                await asyncio.sleep(0.1 * (2 ** attempt))  # Exponential backoff
