"""
Session management for OKX client.

Handles connection lifecycle, session creation, and resource cleanup.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import aiohttp

from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

HEALTH_CHECK_PATH = "/api/v5/public/time"


class SessionManager:
    """Manages HTTP session lifecycle for OKX client."""

    def __init__(self, config: ConnectionConfig):
        """Initialize session manager with configuration."""
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Create and configure HTTP session, reusing an open one."""
        if self._session is not None and not self._session.closed:
            return self._session

        connector = aiohttp.TCPConnector(
            limit=100,
            limit_per_host=20,
            ttl_dns_cache=300,
            use_dns_cache=True,
        )

        timeout = aiohttp.ClientTimeout(total=self._config.timeout)

        headers = {
            "User-Agent": "okx-client/1.0",
            "Accept": "application/json",
        }

        self._session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers=headers,
        )
        logger.debug("HTTP session created")

        return self._session

    async def close_session(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Get current session without creating one."""
        return self._session

    @asynccontextmanager
    async def managed_session(self):
        """Context manager for automatic session lifecycle management."""
        session = await self.create_session()
        try:
            yield session
        finally:
            await self.close_session()

    async def health_check(self) -> bool:
        """Ping the public server-time endpoint."""
        if not self._session or self._session.closed:
            return False

        try:
            async with self._session.get(
                f"{self._config.base_url}{HEALTH_CHECK_PATH}",
                timeout=aiohttp.ClientTimeout(total=5.0),
            ) as response:
                return response.status == 200
        except (aiohttp.ClientError, ConnectionError, asyncio.TimeoutError) as e:
            logger.warning(f"Health check request failed: {e}")
            return False
