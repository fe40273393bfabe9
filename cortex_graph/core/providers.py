"""
Request provider and token service - the transport seam.

The client never talks HTTP itself. It hands a fully built URL to a
RequestProvider and receives decoded JSON back. HttpRequestProvider is the
default implementation: a requests.Session run in a thread pool so callers
stay non-blocking.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


# Thread pool for running sync requests in async context
_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="cortex-graph")


class RequestProvider(ABC):
    """
    Performs an HTTP GET and decodes the JSON body.

    Failures (non-2xx status, transport errors, undecodable bodies) must be
    raised, not returned.
    """

    @abstractmethod
    async def get(
        self,
        url: str,
        auth_token: Optional[str] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Any:
        pass


class HttpRequestProvider(RequestProvider):
    """
    requests-based provider.

    Usage:
        provider = HttpRequestProvider(timeout=30)
        data = await provider.get("http://host/cortex/graph/neurons?limit=10")
    """

    def __init__(self, timeout: float = 30.0, session: requests.Session = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> 'HttpRequestProvider':
        """Create from Config object."""
        return cls(timeout=config.request_timeout)

    def _get_headers(self, auth_token: Optional[str] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json"}

        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"

        return headers

    def _get_sync(self, url: str, auth_token: Optional[str] = None) -> Any:
        """Synchronous GET (internal)."""
        logger.debug(f"GET {url}")
        response = self.session.get(url, headers=self._get_headers(auth_token), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def get(
        self,
        url: str,
        auth_token: Optional[str] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Any:
        # The retry policy watches cancel_event; a cancelled await here
        # abandons the worker thread's result.
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_executor, lambda: self._get_sync(url, auth_token))

    def close(self) -> None:
        self.session.close()


class TokenService(ABC):
    """Supplies the bearer token attached to each request."""

    @abstractmethod
    def get_access_token(self) -> Optional[str]:
        pass


class StaticTokenService(TokenService):
    """Always returns the same token (e.g. from CORTEX_GRAPH_ACCESS_TOKEN)."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def get_access_token(self) -> Optional[str]:
        return self.token
