"""
HTTP access to the storefront.

One aiohttp session per run. Every failure (transport error, timeout, non-2xx,
body that isn't the expected format) is raised as FetchError so callers only
handle one exception type.
"""

import asyncio
import json
from typing import Optional, Any

import aiohttp

from .config import config
from .errors import FetchError
from .logger import get_strategy_logger

log = get_strategy_logger('http')


class StoreHttpClient:
    """
    GET-only client with a bounded timeout, browser-like headers and
    optional TLS verification.

    Usage:
        async with StoreHttpClient() as http:
            data = await http.get_json(url)
            html = await http.get_text(url)
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        verify_tls: Optional[bool] = None,
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.verify_tls = verify_tls if verify_tls is not None else config.VERIFY_TLS
        self.headers = {
            'User-Agent': user_agent or config.USER_AGENT,
            'Accept': 'text/html,application/json,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        }
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> 'StoreHttpClient':
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def open(self):
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=None if self.verify_tls else False)
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                connector=connector,
            )

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get_text(self, url: str) -> str:
        """Fetch a page body as text."""
        if self._session is None:
            await self.open()

        log.debug(f"GET {url}")
        try:
            async with self._session.get(url) as response:
                if response.status < 200 or response.status >= 300:
                    raise FetchError(url, f"HTTP {response.status}", status=response.status)
                return await response.text()
        except aiohttp.ClientError as e:
            raise FetchError(url, f"HTTP error: {e}") from e
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"Timed out after {self.timeout}s") from e

    async def get_json(self, url: str) -> Any:
        """Fetch and decode a JSON body."""
        text = await self.get_text(url)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise FetchError(url, f"Invalid JSON: {e}") from e
