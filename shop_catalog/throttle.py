"""
Fixed-delay throttle.

Requests are never concurrent, so bounding the request rate only needs fixed
sleeps at three points:

    after each feed entry      ENTRY_DELAY   (0.5s)
    between feed pages         PAGE_DELAY    (2.0s)
    between product pages      PRODUCT_DELAY (2.0s)
"""

import asyncio
from typing import Optional

from .config import config


class Throttle:
    """Applies the configured delays. One instance is shared across a run."""

    def __init__(
        self,
        entry_delay: Optional[float] = None,
        page_delay: Optional[float] = None,
        product_delay: Optional[float] = None,
    ):
        self.entry_delay = config.ENTRY_DELAY if entry_delay is None else entry_delay
        self.page_delay = config.PAGE_DELAY if page_delay is None else page_delay
        self.product_delay = config.PRODUCT_DELAY if product_delay is None else product_delay

    async def after_entry(self):
        await self._sleep(self.entry_delay)

    async def between_pages(self):
        await self._sleep(self.page_delay)

    async def between_products(self):
        await self._sleep(self.product_delay)

    async def _sleep(self, seconds: float):
        if seconds > 0:
            await asyncio.sleep(seconds)

