"""
Catalog Pipeline - top-level control for one store.

Tries the feed first; when it fails or returns nothing, crawls the catalog.
The result is always a list (possibly empty). The only exception that
escapes is InvalidStoreUrlError, raised before any request is made.

Usage:
    pipeline = CatalogPipeline()
    products = await pipeline.run("example-store.com")
"""

from typing import Optional, List

from .crawler import CatalogCrawler
from .http_client import StoreHttpClient
from .logger import get_strategy_logger
from .models import Product, StrategyResult
from .normalize import normalize_store_url
from .strategies import FeedStrategy, StoreStrategy
from .throttle import Throttle

log = get_strategy_logger('pipeline')


class CatalogPipeline:
    """Runs store strategies in priority order until one yields products."""

    def __init__(
        self,
        http=None,
        throttle: Optional[Throttle] = None,
        page_size: Optional[int] = None,
        max_products: Optional[int] = None,
    ):
        self.http = http
        self.throttle = throttle or Throttle()
        self.page_size = page_size
        self.max_products = max_products
        self.results: List[StrategyResult] = []

    def build_strategies(self, http) -> List[StoreStrategy]:
        # Order = priority
        return [
            FeedStrategy(http, self.throttle, page_size=self.page_size),
            CatalogCrawler(http, self.throttle, max_products=self.max_products),
        ]

    async def run(self, store_url: str) -> List[Product]:
        """
        Scrape every product of a store.

        Raises:
            InvalidStoreUrlError: if `store_url` has no usable host
        """
        base_url = normalize_store_url(store_url)
        log.info(f"Starting to scrape: {base_url}")

        if self.http is not None:
            return await self._run(base_url, self.http)

        async with StoreHttpClient() as http:
            return await self._run(base_url, http)

    async def _run(self, base_url: str, http) -> List[Product]:
        products: List[Product] = []
        self.results = []

        try:
            for strategy in self.build_strategies(http):
                result = await strategy.run(base_url)
                self.results.append(result)

                if result.success and result.products:
                    products = products + result.products
                    log.info(f"{result.count} products via {result.strategy.value}")
                    break

                reason = result.error or "no products"
                log.info(f"{strategy.strategy_type.value} strategy failed ({reason}), falling back...")
            else:
                log.warning(f"No strategy produced products for {base_url}")
        except Exception:
            log.exception(f"Error during scraping of {base_url}")

        return products

    @property
    def winning_result(self) -> Optional[StrategyResult]:
        """The strategy result that produced the run's products, if any."""
        for result in self.results:
            if result.success and result.products:
                return result
        return None

