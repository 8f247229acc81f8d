"""
Storefront feed strategy.

Pages through `/products.json?page=N&limit=250`. The feed has no total
count, so a page shorter than the limit is taken as the last one.

All or nothing: an empty first page or any error on any page fails the
strategy and drops what earlier pages returned, so the crawl takes over.
"""

from typing import Optional, List, Any

from ..config import config
from ..errors import FetchError
from ..logger import get_strategy_logger
from ..models import Product, Variant, ExtractionStrategy, StrategyResult
from ..normalize import price_from_values, to_price_number
from ..throttle import Throttle
from .base import StoreStrategy

log = get_strategy_logger('feed')


class FeedStrategy(StoreStrategy):
    """Extract the whole catalog via the products.json feed."""

    strategy_type = ExtractionStrategy.FEED

    def __init__(self, http, throttle: Optional[Throttle] = None, page_size: Optional[int] = None):
        self.http = http
        self.throttle = throttle or Throttle()
        self.page_size = page_size or config.PAGE_SIZE

    def feed_url(self, store_url: str, page: int) -> str:
        return f"{store_url}/products.json?page={page}&limit={self.page_size}"

    async def run(self, store_url: str) -> StrategyResult:
        products: List[Product] = []
        page = 1

        try:
            while True:
                log.info(f"Fetching page {page} of products (limit: {self.page_size})...")
                entries = await self.fetch_page(store_url, page)

                if not entries:
                    if page == 1:
                        return StrategyResult.failure(self.strategy_type, "No products found via feed")
                    log.info("Reached the last page of products.")
                    break

                log.info(f"Retrieved {len(entries)} products from page {page}")
                for entry in entries:
                    products.append(self._parse_entry(entry, store_url))
                    await self.throttle.after_entry()

                if len(entries) < self.page_size:
                    log.info("Reached the last page of products.")
                    break

                page += 1
                await self.throttle.between_pages()

        except FetchError as e:
            log.warning(f"Feed request failed: {e}")
            return StrategyResult.failure(self.strategy_type, f"HTTP error: {e}")
        except (KeyError, TypeError, ValueError) as e:
            log.warning(f"Feed page {page} could not be parsed: {e}")
            return StrategyResult.failure(self.strategy_type, f"Malformed feed: {e}")

        log.info(f"Total products fetched via feed: {len(products)}")
        return StrategyResult.from_products(products, self.strategy_type)

    async def fetch_page(self, store_url: str, page: int) -> List[dict]:
        """Raw entries of one feed page. A body without `products` counts as empty."""
        data = await self.http.get_json(self.feed_url(store_url, page))
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        entries = data.get('products')
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ValueError(f"'products' is {type(entries).__name__}, not a list")
        return entries

    def _parse_entry(self, entry: dict, store_url: str) -> Product:
        """Map one feed entry onto the canonical record."""
        if not isinstance(entry, dict):
            raise TypeError(f"feed entry is {type(entry).__name__}, not an object")

        handle = entry.get('handle') or str(entry['id'])
        raw_variants = entry.get('variants') or []

        return self._create_product(
            url=f"{store_url}/products/{handle}",
            product_id=entry.get('id'),
            handle=handle,
            title=entry.get('title'),
            description=entry.get('body_html'),
            price=price_from_values(v.get('price') for v in raw_variants if isinstance(v, dict)),
            images=self._image_sources(entry.get('images')),
            variants=[self._parse_variant(v) for v in raw_variants if isinstance(v, dict)],
        )

    def _image_sources(self, images: Any) -> List[Any]:
        sources = []
        for img in images or []:
            if isinstance(img, dict):
                sources.append(img.get('src'))
            else:
                sources.append(img)
        return sources

    def _parse_variant(self, data: dict) -> Variant:
        available = data.get('available')
        return Variant(
            id=data.get('id'),
            title=data.get('title'),
            price=to_price_number(data.get('price')),
            sku=data.get('sku') or None,
            available=available if isinstance(available, bool) else None,
        )
