"""
Catalog crawl: the fallback when the feed is unavailable.

Finds product links on the store's /collections/all page, then visits each
product page in turn: LD+JSON first, visible markup otherwise. One broken
product page is logged and skipped; it never stops the crawl.
"""

from typing import Optional, List

from .config import config
from .errors import FetchError
from .logger import get_strategy_logger
from .models import Product, ExtractionStrategy, StrategyResult, PageData
from .strategies import StoreStrategy, LdJsonStrategy, MarkupStrategy
from .strategies.base import PRODUCT_PATH_MARKER, parse_html
from .throttle import Throttle

log = get_strategy_logger('crawl')

CATALOG_PATH = '/collections/all'


def resolve_link(href: str, store_url: str) -> str:
    """Absolute URL for a catalog link; relative paths hang off the store base."""
    if href.startswith(('http://', 'https://')):
        return href
    if href.startswith('//'):
        return 'https:' + href
    return store_url + (href if href.startswith('/') else '/' + href)


def discover_product_urls(html: str, store_url: str) -> List[str]:
    """
    Product page URLs linked from a listing page, in discovery order.

    Duplicates are removed by exact string, so the same product linked with
    two different query strings appears twice.
    """
    soup = parse_html(html)
    urls = []
    seen = set()
    for anchor in soup.select(f'a[href*="{PRODUCT_PATH_MARKER}"]'):
        href = (anchor.get('href') or '').strip()
        if PRODUCT_PATH_MARKER not in href:
            continue
        url = resolve_link(href, store_url)
        if url not in seen:
            seen.add(url)
            urls.append(url)
    return urls


class CatalogCrawler(StoreStrategy):
    """Crawl product pages discovered from the catalog listing."""

    strategy_type = ExtractionStrategy.CRAWL

    def __init__(self, http, throttle: Optional[Throttle] = None, max_products: Optional[int] = None):
        self.http = http
        self.throttle = throttle or Throttle()
        self.max_products = max_products if max_products is not None else config.MAX_PRODUCTS

        # Order = priority; the markup strategy always yields a record
        self.page_strategies = [
            LdJsonStrategy(),
            MarkupStrategy(),
        ]

    async def run(self, store_url: str) -> StrategyResult:
        catalog_url = store_url + CATALOG_PATH
        try:
            html = await self.http.get_text(catalog_url)
        except FetchError as e:
            log.warning(f"Catalog page unavailable: {e}")
            return StrategyResult.failure(self.strategy_type, f"HTTP error: {e}")

        urls = discover_product_urls(html, store_url)
        log.info(f"Found {len(urls)} product links")
        if self.max_products is not None and len(urls) > self.max_products:
            log.info(f"Limiting crawl to the first {self.max_products} products")
            urls = urls[:self.max_products]

        products: List[Product] = []
        skipped: List[str] = []

        for idx, url in enumerate(urls):
            if idx:
                await self.throttle.between_products()

            log.info(f"[{idx + 1}/{len(urls)}] Scraping product: {url}")
            try:
                products.append(await self.scrape_product_page(url))
            except FetchError as e:
                log.warning(f"Failed to scrape product {url}: {e}")
                skipped.append(url)
            except Exception:
                log.exception(f"Failed to scrape product {url}")
                skipped.append(url)

        log.info(f"Crawled {len(products)} products ({len(skipped)} skipped)")
        return StrategyResult.from_products(products, self.strategy_type, skipped=skipped)

    async def scrape_product_page(self, url: str) -> Product:
        html = await self.http.get_text(url)
        page = PageData(url=url, html=html)
        soup = parse_html(html)

        for strategy in self.page_strategies:
            product = strategy.extract(page, soup)
            if product is not None:
                log.debug(f"{strategy.strategy_type.value}: {product.title!r}")
                return product

        raise ValueError(f"No strategy could extract {url}")
