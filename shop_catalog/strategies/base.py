"""
Base classes for extraction strategies.

Two kinds:
    StoreStrategy  - runs against a whole store and returns a StrategyResult
                     (feed client, catalog crawl)
    PageStrategy   - runs against one fetched product page and returns a
                     Product or None (LD+JSON, markup)
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Any, Union

from bs4 import BeautifulSoup

from ..models import Product, Price, Variant, ExtractionStrategy, StrategyResult, PageData
from ..normalize import clean_description, normalize_image_urls, handle_from_url

# Storefront path segment shared by product pages and product images
PRODUCT_PATH_MARKER = '/products/'


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or '', 'html.parser')


class BaseStrategy(ABC):
    """Shared record building for all strategies."""

    strategy_type: ExtractionStrategy

    def _create_product(
        self,
        url: str,
        title: Any,
        description: Optional[str],
        price: Optional[Price],
        images: Optional[List[Any]],
        product_id: Optional[Union[int, str]] = None,
        handle: Optional[str] = None,
        variants: Optional[List[Variant]] = None,
    ) -> Product:
        """
        Build a normalized, immutable Product.

        Missing handle/id fall back to the URL's last path segment; missing
        title/description become ''; missing price becomes Price.absent().
        """
        handle = handle or handle_from_url(url)
        if product_id is None or product_id == '':
            product_id = handle

        return Product(
            id=product_id,
            handle=handle,
            title=str(title).strip() if title else '',
            description=clean_description(description),
            price=price if price is not None else Price.absent(),
            images=normalize_image_urls(images, url),
            url=url,
            variants=variants,
            source=self.strategy_type,
        )


class PageStrategy(BaseStrategy):
    """Extracts one product from an already-fetched page."""

    @abstractmethod
    def extract(self, page: PageData, soup: Optional[BeautifulSoup] = None) -> Optional[Product]:
        """
        Args:
            page: URL and HTML of the product page
            soup: Optional pre-parsed page, to avoid parsing twice

        Returns:
            Product, or None when this strategy finds nothing on the page
        """
        pass


class StoreStrategy(BaseStrategy):
    """Produces every product of a store, or reports failure."""

    @abstractmethod
    async def run(self, store_url: str) -> StrategyResult:
        """
        Args:
            store_url: Normalized store base URL (scheme, no trailing slash)

        Returns:
            StrategyResult; failures are returned, not raised
        """
        pass
