"""
LD+JSON extraction strategy.

Extracts product data from <script type="application/ld+json"> tags in HTML.
"""

import json
from typing import Optional, List, Any, Iterator

from bs4 import BeautifulSoup

from ..models import Product, Price, ExtractionStrategy, PageData
from ..normalize import to_price_number
from .base import PageStrategy, parse_html
from .markup import extract_price


def parse_ld_block(text: Optional[str]) -> Optional[Any]:
    """Decode one LD+JSON block; None if it isn't valid JSON."""
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def is_product_node(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    node_type = node.get('@type')
    return node_type == 'Product' or (isinstance(node_type, list) and 'Product' in node_type)


def iter_product_nodes(data: Any) -> Iterator[dict]:
    """Product nodes of a decoded block, in document order (root, lists, @graph)."""
    if isinstance(data, list):
        for item in data:
            yield from iter_product_nodes(item)
        return

    if not isinstance(data, dict):
        return

    if is_product_node(data):
        yield data

    graph = data.get('@graph')
    if isinstance(graph, list):
        for item in graph:
            if is_product_node(item):
                yield item


def find_product_ld_json(soup: BeautifulSoup) -> Optional[dict]:
    """The last Product node on the page. Broken blocks are skipped."""
    product = None
    scripts = soup.find_all('script', type=lambda t: t and 'ld+json' in t.lower())
    for script in scripts:
        data = parse_ld_block(script.string or script.get_text())
        for node in iter_product_nodes(data):
            product = node
    return product


def _image_list(image: Any) -> List[Any]:
    """`image` may be a URL, an ImageObject, or a list of either."""
    if image is None:
        return []
    if not isinstance(image, list):
        image = [image]

    images = []
    for item in image:
        if isinstance(item, dict):
            item = item.get('url') or item.get('contentUrl')
        if item:
            images.append(item)
    return images


def _first_offer(offers: Any) -> dict:
    if isinstance(offers, list):
        offers = next((o for o in offers if isinstance(o, dict)), None)
    return offers if isinstance(offers, dict) else {}


class LdJsonStrategy(PageStrategy):
    """Extract product data from embedded LD+JSON."""

    strategy_type = ExtractionStrategy.LD_JSON

    def extract(self, page: PageData, soup: Optional[BeautifulSoup] = None) -> Optional[Product]:
        """Product from the page's LD+JSON, or None when there is no Product block."""
        if soup is None:
            soup = parse_html(page.html)

        data = find_product_ld_json(soup)
        if data is None:
            return None
        return self._parse_ld_json(data, page.url, soup)

    def _parse_ld_json(self, data: dict, url: str, soup: BeautifulSoup) -> Product:
        offer = _first_offer(data.get('offers'))

        # offer price, then its low bound, then whatever the page displays
        price = to_price_number(offer.get('price'))
        if price is None:
            price = to_price_number(offer.get('lowPrice'))
        if price is None:
            price = extract_price(soup)

        description = data.get('description')
        if not isinstance(description, str):
            description = None

        return self._create_product(
            url=url,
            title=data.get('name'),
            description=description,
            price=Price.fixed(price) if price is not None else Price.absent(),
            images=_image_list(data.get('image')),
        )
