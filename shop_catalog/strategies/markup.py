"""
Markup fallback strategy.

Used when a product page carries no LD+JSON Product. Each field is read
through an ordered list of selector rules: the storefront theme conventions
come first, generic selectors last, and the first rule that yields a value wins.
"""

from dataclasses import dataclass
from typing import Optional, List, Sequence

from bs4 import BeautifulSoup

from ..models import Product, Price, ExtractionStrategy, PageData
from ..normalize import parse_price_text, strip_thumbnail_suffix, normalize_image_urls
from .base import PageStrategy, PRODUCT_PATH_MARKER, parse_html


@dataclass(frozen=True)
class SelectorRule:
    """Read the first element matching `selector`, as text or inner HTML."""
    selector: str
    read: str = 'text'  # 'text' | 'html'

    def apply(self, soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(self.selector)
        if element is None:
            return None
        if self.read == 'html':
            value = element.decode_contents()
        else:
            value = element.get_text(' ', strip=True)
        value = value.strip()
        return value or None


TITLE_RULES = [
    SelectorRule('.product-single__title'),
    SelectorRule('.product__title'),
    SelectorRule('.product-title'),
    SelectorRule('h1.product-name'),
    SelectorRule('h1'),
]

DESCRIPTION_RULES = [
    SelectorRule('.product-single__description', read='html'),
    SelectorRule('.product__description', read='html'),
    SelectorRule('.description', read='html'),
]

PRICE_RULES = [
    SelectorRule('.price__regular .price-item--regular'),
    SelectorRule('.product__price'),
    SelectorRule('.price-item--sale'),
    SelectorRule('.product-single__price'),
    SelectorRule('.price .money'),
    SelectorRule('.product-price'),
    SelectorRule('[data-product-price]'),
]


def first_match(soup: BeautifulSoup, rules: Sequence[SelectorRule]) -> Optional[str]:
    """Value of the first rule that matches something non-empty."""
    for rule in rules:
        value = rule.apply(soup)
        if value:
            return value
    return None


def extract_price(soup: BeautifulSoup) -> Optional[float]:
    """First price label, in PRICE_RULES order, that contains a number."""
    for rule in PRICE_RULES:
        price = parse_price_text(rule.apply(soup))
        if price is not None:
            return price
    return None


def extract_images(soup: BeautifulSoup, base_url: Optional[str] = None) -> List[str]:
    """
    Full-size product image URLs, in page order.

    Only sources under /products/ count. When both `data-src` and `src` are
    product sources the lazy-loaded `data-src` wins. `_300x300` thumbnail
    tokens are removed.
    """
    sources = []
    for img in soup.find_all('img'):
        candidates = [img.get('data-src'), img.get('src')]
        src = next((s for s in candidates if s and PRODUCT_PATH_MARKER in s), None)
        if not src:
            continue
        sources.append(strip_thumbnail_suffix(src.strip()))
    return normalize_image_urls(sources, base_url)


class MarkupStrategy(PageStrategy):
    """Best-effort extraction from visible theme markup."""

    strategy_type = ExtractionStrategy.MARKUP

    title_rules = TITLE_RULES
    description_rules = DESCRIPTION_RULES

    def extract(self, page: PageData, soup: Optional[BeautifulSoup] = None) -> Product:
        if soup is None:
            soup = parse_html(page.html)

        price = extract_price(soup)

        return self._create_product(
            url=page.url,
            title=first_match(soup, self.title_rules),
            description=first_match(soup, self.description_rules),
            price=Price.fixed(price) if price is not None else Price.absent(),
            images=extract_images(soup, page.url),
        )
