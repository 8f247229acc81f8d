"""
Normalization helpers shared by every extraction tier.

Everything here is pure: the same input always gives the same output, and
running a transform on its own output changes nothing.
"""

import dataclasses
import math
import re
from typing import Iterable, List, Optional, Any
from urllib.parse import urljoin, urlparse

from .errors import InvalidStoreUrlError
from .models import Price, Product


STYLE_BLOCK = re.compile(r'<style[^>]*>.*?</style>', re.IGNORECASE | re.DOTALL)
SCRIPT_BLOCK = re.compile(r'<script[^>]*>.*?</script>', re.IGNORECASE | re.DOTALL)

# First numeric token in a price label: an optional leading separator ($.99),
# then digits, commas and dots
PRICE_TOKEN = re.compile(r"[.,]?\d[\d,.]*")

# Thumbnail size token right before the file extension: foo_300x300.jpg
THUMBNAIL_SUFFIX = re.compile(r'_\d+x\d+(?=\.[A-Za-z0-9]+(?:[?#]|$))')

HTTP_SCHEME = re.compile(r"https?://", re.IGNORECASE)


def normalize_store_url(raw: str) -> str:
    """
    Turn user input into a store base URL: trimmed, scheme-qualified, no
    trailing slash.

    Raises:
        InvalidStoreUrlError: if no host can be parsed from the input
    """
    url = (raw or '').strip()
    if HTTP_SCHEME.match(url):
        scheme, rest = url.split('//', 1)
        url = scheme.lower() + '//' + rest
    else:
        url = 'https://' + url
    url = url.rstrip('/')

    try:
        host = urlparse(url).hostname
    except ValueError as e:
        raise InvalidStoreUrlError(f"Invalid store URL: {raw!r}") from e

    if not host or any(ch.isspace() for ch in url) or ('.' not in host and host != 'localhost'):
        raise InvalidStoreUrlError(f"Invalid store URL: {raw!r}")
    return url


def clean_description(html: Optional[str]) -> str:
    """Drop <style> and <script> blocks and trim. Missing input becomes ''."""
    if not html:
        return ''
    html = str(html)
    # Removing one block can splice the text around it into a new one
    while True:
        cleaned = SCRIPT_BLOCK.sub('', STYLE_BLOCK.sub('', html))
        if cleaned == html:
            break
        html = cleaned
    return html.strip()


def absolutize_url(url: Any, base_url: Optional[str] = None) -> Optional[str]:
    """
    Make an image or link URL absolute.

    `//host/x` gets `https:`; paths are resolved against `base_url`. Returns
    None for empty values, non-http schemes, and relative paths with no base.
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()
    if not url:
        return None

    if url.startswith('//'):
        return 'https:' + url

    scheme = urlparse(url).scheme.lower()
    if scheme in ('http', 'https'):
        return url
    if scheme:
        # data:, javascript:, blob: ...
        return None

    if not base_url:
        return None
    return urljoin(base_url, url)


def normalize_image_urls(urls: Optional[Iterable[Any]], base_url: Optional[str] = None) -> List[str]:
    """Absolutize every entry, drop the empty ones, de-duplicate keeping first-seen order."""
    if not urls:
        return []
    if isinstance(urls, str):
        urls = [urls]

    images = []
    seen = set()
    for url in urls:
        absolute = absolutize_url(url, base_url)
        if absolute and absolute not in seen:
            seen.add(absolute)
            images.append(absolute)
    return images


def strip_thumbnail_suffix(url: str) -> str:
    """products/shirt_300x300.jpg?v=1 -> products/shirt.jpg?v=1"""
    return THUMBNAIL_SUFFIX.sub('', url)


def to_price_number(value: Any) -> Optional[float]:
    """Parse a feed/offer price value ('19.99', 19.99, 1999) into a float."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return number


def price_from_values(values: Iterable[Any]) -> Price:
    """
    Reconcile a list of variant prices into one Price.

    Non-numeric values are dropped. Equal min/max collapses to a fixed price;
    nothing valid gives an absent price.
    """
    prices = [p for p in (to_price_number(v) for v in values) if p is not None]
    if not prices:
        return Price.absent()
    return Price.between(min(prices), max(prices))


def parse_price_text(text: Optional[str]) -> Optional[float]:
    """
    Pull the first number out of a price label like '$1,299.00' or 'Sale: €49,90'.

    A comma followed by exactly one or two trailing digits is a decimal comma
    (dots then group thousands). Any other comma groups thousands.
    """
    if not text:
        return None
    match = PRICE_TOKEN.search(text)
    if not match:
        return None

    token = match.group(0).rstrip('.,')
    last_comma = token.rfind(',')
    last_dot = token.rfind('.')

    if last_comma > last_dot and re.fullmatch(r'\d{1,2}', token[last_comma + 1:]):
        token = token.replace('.', '').replace(',', '.')
    else:
        token = token.replace(',', '')
        if token.count('.') > 1:
            token = token.replace('.', '')

    try:
        return float(token)
    except ValueError:
        return None


def handle_from_url(url: str) -> str:
    """Last non-empty path segment, without query string or fragment."""
    segments = [s for s in urlparse(url).path.split('/') if s]
    return segments[-1] if segments else ''


def normalize_product(product: Product) -> Product:
    """Re-apply description and image normalization. A no-op on normalized records."""
    return dataclasses.replace(
        product,
        description=clean_description(product.description),
        images=normalize_image_urls(product.images, product.url),
    )
