"""
Shared fixtures: an in-memory HTTP client and a throttle that records instead of sleeping.
"""

import pytest

from shop_catalog.errors import FetchError
from shop_catalog.throttle import Throttle

STORE = "https://shop.example.com"


class FakeHttp:
    """
    Stands in for StoreHttpClient.

    `routes` maps URL -> dict/list (JSON), str (HTML) or Exception (raised).
    Unknown URLs raise FetchError like a 404 would.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _respond(self, url):
        self.calls.append(url)
        if url not in self.routes:
            raise FetchError(url, "HTTP 404", status=404)
        response = self.routes[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def get_json(self, url):
        return self._respond(url)

    async def get_text(self, url):
        return self._respond(url)


class RecordingThrottle(Throttle):
    def __init__(self):
        super().__init__(entry_delay=0.5, page_delay=2.0, product_delay=2.0)
        self.events = []

    async def after_entry(self):
        self.events.append('entry')

    async def between_pages(self):
        self.events.append('page')

    async def between_products(self):
        self.events.append('product')


def feed_url(page, limit=250):
    return f"{STORE}/products.json?page={page}&limit={limit}"


def make_entry(n, prices=("19.99",), images=None):
    return {
        "id": 1000 + n,
        "handle": f"product-{n}",
        "title": f"Product {n}",
        "body_html": f"<p>Description {n}</p>",
        "images": images if images is not None else [{"src": f"//cdn.example.com/products/p{n}.jpg"}],
        "variants": [
            {"id": 5000 + n * 10 + i, "title": f"V{i}", "price": p, "sku": f"SKU-{n}-{i}", "available": True}
            for i, p in enumerate(prices)
        ],
    }


def product_page(body="", ld_json=None):
    scripts = ""
    for block in ld_json or []:
        scripts += f'<script type="application/ld+json">{block}</script>\n'
    return f"<html><head>{scripts}</head><body>{body}</body></html>"


@pytest.fixture
def throttle():
    return RecordingThrottle()


@pytest.fixture
def fake_http():
    return FakeHttp()
