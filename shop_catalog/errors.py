"""
Exceptions raised by the catalog scraper.
"""


class CatalogError(Exception):
    """Base class for scraper errors."""


class FetchError(CatalogError):
    """A GET request failed: transport error, timeout, non-2xx status or unparseable body."""

    def __init__(self, url: str, reason: str, status: int = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"{url}: {reason}")


class InvalidStoreUrlError(CatalogError, ValueError):
    """The store URL cannot be turned into a fetchable base URL."""
