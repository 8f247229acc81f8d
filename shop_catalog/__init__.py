"""
Storefront Catalog Extraction

Pulls a normalized product catalog out of a storefront: the products.json feed
when the store exposes it, otherwise a crawl of its product pages (LD+JSON
first, visible markup last).
"""

from .models import Product, Price, PriceKind, Variant, ExtractionStrategy, StrategyResult
from .pipeline import CatalogPipeline

__all__ = [
    'Product',
    'Price',
    'PriceKind',
    'Variant',
    'ExtractionStrategy',
    'StrategyResult',
    'CatalogPipeline',
]
