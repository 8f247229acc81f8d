"""
Extraction strategies, from most to least structured.
"""

from .base import BaseStrategy, PageStrategy, StoreStrategy
from .feed import FeedStrategy
from .ld_json import LdJsonStrategy
from .markup import MarkupStrategy

__all__ = [
    'BaseStrategy',
    'PageStrategy',
    'StoreStrategy',
    'FeedStrategy',
    'LdJsonStrategy',
    'MarkupStrategy',
]
