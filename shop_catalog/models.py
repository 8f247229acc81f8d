"""
Data models for catalog extraction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict, Any, Union


class ExtractionStrategy(Enum):
    """Extraction tiers, in order of preference."""
    FEED = "feed"
    CRAWL = "crawl"
    LD_JSON = "ld_json"
    MARKUP = "markup"


class PriceKind(Enum):
    ABSENT = "absent"
    FIXED = "fixed"
    RANGE = "range"


@dataclass(frozen=True)
class Price:
    """
    Product price as a tagged variant.

    ABSENT carries nothing, FIXED carries `amount`, RANGE carries `min`/`max`
    with min < max. Use the constructors below rather than building one by hand.
    """
    kind: PriceKind = PriceKind.ABSENT
    amount: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @classmethod
    def absent(cls) -> 'Price':
        return cls(PriceKind.ABSENT)

    @classmethod
    def fixed(cls, amount: float) -> 'Price':
        if amount < 0:
            raise ValueError(f"Price cannot be negative: {amount}")
        return cls(PriceKind.FIXED, amount=float(amount))

    @classmethod
    def between(cls, low: float, high: float) -> 'Price':
        """Range price; collapses to FIXED when both bounds are equal."""
        low, high = sorted((float(low), float(high)))
        if low < 0:
            raise ValueError(f"Price cannot be negative: {low}")
        if low == high:
            return cls.fixed(low)
        return cls(PriceKind.RANGE, min=low, max=high)

    @classmethod
    def from_json(cls, value: Any) -> 'Price':
        """Inverse of to_json()."""
        if value is None:
            return cls.absent()
        if isinstance(value, dict):
            return cls.between(value["min"], value["max"])
        return cls.fixed(float(value))

    @property
    def is_absent(self) -> bool:
        return self.kind is PriceKind.ABSENT

    def to_json(self) -> Union[None, float, Dict[str, float]]:
        if self.kind is PriceKind.FIXED:
            return self.amount
        if self.kind is PriceKind.RANGE:
            return {"min": self.min, "max": self.max}
        return None


@dataclass(frozen=True)
class Variant:
    """A purchasable variant reported by the feed."""
    id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    price: Optional[float] = None
    sku: Optional[str] = None
    available: Optional[bool] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "sku": self.sku,
        }
        if self.available is not None:
            data["available"] = self.available
        return data


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Product:
    """Canonical product record. Built once by one tier, never mutated after."""
    id: Union[int, str]
    handle: str
    title: str
    description: str
    price: Price
    images: List[str]
    url: str
    variants: Optional[List[Variant]] = None
    source: Optional[ExtractionStrategy] = None
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "handle": self.handle,
            "title": self.title,
            "description": self.description,
            "price": self.price.to_json(),
            "images": list(self.images),
            "url": self.url,
        }
        if self.variants is not None:
            data["variants"] = [v.to_dict() for v in self.variants]
        data["timestamp"] = self.timestamp
        if self.source is not None:
            data["source"] = self.source.value
        return data


@dataclass
class PageData:
    """A fetched product page."""
    url: str
    html: str = ""


@dataclass
class StrategyResult:
    """Outcome of running one strategy against a store."""
    success: bool
    strategy: ExtractionStrategy
    products: List[Product] = field(default_factory=list)
    error: Optional[str] = None
    skipped: List[str] = field(default_factory=list)  # per-item failures (crawl only)

    @classmethod
    def failure(cls, strategy: ExtractionStrategy, error: str) -> 'StrategyResult':
        return cls(success=False, strategy=strategy, error=error)

    @classmethod
    def from_products(
        cls,
        products: List[Product],
        strategy: ExtractionStrategy,
        skipped: Optional[List[str]] = None,
    ) -> 'StrategyResult':
        return cls(
            success=True,
            strategy=strategy,
            products=list(products),
            skipped=list(skipped or []),
        )

    @property
    def count(self) -> int:
        return len(self.products)
