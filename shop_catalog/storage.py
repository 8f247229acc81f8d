"""
Storage utilities for scrape output.

Handles output path naming and JSON persistence.
"""

import json
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlparse

from .config import config
from .models import Product

OUTPUT_FILENAME = "products_data.json"


def get_domain(url: str) -> str:
    """Hostname without a leading www."""
    if not url.lower().startswith(('http://', 'https://')):
        url = 'https://' + url
    host = urlparse(url).hostname or ''
    if host.startswith('www.'):
        host = host[4:]
    return host


def get_output_dir(store_url: str, output_root: Optional[Union[str, Path]] = None) -> Path:
    """<output_root>/<domain>_products"""
    root = Path(output_root if output_root is not None else config.OUTPUT_ROOT)
    return root / f"{get_domain(store_url)}_products"


def save_products(
    products: List[Product],
    store_url: str,
    output_root: Optional[Union[str, Path]] = None,
) -> Path:
    """Write all records as one JSON array. Returns the file path."""
    output_dir = get_output_dir(store_url, output_root)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_path = output_dir / OUTPUT_FILENAME
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([p.to_dict() for p in products], f, indent=2, ensure_ascii=False)

    return output_path


def load_products(path: Union[str, Path]) -> List[dict]:
    """Read a saved products file back as plain dicts."""
    with open(path, encoding='utf-8') as f:
        return json.load(f)
