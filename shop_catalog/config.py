"""
Configuration Management
=======================

Centralized configuration for the catalog scraper. Values come from the
environment, optionally seeded by a `.env` file.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

# Load environment variables from the project's .env, else the working directory's
project_env = Path(__file__).resolve().parent.parent / '.env'
if project_env.exists():
    load_dotenv(project_env)
else:
    load_dotenv()


def _bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


class Config:
    """Scraper configuration"""

    # Feed
    PAGE_SIZE = int(os.getenv('SHOP_CATALOG_PAGE_SIZE', 250))  # products.json maximum

    # Throttling (seconds)
    ENTRY_DELAY = float(os.getenv('SHOP_CATALOG_ENTRY_DELAY', 0.5))
    PAGE_DELAY = float(os.getenv('SHOP_CATALOG_PAGE_DELAY', 2.0))
    PRODUCT_DELAY = float(os.getenv('SHOP_CATALOG_PRODUCT_DELAY', 2.0))

    # HTTP
    REQUEST_TIMEOUT = float(os.getenv('SHOP_CATALOG_REQUEST_TIMEOUT', 30))
    USER_AGENT = os.getenv(
        'SHOP_CATALOG_USER_AGENT',
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )
    VERIFY_TLS = _bool(os.getenv('SHOP_CATALOG_VERIFY_TLS', 'false'))

    # Crawl
    MAX_PRODUCTS = _optional_int(os.getenv('SHOP_CATALOG_MAX_PRODUCTS'))

    # Output
    OUTPUT_ROOT = os.getenv('SHOP_CATALOG_OUTPUT_ROOT', '.')
    LOG_LEVEL = os.getenv('SHOP_CATALOG_LOG_LEVEL', 'INFO').upper()

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Export configuration as dictionary"""
        return {
            'page_size': cls.PAGE_SIZE,
            'entry_delay': cls.ENTRY_DELAY,
            'page_delay': cls.PAGE_DELAY,
            'product_delay': cls.PRODUCT_DELAY,
            'request_timeout': cls.REQUEST_TIMEOUT,
            'user_agent': cls.USER_AGENT,
            'verify_tls': cls.VERIFY_TLS,
            'max_products': cls.MAX_PRODUCTS,
            'output_root': cls.OUTPUT_ROOT,
            'log_level': cls.LOG_LEVEL,
        }


# Global config instance
config = Config()
