#!/usr/bin/env python3
"""
CLI for storefront catalog extraction.

Usage:
    shop-catalog https://example-store.com
    shop-catalog example-store.com --output-root ./data
    shop-catalog example-store.com --max-products 20 --log-level DEBUG
    shop-catalog                      # prompts for the URL
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import config
from .errors import InvalidStoreUrlError
from .logger import logger, set_level
from .normalize import normalize_store_url
from .pipeline import CatalogPipeline
from .storage import save_products, get_output_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shop-catalog',
        description='Extract the product catalog of a storefront to JSON.',
    )
    parser.add_argument('url', nargs='?', help='Store URL, e.g. https://example.com')
    parser.add_argument('--output-root', default=config.OUTPUT_ROOT,
                        help='Directory under which <domain>_products/ is created')
    parser.add_argument('--max-products', type=int, default=config.MAX_PRODUCTS,
                        help='Visit at most this many product pages when crawling')
    parser.add_argument('--log-level', default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser


def prompt_for_url() -> str:
    try:
        return input('Enter the store URL (e.g., https://example.com): ').strip()
    except EOFError:
        return ''


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_level(args.log_level)
    logger.debug(f"Configuration: {config.to_dict()}")

    store_url = (args.url or prompt_for_url()).strip()
    if not store_url:
        print('Error: Store URL is required.', file=sys.stderr)
        return 1

    try:
        base_url = normalize_store_url(store_url)
    except InvalidStoreUrlError:
        print('Error: Invalid URL format.', file=sys.stderr)
        return 1

    print(f"Data will be saved to: {get_output_dir(base_url, args.output_root)}")

    pipeline = CatalogPipeline(max_products=args.max_products)
    products = asyncio.run(pipeline.run(base_url))

    output_path = save_products(products, base_url, args.output_root)
    logger.info(f"Saved product data to {output_path}")
    print(f"\nScraping completed! {len(products)} products saved to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
