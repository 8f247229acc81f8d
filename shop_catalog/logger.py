"""
Logging configuration for catalog extraction.
"""

import logging
import sys

from .config import config

# Create logger
logger = logging.getLogger('shop_catalog')
logger.setLevel(config.LOG_LEVEL)

# Console handler with formatting
console = logging.StreamHandler(sys.stdout)
console.setLevel(logging.DEBUG)

formatter = logging.Formatter(
    '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
    datefmt='%H:%M:%S'
)
console.setFormatter(formatter)

logger.addHandler(console)


def set_level(level):
    """Change verbosity at runtime (CLI --log-level)."""
    logger.setLevel(level)


# Strategy-specific loggers
def get_strategy_logger(name):
    """Get a child logger for a specific strategy or component."""
    return logger.getChild(name)
