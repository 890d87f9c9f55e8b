"""
Constants package — re-exports from domain-specific modules.

Usage:
    from product_feed.core.constants.feed import CSV_FIELDS
    # or
    from product_feed.core.constants import CSV_FIELDS
Version: 1.0.0
"""

from product_feed.core.constants import feed
from product_feed.core.constants.feed import (
    CATALOG_FIELDS,
    AVAILABILITY_IN_STOCK,
    CONDITION_NEW,
    GOOGLE_NAMESPACE,
    RSS_ITEM_FIELDS,
    RSS_GENERATOR,
    CSV_FIELDS,
    CSV_COLUMN_SOURCES,
    IMAGE_TRANSFORM,
    ASSET_ID_STRIP_CHARS,
)

__all__ = [
    "feed",
    "CATALOG_FIELDS",
    "AVAILABILITY_IN_STOCK",
    "CONDITION_NEW",
    "GOOGLE_NAMESPACE",
    "RSS_ITEM_FIELDS",
    "RSS_GENERATOR",
    "CSV_FIELDS",
    "CSV_COLUMN_SOURCES",
    "IMAGE_TRANSFORM",
    "ASSET_ID_STRIP_CHARS",
]
