"""
Lazy DI container — singleton access to clients and services.

Import individual getters to avoid circular imports.
Version: 1.0.0
"""

from functools import lru_cache

from product_feed.core.config import settings
from product_feed.clients.shopify_client import ShopifyClient
from product_feed.clients.cloudinary_client import CloudinaryClient
from product_feed.services.feed_service import FeedService


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_shopify_client():
    return ShopifyClient(settings)


@lru_cache(maxsize=1)
def get_cloudinary_client():
    return CloudinaryClient.from_settings(settings)


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_feed_service():
    return FeedService(
        settings=settings,
        shopify=get_shopify_client(),
        asset_host=get_cloudinary_client(),
    )
