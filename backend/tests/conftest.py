"""
Pytest configuration and shared fixtures for product feed tests.

Provides settings, mocked clients, and sample Shopify catalog data.
Version: 1.0.0
"""
import copy

import pytest
from unittest.mock import AsyncMock, MagicMock


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from product_feed.core.config import Settings
    return Settings(
        shopify_store_domain="demostore.myshopify.com",
        shopify_admin_api_token="shpat_test_token",
        shopify_api_version="2024-10",
        shopify_shared_secret="sharedSecret",
        shopify_page_size=250,
        shop_currency="USD",
        cloudinary_cloud_name="foobar-cloudname",
        cloudinary_api_key="3142",
        cloudinary_api_secret="supersecretkey",
        cloudinary_delivery_host="res.cloudinary.com",
        feed_optimize_images=False,
        feed_category_policy="required",
        feed_failure_policy="isolate",
        feed_link_path="/a/product_catalog",
        image_upload_timeout_seconds=5.0,
        feed_pipeline_timeout_seconds=10.0,
    )


# ---------------------------------------------------------------------------
# Clients (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_cloudinary_client():
    """Mocked CloudinaryClient; uploads echo the requested public id."""
    client = MagicMock()
    client.cloud_name = "foobar-cloudname"
    client.delivery_url = MagicMock(
        side_effect=lambda public_id: f"https://res.cloudinary.com/foobar-cloudname/image/upload/{public_id}"
    )
    client.upload = AsyncMock(
        side_effect=lambda image_url, public_id, transform=None: {"public_id": public_id}
    )
    return client


@pytest.fixture
def mock_shopify_client(sample_catalog):
    """Mocked ShopifyClient returning the sample catalog."""
    client = MagicMock()
    client.store_domain = "demostore.myshopify.com"
    client.list_products = AsyncMock(return_value=copy.deepcopy(sample_catalog))
    return client


# ---------------------------------------------------------------------------
# Sample test data
# ---------------------------------------------------------------------------

def make_product(**overrides):
    """Build a raw Shopify product that passes every eligibility predicate."""
    product = {
        "id": 1,
        "title": "Linen Shirt",
        "handle": "linen-shirt",
        "body_html": "<p>Breathable linen shirt</p>",
        "product_type": "Shirts",
        "images": [
            {"src": "https://cdn.shopify.com/s/files/1/0001/products/shirt.jpg?v=1712"},
            {"src": "https://cdn.shopify.com/s/files/1/0001/products/shirt-back.jpg?v=1712"},
        ],
        "variants": [
            {
                "title": "Default Title",
                "sku": "A1",
                "barcode": "0123456789012",
                "price": "10.00",
                "inventory_quantity": 5,
            }
        ],
    }
    variant_overrides = overrides.pop("variant", None)
    product.update(overrides)
    if variant_overrides:
        product["variants"][0].update(variant_overrides)
    return product


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def sample_product():
    return make_product()


@pytest.fixture
def sample_catalog():
    """Two eligible products and one out of stock."""
    return [
        make_product(),
        make_product(
            id=2,
            title="Canvas Tote",
            handle="canvas-tote",
            product_type="Bags",
            images=[{"src": "https://cdn.shopify.com/s/files/1/0001/products/tote.png"}],
            variant={"sku": "B2", "barcode": "", "price": "24.50", "inventory_quantity": 3},
        ),
        make_product(id=3, handle="sold-out", variant={"inventory_quantity": 0}),
    ]
