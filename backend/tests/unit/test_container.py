"""
Unit tests for the lazy DI container.
Version: 1.0.0
"""
import pytest
from unittest.mock import patch


@pytest.fixture(autouse=True)
def clear_container_cache():
    from product_feed.container import get_cloudinary_client, get_feed_service, get_shopify_client
    for getter in (get_shopify_client, get_cloudinary_client, get_feed_service):
        getter.cache_clear()
    yield
    for getter in (get_shopify_client, get_cloudinary_client, get_feed_service):
        getter.cache_clear()


@pytest.mark.unit
class TestContainer:
    """Tests for container.py DI factory functions."""

    def test_get_shopify_client_returns_instance(self, mock_settings):
        from product_feed.clients.shopify_client import ShopifyClient
        from product_feed.container import get_shopify_client
        with patch("product_feed.container.settings", mock_settings):
            assert isinstance(get_shopify_client(), ShopifyClient)

    def test_get_cloudinary_client_returns_instance(self, mock_settings):
        from product_feed.container import get_cloudinary_client
        with patch("product_feed.container.settings", mock_settings):
            assert get_cloudinary_client().cloud_name == "foobar-cloudname"

    def test_singleton_behavior(self, mock_settings):
        """Calling same getter twice returns identical instance."""
        from product_feed.container import get_feed_service
        with patch("product_feed.container.settings", mock_settings):
            assert get_feed_service() is get_feed_service()

    def test_feed_service_wires_clients(self, mock_settings):
        from product_feed.container import get_feed_service
        with patch("product_feed.container.settings", mock_settings):
            service = get_feed_service()
        assert service.shop.domain == "demostore.myshopify.com"

    def test_missing_credentials_raise(self, mock_settings):
        from product_feed.container import get_cloudinary_client
        from product_feed.core.exceptions import ConfigurationError
        broken = mock_settings.model_copy(update={"cloudinary_api_secret": None})
        with patch("product_feed.container.settings", broken):
            with pytest.raises(ConfigurationError):
                get_cloudinary_client()
