"""
Unit tests for FeedService — configuration checks and feed generation.
Version: 1.0.0
"""
import pytest
from unittest.mock import AsyncMock

from product_feed.core.exceptions import AssetUploadError, CatalogFetchError, ConfigurationError
from product_feed.schemas.feed import FailurePolicy, FeedFormat
from product_feed.services.feed_service import FeedService
from product_feed.utils.signature import compute_signature


pytestmark = pytest.mark.unit


@pytest.fixture
def service(mock_settings, mock_shopify_client, mock_cloudinary_client):
    return FeedService(mock_settings, mock_shopify_client, mock_cloudinary_client)


class TestConstruction:

    @pytest.mark.parametrize(
        "field",
        [
            "shopify_store_domain",
            "shop_currency",
            "shopify_admin_api_token",
            "shopify_shared_secret",
            "cloudinary_cloud_name",
            "cloudinary_api_key",
            "cloudinary_api_secret",
        ],
    )
    def test_missing_setting_raises(self, mock_settings, mock_shopify_client, mock_cloudinary_client, field):
        settings = mock_settings.model_copy(update={field: ""})
        with pytest.raises(ConfigurationError) as exc_info:
            FeedService(settings, mock_shopify_client, mock_cloudinary_client)
        assert field in exc_info.value.missing
        mock_shopify_client.list_products.assert_not_called()

    def test_reports_every_missing_option(self, mock_settings, mock_shopify_client, mock_cloudinary_client):
        settings = mock_settings.model_copy(update={"shop_currency": "", "cloudinary_api_key": None})
        with pytest.raises(ConfigurationError) as exc_info:
            FeedService(settings, mock_shopify_client, mock_cloudinary_client)
        assert exc_info.value.missing == ["shop_currency", "cloudinary_api_key"]

    def test_invalid_policy_rejected(self, mock_settings, mock_shopify_client, mock_cloudinary_client):
        settings = mock_settings.model_copy(update={"feed_failure_policy": "sometimes"})
        with pytest.raises(ValueError):
            FeedService(settings, mock_shopify_client, mock_cloudinary_client)

    def test_shop_identity(self, service):
        assert service.shop.name == "demostore"
        assert service.shop.domain == "demostore.myshopify.com"


class TestSignature:

    def test_valid_signature(self, service):
        query = {"shop": "demostore.myshopify.com", "timestamp": "1317327555"}
        query["signature"] = compute_signature(query, "sharedSecret")
        assert service.is_valid_signature(query)

    def test_wrong_secret(self, service):
        query = {"shop": "demostore.myshopify.com"}
        query["signature"] = compute_signature(query, "otherSecret")
        assert not service.is_valid_signature(query)


class TestGenerate:

    @pytest.mark.asyncio
    async def test_rss_output(self, service):
        output = await service.generate_rss()

        assert output.format == FeedFormat.RSS
        assert output.content_type == "application/rss+xml"
        assert output.record_count == 2
        assert "<g:mpn>A1</g:mpn>" in output.document
        assert output.uploaded_asset_ids == []

    @pytest.mark.asyncio
    async def test_csv_output(self, service):
        output = await service.generate_csv()

        assert output.format == FeedFormat.CSV
        assert output.content_type == "text/csv"
        assert len(output.document.splitlines()) == 3

    @pytest.mark.asyncio
    async def test_uploaded_ids_sorted(self, service, mock_cloudinary_client):
        output = await service.generate(FeedFormat.CSV, optimize=True)

        assert output.uploaded_asset_ids == ["shirtjpg1712", "totepng"]
        assert mock_cloudinary_client.upload.await_count == 2

    @pytest.mark.asyncio
    async def test_known_ids_skip_upload(self, service, mock_cloudinary_client):
        output = await service.generate(FeedFormat.RSS, known_asset_ids=["shirtjpg1712", "totepng"], optimize=True)

        assert output.uploaded_asset_ids == []
        mock_cloudinary_client.upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_optimize_defaults_to_setting(self, mock_settings, mock_shopify_client, mock_cloudinary_client):
        settings = mock_settings.model_copy(update={"feed_optimize_images": True})
        service = FeedService(settings, mock_shopify_client, mock_cloudinary_client)

        output = await service.generate_csv()
        assert len(output.uploaded_asset_ids) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("feed_format", [FeedFormat.RSS, FeedFormat.CSV])
    async def test_nothing_eligible_returns_none(self, service, mock_shopify_client, product_factory, feed_format):
        mock_shopify_client.list_products = AsyncMock(
            return_value=[product_factory(variant={"inventory_quantity": 0})]
        )
        assert await service.generate(feed_format) is None

    @pytest.mark.asyncio
    async def test_catalog_error_propagates(self, service, mock_shopify_client):
        mock_shopify_client.list_products = AsyncMock(side_effect=CatalogFetchError("Invalid API key", 401))

        with pytest.raises(CatalogFetchError):
            await service.generate_rss()

    @pytest.mark.asyncio
    async def test_isolated_failures_reported(self, service, mock_cloudinary_client):
        async def upload(image_url, public_id, transform=None):
            if public_id == "totepng":
                raise AssetUploadError(public_id, "bad image")
            return {"public_id": public_id}

        mock_cloudinary_client.upload = AsyncMock(side_effect=upload)
        output = await service.generate_csv(optimize=True)

        assert output.record_count == 1
        assert output.failures[0].product_id == "2"

    @pytest.mark.asyncio
    async def test_fail_fast_override(self, service, mock_cloudinary_client):
        mock_cloudinary_client.upload = AsyncMock(side_effect=AssetUploadError("x", "bad image"))

        with pytest.raises(AssetUploadError):
            await service.generate(FeedFormat.RSS, optimize=True, failure_policy=FailurePolicy.FAIL_FAST)
