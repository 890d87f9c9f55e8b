"""
Feed service — catalog fetch, normalization and emission for one shop.

Validates configuration at construction, then builds RSS or CSV feeds on
demand. Catalog fetch errors propagate as CatalogFetchError; an empty
eligible set is reported as a None result.
Version: 1.0.0
"""
import logging
from typing import Any, Iterable, Mapping, Optional

from product_feed.clients.cloudinary_client import CloudinaryClient
from product_feed.clients.shopify_client import ShopifyClient
from product_feed.core.config import Settings
from product_feed.core.exceptions import ConfigurationError
from product_feed.schemas.feed import (
    CategoryPolicy,
    FailurePolicy,
    FeedFormat,
    FeedOutput,
    PipelineResult,
    ShopIdentity,
)
from product_feed.services.feed_emitters import emit_csv, emit_rss
from product_feed.services.feed_pipeline import PipelineConfig, normalize_products
from product_feed.utils.shopify_utils import shop_domain_to_name
from product_feed.utils.signature import is_valid_signature

logger = logging.getLogger("feed_service")

CONTENT_TYPES = {
    FeedFormat.RSS: "application/rss+xml",
    FeedFormat.CSV: "text/csv",
}

_REQUIRED_SETTINGS = (
    "shopify_store_domain",
    "shop_currency",
    "shopify_admin_api_token",
    "shopify_shared_secret",
    "cloudinary_cloud_name",
    "cloudinary_api_key",
    "cloudinary_api_secret",
)


class FeedService:
    def __init__(
        self,
        settings: Settings,
        shopify: ShopifyClient,
        asset_host: CloudinaryClient,
    ) -> None:
        missing = [name for name in _REQUIRED_SETTINGS if not getattr(settings, name, None)]
        if missing:
            raise ConfigurationError(missing)

        self._settings = settings
        self._shopify = shopify
        self._asset_host = asset_host
        self._category_policy = CategoryPolicy(settings.feed_category_policy)
        self._failure_policy = FailurePolicy(settings.feed_failure_policy)

        domain = shopify.store_domain or settings.shopify_store_domain
        self._shop = ShopIdentity(name=shop_domain_to_name(domain), domain=domain)

    @property
    def shop(self) -> ShopIdentity:
        return self._shop

    def is_valid_signature(self, query: Mapping[str, Any]) -> bool:
        return is_valid_signature(query, self._settings.shopify_shared_secret)

    def _pipeline_config(
        self,
        known_asset_ids: Iterable[str],
        optimize: Optional[bool],
        failure_policy: Optional[FailurePolicy],
    ) -> PipelineConfig:
        return PipelineConfig(
            shop_domain=self._shop.domain,
            currency=self._settings.shop_currency,
            known_asset_ids=frozenset(known_asset_ids),
            optimize=self._settings.feed_optimize_images if optimize is None else optimize,
            category_policy=self._category_policy,
            failure_policy=failure_policy or self._failure_policy,
            upload_timeout=self._settings.image_upload_timeout_seconds,
            pipeline_timeout=self._settings.feed_pipeline_timeout_seconds,
        )

    async def build_records(
        self,
        known_asset_ids: Iterable[str] = (),
        optimize: Optional[bool] = None,
        failure_policy: Optional[FailurePolicy] = None,
    ) -> PipelineResult:
        config = self._pipeline_config(known_asset_ids, optimize, failure_policy)
        products = await self._shopify.list_products()
        return await normalize_products(products, config, self._asset_host)

    async def generate(
        self,
        feed_format: FeedFormat,
        known_asset_ids: Iterable[str] = (),
        optimize: Optional[bool] = None,
        failure_policy: Optional[FailurePolicy] = None,
    ) -> Optional[FeedOutput]:
        """
        Build a feed document.

        Returns:
            FeedOutput, or None when no product was eligible
        """
        result = await self.build_records(known_asset_ids, optimize, failure_policy)

        if feed_format == FeedFormat.RSS:
            document = emit_rss(self._shop, result, link_path=self._settings.feed_link_path)
        else:
            document = emit_csv(result)

        if document is None:
            logger.info("feed skipped shop=%s format=%s reason=no_records", self._shop.name, feed_format.value)
            return None

        return FeedOutput(
            format=feed_format,
            document=document,
            content_type=CONTENT_TYPES[feed_format],
            record_count=len(result.records),
            uploaded_asset_ids=sorted(result.uploaded_asset_ids),
            failures=result.failures,
        )

    async def generate_rss(self, known_asset_ids: Iterable[str] = (), optimize: Optional[bool] = None) -> Optional[FeedOutput]:
        return await self.generate(FeedFormat.RSS, known_asset_ids, optimize)

    async def generate_csv(self, known_asset_ids: Iterable[str] = (), optimize: Optional[bool] = None) -> Optional[FeedOutput]:
        return await self.generate(FeedFormat.CSV, known_asset_ids, optimize)
