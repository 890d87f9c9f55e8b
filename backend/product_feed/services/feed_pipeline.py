"""
Normalization pipeline — filter, resolve images concurrently, map records.

Pipeline stages:
1. Eligibility filter over the raw catalog (order preserved)
2. One asyncio task per eligible product: resolve primary image, then map
3. Join all tasks, then merge records, uploaded asset ids and failures

Tasks never share mutable state; the uploaded-id set is assembled from the
task results after the join.

Failure policy:
- ISOLATE (default): an AssetUploadError drops only that product and is
  reported in PipelineResult.failures
- FAIL_FAST: the first AssetUploadError is raised to the caller after the
  remaining tasks are cancelled
Any other exception type propagates under both policies.
Version: 1.0.0
"""
import asyncio
import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from product_feed.clients.cloudinary_client import CloudinaryClient
from product_feed.core.exceptions import (
    AssetUploadError,
    ConfigurationError,
    PipelineTimeoutError,
)
from product_feed.schemas.feed import (
    CategoryPolicy,
    FailurePolicy,
    ImageResolution,
    PipelineResult,
    RecordFailure,
)
from product_feed.services.eligibility import filter_eligible, primary_image_url
from product_feed.services.field_mapper import map_product
from product_feed.services.image_gate import ImageDeduplicationGate

logger = logging.getLogger("feed_pipeline")


class PipelineConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    shop_domain: str
    currency: str
    known_asset_ids: FrozenSet[str] = frozenset()
    optimize: bool = False
    category_policy: CategoryPolicy = CategoryPolicy.REQUIRED
    failure_policy: FailurePolicy = FailurePolicy.ISOLATE
    upload_timeout: Optional[float] = None
    pipeline_timeout: Optional[float] = None

    def model_post_init(self, __context: Any) -> None:
        missing = [name for name in ("shop_domain", "currency") if not getattr(self, name)]
        if missing:
            raise ConfigurationError(missing)


async def _process_product(
    product: Dict[str, Any],
    gate: ImageDeduplicationGate,
    config: PipelineConfig,
) -> Tuple[Dict[str, Any], ImageResolution]:
    resolution = await gate.resolve(primary_image_url(product))
    record = map_product(
        product,
        resolution,
        shop_domain=config.shop_domain,
        currency=config.currency,
        category_policy=config.category_policy,
    )
    return record, resolution


async def _cancel_pending(tasks: List[asyncio.Task]) -> None:
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        logger.info("feed pipeline cancelled pending=%s", len(pending))
        await asyncio.gather(*pending, return_exceptions=True)


async def normalize_products(
    raw_products: Iterable[Dict[str, Any]],
    config: PipelineConfig,
    asset_host: CloudinaryClient,
) -> PipelineResult:
    """
    Turn raw Shopify products into sparse feed records.

    Args:
        raw_products: Products as returned by the catalog source
        config: Shop identity, dedup inputs and policies
        asset_host: Client used for delivery URLs and uploads

    Returns:
        PipelineResult; ``records`` is empty when nothing was eligible

    Raises:
        AssetUploadError: an upload failed under FailurePolicy.FAIL_FAST
        PipelineTimeoutError: the run exceeded ``config.pipeline_timeout``
    """
    products = list(raw_products)
    eligible = filter_eligible(products, config.category_policy)
    logger.info("feed pipeline eligible=%s total=%s", len(eligible), len(products))
    if not eligible:
        return PipelineResult()

    gate = ImageDeduplicationGate(
        asset_host,
        known_asset_ids=config.known_asset_ids,
        optimize=config.optimize,
        upload_timeout=config.upload_timeout,
    )
    isolate = config.failure_policy == FailurePolicy.ISOLATE
    tasks = [asyncio.create_task(_process_product(product, gate, config)) for product in eligible]
    joined = asyncio.gather(*tasks, return_exceptions=isolate)

    try:
        if config.pipeline_timeout:
            outcomes = await asyncio.wait_for(joined, timeout=config.pipeline_timeout)
        else:
            outcomes = await joined
    except asyncio.TimeoutError as exc:
        logger.info("feed pipeline timeout after=%ss", config.pipeline_timeout)
        await _cancel_pending(tasks)
        raise PipelineTimeoutError(config.pipeline_timeout) from exc
    except BaseException:
        # fail-fast: no sibling upload may finish after the caller sees the error
        await _cancel_pending(tasks)
        raise

    records: List[Dict[str, Any]] = []
    uploaded: set[str] = set()
    failures: List[RecordFailure] = []

    for product, outcome in zip(eligible, outcomes):
        if isinstance(outcome, AssetUploadError):
            logger.info("feed record failed id=%s error=%s", product.get("id"), outcome)
            failures.append(
                RecordFailure(
                    product_id=str(product.get("id")),
                    image_url=primary_image_url(product),
                    error=str(outcome),
                )
            )
            continue
        if isinstance(outcome, BaseException):
            raise outcome

        record, resolution = outcome
        records.append(record)
        if resolution.asset_id:
            uploaded.add(resolution.asset_id)

    logger.info(
        "feed pipeline done records=%s uploaded=%s failures=%s",
        len(records),
        len(uploaded),
        len(failures),
    )
    return PipelineResult(
        records=records,
        uploaded_asset_ids=frozenset(uploaded),
        failures=failures,
    )
