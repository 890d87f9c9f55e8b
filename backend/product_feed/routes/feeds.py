"""
Feed routes — RSS and CSV product feeds behind the Shopify app proxy.

Provides:
- GET  /api/feeds/rss        – RSS document (signed proxy request)
- GET  /api/feeds/csv        – CSV document (signed proxy request)
- POST /api/feeds/{format}   – feed plus newly uploaded asset ids as JSON
Version: 1.0.0
"""
import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from product_feed.container import get_feed_service
from product_feed.core.auth import verify_proxy_signature
from product_feed.core.exceptions import (
    AssetUploadError,
    ConfigurationError,
    ExternalAPIError,
    PipelineTimeoutError,
    RateLimitError,
)
from product_feed.schemas.feed import FeedFormat, FeedRequest, FeedResponse
from product_feed.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feeds", tags=["feeds"])

UPLOADED_ASSETS_HEADER = "X-Uploaded-Asset-Ids"


def _raise_http(exc: Exception) -> NoReturn:
    if isinstance(exc, RateLimitError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
            headers={"Retry-After": str(exc.retry_after)},
        ) from exc
    if isinstance(exc, PipelineTimeoutError):
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(exc)) from exc
    if isinstance(exc, (AssetUploadError, ExternalAPIError)):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    if isinstance(exc, ConfigurationError):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    raise exc


async def _proxy_feed(service: FeedService, feed_format: FeedFormat) -> Response:
    try:
        output = await service.generate(feed_format)
    except (ExternalAPIError, RateLimitError, PipelineTimeoutError, ConfigurationError) as exc:
        logger.error(f"Feed generation failed format={feed_format.value}: {exc}")
        _raise_http(exc)

    if output is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return Response(
        content=output.document,
        media_type=output.content_type,
        headers={UPLOADED_ASSETS_HEADER: ",".join(output.uploaded_asset_ids)},
    )


@router.get("/rss")
async def rss_feed(
    _query: dict = Depends(verify_proxy_signature),
    service: FeedService = Depends(get_feed_service),
):
    """Product feed as RSS 2.0 with Google Merchant fields."""
    return await _proxy_feed(service, FeedFormat.RSS)


@router.get("/csv")
async def csv_feed(
    _query: dict = Depends(verify_proxy_signature),
    service: FeedService = Depends(get_feed_service),
):
    """Product feed as CSV with a fixed column set."""
    return await _proxy_feed(service, FeedFormat.CSV)


@router.post("/{feed_format}", response_model=FeedResponse)
async def generate_feed(
    feed_format: FeedFormat,
    payload: Optional[FeedRequest] = Body(None),
    _query: dict = Depends(verify_proxy_signature),
    service: FeedService = Depends(get_feed_service),
):
    """
    Build a feed using the caller's set of already uploaded asset ids.

    The response lists the ids uploaded during this request; the caller
    must persist them and send them back on the next call.
    """
    payload = payload or FeedRequest()
    try:
        output = await service.generate(
            feed_format,
            known_asset_ids=payload.known_asset_ids,
            optimize=payload.optimize,
        )
    except (ExternalAPIError, RateLimitError, PipelineTimeoutError, ConfigurationError) as exc:
        logger.error(f"Feed generation failed format={feed_format.value}: {exc}")
        _raise_http(exc)

    if output is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return FeedResponse(
        format=output.format,
        document=output.document,
        record_count=output.record_count,
        uploaded_asset_ids=output.uploaded_asset_ids,
        failures=output.failures,
    )
