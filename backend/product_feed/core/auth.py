"""
Authentication — Shopify app proxy signature verification for route protection.

Shopify forwards storefront requests to the app with a ``signature`` query
parameter (HMAC-SHA256 of the other parameters, keyed by the app's shared
secret). Routes depend on ``verify_proxy_signature`` to reject anything else.
Version: 1.0.0
"""
import logging
from typing import Dict, List, Union

from fastapi import Depends, HTTPException, Request, status

from product_feed.container import get_feed_service
from product_feed.services.feed_service import FeedService

logger = logging.getLogger(__name__)


def _query_to_mapping(request: Request) -> Dict[str, Union[str, List[str]]]:
    """Collapse repeated query keys into lists, as Shopify signs them."""
    query: Dict[str, Union[str, List[str]]] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        query[key] = values if len(values) > 1 else values[0]
    return query


async def verify_proxy_signature(
    request: Request,
    service: FeedService = Depends(get_feed_service),
) -> dict:
    query = _query_to_mapping(request)
    if not service.is_valid_signature(query):
        logger.warning("Proxy signature rejected - shop: %s path: %s", query.get("shop"), request.url.path)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "code": "INVALID_SIGNATURE",
                "message": "Request signature does not match",
            },
        )
    return query
