"""
Eligibility filter — which catalog products may appear in the feed.

A product qualifies only when every predicate holds. Exclusions are silent
for callers; the first failing predicate is logged at DEBUG.
Version: 1.0.0
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from product_feed.schemas.feed import CategoryPolicy
from product_feed.utils.type_converters import to_number

logger = logging.getLogger("eligibility")


def primary_variant(product: Dict[str, Any]) -> Dict[str, Any]:
    variants = product.get("variants") or []
    return variants[0] if variants else {}


def primary_image_url(product: Dict[str, Any]) -> Optional[str]:
    images = product.get("images") or []
    if not images:
        return None
    return (images[0] or {}).get("src")


def ineligibility_reason(
    product: Dict[str, Any],
    category_policy: CategoryPolicy = CategoryPolicy.REQUIRED,
) -> Optional[str]:
    """Name of the first predicate the product fails, or None when eligible."""
    if not product.get("id"):
        return "missing_id"
    if not product.get("body_html"):
        return "missing_description"
    if category_policy == CategoryPolicy.REQUIRED and not product.get("product_type"):
        return "missing_product_type"
    if not primary_image_url(product):
        return "no_images"
    if not product.get("variants"):
        return "no_variants"

    variant = primary_variant(product)
    if not (variant.get("barcode") or variant.get("sku")):
        return "missing_barcode_and_sku"
    # in-stock only: zero, absent and non-numeric inventory all exclude
    if not to_number(variant.get("inventory_quantity")):
        return "out_of_stock"
    if not variant.get("title"):
        return "missing_variant_title"
    if not variant.get("price"):
        return "missing_price"
    return None


def is_eligible(
    product: Dict[str, Any],
    category_policy: CategoryPolicy = CategoryPolicy.REQUIRED,
) -> bool:
    return ineligibility_reason(product, category_policy) is None


def filter_eligible(
    products: Iterable[Dict[str, Any]],
    category_policy: CategoryPolicy = CategoryPolicy.REQUIRED,
) -> List[Dict[str, Any]]:
    eligible = []
    for product in products:
        reason = ineligibility_reason(product, category_policy)
        if reason is None:
            eligible.append(product)
        else:
            logger.debug("product excluded id=%s reason=%s", product.get("id"), reason)
    return eligible
