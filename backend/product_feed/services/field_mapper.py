"""
Field mapper — one eligible Shopify product to a sparse feed record.
Version: 1.0.0
"""
from typing import Any, Dict

from product_feed.core.constants.feed import AVAILABILITY_IN_STOCK, CONDITION_NEW
from product_feed.schemas.feed import CategoryPolicy, ImageResolution
from product_feed.services.eligibility import primary_variant
from product_feed.utils.shopify_utils import compact_record, shop_name_to_domain


def product_link(shop_domain: str, handle: str) -> str:
    return f"https://{shop_name_to_domain(shop_domain)}/products/{handle}"


def map_product(
    product: Dict[str, Any],
    resolution: ImageResolution,
    shop_domain: str,
    currency: str,
    category_policy: CategoryPolicy = CategoryPolicy.REQUIRED,
) -> Dict[str, Any]:
    """
    Map a product that passed the eligibility filter.

    Falsy fields are omitted from the result rather than set to None.
    """
    variant = primary_variant(product)
    category = product.get("product_type")
    if not category and category_policy == CategoryPolicy.TITLE_FALLBACK:
        category = product.get("title")
    handle = product.get("handle")

    record = {
        "id": product.get("id"),
        "availability": AVAILABILITY_IN_STOCK,
        "condition": CONDITION_NEW,
        "description": product.get("body_html"),
        "image_link": resolution.display_url,
        "link": product_link(shop_domain, handle) if handle else None,
        "mpn": variant.get("sku"),
        "gtin": variant.get("barcode"),
        "price": f"{variant.get('price')} {currency}",
        "title": product.get("title"),
        "brand": product.get("product_type"),
        "category": category,
    }
    return compact_record(record)
