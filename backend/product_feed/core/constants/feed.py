"""
Feed constants — catalog field selector, record literals, output schemas.

Product feed constants (Google / Facebook catalog conventions).
Version: 1.0.0
"""

# Fields requested from the Shopify products endpoint
CATALOG_FIELDS: str = "id,title,variants,images,options,handle,body_html,product_type"

# Only stocked products reach the mapper, so availability is fixed
AVAILABILITY_IN_STOCK: str = "in stock"
CONDITION_NEW: str = "new"

# Google Merchant namespace used for the g: elements of the RSS feed
GOOGLE_NAMESPACE: str = "http://base.google.com/ns/1.0"

# Per-item g: elements, in document order
RSS_ITEM_FIELDS: list[str] = [
    "id",
    "title",
    "description",
    "image_link",
    "link",
    "mpn",
    "gtin",
    "price",
    "availability",
    "condition",
]

RSS_GENERATOR: str = "product-feed"

# Column order of the tabular export
CSV_FIELDS: list[str] = [
    "id",
    "availability",
    "condition",
    "description",
    "image_link",
    "link",
    "title",
    "price",
    "gtin",
    "mpn",
    "brand",
    "google_product_category",
    "product_type",
    "sale_price",
    "sale_price_effective_date",
    "item_group_id",
    "color",
    "size",
    "gender",
    "age_group",
    "shipping",
    "shipping_weight",
    "custom_label_0",
    "custom_label_1",
    "custom_label_2",
    "custom_label_3",
    "custom_label_4",
]

# CSV columns filled from a differently named record field
CSV_COLUMN_SOURCES: dict[str, str] = {
    "product_type": "category",
}

# Square 1080px scale applied to uploaded primary images
IMAGE_TRANSFORM: dict[str, object] = {
    "width": 1080,
    "height": 1080,
    "crop": "scale",
}

# Characters removed from the last URL segment to build a Cloudinary public id
ASSET_ID_STRIP_CHARS: tuple[str, ...] = (".", "?", "=", "v")
