import os
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    # Shopify
    shopify_store_domain: Optional[str] = os.getenv("SHOPIFY_STORE_DOMAIN")
    shopify_admin_api_token: Optional[str] = os.getenv("SHOPIFY_ADMIN_API_TOKEN")
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2024-10")
    # App proxy requests are signed with the app's shared secret
    shopify_shared_secret: Optional[str] = os.getenv("SHOPIFY_SHARED_SECRET")
    shopify_page_size: int = int(os.getenv("SHOPIFY_PAGE_SIZE", "250"))
    shop_currency: Optional[str] = os.getenv("SHOP_CURRENCY", "USD")

    # Cloudinary
    cloudinary_cloud_name: Optional[str] = os.getenv("CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: Optional[str] = os.getenv("CLOUDINARY_API_KEY")
    cloudinary_api_secret: Optional[str] = os.getenv("CLOUDINARY_API_SECRET")
    cloudinary_delivery_host: str = os.getenv("CLOUDINARY_DELIVERY_HOST", "res.cloudinary.com")

    # Feed generation
    feed_optimize_images: bool = _env_bool("FEED_OPTIMIZE_IMAGES")
    feed_category_policy: str = os.getenv("FEED_CATEGORY_POLICY", "required")
    feed_failure_policy: str = os.getenv("FEED_FAILURE_POLICY", "isolate")
    feed_link_path: str = os.getenv("FEED_LINK_PATH", "/a/product_catalog")

    # Timeouts (seconds)
    image_upload_timeout_seconds: float = float(os.getenv("IMAGE_UPLOAD_TIMEOUT_SECONDS", "30"))
    feed_pipeline_timeout_seconds: float = float(os.getenv("FEED_PIPELINE_TIMEOUT_SECONDS", "120"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = Settings()
