import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from product_feed.core.config import settings
from product_feed.routes import feeds_router, health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan event handler.

    Logs the configured shop and image policy on startup. Clients are built
    lazily by the container on first request.
    """
    logger.info("=== Product Feed Starting ===")
    logger.info(
        f"Shop: {settings.shopify_store_domain or '<unset>'}, "
        f"optimize images: {settings.feed_optimize_images}, "
        f"category policy: {settings.feed_category_policy}, "
        f"failure policy: {settings.feed_failure_policy}"
    )
    logger.info("=== Product Feed Ready ===")

    yield

    logger.info("Shutdown complete")


app = FastAPI(title="Shopify Product Feed", lifespan=lifespan)
logging.basicConfig(level=settings.log_level, format="%(levelname)s:%(name)s:%(message)s")

app.include_router(health_router)
app.include_router(feeds_router)
