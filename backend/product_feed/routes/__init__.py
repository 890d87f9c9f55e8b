"""
Route aggregation module.

Feed routes are mounted under /api/feeds; health is exported separately
for main.py to mount at root.
Version: 1.0.0
"""
from product_feed.routes.feeds import router as feeds_router
from product_feed.routes.health import router as health_router

__all__ = ["feeds_router", "health_router"]
