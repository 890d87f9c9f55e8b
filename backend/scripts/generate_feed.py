"""
Generate a product feed file from the configured Shopify store.

Fetches the catalog, builds the RSS or CSV feed and writes it to disk.
Asset ids uploaded to Cloudinary during the run are printed to stdout, one
per line, so they can be appended to the known-ids file for the next run.

Usage:
    # RSS feed, no image uploads
    python -m scripts.generate_feed --format rss --output feed.xml

    # CSV feed, upload new primary images, skip ones already stored
    python -m scripts.generate_feed --format csv --output feed.csv \
        --known-ids-file uploaded_ids.txt --optimize

Exit codes:
    0  feed written
    1  catalog fetch, upload or configuration error
    2  no eligible products, nothing written
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from product_feed.clients.cloudinary_client import CloudinaryClient
from product_feed.clients.shopify_client import ShopifyClient
from product_feed.core.config import get_settings
from product_feed.core.exceptions import ProductFeedException
from product_feed.schemas.feed import FailurePolicy, FeedFormat
from product_feed.services.feed_service import FeedService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EMPTY = 2


def read_known_ids(path: Optional[str]) -> List[str]:
    """One asset id per line; blank lines and '#' comments are ignored."""
    if not path:
        return []
    ids = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            ids.append(line)
    return ids


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a Shopify product feed")
    parser.add_argument("--format", choices=[f.value for f in FeedFormat], default=FeedFormat.RSS.value)
    parser.add_argument("--output", required=True, help="File to write the feed to")
    parser.add_argument("--known-ids-file", help="File listing already uploaded asset ids")
    parser.add_argument("--optimize", action="store_true", help="Upload new primary images to Cloudinary")
    parser.add_argument("--fail-fast", action="store_true", help="Abort on the first image upload failure")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, service: FeedService) -> int:
    output = await service.generate(
        FeedFormat(args.format),
        known_asset_ids=read_known_ids(args.known_ids_file),
        optimize=True if args.optimize else None,
        failure_policy=FailurePolicy.FAIL_FAST if args.fail_fast else None,
    )
    if output is None:
        logger.info("No eligible products, nothing written")
        return EXIT_EMPTY

    Path(args.output).write_text(output.document, encoding="utf-8")
    logger.info(f"Wrote {output.record_count} records to {args.output}")
    for failure in output.failures:
        logger.warning(f"Skipped product {failure.product_id}: {failure.error}")
    for asset_id in output.uploaded_asset_ids:
        print(asset_id)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings()
        service = FeedService(
            settings=settings,
            shopify=ShopifyClient(settings),
            asset_host=CloudinaryClient.from_settings(settings),
        )
        return asyncio.run(run(args, service))
    except ProductFeedException as exc:
        logger.error(f"Feed generation failed: {exc}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
