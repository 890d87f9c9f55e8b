"""
Image deduplication gate — decide whether a primary image needs uploading.

Only the first image of a product is ever resolved. The known-asset set is
supplied by the caller on every run and is never modified here; newly
uploaded ids are reported back through ImageResolution.asset_id.
Version: 1.0.0
"""
import asyncio
import logging
from typing import Iterable, Optional

from product_feed.clients.cloudinary_client import CloudinaryClient
from product_feed.core.constants.feed import ASSET_ID_STRIP_CHARS, IMAGE_TRANSFORM
from product_feed.core.exceptions import AssetUploadError
from product_feed.schemas.feed import ImageResolution

logger = logging.getLogger("image_gate")


def derive_asset_id(image_url: str) -> str:
    """
    Build a stable public id from an image URL.

    Takes everything after the last "/" and removes ".", "?", "=" and "v",
    e.g. ".../files/shirt.jpg?v=1712" -> "shirtjpg1712".
    """
    name = image_url[image_url.rfind("/") + 1:]
    for char in ASSET_ID_STRIP_CHARS:
        name = name.replace(char, "")
    return name


class ImageDeduplicationGate:
    def __init__(
        self,
        asset_host: CloudinaryClient,
        known_asset_ids: Iterable[str] = (),
        optimize: bool = False,
        upload_timeout: Optional[float] = None,
    ) -> None:
        self._asset_host = asset_host
        self._known_asset_ids = frozenset(known_asset_ids)
        self._optimize = optimize
        self._upload_timeout = upload_timeout

    @property
    def known_asset_ids(self) -> frozenset:
        return self._known_asset_ids

    async def resolve(self, image_url: str) -> ImageResolution:
        public_id = derive_asset_id(image_url)

        if public_id in self._known_asset_ids:
            return ImageResolution(display_url=self._asset_host.delivery_url(public_id))

        if not self._optimize:
            return ImageResolution(display_url=image_url)

        upload = self._asset_host.upload(image_url, public_id, IMAGE_TRANSFORM)
        try:
            if self._upload_timeout:
                result = await asyncio.wait_for(upload, timeout=self._upload_timeout)
            else:
                result = await upload
        except asyncio.TimeoutError as exc:
            logger.info("image upload timeout public_id=%s timeout=%s", public_id, self._upload_timeout)
            raise AssetUploadError(public_id, f"timed out after {self._upload_timeout}s") from exc

        stored_id = result.get("public_id") or public_id
        logger.info("image uploaded public_id=%s", stored_id)
        return ImageResolution(
            display_url=self._asset_host.delivery_url(stored_id),
            asset_id=public_id,
        )
