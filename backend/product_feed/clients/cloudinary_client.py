"""
Cloudinary HTTP client — signed uploads and delivery URLs.

Each instance carries its own credentials; nothing is configured
process-wide, so clients for different clouds can coexist.
Version: 1.0.0
"""
import hashlib
import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from product_feed.core.exceptions import AssetUploadError, ConfigurationError

logger = logging.getLogger("cloudinary_client")

UPLOAD_API_BASE = "https://api.cloudinary.com/v1_1"

_TRANSFORM_KEYS = (("crop", "c"), ("height", "h"), ("width", "w"))


def build_transformation(transform: Mapping[str, Any]) -> str:
    """{"width": 1080, "height": 1080, "crop": "scale"} -> "c_scale,h_1080,w_1080"."""
    parts = [
        f"{short}_{transform[key]}"
        for key, short in _TRANSFORM_KEYS
        if transform.get(key) is not None
    ]
    return ",".join(parts)


def sign_params(params: Mapping[str, Any], api_secret: str) -> str:
    """SHA-1 of the sorted ``k=v`` pairs joined by ``&`` with the secret appended."""
    to_sign = "&".join(
        f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryClient:
    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        delivery_host: str = "res.cloudinary.com",
        timeout: float = 60.0,
    ) -> None:
        missing = [
            name
            for name, value in (
                ("cloudinary_cloud_name", cloud_name),
                ("cloudinary_api_key", api_key),
                ("cloudinary_api_secret", api_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._delivery_host = delivery_host
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "CloudinaryClient":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            delivery_host=settings.cloudinary_delivery_host,
        )

    @property
    def cloud_name(self) -> str:
        return self._cloud_name

    def delivery_url(self, public_id: str) -> str:
        return f"https://{self._delivery_host}/{self._cloud_name}/image/upload/{public_id}"

    async def upload(
        self,
        image_url: str,
        public_id: str,
        transform: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Upload a remote image by URL under a fixed public id.

        Returns:
            Cloudinary upload response (contains ``public_id``)

        Raises:
            AssetUploadError: transport failure, error status or missing public_id
        """
        params: Dict[str, Any] = {
            "public_id": public_id,
            "timestamp": int(time.time()),
        }
        if transform:
            params["transformation"] = build_transformation(transform)

        data = {
            **params,
            "file": image_url,
            "api_key": self._api_key,
            "signature": sign_params(params, self._api_secret),
        }
        url = f"{UPLOAD_API_BASE}/{self._cloud_name}/image/upload"
        logger.info("cloudinary upload public_id=%s source=%s", public_id, image_url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(url, data=data)
        except httpx.RequestError as exc:
            logger.info("cloudinary upload error public_id=%s detail=%s", public_id, repr(exc))
            raise AssetUploadError(public_id, repr(exc)) from exc

        logger.info("cloudinary upload status=%s public_id=%s", resp.status_code, public_id)
        if resp.status_code >= 400:
            raise AssetUploadError(public_id, resp.text, status_code=resp.status_code)

        try:
            body = resp.json() if resp.text else {}
        except ValueError as exc:
            raise AssetUploadError(public_id, "invalid JSON response", status_code=resp.status_code) from exc
        if not isinstance(body, dict) or not body.get("public_id"):
            raise AssetUploadError(public_id, "response has no public_id")
        return body
