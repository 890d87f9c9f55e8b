"""
Shopify HTTP client — Admin REST API access for the product catalog.
Version: 1.0.0
"""
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlsplit

import httpx

from product_feed.core.config import Settings
from product_feed.core.constants.feed import CATALOG_FIELDS
from product_feed.core.exceptions import (
    CatalogFetchError,
    ConfigurationError,
    RateLimitError,
)

logger = logging.getLogger("shopify_client")

_NEXT_LINK = re.compile(r'<([^>]+)>;\s*rel="?next"?')


class ShopifyClient:
    def __init__(self, settings: Settings) -> None:
        raw_domain = settings.shopify_store_domain
        self._store_domain = self._normalize_store_domain(raw_domain)
        self._token = settings.shopify_admin_api_token
        self._api_version = settings.shopify_api_version
        self._page_size = settings.shopify_page_size
        logger.info(f"ShopifyClient initialized: domain={self._store_domain} (raw: {raw_domain})")

    @staticmethod
    def _normalize_store_domain(domain: Optional[str]) -> Optional[str]:
        """
        Normalize Shopify store domain to ensure it has .myshopify.com suffix.

        Handles these formats:
        - "my-store" -> "my-store.myshopify.com"
        - "my-store.myshopify.com" -> "my-store.myshopify.com" (unchanged)
        - "https://my-store.myshopify.com" -> "my-store.myshopify.com" (strips protocol)
        """
        if not domain:
            return domain

        # Strip protocol if present
        domain = domain.replace("https://", "").replace("http://", "")

        # Strip trailing slashes
        domain = domain.rstrip("/")

        # Add .myshopify.com if not present
        if not domain.endswith(".myshopify.com"):
            domain = f"{domain}.myshopify.com"

        return domain

    @property
    def store_domain(self) -> Optional[str]:
        return self._store_domain

    def _base_url(self) -> str:
        missing = []
        if not self._store_domain:
            missing.append("shopify_store_domain")
        if not self._token:
            missing.append("shopify_admin_api_token")
        if missing:
            raise ConfigurationError(missing)
        return f"https://{self._store_domain}/admin/api/{self._api_version}"

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self._token or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        logger.info("shopify request method=%s url=%s params=%s", method, url, params)
        try:
            resp = await client.request(method=method, url=url, headers=self._headers(), params=params)
        except httpx.TimeoutException as exc:
            raise CatalogFetchError(f"timeout: {exc!r}") from exc
        except httpx.RequestError as exc:
            raise CatalogFetchError(f"request error: {exc!r}") from exc

        logger.info("shopify response status=%s url=%s", resp.status_code, url)
        if resp.status_code == 429:
            retry_after = resp.headers.get("Retry-After") or resp.headers.get("retry-after") or "2"
            raise RateLimitError("Shopify", retry_after=int(float(retry_after)))
        if resp.status_code >= 400:
            raise CatalogFetchError(resp.text, status_code=resp.status_code)
        return resp

    @staticmethod
    def _next_page_info(link_header: Optional[str]) -> Optional[str]:
        """Extract the page_info cursor of the rel="next" entry of a Link header."""
        if not link_header:
            return None
        for part in link_header.split(","):
            match = _NEXT_LINK.search(part)
            if not match:
                continue
            query = parse_qs(urlsplit(match.group(1)).query)
            values = query.get("page_info")
            if values:
                return values[0]
        return None

    async def list_products(self, fields: str = CATALOG_FIELDS) -> List[Dict[str, Any]]:
        """
        Fetch every product in the shop, following cursor pagination.

        Raises:
            ConfigurationError: domain or access token missing
            CatalogFetchError: transport failure or HTTP error status
            RateLimitError: Shopify answered 429
        """
        url = f"{self._base_url()}/products.json"
        params: Dict[str, Any] = {"fields": fields, "limit": self._page_size}
        products: List[Dict[str, Any]] = []

        async with httpx.AsyncClient(timeout=30.0) as client:
            while True:
                resp = await self._request(client, "GET", url, params=params)
                data = resp.json() if resp.text else {}
                page = data.get("products") or []
                products.extend(page)

                page_info = self._next_page_info(
                    resp.headers.get("Link") or resp.headers.get("link")
                )
                if not page_info:
                    break
                # Shopify rejects filter params alongside page_info
                params = {"fields": fields, "limit": self._page_size, "page_info": page_info}

        logger.info("shopify products fetched count=%s domain=%s", len(products), self._store_domain)
        return products
