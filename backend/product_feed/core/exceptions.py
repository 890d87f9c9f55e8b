"""
Custom exception hierarchy for the product feed service.

Exceptions are categorized as:
- RetryableError: Transient errors where calling again may succeed
- NonRetryableError: Permanent errors that need a config or input fix

An empty feed ("nothing eligible") is not an error and has no exception;
generators return None for it.
"""


class ProductFeedException(Exception):
    """Base exception for the product feed service."""
    pass


# ============================================
# RETRYABLE ERRORS
# ============================================
class RetryableError(ProductFeedException):
    """
    Base class for transient errors.

    - Network timeouts
    - Rate limits (with backoff)
    - Temporary service unavailability
    """
    pass


class ExternalAPIError(RetryableError):
    """
    Error from external API (Shopify, Cloudinary).

    Typically transient - the external service might recover.
    """
    def __init__(self, service: str, message: str, status_code: int = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service} API error: {message}")


class CatalogFetchError(ExternalAPIError):
    """Product catalog could not be retrieved from Shopify."""
    def __init__(self, message: str, status_code: int = None):
        super().__init__("Shopify", message, status_code)


class AssetUploadError(ExternalAPIError):
    """
    Image upload to the asset host failed.

    Scoped to one product's primary image; the pipeline decides whether it
    aborts the whole run.
    """
    def __init__(self, public_id: str, message: str, status_code: int = None):
        self.public_id = public_id
        super().__init__("Cloudinary", f"upload of {public_id} failed: {message}", status_code)


class RateLimitError(RetryableError):
    """
    Rate limit exceeded.

    Should retry after the specified delay.
    """
    def __init__(self, service: str, retry_after: int = 60):
        self.service = service
        self.retry_after = retry_after
        super().__init__(f"{service} rate limited. Retry after {retry_after}s")


class PipelineTimeoutError(RetryableError):
    """Feed normalization did not finish before its deadline."""
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Feed pipeline exceeded deadline of {timeout}s")


# ============================================
# NON-RETRYABLE ERRORS
# ============================================
class NonRetryableError(ProductFeedException):
    """
    Base class for permanent errors.

    - Validation failures
    - Missing configuration
    """
    pass


class ConfigurationError(NonRetryableError):
    """
    Required credential or setting is missing.

    Raised at construction time, before any network activity.
    """
    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing or invalid options: {', '.join(self.missing)}")
