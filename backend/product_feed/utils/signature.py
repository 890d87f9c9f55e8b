"""
Signature utilities — Shopify app proxy request verification.

Shopify signs proxied requests by sorting the query parameters, joining
them as ``key=value`` with no separator, and computing an HMAC-SHA256 hex
digest with the app's shared secret.
Version: 1.0.0
"""

import hashlib
import hmac
from typing import Any, Mapping


def _stringify(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def object_to_string(params: Mapping[str, Any]) -> str:
    """
    Serialize params for signing, e.g. {"foo": "bar", "a": [1, 2]} -> "a=1,2foo=bar".

    Args:
        params: Query parameters (scalar or list values)

    Returns:
        Concatenated ``key=value`` pairs in sorted key order
    """
    return "".join(f"{key}={_stringify(params[key])}" for key in sorted(params))


def compute_signature(query: Mapping[str, Any], shared_secret: str) -> str:
    """
    Compute the app proxy signature for a query mapping.

    The ``signature`` key itself is excluded from the signed input.

    Args:
        query: Request query parameters
        shared_secret: Shared secret from the app credentials

    Returns:
        Hex-encoded HMAC-SHA256 digest
    """
    unsigned = {key: value for key, value in query.items() if key != "signature"}
    payload = object_to_string(unsigned)
    return hmac.new(shared_secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def is_valid_signature(query: Mapping[str, Any], shared_secret: str) -> bool:
    """
    Check that a request came from Shopify.

    The caller's mapping is left untouched.

    Args:
        query: Request query parameters including ``signature``
        shared_secret: Shared secret from the app credentials

    Returns:
        True when the supplied signature matches the computed one
    """
    signature = query.get("signature") or ""
    if isinstance(signature, (list, tuple)):
        signature = signature[0] if signature else ""
    if not signature or not shared_secret:
        return False

    expected = compute_signature(query, shared_secret)
    return hmac.compare_digest(expected, str(signature))
