"""
Shopify utilities — shop name/domain conversion and record shaping helpers.
Version: 1.0.0
"""
import re
from typing import Any, Dict, Iterable

_MYSHOPIFY_SUFFIX = ".myshopify.com"
_SCHEME_OR_SUFFIX = re.compile(r"(https?://|\.myshopify\.com(.*)?)")


def shop_name_to_domain(name: str) -> str:
    """'demostore' -> 'demostore.myshopify.com'; full domains are returned as-is."""
    if _MYSHOPIFY_SUFFIX in name:
        return name
    return f"{name}{_MYSHOPIFY_SUFFIX}"


def shop_domain_to_name(domain: str) -> str:
    """'https://demostore.myshopify.com/admin' -> 'demostore'."""
    return _SCHEME_OR_SUFFIX.sub("", domain)


def compact_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop every falsy value (empty string, 0, None, False)."""
    return {key: value for key, value in record.items() if value}


def conform_to_schema(record: Dict[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """
    Default a sparse record against a column schema.

    Every field in ``fields`` is present in the result, in schema order;
    missing or None values become "". Keys outside the schema are dropped.
    """
    conformed: Dict[str, Any] = {}
    for field in fields:
        value = record.get(field)
        conformed[field] = "" if value is None else value
    return conformed
