"""
Unit tests for app proxy signature verification.
Version: 1.0.0
"""
import hashlib
import hmac

import pytest

from product_feed.utils.signature import compute_signature, is_valid_signature, object_to_string


pytestmark = pytest.mark.unit

SHARED_SECRET = "sharedSecret"


@pytest.fixture
def signed_query():
    # 2016-11-06T00:00:00Z in milliseconds
    query = {
        "timestamp": 1478390400000,
        "path_prefix": "/a/product_catalog",
        "shop": "demostore.myshopify.com",
    }
    payload = (
        f"path_prefix={query['path_prefix']}"
        f"shop={query['shop']}"
        f"timestamp={query['timestamp']}"
    )
    query["signature"] = hmac.new(SHARED_SECRET.encode(), payload.encode(), hashlib.sha256).hexdigest()
    return query


class TestObjectToString:

    def test_single_pair(self):
        assert object_to_string({"foo": "bar"}) == "foo=bar"

    def test_sorted_without_separator(self):
        assert object_to_string({"shop": "s", "a": "1", "m": 2}) == "a=1m=2shop=s"

    def test_list_values_joined_with_comma(self):
        assert object_to_string({"ids": ["1", "2"], "x": "y"}) == "ids=1,2x=y"

    def test_empty(self):
        assert object_to_string({}) == ""


class TestIsValidSignature:

    def test_signature_from_shopify(self, signed_query):
        assert is_valid_signature(signed_query, SHARED_SECRET)

    def test_signature_not_from_shopify(self, signed_query):
        signed_query["signature"] = "notfromshopify"
        assert not is_valid_signature(signed_query, SHARED_SECRET)

    def test_wrong_secret(self, signed_query):
        assert not is_valid_signature(signed_query, "otherSecret")

    def test_tampered_parameter(self, signed_query):
        signed_query["shop"] = "evil.myshopify.com"
        assert not is_valid_signature(signed_query, SHARED_SECRET)

    def test_missing_signature(self, signed_query):
        del signed_query["signature"]
        assert not is_valid_signature(signed_query, SHARED_SECRET)

    def test_empty_secret(self, signed_query):
        assert not is_valid_signature(signed_query, "")

    def test_signature_as_list(self, signed_query):
        signed_query["signature"] = [signed_query["signature"]]
        assert is_valid_signature(signed_query, SHARED_SECRET)

    def test_query_is_not_modified(self, signed_query):
        before = dict(signed_query)
        is_valid_signature(signed_query, SHARED_SECRET)
        assert signed_query == before

    def test_compute_signature_matches(self, signed_query):
        assert compute_signature(signed_query, SHARED_SECRET) == signed_query["signature"]
