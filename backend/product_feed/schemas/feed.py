"""
Feed schemas — pipeline results, policies, and API request/response models.
Version: 1.0.0
"""
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field


class CategoryPolicy(str, Enum):
    # product_type must be present for a product to be eligible
    REQUIRED = "required"
    # product_type optional; the brand field falls back to the product title
    TITLE_FALLBACK = "title_fallback"


class FailurePolicy(str, Enum):
    ISOLATE = "isolate"
    FAIL_FAST = "fail_fast"


class FeedFormat(str, Enum):
    RSS = "rss"
    CSV = "csv"


class ImageResolution(BaseModel):
    """Display URL for a primary image plus the asset id uploaded this run, if any."""
    display_url: str
    asset_id: Optional[str] = None


class RecordFailure(BaseModel):
    product_id: Optional[str] = None
    image_url: Optional[str] = None
    error: str


class PipelineResult(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    uploaded_asset_ids: FrozenSet[str] = frozenset()
    failures: List[RecordFailure] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records


class ShopIdentity(BaseModel):
    name: str
    domain: str


class FeedOutput(BaseModel):
    format: FeedFormat
    document: str
    content_type: str
    record_count: int
    uploaded_asset_ids: List[str] = Field(default_factory=list)
    failures: List[RecordFailure] = Field(default_factory=list)


class FeedRequest(BaseModel):
    known_asset_ids: List[str] = Field(default_factory=list)
    optimize: Optional[bool] = None


class FeedResponse(BaseModel):
    format: FeedFormat
    document: str
    record_count: int
    uploaded_asset_ids: List[str] = Field(default_factory=list)
    failures: List[RecordFailure] = Field(default_factory=list)
