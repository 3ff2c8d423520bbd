from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

KeywordId = Union[int, str]


# =========================
# KEYWORD CACHE SCHEMAS
# =========================
class ClusterGroup(BaseModel):
    parentId: KeywordId
    childIds: List[KeywordId] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class KeywordClustersSave(BaseModel):
    signature: str = Field(..., description="Fingerprint of the keyword set the clusters were computed from")
    clusters: List[ClusterGroup]


class KeywordMetricsMerge(BaseModel):
    metrics: Dict[str, Dict[str, Any]] = Field(..., description="Metrics keyed by keyword term")


# =========================
# BRON FEED SCHEMAS
# =========================
class BronFeedRequest(BaseModel):
    domain: Optional[str] = None


# =========================
# CRAWL CALLBACK SCHEMAS
# =========================
class CrawlCallbackPayload(BaseModel):
    """Progress update posted by the crawler.

    Any JSON object is accepted. Field types are not enforced here; the
    receiver coerces them into column types. Unknown fields are kept.
    """
    domain: Optional[Any] = None
    request_id: Optional[Any] = None
    user_id: Optional[Any] = None
    status: Optional[Any] = None
    progress: Optional[Any] = None
    pages_crawled: Optional[Any] = None
    total_pages: Optional[Any] = None
    current_url: Optional[Any] = None
    error: Optional[Any] = None
    completed_at: Optional[Any] = None
    started_at: Optional[Any] = None
    message: Optional[Any] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "domain": "example.com",
                "request_id": "req_123",
                "status": "crawling",
                "progress": 42.5,
                "pages_crawled": 85,
                "total_pages": 200,
                "current_url": "https://example.com/blog",
            }
        },
    )
