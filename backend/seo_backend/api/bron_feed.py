import logging

from fastapi import APIRouter, Depends, HTTPException

from seo_backend.schemas.schemas import BronFeedRequest
from seo_backend.services.bron_feed_client import (
    BronFeedClient,
    BronFeedError,
    get_bron_feed_client,
)

router = APIRouter(prefix="/api/bron-feed", tags=["bron"])
logger = logging.getLogger(__name__)


@router.post("")
def relay_bron_feed(
    body: BronFeedRequest,
    client: BronFeedClient = Depends(get_bron_feed_client),
):
    """Relay a domain lookup to the BRON content feed and return its JSON."""
    domain = (body.domain or "").strip()
    if not domain:
        logger.error("BRON feed request missing domain")
        raise HTTPException(status_code=400, detail="Domain is required")

    try:
        data = client.fetch_feed(domain)
    except BronFeedError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={"error": str(e), "details": e.details},
        )
    except Exception as e:
        logger.error(f"BRON feed relay failed for {domain}: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Unknown error")

    return {"success": True, "data": data}
