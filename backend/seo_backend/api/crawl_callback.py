import logging
import math
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seo_backend.db.database import get_db
from seo_backend.models.models import CrawlEvent
from seo_backend.schemas.schemas import CrawlCallbackPayload

router = APIRouter(prefix="/api/cade", tags=["cade"])
logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_float(value: Any) -> Optional[float]:
    """Numeric value, also from strings like "42.5" or "42%"; None if unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_float(value)
    return None if number is None else int(number)


@router.post("/crawl-callback")
def receive_crawl_callback(
    payload: CrawlCallbackPayload,
    db: Session = Depends(get_db),
):
    """
    Record a crawl-progress update from the CADE crawler.

    Only `domain` is required. Storage is best-effort: if the insert fails the
    crawler still gets a success response so its run is never blocked on us.
    """
    raw_payload = payload.model_dump(exclude_none=True)
    logger.info(f"CADE callback received: {raw_payload}")

    domain = _as_text(payload.domain)
    if not domain or not domain.strip():
        logger.error("CADE callback missing domain in payload")
        raise HTTPException(status_code=400, detail="Missing domain in payload")

    event = CrawlEvent(
        domain=domain,
        request_id=_as_text(payload.request_id),
        user_id=_as_text(payload.user_id),
        status=_as_text(payload.status) or "update",
        progress=_as_float(payload.progress),
        pages_crawled=_as_int(payload.pages_crawled),
        total_pages=_as_int(payload.total_pages),
        current_url=_as_text(payload.current_url),
        error_message=_as_text(payload.error),
        message=_as_text(payload.message),
        raw_payload=raw_payload,
    )

    try:
        db.add(event)
        db.commit()
        db.refresh(event)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"CADE callback storage failed for {domain}: {e}")
        return {
            "success": True,
            "warning": "Callback received but storage failed",
            "received": {
                "domain": payload.domain,
                "request_id": payload.request_id,
                "status": payload.status,
            },
        }

    logger.info(f"Stored CADE crawl event {event.id}")
    return {
        "success": True,
        "event_id": event.id,
        "received": {
            "domain": payload.domain,
            "request_id": payload.request_id,
            "status": payload.status,
            "progress": payload.progress,
        },
    }
