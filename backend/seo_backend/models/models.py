from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
from datetime import datetime
from seo_backend.db.database import Base


class CacheSlot(Base):
    """One named slot of the durable key-value store behind the keyword caches."""
    __tablename__ = "cache_slots"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class CrawlEvent(Base):
    """A crawl-progress update posted by the CADE crawler."""
    __tablename__ = "cade_crawl_events"

    id = Column(Integer, primary_key=True, index=True)
    domain = Column(String, nullable=False, index=True)
    request_id = Column(String, index=True)
    user_id = Column(String, index=True)
    status = Column(String, nullable=False, default="update")
    progress = Column(Float)
    pages_crawled = Column(Integer)
    total_pages = Column(Integer)
    current_url = Column(Text)
    error_message = Column(Text)
    message = Column(Text)
    raw_payload = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)
