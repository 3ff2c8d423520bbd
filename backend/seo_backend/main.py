"""
SEO Dashboard Backend API
Keyword cache routes, BRON feed relay and CADE crawl-callback receiver
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seo_backend.config import settings
from seo_backend.api import keyword_cache, bron_feed, crawl_callback
from seo_backend.db.database import init_db, check_connection
import seo_backend.models.models  # noqa: F401 ensures models are registered

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Ensure DB tables exist (safe for dev) - call AFTER all imports to avoid circular deps
init_db()

app = FastAPI(
    title="SEO Dashboard Backend",
    description="Keyword cluster cache and third-party relays for the SEO dashboard",
    version="1.0.0",
)

# CORS config for the dashboard front-end and the crawler webhook
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials="*" not in settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(keyword_cache.router)
app.include_router(bron_feed.router)
app.include_router(crawl_callback.router)


@app.get("/")
def root():
    """API info and endpoint map"""
    return {
        "message": "SEO Dashboard Backend is running",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs",
        "endpoints": {
            "keyword_clusters": "/api/keyword-cache/{domain}/clusters",
            "keyword_metrics": "/api/keyword-cache/{domain}/metrics",
            "purge_domain": "/api/keyword-cache/{domain}",
            "bron_feed": "/api/bron-feed",
            "crawl_callback": "/api/cade/crawl-callback",
        },
    }


@app.get("/health")
def health_check():
    """Simple health endpoint"""
    connected = check_connection()
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "unreachable",
        "cache_backend": settings.CACHE_BACKEND,
    }


# Run with:
#   uvicorn seo_backend.main:app --reload --port 8000
