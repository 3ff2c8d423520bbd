from fastapi import APIRouter, Depends, HTTPException, Query

from seo_backend.cache.cache_key import normalize_domain
from seo_backend.schemas.schemas import (
    KeywordClustersSave,
    KeywordMetricsMerge,
)
from seo_backend.services.keyword_cache_service import (
    KeywordCacheService,
    get_keyword_cache_service,
)

# Router
router = APIRouter(prefix="/api/keyword-cache", tags=["keyword-cache"])


# =========================
# KEYWORD CLUSTERS
# =========================
@router.get("/{domain}/clusters")
def get_keyword_clusters(
    domain: str,
    signature: str = Query(..., description="Fingerprint of the caller's current keyword set"),
    service: KeywordCacheService = Depends(get_keyword_cache_service),
):
    clusters = service.load_clusters(domain, signature)
    if clusters is None:
        raise HTTPException(status_code=404, detail="No cached clusters for this keyword set")
    return {"domain": normalize_domain(domain), "signature": signature, "clusters": clusters}


@router.put("/{domain}/clusters")
def save_keyword_clusters(
    domain: str,
    body: KeywordClustersSave,
    service: KeywordCacheService = Depends(get_keyword_cache_service),
):
    clusters = [group.model_dump() for group in body.clusters]
    service.save_clusters(domain, body.signature, clusters)
    return {"domain": normalize_domain(domain), "saved": len(clusters)}


# =========================
# KEYWORD METRICS
# =========================
@router.get("/{domain}/metrics")
def get_keyword_metrics(
    domain: str,
    service: KeywordCacheService = Depends(get_keyword_cache_service),
):
    return {"domain": normalize_domain(domain), "metrics": service.load_metrics(domain)}


@router.post("/{domain}/metrics")
def merge_keyword_metrics(
    domain: str,
    body: KeywordMetricsMerge,
    service: KeywordCacheService = Depends(get_keyword_cache_service),
):
    terms = service.merge_metrics(domain, body.metrics)
    return {"domain": normalize_domain(domain), "terms": terms}


# =========================
# PURGE DOMAIN
# =========================
@router.delete("/{domain}")
def purge_domain(
    domain: str,
    service: KeywordCacheService = Depends(get_keyword_cache_service),
):
    removed = service.purge_domain(domain)
    return {"domain": normalize_domain(domain), "removed": removed}
