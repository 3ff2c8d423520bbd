from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from seo_backend.cache.cache_key import normalize_domain
from seo_backend.cache.keyword_clusters import KeywordClusterCache, KeywordClusterIndex
from seo_backend.cache.keyword_metrics import KeywordMetricsCache
from seo_backend.cache.store import Store, build_store
from seo_backend.config import settings

logger = logging.getLogger(__name__)


class KeywordCacheService:
    """Keyword cluster and metrics caches sharing one store, addressed by normalized domain."""

    def __init__(self, store: Store, clock=None) -> None:
        self.store = store
        self.clusters = KeywordClusterCache(store, clock=clock)
        self.metrics = KeywordMetricsCache(store, clock=clock)

    def load_clusters(self, domain: str, signature: str) -> Optional[KeywordClusterIndex]:
        return self.clusters.load(normalize_domain(domain), signature)

    def save_clusters(self, domain: str, signature: str, clusters: KeywordClusterIndex) -> None:
        self.clusters.save(normalize_domain(domain), signature, clusters)

    def load_metrics(self, domain: str) -> Dict[str, Any]:
        return self.metrics.load(normalize_domain(domain))

    def merge_metrics(self, domain: str, incoming: Dict[str, Any]) -> int:
        return self.metrics.merge_and_save(normalize_domain(domain), incoming)

    def purge_domain(self, domain: str) -> Dict[str, bool]:
        """Remove every cached entry held for a domain."""
        normalized = normalize_domain(domain)
        removed = {
            "clusters": self.clusters.remove(normalized),
            "metrics": self.metrics.remove(normalized),
        }
        logger.info(f"Purged cached keyword data for {normalized}: {removed}")
        return removed


# Singleton accessor for ease of use
_service: KeywordCacheService | None = None


def get_keyword_cache_service() -> KeywordCacheService:
    global _service
    if _service is None:
        _service = KeywordCacheService(build_store(settings.CACHE_BACKEND, settings.CACHE_DIR))
    return _service
