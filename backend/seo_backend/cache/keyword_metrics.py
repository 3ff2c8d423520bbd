"""Per-domain cache of keyword metrics, keyed by keyword term."""
from typing import Any, Callable, Dict, List, Optional

from seo_backend.cache.bounded_cache import DAY_MS, BoundedTTLCache
from seo_backend.cache.store import Store

KEYWORD_METRICS_NAMESPACE = "bron_keyword_metrics_cache"
KEYWORD_METRICS_SCHEMA_VERSION = "v1"
MAX_AGE_MS = DAY_MS  # 24 hours
MAX_DOMAINS = 10
MAX_TERMS_PER_DOMAIN = 250

KeywordMetrics = Dict[str, Any]


class KeywordMetricsCache:
    """
    Accumulates metrics fetched for a domain's keywords across requests.

    Incoming metrics are merged over what is already cached; a domain keeps at
    most MAX_TERMS_PER_DOMAIN terms (earliest cached first) and at most
    MAX_DOMAINS domains are kept.
    """

    def __init__(self, store: Store, clock: Optional[Callable[[], int]] = None):
        self._cache = BoundedTTLCache(
            store,
            KEYWORD_METRICS_NAMESPACE,
            schema_version=KEYWORD_METRICS_SCHEMA_VERSION,
            max_age_ms=MAX_AGE_MS,
            max_keys=MAX_DOMAINS,
            clock=clock,
        )

    @property
    def storage_key(self) -> str:
        return self._cache.storage_key

    def load(self, domain: str) -> Dict[str, KeywordMetrics]:
        entry = self._cache.read(domain)
        metrics = entry.get("metricsByCore") if entry else None
        return dict(metrics) if isinstance(metrics, dict) else {}

    def merge_and_save(self, domain: str, incoming: Dict[str, KeywordMetrics]) -> int:
        """
        Merge incoming term metrics into the domain's entry and persist.

        Returns:
            Number of terms stored for the domain after the merge
            (0 if the write was dropped)
        """
        with self._cache.lock:
            merged = self.load(domain)
            merged.update(incoming or {})
            if len(merged) > MAX_TERMS_PER_DOMAIN:
                merged = {term: merged[term] for term in list(merged)[:MAX_TERMS_PER_DOMAIN]}

            if not self._cache.write(domain, {"metricsByCore": merged}):
                return 0
            return len(merged)

    def remove(self, domain: str) -> bool:
        return self._cache.remove(domain)

    def domains(self) -> List[str]:
        return self._cache.keys()
