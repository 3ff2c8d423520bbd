"""Per-domain cache of keyword cluster indices."""
from typing import Any, Callable, Dict, List, Optional

from seo_backend.cache.bounded_cache import DAY_MS, BoundedTTLCache
from seo_backend.cache.store import Store

KEYWORD_CLUSTERS_NAMESPACE = "bron_keyword_clusters_cache"
KEYWORD_CLUSTERS_SCHEMA_VERSION = "v1"
MAX_AGE_MS = DAY_MS  # 24 hours
MAX_DOMAINS = 25

# [{"parentId": 12, "childIds": [13, "k-14"]}, ...]
KeywordClusterIndex = List[Dict[str, Any]]


class KeywordClusterCache:
    """
    Remembers the last cluster index computed for each domain.

    Each entry carries the signature of the keyword set it was computed from.
    A lookup with a different signature is a miss, so a changed keyword set
    invalidates the clusters without any explicit call. The cache is advisory:
    load and save never raise and the caller must be able to recompute.

    Example:
        >>> cache = KeywordClusterCache(InMemoryStore())
        >>> cache.save("example.com", "sig-a", [{"parentId": 1, "childIds": [2, 3]}])
        >>> cache.load("example.com", "sig-a")
        [{'parentId': 1, 'childIds': [2, 3]}]
        >>> cache.load("example.com", "sig-b") is None
        True
    """

    def __init__(self, store: Store, clock: Optional[Callable[[], int]] = None):
        self._cache = BoundedTTLCache(
            store,
            KEYWORD_CLUSTERS_NAMESPACE,
            schema_version=KEYWORD_CLUSTERS_SCHEMA_VERSION,
            max_age_ms=MAX_AGE_MS,
            max_keys=MAX_DOMAINS,
            clock=clock,
        )

    @property
    def storage_key(self) -> str:
        return self._cache.storage_key

    def load(self, domain: str, signature: str) -> Optional[KeywordClusterIndex]:
        """Cached clusters for domain if present, fresh and computed from the same keywords."""
        entry = self._cache.read(domain)
        if not entry:
            return None
        if entry.get("keywordIdsSignature") != signature:
            return None
        return entry.get("clusters")

    def save(self, domain: str, signature: str, clusters: KeywordClusterIndex) -> None:
        self._cache.write(domain, {"keywordIdsSignature": signature, "clusters": clusters})

    def remove(self, domain: str) -> bool:
        return self._cache.remove(domain)

    def domains(self) -> List[str]:
        return self._cache.keys()
