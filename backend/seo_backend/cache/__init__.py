"""Bounded TTL caches for keyword clusters and keyword metrics."""
from .bounded_cache import BoundedTTLCache
from .cache_key import generate_storage_key, keyword_ids_signature, normalize_domain
from .exceptions import CacheError, DeserializationFailure, PersistenceFailure
from .keyword_clusters import KeywordClusterCache
from .keyword_metrics import KeywordMetricsCache
from .store import FileStore, InMemoryStore, SqlStore, Store, build_store

__all__ = [
    "BoundedTTLCache",
    "KeywordClusterCache",
    "KeywordMetricsCache",
    "Store",
    "InMemoryStore",
    "FileStore",
    "SqlStore",
    "build_store",
    "generate_storage_key",
    "keyword_ids_signature",
    "normalize_domain",
    "CacheError",
    "DeserializationFailure",
    "PersistenceFailure",
]
