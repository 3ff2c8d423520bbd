"""Cache key generation logic."""
import hashlib
import re
from typing import Iterable, Union

KeywordId = Union[str, int]

_SCHEME_PREFIX = re.compile(r"^(https?://)?(www\.)?")


def generate_storage_key(namespace: str, schema_version: str = "v1") -> str:
    """
    Generate the store slot name for a cache namespace.

    Bumping the schema version points the cache at a fresh slot; data under
    the old version is left behind and never read again.

    Args:
        namespace: Cache namespace (e.g., 'bron_keyword_clusters_cache')
        schema_version: Layout version of the stored JSON

    Returns:
        Slot name string

    Example:
        >>> generate_storage_key("bron_keyword_clusters_cache", "v1")
        "bron_keyword_clusters_cache_v1"
    """
    return f"{namespace}_{schema_version}"


def normalize_domain(domain: str) -> str:
    """
    Reduce a user-entered domain or URL to its bare host.

    Example:
        >>> normalize_domain("https://www.Example.com/blog/")
        "example.com"
    """
    cleaned = _SCHEME_PREFIX.sub("", (domain or "").strip().lower())
    return cleaned.split("/")[0]


def keyword_ids_signature(keyword_ids: Iterable[KeywordId]) -> str:
    """
    Fingerprint a keyword id collection, independent of order.

    Producers pass this to the cluster cache so a changed keyword set
    invalidates the cached clusters even inside the TTL window.

    Example:
        >>> keyword_ids_signature([3, "1", 2]) == keyword_ids_signature([2, 3, 1])
        True
    """
    joined = "|".join(sorted(str(k) for k in keyword_ids))
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()
