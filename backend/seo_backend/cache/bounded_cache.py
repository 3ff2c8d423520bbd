"""Age- and capacity-bounded cache persisted as one JSON slot."""
import json
import logging
import math
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from seo_backend.cache.cache_key import generate_storage_key
from seo_backend.cache.exceptions import DeserializationFailure, PersistenceFailure
from seo_backend.cache.store import Store

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000

Entry = Dict[str, Any]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _is_live(entry: Any, now: int, max_age_ms: int) -> bool:
    if not isinstance(entry, dict):
        return False
    cached_at = entry.get("cachedAt")
    if isinstance(cached_at, bool) or not isinstance(cached_at, (int, float)) or not cached_at:
        return False
    if not math.isfinite(cached_at) or cached_at > now:
        return False
    return now - cached_at <= max_age_ms


class BoundedTTLCache:
    """
    Best-effort cache of per-key entries with a maximum age and key count.

    The whole map lives in a single store slot and every write is a full
    read-modify-write of that slot. Expired entries are filtered out on every
    read but only disappear from storage when the next write persists the map.
    When a write leaves more than `max_keys` entries, the ones with the oldest
    `cachedAt` are evicted. Entries stamped in the future, or with a
    non-finite stamp, are treated as malformed.

    read/write/remove/clear/keys hold `lock` (re-entrant), so threads sharing
    one instance never interleave their read-modify-write cycles. Callers
    that read and then write (merge) can hold it across both calls.

    read/write/remove/clear never raise: corrupt data reads as empty and failed
    writes are logged and dropped. load_all/save_all are the raising primitives
    underneath them.

    Attributes:
        storage_key: Store slot name, namespace plus schema version
        max_age_ms: Entries older than this are treated as absent
        max_keys: Maximum number of entries kept after a write
        lock: Re-entrant lock serializing access to the slot

    Example:
        >>> cache = BoundedTTLCache(InMemoryStore(), "demo_cache", max_keys=2)
        >>> cache.write("example.com", {"value": 1})
        True
        >>> cache.read("example.com")["value"]
        1
    """

    def __init__(
        self,
        store: Store,
        namespace: str,
        schema_version: str = "v1",
        max_age_ms: int = DAY_MS,
        max_keys: int = 25,
        clock: Optional[Callable[[], int]] = None,
    ):
        if max_keys < 1:
            raise ValueError("max_keys must be at least 1")
        self.store = store
        self.storage_key = generate_storage_key(namespace, schema_version)
        self.max_age_ms = max_age_ms
        self.max_keys = max_keys
        self._clock = clock or _now_ms
        self.lock = threading.RLock()

    def now(self) -> int:
        return int(self._clock())

    def load_all(self) -> Dict[str, Entry]:
        """
        Read the slot and return every live entry.

        Returns:
            Mapping of key -> entry with expired and malformed entries removed.
            An absent slot, or a slot holding anything but a JSON object,
            yields an empty mapping.

        Raises:
            DeserializationFailure: The slot holds text that is not JSON
        """
        raw = self.store.get(self.storage_key)
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise DeserializationFailure(f"Corrupt cache slot {self.storage_key}: {e}") from e
        if not isinstance(parsed, dict):
            return {}

        now = self.now()
        return {key: entry for key, entry in parsed.items() if _is_live(entry, now, self.max_age_ms)}

    def save_all(self, entries: Dict[str, Entry]) -> None:
        """
        Serialize and persist the full map.

        Raises:
            PersistenceFailure: Value not serializable or rejected by the store
        """
        try:
            payload = json.dumps(entries)
        except (TypeError, ValueError) as e:
            raise PersistenceFailure(f"Cache entries for {self.storage_key} are not serializable: {e}") from e
        self.store.set(self.storage_key, payload)

    def _load_or_empty(self) -> Dict[str, Entry]:
        try:
            return self.load_all()
        except DeserializationFailure as e:
            logger.debug(f"{e}; treating as empty")
            return {}

    def read(self, key: str) -> Optional[Entry]:
        """Return the live entry for key, or None."""
        with self.lock:
            if not key:
                return None
            try:
                return self._load_or_empty().get(key)
            except Exception as e:
                logger.warning(f"Cache read failed for {self.storage_key}: {e}")
                return None

    def write(self, key: str, entry: Entry) -> bool:
        """
        Store entry under key, stamped with the current time.

        Args:
            key: Entry key (e.g., a domain)
            entry: JSON-serializable dict; its 'cachedAt' is overwritten

        Returns:
            True if the map was persisted, False if the write was dropped
        """
        with self.lock:
            if not key:
                return False
            try:
                entries = self._load_or_empty()
                entries[key] = {**entry, "cachedAt": self.now()}
                self._evict_oldest(entries)
                self.save_all(entries)
                return True
            except PersistenceFailure as e:
                logger.warning(f"Cache write dropped: {e}")
                return False
            except Exception as e:
                logger.warning(f"Cache write failed for {self.storage_key}: {e}")
                return False

    def _evict_oldest(self, entries: Dict[str, Entry]) -> List[str]:
        overflow = len(entries) - self.max_keys
        if overflow <= 0:
            return []
        oldest = sorted(entries, key=lambda k: entries[k].get("cachedAt") or 0)[:overflow]
        for key in oldest:
            del entries[key]
        logger.debug(f"Evicted {len(oldest)} entries from {self.storage_key}")
        return oldest

    def remove(self, key: str) -> bool:
        """
        Drop one entry.

        Returns:
            True if the entry existed and the map was persisted without it
        """
        with self.lock:
            try:
                entries = self._load_or_empty()
                if key not in entries:
                    return False
                del entries[key]
                self.save_all(entries)
                return True
            except Exception as e:
                logger.warning(f"Cache remove failed for {self.storage_key}: {e}")
                return False

    def clear(self) -> None:
        """Delete the whole slot."""
        with self.lock:
            try:
                self.store.delete(self.storage_key)
            except Exception as e:
                logger.warning(f"Cache clear failed for {self.storage_key}: {e}")

    def keys(self) -> List[str]:
        """Keys of all live entries."""
        with self.lock:
            try:
                return list(self._load_or_empty())
            except Exception as e:
                logger.warning(f"Cache read failed for {self.storage_key}: {e}")
                return []
