"""Error types raised inside the cache layer.

None of these escape the public cache operations; they exist so the stores and
the read/write primitives can signal failure to the code that absorbs it.
"""


class CacheError(Exception):
    pass


class DeserializationFailure(CacheError):
    """Stored slot is not valid JSON (or not the expected shape)."""


class PersistenceFailure(CacheError):
    """The store rejected a write, e.g. quota exceeded or disk error."""
