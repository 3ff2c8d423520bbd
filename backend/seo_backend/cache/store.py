"""Durable key-value stores the caches persist into.

A store holds string values under string slot names. Reads never raise: a
missing or unreadable slot is reported as None. Writes raise
PersistenceFailure when the backing medium rejects them.
"""
from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seo_backend.cache.exceptions import PersistenceFailure
from seo_backend.models.models import CacheSlot

logger = logging.getLogger(__name__)


@runtime_checkable
class Store(Protocol):
    """Slot-oriented key-value capability injected into the caches."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryStore:
    """
    Dict-backed store for tests and single-process use.

    Args:
        quota_bytes: If set, a write whose value exceeds this many UTF-8 bytes
            is rejected, the way a browser storage quota would reject it.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._slots: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None and len(value.encode("utf-8")) > self.quota_bytes:
            raise PersistenceFailure(
                f"Quota exceeded writing {key!r} ({len(value)} chars > {self.quota_bytes} bytes)"
            )
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class FileStore:
    """One JSON file per slot inside a directory; writes replace atomically."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read cache slot {key} from {self.directory}: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.replace(tmp_name, self._path(key))
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise PersistenceFailure(f"Could not write cache slot {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not delete cache slot {key}: {e}")


class SqlStore:
    """Slots stored as rows of the cache_slots table."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            slot = db.query(CacheSlot).filter(CacheSlot.key == key).first()
            return slot.value if slot else None
        except SQLAlchemyError as e:
            logger.warning(f"Could not read cache slot {key}: {e}")
            return None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            slot = db.query(CacheSlot).filter(CacheSlot.key == key).first()
            if slot is None:
                db.add(CacheSlot(key=key, value=value))
            else:
                slot.value = value
                slot.updated_at = datetime.utcnow()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceFailure(f"Could not write cache slot {key}: {e}") from e
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.session_factory()
        try:
            db.query(CacheSlot).filter(CacheSlot.key == key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Could not delete cache slot {key}: {e}")
        finally:
            db.close()


def build_store(backend: str, cache_dir: str | Path | None = None) -> Store:
    """
    Create the store named by configuration.

    Args:
        backend: 'sql', 'file' or 'memory'
        cache_dir: Directory for the file backend

    Raises:
        ValueError: Unknown backend name
    """
    backend = (backend or "").strip().lower()
    if backend == "sql":
        from seo_backend.db.database import SessionLocal
        return SqlStore(SessionLocal)
    if backend == "file":
        if not cache_dir:
            raise ValueError("File cache backend requires a cache directory")
        return FileStore(cache_dir)
    if backend == "memory":
        return InMemoryStore()
    raise ValueError(f"Unknown cache backend '{backend}'")
