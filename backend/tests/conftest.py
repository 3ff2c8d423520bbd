import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for `import seo_backend`
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Throwaway SQLite database for the whole test session
test_db_path = ROOT / "test_run.db"
if test_db_path.exists():
    test_db_path.unlink()

os.environ.setdefault("DATABASE_URL", f"sqlite:///{test_db_path}")
os.environ.setdefault("AUTO_CREATE_TABLES", "1")
os.environ.setdefault("CACHE_BACKEND", "memory")

# Create tables if needed
from seo_backend.db.database import engine, Base
import seo_backend.models.models  # noqa: F401 ensures models are registered

Base.metadata.create_all(bind=engine)

from seo_backend.cache.store import InMemoryStore


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()
