from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode runtime guards:
# - local sqlite file instead of postgres
# - fixed signing secret so tokens can be decoded in assertions
_DB_DIR = tempfile.mkdtemp(prefix="loginkit-test-")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_DB_DIR}/loginkit.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "10")

from loginkit.main import app  # noqa: E402
from loginkit.memory import session_store as session_store_module  # noqa: E402


class FakeRedis:
    """In-memory stand-in for the redis.asyncio client used by the session store."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str):
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None):
        self.data[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed


class BrokenRedis:
    async def get(self, *_args, **_kwargs):
        raise ConnectionError("redis down")

    async def set(self, *_args, **_kwargs):
        raise ConnectionError("redis down")

    async def delete(self, *_args, **_kwargs):
        raise ConnectionError("redis down")


@pytest.fixture
def fake_redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()
    monkeypatch.setattr(session_store_module, "redis_client", fake)
    monkeypatch.setattr(session_store_module, "_degraded_session_cache", {})
    return fake


@pytest.fixture
def broken_redis(monkeypatch) -> BrokenRedis:
    broken = BrokenRedis()
    monkeypatch.setattr(session_store_module, "redis_client", broken)
    monkeypatch.setattr(session_store_module, "_degraded_session_cache", {})
    return broken


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc
