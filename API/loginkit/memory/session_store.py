"""Per-client key/value session storage.

Persisted values live in Redis with an expiry so they survive a restart and
are visible to other workers. Non-persisted values, and persisted values
written while Redis is down, live in a process-local cache. Every local entry
carries the same expiry as its Redis twin and is dropped once it lapses.
"""
from __future__ import annotations

import time

from loginkit.core.logging import DOMAIN_SESSION, get_domain_logger
from loginkit.core.settings import settings
from loginkit.memory.cache import redis_client

logger = get_domain_logger(__name__, DOMAIN_SESSION)

# session key -> (value, monotonic deadline)
_degraded_session_cache: dict[str, tuple[str, float]] = {}
_clock = time.monotonic


def _session_key(client_id: str, key: str) -> str:
    return f"session:{client_id}:{key}"


def _purge_expired() -> None:
    now = _clock()
    for session_key in [k for k, (_v, deadline) in _degraded_session_cache.items() if deadline <= now]:
        _degraded_session_cache.pop(session_key, None)


class SessionStore:
    def __init__(self, client_id: str, client=None, ttl_seconds: int | None = None):
        self.client_id = client_id
        self._client = client if client is not None else redis_client
        self._ttl = ttl_seconds or settings.jwt_expire_seconds

    def _cache_locally(self, session_key: str, value: str) -> None:
        _purge_expired()
        _degraded_session_cache[session_key] = (value, _clock() + self._ttl)

    async def store_value(self, key: str, value: str, persist: bool = False) -> None:
        session_key = _session_key(self.client_id, key)
        if not persist:
            self._cache_locally(session_key, value)
            return
        try:
            await self._client.set(session_key, value, ex=self._ttl)
        except Exception as exc:
            logger.warning("Redis unavailable for session store. Using degraded cache: %s", exc)
            self._cache_locally(session_key, value)
            return
        _degraded_session_cache.pop(session_key, None)

    async def get_value(self, key: str) -> str | None:
        session_key = _session_key(self.client_id, key)
        try:
            raw = await self._client.get(session_key)
            if raw is not None:
                return raw
        except Exception as exc:
            logger.warning("Redis unavailable for session load. Falling back to degraded cache: %s", exc)
        _purge_expired()
        cached = _degraded_session_cache.get(session_key)
        return cached[0] if cached else None

    async def remove_value(self, key: str) -> None:
        session_key = _session_key(self.client_id, key)
        _degraded_session_cache.pop(session_key, None)
        try:
            await self._client.delete(session_key)
        except Exception as exc:
            logger.warning("Redis unavailable for session delete: %s", exc)
