"""Key-value cache clients used to mirror session state.

Two backends share the same small surface (``get``, ``set``, ``delete``,
``ping``):

- ``RedisCache`` talks to Redis through redis-py and stores JSON payloads
  with ``SETEX`` so every write refreshes the TTL.
- ``MemoryCache`` keeps values in-process; it backs development and tests.

``build_cache`` picks the backend from a URL (``redis://``, ``rediss://``,
``memory://``); an empty URL or ``none://`` disables caching.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Dict, Optional, Tuple

import redis
from flask import current_app

logger = logging.getLogger(__name__)

CACHE_EXTENSION_KEY = "storefront_cache"


class CacheError(Exception):
    """Raised when a cache backend cannot be configured."""


class MemoryCache:
    """Thread-safe in-process cache with per-key expiry."""

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._data: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._data.get(key)
            if item is None:
                return None
            expires_at, value = item
            if expires_at <= self._clock():
                self._data.pop(key, None)
                return None
            # Hand out copies so callers cannot mutate stored entries in place.
            return json.loads(json.dumps(value))

    def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._data[key] = (now + ttl_seconds, json.loads(json.dumps(value)))
        return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def _purge_expired(self, now: float) -> None:
        # Caller holds the lock.
        expired = [key for key, (expires_at, _) in self._data.items() if expires_at <= now]
        for key in expired:
            del self._data[key]

    def ping(self) -> bool:
        return True


class RedisCache:
    """Redis-backed cache storing JSON-encoded values."""

    def __init__(self, client: "redis.Redis", key_prefix: str = "") -> None:
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 0.5, key_prefix: str = "") -> "RedisCache":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )
        return cls(client, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding undecodable cache value for %s", key)
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        payload = json.dumps(value, ensure_ascii=False)
        return bool(self.client.setex(self._key(key), int(ttl_seconds), payload))

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))

    def ping(self) -> bool:
        return bool(self.client.ping())


def build_cache(url: Optional[str], socket_timeout: float = 0.5, key_prefix: str = ""):
    """Return a cache client for ``url`` or ``None`` when caching is disabled."""
    url = (url or "").strip()
    if not url or url.startswith("none://"):
        return None
    if url.startswith("memory://"):
        return MemoryCache()
    if url.startswith(("redis://", "rediss://", "unix://")):
        return RedisCache.from_url(url, socket_timeout=socket_timeout, key_prefix=key_prefix)
    raise CacheError(f"unsupported cache url: {url}")


def init_cache(app) -> None:
    """Attach the configured cache to ``app.extensions``; failures leave it disabled."""
    try:
        cache = build_cache(
            app.config.get("CACHE_URL"),
            socket_timeout=app.config.get("CACHE_SOCKET_TIMEOUT", 0.5),
            key_prefix=app.config.get("CACHE_KEY_PREFIX", ""),
        )
    except Exception as exc:
        app.logger.error("Failed to initialize cache: %s", exc)
        cache = None
    app.extensions[CACHE_EXTENSION_KEY] = cache


def get_cache():
    """Cache client for the current app, or ``None`` when unavailable."""
    return current_app.extensions.get(CACHE_EXTENSION_KEY)
