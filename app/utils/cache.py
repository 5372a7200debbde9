"""Namespaced JSON cache with optional Redis backing."""

from __future__ import annotations

import importlib
import importlib.util
import json
import threading
import time
from dataclasses import dataclass
from typing import Any

from loguru import logger

from app.config import settings


def _json_default(value: Any) -> Any:
    """Serialize values not supported by ``json`` out of the box."""

    if hasattr(value, "isoformat"):
        return value.isoformat()  # datetime and date objects
    if hasattr(value, "hex") and not isinstance(value, (int, float)):
        return str(value)  # UUIDs
    raise TypeError(f"Object of type {type(value)!r} is not JSON serializable")


_redis_module = None
if importlib.util.find_spec("redis") is not None:
    _redis_module = importlib.import_module("redis")


@dataclass
class _CacheEntry:
    expires_at: float | None
    payload: str


class CacheBackend:
    """Redis-backed cache with an in-process fallback.

    While Redis is live it is the only store. After its first failure it is
    dropped for the process lifetime and the local dict takes over.
    """

    def __init__(self, redis_url: str | None = None, *, redis_client: Any = None) -> None:
        self._lock = threading.Lock()
        self._local: dict[str, _CacheEntry] = {}
        self._redis = redis_client
        if self._redis is None and redis_url and _redis_module is not None:
            self._redis = _redis_module.Redis.from_url(redis_url, decode_responses=True)

    @staticmethod
    def _compose(namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def _disable_redis(self, exc: Exception) -> None:
        logger.warning(f"Redis cache unavailable, using in-process cache: {exc}")
        self._redis = None

    def get(self, namespace: str, key: str) -> Any | None:
        namespaced = self._compose(namespace, key)
        if self._redis is not None:
            try:
                value = self._redis.get(namespaced)
            except Exception as exc:
                self._disable_redis(exc)
            else:
                # Redis is shared by every worker; a miss there is authoritative
                return None if value is None else json.loads(value)
        with self._lock:
            entry = self._local.get(namespaced)
            if not entry:
                return None
            if entry.expires_at is not None and entry.expires_at < time.time():
                self._local.pop(namespaced, None)
                return None
            return json.loads(entry.payload)

    def set(self, namespace: str, key: str, value: Any, ttl_seconds: int) -> None:
        namespaced = self._compose(namespace, key)
        payload = json.dumps(value, default=_json_default)
        if self._redis is not None:
            try:
                self._redis.set(namespaced, payload, ex=ttl_seconds or None)
            except Exception as exc:
                self._disable_redis(exc)
            else:
                return
        with self._lock:
            expires_at = time.time() + ttl_seconds if ttl_seconds else None
            self._local[namespaced] = _CacheEntry(expires_at=expires_at, payload=payload)

    def invalidate(self, namespace: str, key: str) -> None:
        namespaced = self._compose(namespace, key)
        if self._redis is not None:
            try:
                self._redis.delete(namespaced)
            except Exception as exc:
                self._disable_redis(exc)
        with self._lock:
            self._local.pop(namespaced, None)

    def clear(self) -> None:
        """Reset the in-memory cache for test environments."""

        with self._lock:
            self._local.clear()


cache_backend = CacheBackend(str(settings.REDIS_URL) if settings.REDIS_URL else None)


__all__ = ["cache_backend", "CacheBackend"]
