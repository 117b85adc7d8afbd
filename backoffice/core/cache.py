"""缓存模块：使用 Redis 或内存后端实现带 TTL 的读穿透缓存。"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

import redis

from backoffice.core.config import get_settings
from backoffice.core.logger import logger

_MISSING = object()


class CacheBackend:
    """缓存后端基类，约定读取、写入与失效三个操作。"""

    def get(self, key: str) -> Any:  # pragma: no cover - interface definition
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def delete(self, key: str) -> None:  # pragma: no cover
        raise NotImplementedError


class RedisCacheBackend(CacheBackend):
    """基于 Redis 的缓存后端，值以 JSON 字符串存储。"""

    def __init__(self, url: str) -> None:
        self._client = redis.Redis.from_url(url, decode_responses=True, socket_connect_timeout=1)
        self._client.ping()

    def get(self, key: str) -> Any:
        raw = self._client.get(self._build_key(key))
        if raw is None:
            return _MISSING
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._client.set(self._build_key(key), json.dumps(value, ensure_ascii=False), ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self._client.delete(self._build_key(key))

    @staticmethod
    def _build_key(key: str) -> str:
        return f"cache:{key}"


class InMemoryCacheBackend(CacheBackend):
    """内存后端用于测试或缺少 Redis 时的回退实现。"""

    def __init__(self) -> None:
        self._store: dict[str, tuple[Any, datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            record = self._store.get(key)
            if record is None:
                return _MISSING
            value, expires_at = record
            if expires_at < datetime.now(timezone.utc):
                self._store.pop(key, None)
                return _MISSING
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
        with self._lock:
            self._store[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)


_backend: Optional[CacheBackend] = None


def _get_backend() -> CacheBackend:
    global _backend
    if _backend is not None:
        return _backend

    settings = get_settings()
    if settings.cache_backend.strip().lower() == "memory":
        _backend = InMemoryCacheBackend()
        return _backend

    try:
        backend = RedisCacheBackend(settings.redis_url)
        logger.info("Cache initialized with Redis at %s", settings.redis_url)
        _backend = backend
    except redis.RedisError as exc:
        logger.warning("Redis unavailable (%s), falling back to in-memory cache", exc)
        _backend = InMemoryCacheBackend()
    return _backend


def reset_backend() -> None:
    """丢弃当前后端实例，下一次访问时按配置重新创建。"""
    global _backend
    _backend = None


def cached(key: str, loader: Callable[[], Any], ttl_seconds: Optional[int] = None) -> Any:
    """读穿透：命中时直接返回缓存值，否则调用 ``loader`` 并写回缓存。"""
    backend = _get_backend()
    value = backend.get(key)
    if value is not _MISSING:
        return value
    value = loader()
    ttl = ttl_seconds if ttl_seconds is not None else get_settings().cache_ttl_seconds
    backend.set(key, value, max(ttl, 1))
    return value


def invalidate(key: str) -> None:
    """删除指定缓存键，忽略不存在的情况。"""
    _get_backend().delete(key)
