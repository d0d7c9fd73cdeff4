"""Namespaced key-value stores backing the search result cache."""

import json
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import redis

from src.utils.config import Settings, settings as default_settings
from src.utils.logger import get_logger

log = get_logger(__name__)


class KeyValueStore(ABC):
    """Minimal get/set/remove/clear contract; values are JSON-compatible."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every key in this store's namespace."""
        ...


class RedisStore(KeyValueStore):
    """Thin wrapper around redis-py that keeps JSON values under a key prefix."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        db: int | None = None,
        namespace: str | None = None,
        client: redis.Redis | None = None,
    ):
        self.namespace = namespace if namespace is not None else default_settings.cache_namespace
        self.client = client or redis.Redis(
            host=host or default_settings.redis_host,
            port=port or default_settings.redis_port,
            password=password or default_settings.redis_password or None,
            db=db if db is not None else default_settings.redis_db,
            decode_responses=True,
        )

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    # -- CRUD ---------------------------------------------------------------

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(self._key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            log.warning("Dropping undecodable cache value at %s", key)
            self.remove(key)
            return None

    def set(self, key: str, value: Any) -> None:
        self.client.set(self._key(key), json.dumps(value))

    def remove(self, key: str) -> None:
        self.client.delete(self._key(key))

    def clear(self) -> None:
        pipe = self.client.pipeline()
        count = 0
        for full_key in self.client.scan_iter(match=f"{self.namespace}*"):
            pipe.delete(full_key)
            count += 1
        pipe.execute()
        log.info("Cleared %d keys under '%s'", count, self.namespace)

    # -- Utilities ----------------------------------------------------------

    def ping(self) -> bool:
        return self.client.ping()


class MemoryStore(KeyValueStore):
    """Process-local store; contents are lost on exit."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        # Stored as JSON so callers never share a mutable object with the store.
        raw = json.dumps(value)
        with self._lock:
            self._data[key] = raw

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


def build_store(settings: Optional[Settings] = None) -> KeyValueStore:
    """Create the store selected by ``CACHE_BACKEND``."""
    cfg = settings or default_settings
    backend = cfg.cache_backend.strip().lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "redis":
        return RedisStore(
            host=cfg.redis_host,
            port=cfg.redis_port,
            password=cfg.redis_password,
            db=cfg.redis_db,
            namespace=cfg.cache_namespace,
        )
    raise ValueError(f"Unknown CACHE_BACKEND: {cfg.cache_backend!r}")
