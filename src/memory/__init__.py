"""Memory module -- key-value stores and the search result cache."""

from src.memory.result_cache import ResultCache
from src.memory.store import KeyValueStore, MemoryStore, RedisStore, build_store

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "ResultCache", "build_store"]
